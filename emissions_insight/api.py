"""HTTP surface: chat gateway endpoint plus the dashboard data feed."""

from __future__ import annotations

import logging
from typing import List, Literal, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .logging_config import logging as _  # noqa: F401  # ensure config applied early
from .config import PORT
from .models import ChatMessage
from .services.gateway import APOLOGY_TEXT, ConversationalGateway
from .workflows.dashboard_pipeline import load_dashboard

logger = logging.getLogger(__name__)


class GroundingSourceIn(BaseModel):
    title: str = ""
    uri: str


class ChatMessageIn(BaseModel):
    id: Optional[str] = None
    role: Literal["user", "model"]
    text: str = ""
    timestamp: Optional[str] = None
    sources: List[GroundingSourceIn] = Field(default_factory=list)
    isThinking: bool = False


class GeminiRequest(BaseModel):
    history: List[ChatMessageIn] = Field(default_factory=list)
    newMessage: str
    systemInstruction: str = ""


def create_app(gateway: ConversationalGateway | None = None) -> FastAPI:
    """Build the FastAPI app; the gateway (and its call budget) lives on ``app.state``."""
    app = FastAPI(title="Emissions Insight")
    app.state.gateway = gateway or ConversationalGateway()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.post("/api/gemini")
    async def gemini(req: GeminiRequest, request: Request):
        try:
            history = [ChatMessage.from_dict(msg.model_dump()) for msg in req.history]
            reply = await request.app.state.gateway.send_message(
                history, req.newMessage, req.systemInstruction
            )
            return reply.to_dict()
        except Exception:
            logger.exception("Gateway request failed")
            return JSONResponse(status_code=500, content={"text": APOLOGY_TEXT, "sources": []})

    @app.get("/api/dashboard")
    async def dashboard():
        snapshot = await load_dashboard()
        if snapshot.error:
            return JSONResponse(status_code=503, content=snapshot.to_dict())
        return snapshot.to_dict()

    return app


app = create_app()


def main() -> None:
    import uvicorn

    logger.info("Server running at http://localhost:%d", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT, log_level="info")


if __name__ == "__main__":
    main()
