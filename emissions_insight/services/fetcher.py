"""HTTP GET with a single CORS-proxy fallback."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from ..clients.http_client import get_session
from ..config import CORS_PROXY_URL, HTTP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class FetchFailure(RuntimeError):
    """Both the direct and the proxied attempt failed.

    ``direct_error`` is the error raised by the first attempt and is what the
    message reports; ``proxy_error`` is kept for diagnostics.
    """

    def __init__(self, url: str, direct_error: BaseException, proxy_error: BaseException | None = None):
        super().__init__(f"Failed to fetch {url}: {direct_error}")
        self.url = url
        self.direct_error = direct_error
        self.proxy_error = proxy_error


def proxied_url(url: str, proxy_prefix: str = CORS_PROXY_URL) -> str:
    """Rewrite *url* so it is requested through the CORS relay."""
    return f"{proxy_prefix}{quote(url, safe='')}"


def _get_json(session: requests.Session, url: str, timeout: float | None) -> Any:
    response = session.get(url, timeout=timeout)
    if not 200 <= response.status_code < 300:
        raise requests.HTTPError(
            f"{response.status_code} {response.reason} for {url}", response=response
        )
    return response.json()


def fetch_json(
    url: str,
    *,
    session: requests.Session | None = None,
    timeout: float | None = HTTP_TIMEOUT_SECONDS,
) -> Any:
    """Return the parsed JSON body of *url*.

    A non-2xx status, a transport error or an unparsable body on the direct
    request triggers exactly one retry through the CORS proxy. Raises
    :class:`FetchFailure` only when that retry fails too.
    """
    http = session or get_session()
    logger.info("Fetching %s", url)
    try:
        return _get_json(http, url, timeout)
    except (requests.RequestException, ValueError) as direct_error:
        logger.warning("Direct fetch of %s failed (%s) – retrying through proxy", url, direct_error)
        try:
            return _get_json(http, proxied_url(url), timeout)
        except (requests.RequestException, ValueError) as proxy_error:
            logger.error("Proxied fetch of %s failed: %s", url, proxy_error)
            raise FetchFailure(url, direct_error, proxy_error) from direct_error

__all__ = ["FetchFailure", "fetch_json", "proxied_url"]
