# shared/http.py
from __future__ import annotations
from typing import Optional
import httpx

_client: Optional[httpx.Client] = None

USER_AGENT = "mp-openapi-cdi-suite/0.1"
DEFAULT_TIMEOUT = 30.0


def get_client(timeout: Optional[float] = None) -> httpx.Client:
    """Shared client; asking for a different timeout replaces it, None keeps the current one."""
    global _client
    if _client is not None and timeout is not None and _client.timeout != httpx.Timeout(timeout):
        close_client()
    if _client is None:
        _client = httpx.Client(
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )
    return _client


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def get(url: str, client: Optional[httpx.Client] = None) -> httpx.Response:
    # single attempt; callers assert on the status themselves
    return (client or get_client()).get(url)
