"""
Wolfram|Alpha client: send a query to the v2 API and parse pods/subpods.

Responsibility: One HTTP call per query, JSON output parsed into ResultTree.
Any failure (HTTP, network, API-level error, missing app id) collapses to None
so callers only see "answer" or "no answer".
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.config import WOLFRAM_API_TIMEOUT, WOLFRAM_API_URL, WOLFRAM_APP_ID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subpod:
    image_url: str | None
    plaintext: str


@dataclass(frozen=True)
class Pod:
    title: str
    primary: bool
    subpods: tuple[Subpod, ...]


@dataclass(frozen=True)
class ResultTree:
    """Ordered pods of one answer. Empty pods means the service had nothing to say."""

    pods: tuple[Pod, ...]


def _parse_subpod(raw: dict[str, Any]) -> Subpod:
    img = raw.get("img") or {}
    src = (img.get("src") or "").strip() if isinstance(img, dict) else ""
    return Subpod(image_url=src or None, plaintext=raw.get("plaintext") or "")


def _parse_pod(raw: dict[str, Any]) -> Pod:
    subpods = raw.get("subpods") or []
    return Pod(
        title=raw.get("title") or "",
        primary=bool(raw.get("primary", False)),
        subpods=tuple(_parse_subpod(s) for s in subpods if isinstance(s, dict)),
    )


def parse_result(data: Any) -> ResultTree | None:
    """Parse a v2 JSON response body. Returns None when the API reports an error."""
    if not isinstance(data, dict):
        return None
    result = data.get("queryresult")
    if not isinstance(result, dict):
        return None
    if result.get("error"):
        logger.warning("[wolfram:parse_result] api error=%r", result.get("error"))
        return None
    pods = result.get("pods") or []
    return ResultTree(pods=tuple(_parse_pod(p) for p in pods if isinstance(p, dict)))


class WolframClient:
    def __init__(self, app_id: str | None = None, timeout: float = WOLFRAM_API_TIMEOUT):
        self.app_id = app_id if app_id is not None else WOLFRAM_APP_ID
        self.client = httpx.AsyncClient(timeout=timeout)

    @property
    def enabled(self) -> bool:
        return bool(self.app_id)

    async def query(self, text: str) -> ResultTree | None:
        """Run one query. Returns the parsed tree, or None on any failure."""
        logger.info("[wolfram:query] IN  text=%r", text)
        if not self.enabled:
            logger.warning("[wolfram:query] no WOLFRAM_APP_ID")
            return None
        params = {
            "input": text,
            "appid": self.app_id,
            "output": "json",
            "format": "image,plaintext",
        }
        try:
            resp = await self.client.get(WOLFRAM_API_URL, params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.warning("[wolfram:query] http status=%s", e.response.status_code)
            return None
        except httpx.RequestError as e:
            logger.warning("[wolfram:query] request failed: %s", e)
            return None
        except ValueError as e:
            logger.warning("[wolfram:query] invalid JSON: %s", e)
            return None
        tree = parse_result(data)
        logger.info("[wolfram:query] OUT pods=%s", len(tree.pods) if tree else None)
        return tree

    async def close(self) -> None:
        if not self.client.is_closed:
            await self.client.aclose()
