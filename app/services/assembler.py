"""
Result assembly: turn a computation result tree into chat attachments.

Responsibility: Pick which pods to show, flatten their subpods into attachments,
rehost every attachment image concurrently, and deliver the finished list once.
No HTTP here; the image host is passed in.

Delivery rule: the set of image-bearing attachments is fixed when rehosting is
dispatched. The result is delivered when the last of them resolves (success,
failure, or timeout), or immediately when there are none. An image that cannot
be rehosted keeps its original URL; its attachment is never dropped.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Protocol
from urllib.parse import quote

from app.clients.cloudinary import HostedImage
from app.clients.wolfram import Pod, ResultTree
from app.core.config import (
    ACCENT_COLOR,
    REHOST_FORMAT,
    REHOST_TIMEOUT,
    WOLFRAM_IMAGE_HOST,
    WOLFRAM_WEB_URL,
)
from app.core.errors import ImageHostingError

logger = logging.getLogger(__name__)


class ImageHost(Protocol):
    async def upload(self, url: str, format: str = REHOST_FORMAT) -> HostedImage: ...


class AssemblyState(str, Enum):
    DISPATCHED = "dispatched"
    AWAITING_IMAGES = "awaiting_images"
    DELIVERED = "delivered"


@dataclass
class Attachment:
    """One displayable piece of an answer. `index` is its position in the owning list."""

    index: int
    title: str
    title_link: str
    fallback: str
    color: str | None = None
    image_url: str | None = None
    image_width: int | None = None
    image_height: int | None = None
    from_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Chat attachment shape; unset fields are left out."""
        data = asdict(self)
        data.pop("index")
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class QueryResult:
    """What a query delivers: a message, attachments, or the error flag."""

    message: str | None = None
    attachments: list[Attachment] | None = None
    error: bool | None = None


def no_answer() -> QueryResult:
    return QueryResult(message=None, attachments=None, error=True)


def title_link(text: str) -> str:
    """Deep link to the web UI for the original query (encodeURIComponent-style quoting)."""
    return WOLFRAM_WEB_URL + quote(text, safe="-_.!~*'()")


def select_pods(tree: ResultTree, full: bool) -> list[Pod]:
    """
    All pods when full, otherwise only primary ones.

    If that selects nothing that yields an attachment and the tree has at least two
    pods, fall back to the second pod: the first is usually just the input interpretation.
    """
    selected = [p for p in tree.pods if full or p.primary]
    if not any(p.subpods for p in selected) and len(tree.pods) >= 2:
        selected = [tree.pods[1]]
    return selected


def build_attachments(tree: ResultTree, full: bool, text: str) -> list[Attachment]:
    """Flatten selected pods into attachments, pod order then subpod order."""
    link = title_link(text)
    attachments: list[Attachment] = []
    for pod in select_pods(tree, full):
        color = ACCENT_COLOR if (not full or pod.primary) else None
        for subpod in pod.subpods:
            attachments.append(
                Attachment(
                    index=len(attachments),
                    title=pod.title,
                    title_link=link,
                    fallback=subpod.plaintext,
                    color=color,
                    image_url=subpod.image_url,
                )
            )
    return attachments


def service_hosted(attachments: list[Attachment]) -> list[int]:
    """Indices of attachments whose image still points at the computation service."""
    return [a.index for a in attachments if a.image_url and WOLFRAM_IMAGE_HOST in a.image_url]


class ResultAssembler:
    """Owns one query's attachment list from construction to delivery. Use once."""

    def __init__(self, image_host: ImageHost, text: str, full: bool, rehost_timeout: float = REHOST_TIMEOUT):
        self.image_host = image_host
        self.text = text
        self.full = full
        self.rehost_timeout = rehost_timeout
        self.state = AssemblyState.DISPATCHED
        self.attachments: list[Attachment] = []
        self.pending: set[int] = set()

    async def assemble(self, tree: ResultTree | None) -> QueryResult:
        logger.info("[assembler:assemble] IN  text=%r full=%s pods=%s", self.text, self.full, len(tree.pods) if tree else None)
        if tree is None or not tree.pods:
            return self._deliver(no_answer())

        self.attachments = build_attachments(tree, self.full, self.text)
        if not self.attachments:
            # single non-primary pod without full, or pods without subpods
            return self._deliver(no_answer())
        self.pending = {a.index for a in self.attachments if a.image_url}
        if self.pending:
            self.state = AssemblyState.AWAITING_IMAGES
            await asyncio.gather(*(self._rehost(i) for i in sorted(self.pending)))

        kept = service_hosted(self.attachments)
        if kept:
            logger.warning("[assembler:assemble] %d image(s) kept at original host: indices=%s", len(kept), kept)
        return self._deliver(QueryResult(message=None, attachments=self.attachments, error=False))

    async def _rehost(self, index: int) -> None:
        attachment = self.attachments[index]
        source = attachment.image_url
        try:
            hosted = await asyncio.wait_for(
                self.image_host.upload(source, format=REHOST_FORMAT),
                timeout=self.rehost_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("[assembler:rehost] timeout after %.1fs index=%d url=%s", self.rehost_timeout, index, source)
        except ImageHostingError as e:
            logger.warning("[assembler:rehost] failed index=%d: %s", index, e.detail)
        except Exception:
            # keep the original image for any other upload failure too
            logger.exception("[assembler:rehost] unexpected failure index=%d url=%s", index, source)
        else:
            attachment.image_url = hosted.secure_url
            attachment.from_url = hosted.secure_url
            attachment.image_width = hosted.width
            attachment.image_height = hosted.height
        finally:
            self.pending.discard(index)
            logger.info("[assembler:rehost] index=%d resolved pending=%d", index, len(self.pending))

    def _deliver(self, result: QueryResult) -> QueryResult:
        if self.state is AssemblyState.DELIVERED:
            raise RuntimeError("result already delivered")
        self.state = AssemblyState.DELIVERED
        logger.info(
            "[assembler:deliver] OUT error=%s attachments=%s",
            result.error,
            len(result.attachments) if result.attachments is not None else None,
        )
        return result
