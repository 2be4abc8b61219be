"""
Queries: the two ways a chat question gets answered.

ConversionQuery answers immediately from the unit table. ComputationQuery asks
Wolfram|Alpha and assembles image attachments. Both expose solve(callback) where
callback receives (message, attachments, error) exactly once.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Protocol, Union

from app.clients.wolfram import ResultTree
from app.core.errors import NothingToConvertError
from app.services.assembler import Attachment, ImageHost, QueryResult, ResultAssembler
from app.services.units import get_conversions

logger = logging.getLogger(__name__)

Callback = Callable[[str | None, list[Attachment] | None, bool | None], Union[Any, Awaitable[Any]]]


class ComputationClient(Protocol):
    """Computation service client (see app.clients.wolfram.WolframClient)."""

    async def query(self, text: str) -> ResultTree | None: ...


class ConversionQuery:
    """A unit conversion. Fails at construction when the text has nothing to convert."""

    kind = "conversion"

    def __init__(self, text: str, resolver: Callable[[str], list[str]] = get_conversions) -> None:
        solution = resolver(text)
        if not solution:
            raise NothingToConvertError(text)
        self._text = text
        self._solution = tuple(solution)

    @property
    def text(self) -> str:
        return self._text

    @property
    def solution(self) -> tuple[str, ...]:
        return self._solution

    async def resolve(self) -> QueryResult:
        return await resolve_query(self)

    async def solve(self, callback: Callback) -> None:
        """Calls back with a message only: "<text> = <value1> = <value2> ..."."""
        await solve_query(self, callback)


class ComputationQuery:
    """
    A query delegated to the computation service.

    Args:
        text: The query to send.
        full: Show every pod. When False only the primary pod (and all its subpods) is shown.
        client: Computation service client.
        image_host: Image host used to rehost result images.
    """

    kind = "computation"

    def __init__(self, text: str, full: bool, client: ComputationClient, image_host: ImageHost) -> None:
        self._text = text
        self._full = bool(full)
        self.client = client
        self.image_host = image_host

    @property
    def text(self) -> str:
        return self._text

    @property
    def full(self) -> bool:
        return self._full

    async def resolve(self) -> QueryResult:
        return await resolve_query(self)

    async def solve(self, callback: Callback) -> None:
        """Calls back with attachments only, or with error=True when there is no answer."""
        await solve_query(self, callback)


Query = Union[ConversionQuery, ComputationQuery]


async def resolve_query(query: Query) -> QueryResult:
    """Resolve either query kind to a QueryResult."""
    if isinstance(query, ConversionQuery):
        message = query.text + " = " + " = ".join(query.solution)
        return QueryResult(message=message, attachments=None, error=None)
    if isinstance(query, ComputationQuery):
        tree = await query.client.query(query.text)
        return await ResultAssembler(query.image_host, query.text, query.full).assemble(tree)
    raise TypeError(f"Unsupported query type: {type(query).__name__}")


async def solve_query(query: Query, callback: Callback) -> None:
    """Resolve the query and call back once. Coroutine callbacks are awaited."""
    result = await resolve_query(query)
    out = callback(result.message, result.attachments, result.error)
    if inspect.isawaitable(out):
        await out


def build_query(text: str, full: bool, client: ComputationClient, image_host: ImageHost) -> Query:
    """
    Route a chat question: unit conversion when the text is one, computation otherwise.
    Raises ValueError for empty text.
    """
    text = (text or "").strip()
    if not text:
        raise ValueError("Query text is required.")
    try:
        query: Query = ConversionQuery(text)
    except NothingToConvertError:
        query = ComputationQuery(text, full, client, image_host)
    logger.info("[query:build_query] IN  text=%r full=%s OUT kind=%s", text, full, query.kind)
    return query
