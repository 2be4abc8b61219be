"""
API handlers: read request data, call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

from fastapi import HTTPException

from app.clients.cloudinary import CloudinaryClient
from app.clients.wolfram import WolframClient
from app.core.errors import ServiceUnavailableError
from app.schemas.query import AttachmentOut, QueryRequest, QueryResponse
from app.services.query import ComputationQuery, build_query


async def handle_query(body: QueryRequest, wolfram: WolframClient, image_host: CloudinaryClient) -> QueryResponse:
    """
    Route the question, solve it, and convert the delivered result to the response model.
    Raises 400 for blank text and ServiceUnavailableError when Wolfram|Alpha is not configured.
    """
    try:
        query = build_query(body.text, body.full, wolfram, image_host)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if isinstance(query, ComputationQuery) and not wolfram.enabled:
        raise ServiceUnavailableError("Computation service is not configured (set WOLFRAM_APP_ID).")

    delivered: list[QueryResponse] = []

    def on_result(message, attachments, error) -> None:
        delivered.append(
            QueryResponse(
                message=message,
                attachments=[AttachmentOut(**a.to_dict()) for a in attachments] if attachments is not None else None,
                error=error,
            )
        )

    await query.solve(on_result)
    return delivered[0]
