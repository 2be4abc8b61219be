"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.handlers import handle_query
from app.clients.cloudinary import CloudinaryClient
from app.clients.wolfram import WolframClient
from app.core.errors import ServiceUnavailableError
from app.schemas.query import QueryRequest, QueryResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def get_wolfram_client(request: Request) -> WolframClient:
    return request.app.state.wolfram


def get_image_host(request: Request) -> CloudinaryClient:
    return request.app.state.image_host


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Query backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Query ---

@router.post(
    "/query",
    response_model=QueryResponse,
    tags=["query"],
    summary="Answer a chat question",
    description="Unit conversions return a message; anything else goes to Wolfram|Alpha and returns attachments. error=true when there is no answer. 400 on blank text, 503 when Wolfram|Alpha is not configured.",
)
async def post_query(
    body: QueryRequest,
    wolfram: WolframClient = Depends(get_wolfram_client),
    image_host: CloudinaryClient = Depends(get_image_host),
) -> QueryResponse:
    logger.info("[api:post_query] IN  text=%r full=%s", body.text, body.full)
    try:
        response = await handle_query(body, wolfram, image_host)
    except HTTPException:
        raise
    except ServiceUnavailableError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
    except Exception as e:
        logger.exception("Query failed")
        raise HTTPException(status_code=500, detail=str(e)) from e
    logger.info(
        "[api:post_query] OUT error=%s attachments=%s",
        response.error,
        len(response.attachments) if response.attachments is not None else None,
    )
    return response
