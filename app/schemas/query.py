"""Schemas for the query endpoint."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request body for POST /query."""

    text: str = Field(..., min_length=1, description="Chat question: a unit conversion or anything for Wolfram|Alpha.")
    full: bool = Field(False, description="Show every result pod instead of only the primary one.")


class AttachmentOut(BaseModel):
    """One chat attachment: a titled image with a plaintext fallback."""

    title: str
    title_link: str
    fallback: str = ""
    color: str | None = None
    image_url: str | None = None
    image_width: int | None = None
    image_height: int | None = None
    from_url: str | None = None


class QueryResponse(BaseModel):
    """Response for POST /query. At most one of message/attachments is set; error=True means neither is."""

    message: str | None = Field(None, description="Plain answer (unit conversions).")
    attachments: list[AttachmentOut] | None = Field(None, description="Rich answer (computation results).")
    error: bool | None = Field(None, description="True when there is no answer.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "1 mi = 1609.344 m = 1.609 km", "attachments": None, "error": None},
                {"message": None, "attachments": None, "error": True},
            ]
        }
    }
