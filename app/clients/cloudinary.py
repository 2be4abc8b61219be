"""
Cloudinary client: rehost a remote image URL and return its secure URL and size.

Responsibility: One signed upload call per image. Raises ImageHostingError on
any failure; the caller decides what to do with the original image.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.config import (
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
    CLOUDINARY_CLOUD_NAME,
    CLOUDINARY_UPLOAD_URL,
    REHOST_FORMAT,
    UPLOAD_API_TIMEOUT,
)
from app.core.errors import ImageHostingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostedImage:
    secure_url: str
    width: int | None
    height: int | None


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Cloudinary signature: sha1 of the sorted "k=v&..." string followed by the secret."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1((to_sign + api_secret).encode("utf-8")).hexdigest()


class CloudinaryClient:
    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        timeout: float = UPLOAD_API_TIMEOUT,
    ):
        self.cloud_name = cloud_name if cloud_name is not None else CLOUDINARY_CLOUD_NAME
        self.api_key = api_key if api_key is not None else CLOUDINARY_API_KEY
        self.api_secret = api_secret if api_secret is not None else CLOUDINARY_API_SECRET
        self.client = httpx.AsyncClient(timeout=timeout)

    @property
    def enabled(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    @property
    def upload_url(self) -> str:
        return CLOUDINARY_UPLOAD_URL.format(cloud_name=self.cloud_name)

    async def upload(self, url: str, format: str = REHOST_FORMAT) -> HostedImage:
        """Upload a remote image by URL. Raises ImageHostingError when the upload does not succeed."""
        if not self.enabled:
            raise ImageHostingError(url, "missing Cloudinary credentials")
        params: dict[str, Any] = {"format": format, "timestamp": int(time.time())}
        payload = {
            **params,
            "file": url,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        try:
            resp = await self.client.post(self.upload_url, data=payload)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise ImageHostingError(url, f"http_status {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise ImageHostingError(url, f"request_failed {e}") from e
        except ValueError as e:
            raise ImageHostingError(url, "invalid JSON response") from e

        if not isinstance(data, dict):
            raise ImageHostingError(url, "response is not a JSON object")
        secure_url = data.get("secure_url")
        if not secure_url:
            raise ImageHostingError(url, "response has no secure_url")
        logger.info("[cloudinary:upload] OUT secure_url=%s %sx%s", secure_url, data.get("width"), data.get("height"))
        return HostedImage(secure_url=secure_url, width=data.get("width"), height=data.get("height"))

    async def close(self) -> None:
        if not self.client.is_closed:
            await self.client.aclose()
