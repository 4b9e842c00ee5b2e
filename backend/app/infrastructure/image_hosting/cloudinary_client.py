"""Cloudinary REST client: implements the ImageHost interface.

Talks to the upload API (https://api.cloudinary.com/v1_1/<cloud>/image/...)
with signed requests: the sorted request parameters plus the API secret are
hashed with SHA-1.
"""

import hashlib
import logging
import time

import httpx

from app.application.interfaces import ImageHost, UploadedImage
from app.domain.exceptions import ImageHostingError

logger = logging.getLogger(__name__)

# Never part of the string to sign.
_UNSIGNED_PARAMS = {"file", "api_key", "resource_type", "cloud_name", "signature"}


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature for ``params``."""
    to_sign = "&".join(
        f"{key}={value}"
        for key, value in sorted(params.items())
        if key not in _UNSIGNED_PARAMS and value not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryClient(ImageHost):
    """Infrastructure adapter for Cloudinary image uploads and deletion."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.cloudinary.com/v1_1",
        http_client: httpx.AsyncClient | None = None,
    ):
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "cloudinary"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a one-off one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=60.0)

    def _signed(self, params: dict[str, str]) -> dict[str, str]:
        payload = {**params, "timestamp": str(int(time.time()))}
        payload["signature"] = sign_params(payload, self._api_secret)
        payload["api_key"] = self._api_key
        return payload

    async def upload(
        self,
        content: bytes,
        filename: str,
        *,
        folder: str,
        transformation: str | None = None,
    ) -> UploadedImage:
        params = {"folder": folder}
        if transformation:
            params["transformation"] = transformation
        url = f"{self._base_url}/{self._cloud_name}/image/upload"

        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.post(
                url,
                data=self._signed(params),
                files={"file": (filename, content)},
            )
        except httpx.HTTPError as exc:
            raise ImageHostingError(self.provider_name, 503, f"Upload request failed: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code != 200:
            self._raise_provider_error(response)

        data = response.json()
        logger.debug("Cloudinary upload ok: public_id=%s", data.get("public_id"))
        return UploadedImage(
            url=data.get("secure_url") or data.get("url", ""),
            public_id=data["public_id"],
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
            format=data.get("format", ""),
            bytes=int(data.get("bytes", len(content))),
        )

    async def delete(self, public_id: str) -> bool:
        url = f"{self._base_url}/{self._cloud_name}/image/destroy"

        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.post(url, data=self._signed({"public_id": public_id}))
        except httpx.HTTPError as exc:
            raise ImageHostingError(self.provider_name, 503, f"Delete request failed: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code != 200:
            self._raise_provider_error(response)

        result = response.json().get("result")
        if result != "ok":
            logger.info("Cloudinary refused to delete %s: %s", public_id, result)
        return result == "ok"

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Parse a Cloudinary error body and raise ImageHostingError."""
        try:
            message = response.json().get("error", {}).get("message", response.text)
        except ValueError:
            message = response.text
        logger.error("Cloudinary API error %d: %s", response.status_code, message)
        raise ImageHostingError(self.provider_name, response.status_code, message)
