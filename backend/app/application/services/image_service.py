"""Post image upload and removal against the configured image host."""

import logging
from collections.abc import Awaitable, Callable
from pathlib import PurePath

from app.application.interfaces import ImageHost, UploadedImage
from app.domain.authorization import Action, require
from app.domain.entities import AuthSession
from app.domain.exceptions import ImageHostingError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TRANSFORMATION = "c_limit,w_1200,h_630/q_auto/f_auto"

# Reads at most the given number of bytes, like UploadFile.read(size).
FileReader = Callable[[int], Awaitable[bytes]]


class ImageService:
    """Validates uploads before handing them to the ImageHost port.

    ``image_host`` is None when no credentials are configured; every call then
    fails with an ImageHostingError instead of reaching the network.
    """

    def __init__(
        self,
        image_host: ImageHost | None,
        *,
        folder: str,
        max_size_bytes: int,
        allowed_types: list[str],
        transformation: str = DEFAULT_TRANSFORMATION,
    ):
        self._host = image_host
        self._folder = folder
        self._max_size_bytes = max_size_bytes
        self._allowed_types = [t.lower() for t in allowed_types]
        self._transformation = transformation

    async def upload_image(
        self,
        session: AuthSession | None,
        *,
        read: FileReader | None,
        filename: str | None,
        content_type: str | None,
    ) -> UploadedImage:
        """Upload the file behind ``read`` once the caller may upload and the type is allowed.

        At most one byte over the size limit is ever read.
        """
        session = require(session, Action.UPLOAD_IMAGE)

        if read is None:
            raise ValidationError("No file provided", field="file")
        if (content_type or "").lower() not in self._allowed_types:
            raise ValidationError(
                "Invalid file type. Only JPEG, PNG, and WebP are allowed.", field="file"
            )

        content = await read(self._max_size_bytes + 1)
        if not content:
            raise ValidationError("No file provided", field="file")
        if len(content) > self._max_size_bytes:
            limit_mb = self._max_size_bytes // (1024 * 1024)
            raise ValidationError(f"File size too large. Maximum size is {limit_mb}MB.", field="file")

        host = self._require_host()
        image = await host.upload(
            content,
            PurePath(filename or "upload").name,
            folder=self._folder,
            transformation=self._transformation,
        )
        logger.info(
            "Image uploaded: public_id=%s bytes=%d by=%s", image.public_id, image.bytes, session.user_id
        )
        return image

    async def delete_image(self, session: AuthSession | None, public_id: str | None) -> None:
        require(session, Action.DELETE_IMAGE)

        if not public_id or not public_id.strip():
            raise ValidationError("Public ID is required", field="public_id")

        host = self._require_host()
        if not await host.delete(public_id.strip()):
            raise ValidationError("Failed to delete image", field="public_id")
        logger.info("Image deleted: public_id=%s", public_id)

    def _require_host(self) -> ImageHost:
        if self._host is None:
            raise ImageHostingError("cloudinary", 503, "Image hosting is not configured")
        return self._host
