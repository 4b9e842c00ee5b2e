"""Abstract interface for the hosted image service."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class UploadedImage:
    """What the image host reports back after a successful upload."""

    url: str
    public_id: str
    width: int
    height: int
    format: str
    bytes: int


class ImageHost(ABC):
    """Port for storing and removing post images on an external host."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @abstractmethod
    async def upload(
        self,
        content: bytes,
        filename: str,
        *,
        folder: str,
        transformation: str | None = None,
    ) -> UploadedImage:
        """Upload image bytes. Raises ImageHostingError on provider failure."""
        ...

    @abstractmethod
    async def delete(self, public_id: str) -> bool:
        """Remove an image. Returns True when the host confirms deletion."""
        ...
