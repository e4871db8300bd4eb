"""Types for the publish module."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PublishedAsset:
    """A release asset as reported back by the hosting service."""

    id: Optional[int]
    name: str
    content_type: str
    size: int
    download_url: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "content_type": self.content_type,
            "size": self.size,
            "download_url": self.download_url,
        }
