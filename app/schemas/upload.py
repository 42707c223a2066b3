from dataclasses import dataclass
from pydantic import BaseModel
from typing import List


@dataclass(frozen=True)
class ImagePayload:
    """Image bytes ready to be stored."""
    data: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)


class UploadResponse(BaseModel):
    url: str


class UploadListResponse(BaseModel):
    urls: List[str]


class DeleteResponse(BaseModel):
    status: str = "deleted"
    key: str
