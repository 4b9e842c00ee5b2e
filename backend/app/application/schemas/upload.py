"""Pydantic schemas for image upload responses."""

from pydantic import BaseModel


class ImageUploadResponse(BaseModel):
    url: str
    public_id: str
    width: int
    height: int
    format: str
    bytes: int

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
