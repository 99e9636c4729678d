from pydantic import BaseModel, Field

from schemas.baseschema import CamelSchema


class CreateFileSchema(CamelSchema):
    public_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    resource_type: str = Field(default="raw", examples=["image", "video", "raw"])
    size: int = Field(default=0, ge=0, alias="bytes")
    file_format: str | None = Field(default=None, alias="format")


class FileReferenceSchema(CreateFileSchema):
    uploaded_at: int


class UploadFileSchema(BaseModel):
    file: str = Field(min_length=1, description="Base64 data URI or remote URL")
    name: str | None = None
