from typing import Any

from pydantic import BaseModel, Field


class UploadMediaSchema(BaseModel):
    file: str = Field(min_length=1, description="Base64 data URI or remote URL")


class DeleteMediaSchema(BaseModel):
    public_id: str | None = None


class BulkDeleteMediaSchema(BaseModel):
    # validated by the route: anything but a non-empty array is a 400
    public_ids: Any = None
