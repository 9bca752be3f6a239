"""Pydantic schemas for the file upload endpoint."""

from pydantic import BaseModel, Field


class UploadResult(BaseModel):
    """Location of a stored upload."""

    url: str = Field(description="URL the file is served from")
    filename: str = Field(description="Stored file name")
    type: str = Field(description="Upload kind (image or audio)")
