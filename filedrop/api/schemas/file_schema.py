# filedrop/api/schemas/file_schema.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UploadFileResponse(BaseModel):
    original_name: Optional[str] = Field(default=None, max_length=1024)
    stored_name: str = Field(min_length=1, max_length=255)
    size_bytes: int
    download_url: str


class FileListItem(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    size_bytes: int
    size_kb: int
    modified_at: datetime
    download_url: str


class FileListResponse(BaseModel):
    files: list[FileListItem]
