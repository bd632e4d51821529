"""Pydantic schemas for upload responses."""

from pydantic import BaseModel
from typing import Dict, List, Optional


class UploadedFileOut(BaseModel):
    file_path: str
    file_name: str
    original_name: str
    file_size: int
    mime_type: str
    full_url: str
    document_type: Optional[str] = None


class UploadedFilesOut(BaseModel):
    files: List[UploadedFileOut]


class FileDeleteRequest(BaseModel):
    file_path: Optional[str] = None


class DirectoryHealth(BaseModel):
    exists: bool
    writable: bool


class DiskSpace(BaseModel):
    free: float
    total: float
    used: float


class UploadHealthOut(BaseModel):
    healthy: bool
    uploads_dir: bool
    subdirectories: Dict[str, DirectoryHealth]
    total_space: Optional[DiskSpace] = None
    timestamp: str
