"""Uploads API router. Validates requests and delegates to the service layer."""

from fastapi import APIRouter, File, Form, UploadFile
from typing import List, Optional
from intern_admin.schemas.common import Envelope
from intern_admin.schemas.upload import FileDeleteRequest, UploadedFileOut, UploadedFilesOut, UploadHealthOut
from intern_admin.services import upload_service

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("/photo", response_model=Envelope[UploadedFileOut], response_model_exclude_unset=True)
async def upload_photo(file: Optional[UploadFile] = File(None)):
    saved = await upload_service.save_upload(file, "photo")
    return {"success": True, "message": "Photo uploaded successfully", "data": saved}


@router.post("/document", response_model=Envelope[UploadedFileOut], response_model_exclude_unset=True)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    doc_type: str = Form("document", alias="type"),
):
    saved = await upload_service.save_upload(file, "document", prefix=doc_type)
    saved["document_type"] = doc_type
    return {"success": True, "message": "Document uploaded successfully", "data": saved}


@router.post("/payment", response_model=Envelope[UploadedFileOut], response_model_exclude_unset=True)
async def upload_payment(file: Optional[UploadFile] = File(None)):
    saved = await upload_service.save_upload(file, "payment")
    return {"success": True, "message": "Payment proof uploaded successfully", "data": saved}


@router.post("/multiple", response_model=Envelope[UploadedFilesOut], response_model_exclude_unset=True)
async def upload_multiple(files: Optional[List[UploadFile]] = File(None)):
    saved = await upload_service.save_many(files or [])
    return {"success": True, "message": f"{len(saved)} files uploaded successfully", "data": {"files": saved}}


@router.delete("/file", response_model=Envelope, response_model_exclude_unset=True)
def delete_file(data: FileDeleteRequest):
    upload_service.delete_upload(data.file_path)
    return {"success": True, "message": "File deleted successfully"}


@router.get("/health", response_model=Envelope[UploadHealthOut], response_model_exclude_unset=True)
def upload_health():
    return {"success": True, "data": upload_service.get_health()}
