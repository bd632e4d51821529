"""Region lookup API router, proxying wilayah.id."""

from fastapi import APIRouter
from intern_admin.schemas.common import Envelope
from intern_admin.services import wilayah_service

router = APIRouter(prefix="/api/wilayah", tags=["wilayah"])


@router.get("/provinces", response_model=Envelope, response_model_exclude_unset=True)
def list_provinces():
    return {"success": True, "data": wilayah_service.get_provinces()}


@router.get("/regencies/{province_code}", response_model=Envelope, response_model_exclude_unset=True)
def list_regencies(province_code: str):
    return {"success": True, "data": wilayah_service.get_regencies(province_code)}


@router.get("/districts/{regency_code}", response_model=Envelope, response_model_exclude_unset=True)
def list_districts(regency_code: str):
    return {"success": True, "data": wilayah_service.get_districts(regency_code)}
