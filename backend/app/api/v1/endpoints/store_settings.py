# backend/app/api/v1/endpoints/store_settings.py
"""
Endpoints de los ajustes generales de la tienda.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.settings_schema import StoreSettingsResponse, StoreSettingsUpdate
from app.services.settings_service import settings_service

router = APIRouter()


@router.get("/", response_model=Optional[StoreSettingsResponse])
async def read_store_settings(db: AsyncSession = Depends(deps.get_db)):
    """Ajustes de la tienda, o null si todavía no se han guardado."""
    return await settings_service.get_settings(db)


@router.put("/", response_model=StoreSettingsResponse)
async def update_store_settings(
    settings_in: StoreSettingsUpdate,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
):
    return await settings_service.update_settings(db, settings_in)
