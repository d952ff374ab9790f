# backend/app/services/settings_service.py
"""
Ajustes generales de la tienda (nombre, contacto, moneda e impuestos).
La validación de campos la hace el esquema StoreSettingsUpdate.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import settings_crud
from app.db.models.settings_model import StoreSettings
from app.schemas.settings_schema import Currency, StoreSettingsUpdate

logger = logging.getLogger(__name__)


class SettingsService:

    async def get_settings(self, db: AsyncSession) -> Optional[StoreSettings]:
        return await settings_crud.get_store_settings(db)

    async def get_currency(self, db: AsyncSession) -> str:
        """Moneda de la tienda; USD si todavía no se han guardado ajustes."""
        db_settings = await settings_crud.get_store_settings(db)
        if db_settings is None or not db_settings.currency:
            return Currency.USD.value
        return db_settings.currency

    async def update_settings(self, db: AsyncSession, settings_in: StoreSettingsUpdate) -> StoreSettings:
        values = settings_in.model_dump()
        values["currency"] = settings_in.currency.value
        db_settings = await settings_crud.upsert_store_settings(db, values)
        logger.info(f"Ajustes de la tienda actualizados: '{db_settings.store_name}' ({db_settings.currency}).")
        return db_settings


settings_service = SettingsService()
