# backend/app/crud/settings_crud.py
"""
Operaciones CRUD para las tablas de configuración de fila única
(ajustes de la tienda y configuración de pagos).
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.settings_model import PaymentConfiguration, StoreSettings, SINGLETON_ID


async def get_store_settings(db: AsyncSession) -> Optional[StoreSettings]:
    result = await db.execute(select(StoreSettings).filter(StoreSettings.settings_id == SINGLETON_ID))
    return result.scalars().first()


async def upsert_store_settings(db: AsyncSession, values: dict) -> StoreSettings:
    """Crea o sobrescribe los ajustes de la tienda."""
    db_settings = await get_store_settings(db)
    if db_settings is None:
        db_settings = StoreSettings(settings_id=SINGLETON_ID)
    for key, value in values.items():
        setattr(db_settings, key, value)
    db.add(db_settings)
    await db.commit()
    await db.refresh(db_settings)
    return db_settings


async def get_payment_configuration(db: AsyncSession) -> Optional[PaymentConfiguration]:
    result = await db.execute(select(PaymentConfiguration).filter(PaymentConfiguration.config_id == SINGLETON_ID))
    return result.scalars().first()


async def upsert_payment_configuration(db: AsyncSession, secret_key: str, allowed_countries: List[str]) -> PaymentConfiguration:
    """Crea o sobrescribe la configuración de Stripe."""
    config = await get_payment_configuration(db)
    if config is None:
        config = PaymentConfiguration(config_id=SINGLETON_ID)
    config.secret_key = secret_key
    config.allowed_countries = list(allowed_countries)
    db.add(config)
    await db.commit()
    await db.refresh(config)
    return config
