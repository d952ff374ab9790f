# backend/app/db/models/settings_model.py
"""
Modelos de configuración administrativa: ajustes de la tienda, configuración
de pagos y precios mínimos por categoría.
"""

from sqlalchemy import Column, Integer, String, Text, Float, JSON

from app.db.database import Base

# Las tablas de fila única usan siempre esta clave
SINGLETON_ID = 1


class StoreSettings(Base):
    __tablename__ = "store_settings"

    settings_id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    store_name = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=False)
    store_description = Column(Text, nullable=False, default="")
    currency = Column(String(3), nullable=False, default="usd")
    tax_rate = Column(Float, nullable=False, default=0.0)


class PaymentConfiguration(Base):
    __tablename__ = "payment_configuration"

    config_id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    secret_key = Column(String(255), nullable=False)
    allowed_countries = Column(JSON, nullable=False, default=list)


class PriceConstraint(Base):
    """
    Precio mínimo por categoría. Se relaciona con Category solo por igualdad de
    nombre, no hay clave foránea.
    """
    __tablename__ = "price_constraints"

    category = Column(String(255), primary_key=True)
    # Decimal en unidades mayores guardado como texto, p. ej. "10.00"
    min_price = Column(String(32), nullable=False)

    def to_dict(self):
        return {"category": self.category, "min_price": self.min_price}
