# backend/app/schemas/settings_schema.py
"""
Se encarga de definir los esquemas Pydantic de la configuración administrativa:
ajustes de la tienda, configuración de Stripe y precios mínimos.
"""

import enum
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class Currency(str, enum.Enum):
    """Monedas admitidas por la tienda."""
    AUD = "aud"
    CAD = "cad"
    EUR = "eur"
    GBP = "gbp"
    USD = "usd"


# ========================================
# AJUSTES DE LA TIENDA
# ========================================

class StoreSettingsBase(BaseModel):
    store_name: str = Field(..., description="Nombre de la tienda")
    contact_email: EmailStr = Field(..., description="Email de contacto")
    store_description: str = Field("", description="Descripción breve de la tienda")
    currency: Currency = Field(Currency.USD, description="Moneda de los precios")
    tax_rate: float = Field(0.0, ge=0, le=100, description="Tipo impositivo en porcentaje")

    @field_validator('store_name')
    @classmethod
    def validate_store_name(cls, v):
        if not v or not v.strip():
            raise ValueError('El nombre de la tienda es requerido')
        return v.strip()

    @field_validator('store_description')
    @classmethod
    def strip_description(cls, v):
        return v.strip()


class StoreSettingsUpdate(StoreSettingsBase):
    pass


class StoreSettingsResponse(StoreSettingsBase):
    model_config = ConfigDict(from_attributes=True)


# ========================================
# CONFIGURACIÓN DE PAGOS
# ========================================

class PaymentConfigurationUpdate(BaseModel):
    """Clave secreta de Stripe y países admitidos para el envío."""
    secret_key: str
    allowed_countries: List[str]


class PaymentConfigurationStatus(BaseModel):
    """Lo que la API devuelve de la configuración. Nunca incluye la clave."""
    configured: bool
    allowed_countries: List[str] = []


# ========================================
# PRECIOS MÍNIMOS
# ========================================

class PriceConstraintUpdate(BaseModel):
    min_price: str = Field(..., description="Precio mínimo en unidades mayores, p. ej. '10.00'")

    @field_validator('min_price')
    @classmethod
    def validate_min_price(cls, v):
        try:
            value = Decimal(v.strip())
        except InvalidOperation:
            raise ValueError('El precio mínimo debe ser un número decimal')
        if not value.is_finite() or value < 0:
            raise ValueError('El precio mínimo no puede ser negativo')
        return v.strip()


class PriceConstraintResponse(BaseModel):
    category: str
    min_price: str

    model_config = ConfigDict(from_attributes=True)


# ========================================
# CHECKOUT
# ========================================

class ShoppingItem(BaseModel):
    """Línea enviada al procesador de pagos."""
    product_name: str
    product_description: str = ""
    currency: str = "usd"
    price_in_cents: int = Field(..., ge=0)
    quantity: int = Field(..., gt=0)


class CheckoutSessionCreate(BaseModel):
    """Si items es None se construyen a partir del carrito del llamante."""
    success_url: str
    cancel_url: str
    items: Optional[List[ShoppingItem]] = None


class CheckoutSession(BaseModel):
    id: str
    url: Optional[str] = None


class CheckoutSessionStatus(BaseModel):
    """Resultado de consultar una sesión: 'completed' o 'failed'."""
    status: str
    user_principal: Optional[str] = None
    response: Optional[str] = None
    error: Optional[str] = None
