# backend/app/api/v1/endpoints/payments.py
"""
Endpoints de pagos: configuración de Stripe (solo administradores) y sesiones
de Checkout para usuarios identificados.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.exceptions import ValidationError
from app.schemas.settings_schema import (
    CheckoutSession,
    CheckoutSessionCreate,
    CheckoutSessionStatus,
    PaymentConfigurationStatus,
    PaymentConfigurationUpdate,
)
from app.services.cart_service import CartService
from app.services.payment_service import PaymentService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/config", response_model=PaymentConfigurationStatus)
async def read_payment_configuration(
    db: AsyncSession = Depends(deps.get_db),
    payments: PaymentService = Depends(deps.get_payment_service),
):
    """Indica si Stripe está configurado. La clave secreta nunca se devuelve."""
    config = await payments.get_configuration(db)
    return PaymentConfigurationStatus(
        configured=await payments.is_configured(db),
        allowed_countries=list(config.allowed_countries) if config else [],
    )


@router.put("/config", response_model=PaymentConfigurationStatus)
async def update_payment_configuration(
    config_in: PaymentConfigurationUpdate,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    payments: PaymentService = Depends(deps.get_payment_service),
):
    """Guarda la clave secreta de Stripe y los países de envío admitidos."""
    config = await payments.set_configuration(db, config_in.secret_key, config_in.allowed_countries)
    return PaymentConfigurationStatus(configured=True, allowed_countries=list(config.allowed_countries))


@router.post("/checkout-sessions", response_model=CheckoutSession, status_code=status.HTTP_201_CREATED)
async def create_checkout_session(
    session_in: CheckoutSessionCreate,
    db: AsyncSession = Depends(deps.get_db),
    principal: str = Depends(deps.require_user),
    payments: PaymentService = Depends(deps.get_payment_service),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Crea una sesión de Checkout. Sin items explícitos se cobra el carrito del
    llamante con los precios del catálogo.
    """
    items = session_in.items
    if items is None:
        cart_items = await cart_service.get_cart_contents(principal)
        if not cart_items:
            raise ValidationError("Basket is empty.")
        items = await payments.items_from_cart(db, cart_items)

    return await payments.create_checkout_session(
        db, items, session_in.success_url, session_in.cancel_url, principal=principal
    )


@router.get("/checkout-sessions/{session_id}", response_model=CheckoutSessionStatus)
async def read_checkout_session_status(
    session_id: str,
    db: AsyncSession = Depends(deps.get_db),
    _principal: str = Depends(deps.require_user),
    payments: PaymentService = Depends(deps.get_payment_service),
):
    """Consulta si una sesión de Checkout se ha completado."""
    return await payments.get_session_status(db, session_id)
