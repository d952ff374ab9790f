# backend/app/services/payment_service.py
"""
Cliente del procesador de pagos (Stripe).

Guarda la clave secreta y los países de envío admitidos, crea sesiones de
Checkout y consulta su estado. Se habla directamente con la API REST de Stripe
mediante httpx; los parámetros van codificados como formulario, tal y como los
espera Stripe (line_items[0][price_data][currency]=usd, ...).

Cualquier error de red o respuesta no 2xx se traduce a ExternalServiceError.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ExternalServiceError, NotFoundError, ValidationError
from app.crud import product_crud, settings_crud
from app.db.models.settings_model import PaymentConfiguration
from app.schemas.cart_schema import CartItem
from app.schemas.settings_schema import CheckoutSession, CheckoutSessionStatus, ShoppingItem
from app.services.settings_service import SettingsService, settings_service as default_settings_service

logger = logging.getLogger(__name__)

COUNTRY_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")


def normalize_countries(allowed_countries: List[str]) -> List[str]:
    """
    Normaliza los códigos de país (strip + mayúsculas) y descarta vacíos.

    Raises:
        ValidationError: si algún código no tiene dos letras o no queda ninguno
    """
    codes = []
    for raw in allowed_countries:
        code = raw.strip().upper()
        if not code:
            continue
        if not COUNTRY_CODE_PATTERN.match(code):
            raise ValidationError(f"Invalid country code '{raw}'. Use two-letter ISO codes.")
        if code not in codes:
            codes.append(code)
    if not codes:
        raise ValidationError("At least one allowed country is required.")
    return codes


def build_checkout_form(
    items: List[ShoppingItem],
    success_url: str,
    cancel_url: str,
    allowed_countries: List[str],
    client_reference_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Parámetros de POST /v1/checkout/sessions en notación de formulario de Stripe."""
    form: Dict[str, Any] = {
        "mode": "payment",
        "success_url": success_url,
        "cancel_url": cancel_url,
    }
    for i, item in enumerate(items):
        prefix = f"line_items[{i}]"
        form[f"{prefix}[price_data][currency]"] = item.currency
        form[f"{prefix}[price_data][product_data][name]"] = item.product_name
        if item.product_description:
            form[f"{prefix}[price_data][product_data][description]"] = item.product_description
        form[f"{prefix}[price_data][unit_amount]"] = str(item.price_in_cents)
        form[f"{prefix}[quantity]"] = str(item.quantity)
    for j, country in enumerate(allowed_countries):
        form[f"shipping_address_collection[allowed_countries][{j}]"] = country
    if client_reference_id:
        form["client_reference_id"] = client_reference_id
    return form


class PaymentService:
    """
    Servicio de pagos. El transporte de httpx se puede inyectar para los tests.
    """

    def __init__(
        self,
        api_base: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        store_settings: Optional[SettingsService] = None,
    ):
        self.api_base = (api_base or settings.STRIPE_API_BASE).rstrip("/")
        self.transport = transport
        self.store_settings = store_settings or default_settings_service

    # ========================================
    # CONFIGURACIÓN
    # ========================================

    async def get_configuration(self, db: AsyncSession) -> Optional[PaymentConfiguration]:
        return await settings_crud.get_payment_configuration(db)

    async def is_configured(self, db: AsyncSession) -> bool:
        config = await settings_crud.get_payment_configuration(db)
        return bool(config and config.secret_key and config.allowed_countries)

    async def set_configuration(self, db: AsyncSession, secret_key: str, allowed_countries: List[str]) -> PaymentConfiguration:
        """
        Guarda la clave de Stripe y los países de envío.

        Raises:
            ValidationError: clave vacía o códigos de país inválidos
        """
        secret_key = (secret_key or "").strip()
        if not secret_key:
            raise ValidationError("Stripe secret key is required.")
        countries = normalize_countries(allowed_countries)
        config = await settings_crud.upsert_payment_configuration(db, secret_key, countries)
        logger.info(f"Configuración de Stripe actualizada. Países admitidos: {', '.join(countries)}")
        return config

    # ========================================
    # SESIONES DE CHECKOUT
    # ========================================

    async def items_from_cart(self, db: AsyncSession, cart_items: List[CartItem]) -> List[ShoppingItem]:
        """Convierte las líneas del carrito en líneas de pago con precio de catálogo."""
        products = {p.product_id: p for p in await product_crud.get_products_by_ids(db, [c.product_id for c in cart_items])}
        currency = await self.store_settings.get_currency(db)
        items = []
        for line in cart_items:
            product = products.get(line.product_id)
            if product is None:
                raise NotFoundError(f"Product '{line.product_id}' in basket no longer exists.")
            items.append(
                ShoppingItem(
                    product_name=product.name,
                    product_description=product.description or "",
                    currency=currency,
                    price_in_cents=product.price,
                    quantity=line.quantity,
                )
            )
        return items

    async def create_checkout_session(
        self,
        db: AsyncSession,
        items: List[ShoppingItem],
        success_url: str,
        cancel_url: str,
        principal: Optional[str] = None,
    ) -> CheckoutSession:
        """
        Crea una sesión de Checkout en Stripe.

        Raises:
            ValidationError: si Stripe no está configurado o no hay líneas
            ExternalServiceError: si Stripe falla o no responde
        """
        config = await settings_crud.get_payment_configuration(db)
        if not (config and config.secret_key and config.allowed_countries):
            raise ValidationError("Stripe is not configured.")
        if not items:
            raise ValidationError("Cannot create a checkout session without items.")

        form = build_checkout_form(items, success_url, cancel_url, config.allowed_countries, principal)
        data = await self._request(config.secret_key, "POST", "/v1/checkout/sessions", data=form)
        logger.info(f"Sesión de checkout {data.get('id')} creada ({len(items)} líneas) para {principal or 'anónimo'}.")
        return CheckoutSession(id=data["id"], url=data.get("url"))

    async def get_session_status(self, db: AsyncSession, session_id: str) -> CheckoutSessionStatus:
        """
        Consulta el estado de una sesión de Checkout.

        Una sesión pagada o completa se devuelve como 'completed'; cualquier
        otro estado como 'failed'.
        """
        config = await settings_crud.get_payment_configuration(db)
        if not (config and config.secret_key):
            raise ValidationError("Stripe is not configured.")

        data = await self._request(config.secret_key, "GET", f"/v1/checkout/sessions/{session_id}")
        if data.get("payment_status") == "paid" or data.get("status") == "complete":
            return CheckoutSessionStatus(
                status="completed",
                user_principal=data.get("client_reference_id"),
                response=f"Payment {data.get('payment_status')} for session {session_id}",
            )
        return CheckoutSessionStatus(
            status="failed",
            error=f"Session {session_id} is {data.get('status')} ({data.get('payment_status')})",
        )

    async def _request(self, secret_key: str, method: str, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {secret_key}"}
        try:
            async with httpx.AsyncClient(
                base_url=self.api_base, timeout=settings.STRIPE_TIMEOUT, transport=self.transport
            ) as client:
                response = await client.request(method, path, data=data, headers=headers)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Error HTTP de Stripe en {method} {path}: {e.response.status_code} - {e.response.text}")
            raise ExternalServiceError(f"Payment processor returned {e.response.status_code}.") from e
        except httpx.HTTPError as e:
            logger.error(f"Error de red con Stripe en {method} {path}: {e}")
            raise ExternalServiceError("Payment processor unavailable.") from e


payment_service = PaymentService()
