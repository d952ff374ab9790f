# backend/app/services/cart_service.py
"""
Servicio de Carrito de Compras para la aplicación.

Este servicio se encarga de gestionar el carrito de cada llamante en memoria:
un diccionario product_id -> cantidad por identidad. El carrito se crea al
añadir el primer producto y desaparece entero al vaciarlo.
"""
import logging
from typing import Dict, List

from app.core.exceptions import NotFoundError, ValidationError
from app.schemas.cart_schema import CartItem

logger = logging.getLogger(__name__)


class CartService:
    """
    Servicio para gestionar el carrito de compras de cada usuario en memoria.

    La existencia del producto la comprueba el llamante contra el catálogo
    antes de invocar add/remove.
    """
    def __init__(self):
        self._carts: Dict[str, Dict[str, int]] = {}

    def _get_cart_key(self, principal: str) -> str:
        """Genera la clave para un carrito de usuario."""
        return str(principal)

    async def add_product_to_cart(self, principal: str, product_id: str, quantity: int = 1) -> None:
        """
        Fija la cantidad de un producto en el carrito. No acumula: una segunda
        llamada sobrescribe la cantidad anterior.
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1.")

        cart_key = self._get_cart_key(principal)
        current_cart = self._carts.setdefault(cart_key, {})
        current_cart[product_id] = quantity
        logger.debug(f"Carrito de {principal}: {product_id} x{quantity}")

    async def get_cart_contents(self, principal: str) -> List[CartItem]:
        """Obtiene todas las líneas del carrito como lista plana."""
        cart = self._carts.get(self._get_cart_key(principal), {})
        return [CartItem(product_id=pid, quantity=qty) for pid, qty in cart.items()]

    async def remove_product_from_cart(self, principal: str, product_id: str) -> None:
        """
        Elimina un producto del carrito.

        Raises:
            NotFoundError: si el llamante no tiene carrito
        """
        cart_key = self._get_cart_key(principal)
        if cart_key not in self._carts:
            raise NotFoundError("Basket not found.")
        self._carts[cart_key].pop(product_id, None)

    async def clear_cart(self, principal: str) -> None:
        """Elimina por completo el carrito del llamante."""
        self._carts.pop(self._get_cart_key(principal), None)
        logger.debug(f"Carrito de {principal} vaciado.")


# Carrito en memoria compartido por toda la aplicación
cart_service = CartService()
