# backend/app/api/v1/endpoints/cart.py
"""
Este archivo contiene los endpoints para el carrito de compras.

Se encarga de fijar cantidades, eliminar productos, obtener el contenido del
carrito y vaciarlo. El carrito pertenece al llamante identificado; los
invitados no tienen carrito.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.api import deps
from app.crud import product_crud
from app.schemas.cart_schema import Cart, CartItemCreate
from app.services.cart_service import CartService

logger = logging.getLogger(__name__)

# Router para el carrito de compras
router = APIRouter()


@router.get("/", response_model=Cart)
async def get_cart(
    principal: str = Depends(deps.require_user),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """Obtiene el contenido del carrito del llamante."""
    return Cart(items=await cart_service.get_cart_contents(principal))


@router.put("/items", response_model=Cart)
async def set_cart_item(
    item: CartItemCreate,
    db: AsyncSession = Depends(deps.get_db),
    principal: str = Depends(deps.require_user),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Fija la cantidad de un producto en el carrito (sobrescribe la anterior).
    """
    product_db = await product_crud.get_product_by_id(db, item.product_id)
    if not product_db:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    await cart_service.add_product_to_cart(principal, item.product_id, item.quantity)
    return Cart(items=await cart_service.get_cart_contents(principal))


@router.delete("/items/{product_id}", response_model=Cart)
async def remove_cart_item(
    product_id: str,
    db: AsyncSession = Depends(deps.get_db),
    principal: str = Depends(deps.require_user),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """Elimina un producto del carrito."""
    product_db = await product_crud.get_product_by_id(db, product_id)
    if not product_db:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    await cart_service.remove_product_from_cart(principal, product_id)
    return Cart(items=await cart_service.get_cart_contents(principal))


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(
    principal: str = Depends(deps.require_user),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """Vacía por completo el carrito."""
    await cart_service.clear_cart(principal)
