# backend/app/schemas/cart_schema.py
"""
Esquemas Pydantic para la gestión del carrito de la compra.
"""

from pydantic import BaseModel
from typing import List

class CartItemCreate(BaseModel):
    """Esquema para fijar la cantidad de un producto en el carrito."""
    product_id: str
    quantity: int = 1

class CartItem(BaseModel):
    """Una línea del carrito."""
    product_id: str
    quantity: int

class Cart(BaseModel):
    """Esquema que representa el estado completo del carrito."""
    items: List[CartItem] = []
