# backend/app/db/models/product_model.py
from sqlalchemy import Column, Integer, String, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

from app.db.database import Base

class Product(Base):
    __tablename__ = "products"

    # Identificador "<nombre>#<secuencia>"
    product_id = Column(String(300), primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    # Precio en unidades menores de la moneda (céntimos)
    price = Column(Integer, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="RESTRICT"), nullable=False)
    # Referencia opaca devuelta por el almacén de blobs
    image_ref = Column(String(512), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category = relationship("Category")

    def to_dict(self):
        """Convierte el objeto Product en un diccionario."""
        return {
            "id": self.product_id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category.name if self.category else None,
            "image": self.image_ref,
        }

    def __repr__(self):
        return f"<Product(id='{self.product_id}', price={self.price})>"
