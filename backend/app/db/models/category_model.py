# backend/app/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría para la aplicación.

La jerarquía tiene como máximo dos niveles. El vínculo padre/hijo se guarda una
sola vez (parent_id en el hijo); la lista de subcategorías se deriva al leer.
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from app.db.database import Base

class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    parent_id = Column(Integer, ForeignKey("categories.category_id", ondelete="RESTRICT"), nullable=True)
    # Orden del registro, lo fija reorder_categories
    position = Column(Integer, nullable=False, default=0)

    children = relationship("Category", back_populates="parent", order_by="Category.position")
    parent = relationship("Category", remote_side=[category_id], back_populates="children")

    @property
    def subcategories(self):
        """Nombres de las subcategorías en el orden del registro."""
        return [child.name for child in self.children]

    def to_dict(self):
        """Convierte el objeto Category en un diccionario."""
        return {
            "name": self.name,
            "parent": self.parent.name if self.parent else None,
            "subcategories": self.subcategories,
        }

    def __repr__(self):
        return f"<Category(name='{self.name}', parent_id={self.parent_id})>"
