# backend/app/db/models/user_model.py
"""
Este archivo contiene el modelo de cuenta de usuario (rol y perfil por identidad).
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from app.db.database import Base

class UserAccount(Base):
    __tablename__ = "user_accounts"

    principal = Column(String(255), primary_key=True)
    role = Column(String(20), nullable=False, default="user")
    display_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<UserAccount(principal='{self.principal}', role='{self.role}')>"
