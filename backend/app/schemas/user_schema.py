# backend/app/schemas/user_schema.py
"""
Esquemas Pydantic para roles, administradores y perfiles de usuario.
"""

import enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class UserRole(str, enum.Enum):
    """Roles que el proveedor de identidad puede resolver."""
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


class AdminCreate(BaseModel):
    principal: str = Field(..., description="Identidad a la que se conceden privilegios")

    @field_validator('principal')
    @classmethod
    def validate_principal(cls, v):
        if not v or not v.strip():
            raise ValueError('La identidad es requerida')
        return v.strip()


class RoleAssignment(BaseModel):
    role: UserRole


class CallerRole(BaseModel):
    principal: Optional[str] = None
    role: UserRole
    is_admin: bool


class UserProfile(BaseModel):
    name: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('El nombre es requerido')
        return v.strip()
