# backend/app/api/v1/endpoints/admins.py
"""
Endpoints del registro de administradores. Solo accesibles para administradores.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.user_schema import AdminCreate
from app.services.user_service import UserService

router = APIRouter()


@router.get("/", response_model=List[str])
async def read_admins(
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    users: UserService = Depends(deps.get_user_service),
):
    """Lista las identidades con rol de administrador."""
    return await users.list_admins(db)


@router.post("/", response_model=List[str], status_code=status.HTTP_201_CREATED)
async def add_admin(
    admin_in: AdminCreate,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    users: UserService = Depends(deps.get_user_service),
):
    """Concede privilegios de administrador a una identidad."""
    return await users.add_admin(db, admin_in.principal)


@router.delete("/{principal}", response_model=List[str])
async def remove_admin(
    principal: str,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    users: UserService = Depends(deps.get_user_service),
):
    """Retira los privilegios de administrador."""
    return await users.remove_admin(db, principal)
