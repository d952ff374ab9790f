# backend/app/api/v1/endpoints/users.py
"""
Endpoints de roles y perfiles de usuario.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.user_schema import CallerRole, RoleAssignment, UserProfile, UserRole
from app.services.user_service import UserService

router = APIRouter()


@router.get("/me/role", response_model=CallerRole)
async def read_caller_role(
    principal: Optional[str] = Depends(deps.get_caller_principal),
    role: UserRole = Depends(deps.get_caller_role),
):
    """Rol del llamante: admin, user o guest."""
    return CallerRole(principal=principal, role=role, is_admin=role is UserRole.ADMIN)


@router.get("/me/profile", response_model=UserProfile)
async def read_caller_profile(
    db: AsyncSession = Depends(deps.get_db),
    principal: str = Depends(deps.require_user),
    users: UserService = Depends(deps.get_user_service),
):
    name = await users.get_profile(db, principal)
    if name is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return UserProfile(name=name)


@router.put("/me/profile", response_model=UserProfile)
async def save_caller_profile(
    profile_in: UserProfile,
    db: AsyncSession = Depends(deps.get_db),
    principal: str = Depends(deps.require_user),
    users: UserService = Depends(deps.get_user_service),
):
    name = await users.save_profile(db, principal, profile_in.name)
    return UserProfile(name=name)


@router.get("/{principal}/profile", response_model=UserProfile)
async def read_user_profile(
    principal: str,
    db: AsyncSession = Depends(deps.get_db),
    _caller: str = Depends(deps.require_user),
    users: UserService = Depends(deps.get_user_service),
):
    """Perfil público de otra identidad."""
    name = await users.get_profile(db, principal)
    if name is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return UserProfile(name=name)


@router.put("/{principal}/role", response_model=CallerRole)
async def assign_user_role(
    principal: str,
    role_in: RoleAssignment,
    db: AsyncSession = Depends(deps.get_db),
    _admin: str = Depends(deps.require_admin),
    users: UserService = Depends(deps.get_user_service),
):
    """Asigna un rol a una identidad."""
    await users.assign_role(db, principal, role_in.role)
    role = await users.get_role(db, principal)
    return CallerRole(principal=principal, role=role, is_admin=role is UserRole.ADMIN)
