# backend/app/services/user_service.py
"""
Registro de administradores, roles y perfiles de usuario.

El proveedor de identidad solo entrega una cadena opaca (principal). Aquí se
resuelve su rol:
- admin: si figura en ADMIN_PRINCIPALS o tiene rol admin guardado
- guest: si es anónimo o tiene rol guest guardado
- user: cualquier otra identidad
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError
from app.crud import user_crud
from app.db.models.user_model import UserAccount
from app.schemas.user_schema import UserRole

logger = logging.getLogger(__name__)

ANONYMOUS_PRINCIPAL = "anonymous"


def is_anonymous(principal: Optional[str]) -> bool:
    return not principal or principal == ANONYMOUS_PRINCIPAL


class UserService:

    def __init__(self, bootstrap_admins: Optional[List[str]] = None):
        self.bootstrap_admins = set(settings.admin_principals if bootstrap_admins is None else bootstrap_admins)

    # ========================================
    # ROLES
    # ========================================

    async def get_role(self, db: AsyncSession, principal: Optional[str]) -> UserRole:
        """Resuelve el rol de una identidad."""
        if is_anonymous(principal):
            return UserRole.GUEST
        if principal in self.bootstrap_admins:
            return UserRole.ADMIN
        account = await user_crud.get_account(db, principal)
        if account is None:
            return UserRole.USER
        return UserRole(account.role)

    async def is_admin(self, db: AsyncSession, principal: Optional[str]) -> bool:
        return await self.get_role(db, principal) is UserRole.ADMIN

    async def assign_role(self, db: AsyncSession, principal: str, role: UserRole) -> UserAccount:
        """
        Asigna un rol a una identidad (crea la cuenta si hace falta).

        Raises:
            ConflictError: si se degrada una identidad de ADMIN_PRINCIPALS o al
                último administrador
        """
        if role is not UserRole.ADMIN and principal in self.bootstrap_admins:
            raise ConflictError(f"'{principal}' is configured in ADMIN_PRINCIPALS and cannot be demoted.")
        if role is not UserRole.ADMIN and await self.is_admin(db, principal):
            await self._ensure_not_last_admin(db, principal)
        account = await user_crud.upsert_account(db, principal, role=role.value)
        logger.info(f"Rol de {principal} fijado en '{role.value}'.")
        return account

    # ========================================
    # ADMINISTRADORES
    # ========================================

    async def list_admins(self, db: AsyncSession) -> List[str]:
        stored = [a.principal for a in await user_crud.get_accounts_by_role(db, UserRole.ADMIN.value)]
        return sorted(self.bootstrap_admins | set(stored))

    async def add_admin(self, db: AsyncSession, principal: str) -> List[str]:
        """
        Concede privilegios de administrador.

        Raises:
            ConflictError: si la identidad ya es administradora
        """
        if await self.is_admin(db, principal):
            raise ConflictError(f"'{principal}' is already an admin.")
        await user_crud.upsert_account(db, principal, role=UserRole.ADMIN.value)
        logger.info(f"Administrador añadido: {principal}")
        return await self.list_admins(db)

    async def remove_admin(self, db: AsyncSession, principal: str) -> List[str]:
        """
        Retira los privilegios de administrador; la identidad pasa a 'user'.

        Raises:
            NotFoundError: si la identidad no es administradora
            ConflictError: si es el último administrador o viene de ADMIN_PRINCIPALS
        """
        if not await self.is_admin(db, principal):
            raise NotFoundError(f"'{principal}' is not an admin.")
        if principal in self.bootstrap_admins:
            raise ConflictError(f"'{principal}' is configured in ADMIN_PRINCIPALS and cannot be removed.")
        await self._ensure_not_last_admin(db, principal)
        await user_crud.upsert_account(db, principal, role=UserRole.USER.value)
        logger.info(f"Administrador retirado: {principal}")
        return await self.list_admins(db)

    async def _ensure_not_last_admin(self, db: AsyncSession, principal: str) -> None:
        admins = await self.list_admins(db)
        if admins == [principal]:
            raise ConflictError("Cannot remove the last admin.")

    # ========================================
    # PERFILES
    # ========================================

    async def get_profile(self, db: AsyncSession, principal: str) -> Optional[str]:
        """Nombre del perfil, o None si el usuario no lo ha guardado."""
        account = await user_crud.get_account(db, principal)
        return account.display_name if account else None

    async def save_profile(self, db: AsyncSession, principal: str, name: str) -> str:
        account = await user_crud.upsert_account(db, principal, display_name=name)
        return account.display_name


user_service = UserService()
