# backend/app/crud/user_crud.py
"""
Operaciones CRUD para el modelo UserAccount.

Operaciones CRUD para cuentas de usuario: rol asignado y nombre de perfil.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user_model import UserAccount


async def get_account(db: AsyncSession, principal: str) -> Optional[UserAccount]:
    result = await db.execute(select(UserAccount).filter(UserAccount.principal == principal))
    return result.scalars().first()


async def get_accounts_by_role(db: AsyncSession, role: str) -> List[UserAccount]:
    result = await db.execute(
        select(UserAccount).filter(UserAccount.role == role).order_by(UserAccount.principal)
    )
    return list(result.scalars().all())


async def upsert_account(
    db: AsyncSession,
    principal: str,
    role: Optional[str] = None,
    display_name: Optional[str] = None,
) -> UserAccount:
    """
    Crea la cuenta si no existe y actualiza solo los campos proporcionados.
    """
    account = await get_account(db, principal)
    if account is None:
        account = UserAccount(principal=principal, role=role or "user")
    elif role is not None:
        account.role = role
    if display_name is not None:
        account.display_name = display_name
    db.add(account)
    await db.commit()
    await db.refresh(account)
    return account
