"""Wallet balances.

Credits are a single ``INSERT ... ON CONFLICT DO UPDATE ... RETURNING``
statement so concurrent approvals for the same owner never lose tokens.
Balances are never read, modified and written back from Python.
"""

from __future__ import annotations

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from api.models.wallet import Wallet

logger = structlog.get_logger()

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


async def credit_wallet(db: AsyncSession, user_id: str, amount: int) -> int:
    """Add ``amount`` tokens to ``user_id``'s wallet, commit, and return the new balance."""
    if amount < 0:
        raise ValueError("Wallet credits must be non-negative")

    dialect = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise RuntimeError(f"No atomic wallet credit for dialect {dialect}")

    stmt = insert(Wallet).values(user_id=user_id, balance=amount)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Wallet.user_id],
        set_={"balance": Wallet.balance + stmt.excluded.balance, "updated_at": func.now()},
    ).returning(Wallet.balance)

    try:
        new_balance = (await db.execute(stmt)).scalar_one()
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("wallet_credited", user_id=user_id, amount=amount, balance=new_balance)
    return int(new_balance)


async def get_balance(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(select(Wallet.balance).where(Wallet.user_id == user_id))
    return int(result.scalar_one_or_none() or 0)
