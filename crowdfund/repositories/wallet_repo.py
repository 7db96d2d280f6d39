"""
Wallet and wallet transaction repository.
"""
from typing import Optional, List
from datetime import datetime

from sqlmodel import select
from sqlalchemy import update
from sqlalchemy import exc as sa_exc
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlmodel.ext.asyncio.session import AsyncSession

from crowdfund.models.wallet import TransactionType, Wallet, WalletTransaction
from crowdfund.repositories.base import BaseRepository, storage_call
from crowdfund.repositories.interfaces import WalletStore


class WalletRepository(BaseRepository[Wallet], WalletStore):
    """PostgreSQL wallet store."""

    def __init__(self, session: AsyncSession):
        super().__init__(Wallet, session)

    async def _ensure_wallet(self, user_id: int) -> None:
        stmt = pg_insert(Wallet).values(
            user_id=user_id,
            balance=0,
            updated_at=datetime.utcnow()
        ).on_conflict_do_nothing(index_elements=["user_id"])
        await self.session.exec(stmt)

    async def _credit(self, user_id: int, amount: int) -> int:
        # Increment in SQL so concurrent credits serialize on the row lock
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id)
            .values(balance=Wallet.balance + amount, updated_at=datetime.utcnow())
            .returning(Wallet.id)
        )
        result = await self.session.exec(stmt)
        return result.scalar_one()

    async def _by_user(self, user_id: int) -> Wallet:
        query = select(Wallet).where(Wallet.user_id == user_id).execution_options(populate_existing=True)
        result = await self.session.exec(query)
        return result.one()

    @storage_call
    async def get_or_create(self, user_id: int) -> Wallet:
        await self._ensure_wallet(user_id)
        await self.session.commit()
        return await self._by_user(user_id)

    @storage_call
    async def top_up(self, user_id: int, amount: int, method: str, phone_number: str) -> Wallet:
        try:
            await self._ensure_wallet(user_id)
            wallet_id = await self._credit(user_id, amount)
            self.session.add(WalletTransaction(
                wallet_id=wallet_id,
                transaction_type=TransactionType.TOPUP,
                amount=amount,
                method=method,
                phone_number=phone_number,
            ))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return await self._by_user(user_id)

    @storage_call
    async def withdraw_campaign(self, user_id: int, campaign_id: int, amount: int) -> Optional[Wallet]:
        try:
            await self._ensure_wallet(user_id)
            wallet = await self._by_user(user_id)
            self.session.add(WalletTransaction(
                wallet_id=wallet.id,
                transaction_type=TransactionType.WITHDRAWAL,
                amount=amount,
                campaign_id=campaign_id,
            ))
            # Trips the one-withdrawal-per-campaign index before any balance change
            await self.session.flush()
            await self._credit(user_id, amount)
            await self.session.commit()
        except sa_exc.IntegrityError:
            await self.session.rollback()
            return None
        except Exception:
            await self.session.rollback()
            raise
        return await self._by_user(user_id)

    @storage_call
    async def get_transaction(self, transaction_id: int) -> Optional[WalletTransaction]:
        return await self.session.get(WalletTransaction, transaction_id, populate_existing=True)

    @storage_call
    async def list_transactions(self, wallet_id: int) -> List[WalletTransaction]:
        query = select(WalletTransaction).where(
            WalletTransaction.wallet_id == wallet_id,
            WalletTransaction.is_deleted == False
        ).order_by(WalletTransaction.created_at.desc(), WalletTransaction.id.desc())
        result = await self.session.exec(query)
        return result.all()

    @storage_call
    async def soft_delete_transaction(self, transaction_id: int, wallet_id: int) -> bool:
        stmt = (
            update(WalletTransaction)
            .where(
                WalletTransaction.id == transaction_id,
                WalletTransaction.wallet_id == wallet_id,
                WalletTransaction.is_deleted == False
            )
            .values(is_deleted=True)
        )
        result = await self.session.exec(stmt)
        await self.session.commit()
        return result.rowcount > 0
