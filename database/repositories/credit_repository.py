"""
Credit Ledger Repository

Balances live in `user_credits`. Every write is a compare-and-swap on the
`current_credits` value that was read, so concurrent debits for the same
user can never both succeed against the same balance.
"""
from typing import Optional, Dict, Any
import logging

from config.constants import LEDGER_MAX_CAS_ATTEMPTS
from core.exceptions import DatabaseError, LedgerUnavailableError
from core.models import LedgerBalance, LedgerDebit
from database.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)


def _to_balance(row: Dict[str, Any]) -> LedgerBalance:
    return LedgerBalance(
        user_id=row["user_id"],
        current_credits=int(row.get("current_credits") or 0),
        total_purchased_credits=int(row.get("total_purchased_credits") or 0),
        updated_at=BaseRepository.parse_timestamp(row.get("updated_at"))
    )


class CreditRepository(BaseRepository):
    """Supabase-backed credit ledger"""

    def __init__(self, db=None, max_attempts: int = LEDGER_MAX_CAS_ATTEMPTS):
        super().__init__("user_credits", db)
        self.max_attempts = max_attempts

    async def read_balance(self, user_id: str) -> Optional[LedgerBalance]:
        row = await self.get_one("user_id", user_id)
        return _to_balance(row) if row else None

    async def create_balance(self, user_id: str, credits: int) -> LedgerBalance:
        """Provision a balance row; concurrent first requests keep the first row"""
        now = self.now()
        try:
            self.db.table(self.table_name).upsert(
                {
                    "user_id": user_id,
                    "current_credits": credits,
                    "total_purchased_credits": 0,
                    "created_at": now,
                    "updated_at": now
                },
                on_conflict="user_id",
                ignore_duplicates=True
            ).execute()
        except Exception as e:
            logger.error(f"Create balance failed for {user_id}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

        balance = await self.read_balance(user_id)
        if balance is None:
            raise LedgerUnavailableError(f"Balance row for {user_id} missing after provisioning")
        return balance

    async def _compare_and_swap(
        self,
        user_id: str,
        expected: int,
        changes: Dict[str, Any]
    ) -> Optional[LedgerBalance]:
        """Apply changes only if current_credits still equals expected"""
        changes["updated_at"] = self.now()
        try:
            result = (
                self.db.table(self.table_name)
                .update(changes)
                .eq("user_id", user_id)
                .eq("current_credits", expected)
                .execute()
            )
        except Exception as e:
            logger.error(f"Ledger update failed for {user_id}: {e}")
            raise DatabaseError(f"Database operation failed: {str(e)}")

        return _to_balance(result.data[0]) if result.data else None

    async def atomic_debit(self, user_id: str, amount: int) -> LedgerDebit:
        for attempt in range(1, self.max_attempts + 1):
            balance = await self.read_balance(user_id)
            if balance is None:
                return LedgerDebit(applied=False, balance=0)
            if balance.current_credits < amount:
                return LedgerDebit(applied=False, balance=balance.current_credits)

            updated = await self._compare_and_swap(
                user_id,
                balance.current_credits,
                {"current_credits": balance.current_credits - amount}
            )
            if updated is not None:
                return LedgerDebit(applied=True, balance=updated.current_credits)

            logger.debug(f"Debit CAS lost for {user_id} (attempt {attempt})")

        raise LedgerUnavailableError(
            f"Could not debit {user_id} after {self.max_attempts} attempts"
        )

    async def credit(self, user_id: str, amount: int, purchased: bool = False) -> LedgerBalance:
        for attempt in range(1, self.max_attempts + 1):
            balance = await self.read_balance(user_id)
            if balance is None:
                raise LedgerUnavailableError(f"No balance row for {user_id}")

            changes = {"current_credits": balance.current_credits + amount}
            if purchased:
                changes["total_purchased_credits"] = balance.total_purchased_credits + amount

            updated = await self._compare_and_swap(user_id, balance.current_credits, changes)
            if updated is not None:
                return updated

            logger.debug(f"Credit CAS lost for {user_id} (attempt {attempt})")

        raise LedgerUnavailableError(
            f"Could not credit {user_id} after {self.max_attempts} attempts"
        )
