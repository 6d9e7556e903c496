"""
In-process stores

Used when Supabase is not configured (local development) and in tests.
Same async interface as the Supabase repositories.
"""
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional
import asyncio
import logging

from config.constants import ValidationSource
from core.models import LedgerBalance, LedgerDebit, SearchHistoryEntry, ValidationLogEntry

logger = logging.getLogger(__name__)


def _copy(balance: LedgerBalance) -> LedgerBalance:
    return LedgerBalance(
        user_id=balance.user_id,
        current_credits=balance.current_credits,
        total_purchased_credits=balance.total_purchased_credits,
        updated_at=balance.updated_at
    )


class InMemoryLedger:
    """Credit ledger serialized per user"""

    def __init__(self):
        self._balances: Dict[str, LedgerBalance] = {}
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def read_balance(self, user_id: str) -> Optional[LedgerBalance]:
        balance = self._balances.get(user_id)
        return _copy(balance) if balance else None

    async def create_balance(self, user_id: str, credits: int) -> LedgerBalance:
        """Provision a row; an existing row is returned untouched"""
        async with self._locks[user_id]:
            if user_id not in self._balances:
                self._balances[user_id] = LedgerBalance(
                    user_id=user_id,
                    current_credits=credits,
                    updated_at=datetime.now(timezone.utc)
                )
            return _copy(self._balances[user_id])

    async def atomic_debit(self, user_id: str, amount: int) -> LedgerDebit:
        async with self._locks[user_id]:
            balance = self._balances.get(user_id)
            if balance is None:
                return LedgerDebit(applied=False, balance=0)
            if balance.current_credits < amount:
                return LedgerDebit(applied=False, balance=balance.current_credits)

            balance.current_credits -= amount
            balance.updated_at = datetime.now(timezone.utc)
            return LedgerDebit(applied=True, balance=balance.current_credits)

    async def credit(self, user_id: str, amount: int, purchased: bool = False) -> LedgerBalance:
        async with self._locks[user_id]:
            balance = self._balances.setdefault(
                user_id,
                LedgerBalance(user_id=user_id, current_credits=0)
            )
            balance.current_credits += amount
            if purchased:
                balance.total_purchased_credits += amount
            balance.updated_at = datetime.now(timezone.utc)
            return _copy(balance)


class InMemoryAuditLog:
    """Append-only validation log"""

    def __init__(self):
        self._entries: List[ValidationLogEntry] = []

    async def append(self, entry: ValidationLogEntry) -> None:
        self._entries.append(entry)

    async def list_recent(
        self,
        domain: Optional[str] = None,
        source: Optional[ValidationSource] = None,
        limit: int = 100
    ) -> List[ValidationLogEntry]:
        """Newest first"""
        entries = [
            e for e in reversed(self._entries)
            if (domain is None or e.domain == domain)
            and (source is None or e.source == source)
        ]
        return entries[:limit]

    def __len__(self) -> int:
        return len(self._entries)


class InMemorySearchHistory:
    """Per-user search history"""

    def __init__(self):
        self._entries: List[SearchHistoryEntry] = []

    async def record(
        self,
        user_id: str,
        keyword: str,
        operation: str,
        result_count: int,
        available_count: int = 0
    ) -> None:
        self._entries.append(SearchHistoryEntry(
            user_id=user_id,
            keyword=keyword,
            operation=operation,
            result_count=result_count,
            available_count=available_count
        ))

    async def list_for_user(self, user_id: str, limit: int = 20) -> List[SearchHistoryEntry]:
        entries = [e for e in reversed(self._entries) if e.user_id == user_id]
        return entries[:limit]
