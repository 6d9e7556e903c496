"""
Credit Ledger Gate

Authorizes billable operations against a user's credit balance. Outcomes
are returned as data; rendering an upgrade prompt is the caller's job.
"""
from dataclasses import dataclass
from typing import Optional, Union
import logging

from config.settings import settings
from core.exceptions import LedgerUnavailableError
from core.models import LedgerBalance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DebitApproved:
    """Operation may proceed"""
    new_balance: Optional[int]
    bypassed: bool = False

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class InsufficientCredits:
    """Balance too low; nothing was debited"""
    available_credits: int
    required_credits: int

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class LedgerUnavailable:
    """Ledger could not be consulted; operation is blocked"""
    reason: str

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class CreditGranted:
    new_balance: int

    @property
    def ok(self) -> bool:
        return True


DebitOutcome = Union[DebitApproved, InsufficientCredits, LedgerUnavailable]
GrantOutcome = Union[CreditGranted, LedgerUnavailable]


class CreditLedgerGate:
    """Check-and-debit credits before billable work starts"""

    def __init__(self, ledger, starter_credits: Optional[int] = None):
        self.ledger = ledger
        self.starter_credits = settings.starter_credits if starter_credits is None else starter_credits

    async def _ensure_balance(self, user_id: str) -> LedgerBalance:
        """Read the ledger row, provisioning the starter balance on first use"""
        balance = await self.ledger.read_balance(user_id)
        if balance is None:
            balance = await self.ledger.create_balance(user_id, self.starter_credits)
            logger.info(f"✅ Provisioned {balance.current_credits} starter credits for user {user_id}")
        return balance

    async def try_debit(
        self,
        user_id: str,
        amount: int,
        reason: str,
        is_admin: bool = False
    ) -> DebitOutcome:
        """
        Atomically debit `amount` credits for `reason`

        Args:
            user_id: Ledger owner
            amount: Credits to debit, must be positive
            reason: Operation being paid for
            is_admin: Admins bypass the gate with no ledger I/O

        Returns:
            DebitApproved, InsufficientCredits or LedgerUnavailable
        """
        if amount <= 0:
            raise ValueError("Debit amount must be positive")

        if is_admin:
            logger.debug(f"Admin bypass for {reason} by user {user_id}")
            return DebitApproved(new_balance=None, bypassed=True)

        try:
            balance = await self._ensure_balance(user_id)
            if balance.current_credits < amount:
                logger.info(
                    f"Insufficient credits for {reason}: user {user_id} "
                    f"has {balance.current_credits}, needs {amount}"
                )
                return InsufficientCredits(
                    available_credits=balance.current_credits,
                    required_credits=amount
                )

            debit = await self.ledger.atomic_debit(user_id, amount)
        except Exception as e:
            logger.error(f"❌ Ledger unavailable while debiting {reason} for user {user_id}: {e}")
            return LedgerUnavailable(reason=str(e))

        if not debit.applied:
            # Lost a race with a concurrent debit for the same user
            return InsufficientCredits(available_credits=debit.balance, required_credits=amount)

        logger.info(f"💳 Debited {amount} credits for {reason}: user {user_id} now has {debit.balance}")
        return DebitApproved(new_balance=debit.balance)

    async def grant(
        self,
        user_id: str,
        amount: int,
        reason: str,
        purchased: bool = False
    ) -> GrantOutcome:
        """Atomically add credits (purchase completion or admin grant)"""
        if amount <= 0:
            raise ValueError("Grant amount must be positive")

        try:
            await self._ensure_balance(user_id)
            balance = await self.ledger.credit(user_id, amount, purchased=purchased)
        except Exception as e:
            logger.error(f"❌ Ledger unavailable while granting credits to user {user_id}: {e}")
            return LedgerUnavailable(reason=str(e))

        logger.info(f"✅ Granted {amount} credits ({reason}) to user {user_id}; balance {balance.current_credits}")
        return CreditGranted(new_balance=balance.current_credits)

    async def get_balance(self, user_id: str) -> LedgerBalance:
        """
        Current balance, provisioning on first use

        Raises:
            LedgerUnavailableError: ledger could not be read
        """
        try:
            return await self._ensure_balance(user_id)
        except Exception as e:
            logger.error(f"❌ Failed to read balance for user {user_id}: {e}")
            raise LedgerUnavailableError(f"Could not read credit balance: {e}")
