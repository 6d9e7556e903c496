"""
Shared fixtures and collaborator fakes
"""
import os

# Settings are loaded at import time
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("SIMULATION_MODE", "false")
os.environ.setdefault("ENABLE_REQUEST_LOGGING", "false")

import asyncio
from decimal import Decimal
from typing import Dict, List, Optional, Union
from unittest.mock import AsyncMock, MagicMock

import jwt
import pytest

from config.settings import settings
from core.models import CurrentUser
from config.constants import UserRole
from database.memory_store import InMemoryAuditLog, InMemoryLedger, InMemorySearchHistory
from services.authorities import (
    PrimaryAvailabilityAuthority,
    PrimaryCheck,
    SecondaryAvailabilityAuthority,
    SecondaryLookup
)
from services.availability_service import AvailabilityResolver
from services.credit_service import CreditLedgerGate
from services.domain_service import DomainService


TAKEN = PrimaryCheck(available=False, status="taken")


class FakePrimary(PrimaryAvailabilityAuthority):
    """Registrar fake: unknown domains are taken"""

    name = "fake_primary"

    def __init__(self, answers: Optional[Dict[str, Union[PrimaryCheck, Exception]]] = None, default=TAKEN, delay: float = 0):
        self.answers = answers or {}
        self.default = default
        self.delay = delay
        self.calls: List[str] = []

    async def check(self, domain_name: str) -> PrimaryCheck:
        self.calls.append(domain_name)
        if self.delay:
            await asyncio.sleep(self.delay)
        answer = self.answers.get(domain_name, self.default)
        if isinstance(answer, Exception):
            raise answer
        return answer


class FakeSecondary(SecondaryAvailabilityAuthority):
    """Registry fake: unknown domains have no record"""

    name = "fake_secondary"

    def __init__(self, answers: Optional[Dict[str, Union[SecondaryLookup, Exception, None]]] = None, delay: float = 0):
        self.answers = answers or {}
        self.delay = delay
        self.calls: List[str] = []

    async def lookup(self, domain_name: str) -> Optional[SecondaryLookup]:
        self.calls.append(domain_name)
        if self.delay:
            await asyncio.sleep(self.delay)
        answer = self.answers.get(domain_name)
        if isinstance(answer, Exception):
            raise answer
        return answer


def available(price: Optional[str] = None) -> PrimaryCheck:
    return PrimaryCheck(
        available=True,
        status="available",
        price=Decimal(price) if price else None
    )


@pytest.fixture
def user():
    return CurrentUser(user_id="user-1")


@pytest.fixture
def admin_user():
    return CurrentUser(user_id="admin-1", role=UserRole.ADMIN)


@pytest.fixture
def audit_log():
    return InMemoryAuditLog()


@pytest.fixture
def ledger():
    return InMemoryLedger()


@pytest.fixture
def history():
    return InMemorySearchHistory()


@pytest.fixture
def primary():
    return FakePrimary()


@pytest.fixture
def secondary():
    return FakeSecondary()


@pytest.fixture
def resolver(primary, secondary, audit_log):
    return AvailabilityResolver(primary, secondary, audit_log, primary_timeout=1, secondary_timeout=1)


@pytest.fixture
def gate(ledger):
    return CreditLedgerGate(ledger, starter_credits=10)


@pytest.fixture
def ai_manager():
    ai = MagicMock()
    ai.suggest_domains = AsyncMock(return_value=[])
    return ai


@pytest.fixture
def domain_service(gate, resolver, audit_log, history, ai_manager):
    return DomainService(
        gate=gate,
        resolver=resolver,
        audit_log=audit_log,
        history=history,
        ai_manager=ai_manager
    )


def make_token(sub: str = "user-1", **claims) -> str:
    return jwt.encode({"sub": sub, **claims}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token('admin-1', role='admin')}"}
