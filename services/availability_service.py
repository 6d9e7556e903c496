"""
Availability Resolver

Reconciles the registrar (primary) and registry (secondary) answers for
each candidate. Failures never escape: they resolve to unavailable with
an audit entry. Routine agreement is not logged.
"""
from typing import List, Optional
import asyncio
import logging

from config.settings import settings
from config.constants import (
    DEFAULT_TLD_PRICES,
    FALLBACK_PRICE,
    ResolutionStatus,
    ValidationSource,
    STATUS_ERROR,
    STATUS_TIMEOUT,
    STATUS_MISMATCH,
    STATUS_INVALID_RESPONSE
)
from core.exceptions import UpstreamUnavailableError
from core.models import Candidate, DomainRecord, ValidationLogEntry
from services.authorities import (
    PrimaryAvailabilityAuthority,
    SecondaryAvailabilityAuthority,
    PrimaryCheck
)

logger = logging.getLogger(__name__)

TAKEN_STATUS_MARKERS = ("taken", "registered")


def default_price(tld: str):
    """Fallback registration price for a TLD"""
    return DEFAULT_TLD_PRICES.get(tld, FALLBACK_PRICE)


def primary_reports_available(check: PrimaryCheck) -> bool:
    """Registrar positive: flag set, no taken/registered status, not marked registered"""
    if check.available is not True:
        return False
    if check.registered is True:
        return False
    status = (check.status or "").lower()
    return not any(marker in status for marker in TAKEN_STATUS_MARKERS)


class AvailabilityResolver:
    """Resolve candidates against two authorities, failing closed"""

    def __init__(
        self,
        primary: PrimaryAvailabilityAuthority,
        secondary: SecondaryAvailabilityAuthority,
        audit_log,
        primary_timeout: Optional[float] = None,
        secondary_timeout: Optional[float] = None,
        max_concurrency: Optional[int] = None
    ):
        self.primary = primary
        self.secondary = secondary
        self.audit_log = audit_log
        self.primary_timeout = primary_timeout or settings.primary_timeout_seconds
        self.secondary_timeout = secondary_timeout or settings.secondary_timeout_seconds
        self.max_concurrency = max_concurrency or settings.resolver_concurrency

    async def resolve(self, candidate: Candidate) -> DomainRecord:
        """
        Resolve one candidate

        Primary is always asked first; the secondary is consulted only when
        the primary claims availability. A secondary record overrides a
        primary positive.
        """
        domain = candidate.name

        try:
            check = await asyncio.wait_for(
                self.primary.check(domain),
                timeout=self.primary_timeout
            )
        except asyncio.TimeoutError:
            await self._record_anomaly(
                domain, ValidationSource.PRIMARY, STATUS_TIMEOUT,
                f"{self.primary.name} did not answer within {self.primary_timeout}s"
            )
            return self._unavailable(candidate, ResolutionStatus.ERROR)
        except UpstreamUnavailableError as e:
            await self._record_anomaly(domain, ValidationSource.PRIMARY, e.status, e.message)
            return self._unavailable(candidate, ResolutionStatus.ERROR)
        except Exception as e:
            await self._record_anomaly(
                domain, ValidationSource.PRIMARY, STATUS_ERROR,
                f"Exception during availability check: {e}"
            )
            return self._unavailable(candidate, ResolutionStatus.ERROR)

        if check.available is None:
            await self._record_anomaly(
                domain, ValidationSource.PRIMARY, STATUS_INVALID_RESPONSE,
                f"{self.primary.name} response missing availability flag (status={check.status})"
            )
            return self._unavailable(candidate, ResolutionStatus.ERROR)

        if not primary_reports_available(check):
            return self._unavailable(candidate, ResolutionStatus.UNAVAILABLE)

        try:
            record = await asyncio.wait_for(
                self.secondary.lookup(domain),
                timeout=self.secondary_timeout
            )
        except asyncio.TimeoutError:
            await self._record_anomaly(
                domain, ValidationSource.SECONDARY, STATUS_TIMEOUT,
                f"{self.secondary.name} did not answer within {self.secondary_timeout}s"
            )
            return self._unavailable(candidate, ResolutionStatus.ERROR)
        except UpstreamUnavailableError as e:
            await self._record_anomaly(domain, ValidationSource.SECONDARY, e.status, e.message)
            return self._unavailable(candidate, ResolutionStatus.ERROR)
        except Exception as e:
            await self._record_anomaly(
                domain, ValidationSource.SECONDARY, STATUS_ERROR,
                f"{self.secondary.name} exception: {e}"
            )
            return self._unavailable(candidate, ResolutionStatus.ERROR)

        if record is not None:
            statuses = ", ".join(record.statuses) or "no status"
            await self._record_anomaly(
                domain, ValidationSource.SECONDARY, STATUS_MISMATCH,
                f"{self.primary.name} marked available but {self.secondary.name} shows registered: {statuses}"
            )
            return self._unavailable(candidate, ResolutionStatus.UNAVAILABLE)

        return DomainRecord(
            name=domain,
            available=True,
            tld=candidate.tld,
            price=check.price if check.price is not None else default_price(candidate.tld),
            status=ResolutionStatus.AVAILABLE
        )

    async def resolve_all(self, candidates: List[Candidate]) -> List[DomainRecord]:
        """Resolve candidates concurrently; output keeps candidate order"""
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(candidate: Candidate) -> DomainRecord:
            async with semaphore:
                return await self.resolve(candidate)

        return list(await asyncio.gather(*(bounded(c) for c in candidates)))

    def _unavailable(self, candidate: Candidate, status: ResolutionStatus) -> DomainRecord:
        return DomainRecord(
            name=candidate.name,
            available=False,
            tld=candidate.tld,
            price=None,
            status=status
        )

    async def _record_anomaly(
        self,
        domain: str,
        source: ValidationSource,
        status: str,
        message: str
    ) -> None:
        """Append one audit entry; a failed write never fails the resolution"""
        logger.warning(f"⚠️ {source.value} {status} for {domain}: {message}")
        entry = ValidationLogEntry(domain=domain, source=source, status=status, message=message)
        try:
            await self.audit_log.append(entry)
        except Exception as e:
            logger.error(f"Failed to log validation for {domain}: {e}")
