"""
Upstream availability authorities

Primary: registrar availability API (Spaceship).
Secondary: registry RDAP lookup, used to catch registrar false positives.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import hashlib
import logging

import aiohttp

from config.settings import settings
from config.constants import DEFAULT_TLD_PRICES, FALLBACK_PRICE, STATUS_ERROR
from core.exceptions import MissingAPIKeyError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrimaryCheck:
    """Registrar answer; `available` is None when the flag was missing"""
    available: Optional[bool]
    status: Optional[str] = None
    price: Optional[Decimal] = None
    registered: Optional[bool] = None


@dataclass(frozen=True)
class SecondaryLookup:
    """Registry record found for the domain"""
    statuses: List[str] = field(default_factory=list)


class PrimaryAvailabilityAuthority(ABC):
    """Registrar-style availability API"""

    name = "primary"

    @abstractmethod
    async def check(self, domain_name: str) -> PrimaryCheck:
        """Check availability; raises on transport or upstream errors"""

    async def close(self) -> None:
        """Release network resources"""


class SecondaryAvailabilityAuthority(ABC):
    """Registry-protocol lookup"""

    name = "secondary"

    @abstractmethod
    async def lookup(self, domain_name: str) -> Optional[SecondaryLookup]:
        """Look up a registration; None means no record exists (NotFound)"""

    async def close(self) -> None:
        """Release network resources"""


def parse_price(value: Any) -> Optional[Decimal]:
    """Parse an upstream price, ignoring anything that is not a positive number"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, dict):
        value = value.get("amount") or value.get("price")
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    return price if price > 0 else None


def parse_primary_payload(data: Any) -> PrimaryCheck:
    """Convert a registrar JSON body into a PrimaryCheck"""
    if not isinstance(data, dict):
        return PrimaryCheck(available=None)

    available = data.get("available")
    if not isinstance(available, bool):
        available = None

    status = data.get("status")
    registered = data.get("registered")
    return PrimaryCheck(
        available=available,
        status=str(status) if status is not None else None,
        price=parse_price(data.get("price")),
        registered=registered if isinstance(registered, bool) else None
    )


def parse_rdap_payload(data: Any) -> SecondaryLookup:
    """Extract the status list from an RDAP domain object"""
    statuses = data.get("status", []) if isinstance(data, dict) else []
    if isinstance(statuses, str):
        statuses = [statuses]
    return SecondaryLookup(statuses=[str(s).lower() for s in statuses])


class _HttpAuthority:
    """Shared aiohttp session handling"""

    def __init__(self, timeout_seconds: float, session: Optional[aiohttp.ClientSession] = None):
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self.session

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()


class SpaceshipAuthority(_HttpAuthority, PrimaryAvailabilityAuthority):
    """Spaceship registrar availability API"""

    name = "spaceship"

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__(timeout_seconds or settings.primary_timeout_seconds, session)
        self.api_key = api_key if api_key is not None else settings.primary_api_key
        self.url = url or settings.primary_api_url

    async def check(self, domain_name: str) -> PrimaryCheck:
        if not self.api_key:
            raise MissingAPIKeyError(self.name, "No Spaceship API key configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            async with self._get_session().get(
                self.url,
                params={"domain": domain_name},
                headers=headers,
                timeout=self.timeout
            ) as response:
                if response.status != 200:
                    raise UpstreamUnavailableError(
                        self.name,
                        f"API request failed: {response.status} {response.reason}",
                        status=STATUS_ERROR,
                        http_status=response.status
                    )
                data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise UpstreamUnavailableError(self.name, str(e), status=STATUS_ERROR) from e

        return parse_primary_payload(data)


class RdapAuthority(_HttpAuthority, SecondaryAvailabilityAuthority):
    """RDAP bootstrap lookup (rdap.org)"""

    name = "rdap"

    def __init__(
        self,
        url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__(timeout_seconds or settings.secondary_timeout_seconds, session)
        self.url = (url or settings.secondary_api_url).rstrip("/")

    async def lookup(self, domain_name: str) -> Optional[SecondaryLookup]:
        try:
            async with self._get_session().get(
                f"{self.url}/{quote(domain_name)}",
                headers={"Accept": "application/json"},
                timeout=self.timeout
            ) as response:
                if response.status == 404:
                    return None
                if response.status != 200:
                    raise UpstreamUnavailableError(
                        self.name,
                        f"RDAP request failed: {response.status}",
                        status=STATUS_ERROR,
                        http_status=response.status
                    )
                data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise UpstreamUnavailableError(self.name, str(e), status=STATUS_ERROR) from e

        return parse_rdap_payload(data)


def _stable_bucket(value: str) -> int:
    """Deterministic 0-99 bucket for a string"""
    digest = hashlib.sha256(value.encode("utf-8")).hexdigest()
    return int(digest[:8], 16) % 100


class SimulatedPrimaryAuthority(PrimaryAvailabilityAuthority):
    """
    Offline registrar stand-in for demos and local development

    Availability is a deterministic function of the name: shorter names
    are less likely to be free. Only wired when `simulation_mode` is on.
    """

    name = "simulated_primary"

    async def check(self, domain_name: str) -> PrimaryCheck:
        base_name, _, tld = domain_name.partition(".")
        length_factor = max(0.2, min(0.8, (len(base_name) - 3) / 10))
        available = _stable_bucket(domain_name) < int(60 * length_factor)
        return PrimaryCheck(
            available=available,
            status="available" if available else "taken",
            price=DEFAULT_TLD_PRICES.get(tld, FALLBACK_PRICE) if available else None
        )


class SimulatedSecondaryAuthority(SecondaryAvailabilityAuthority):
    """Registry stand-in that never finds a record"""

    name = "simulated_secondary"

    async def lookup(self, domain_name: str) -> Optional[SecondaryLookup]:
        return None


def build_authorities() -> Dict[str, Any]:
    """Create the configured primary/secondary authority pair"""
    if settings.simulation_mode:
        logger.warning("⚠️ SIMULATION MODE: availability results are not real")
        return {
            "primary": SimulatedPrimaryAuthority(),
            "secondary": SimulatedSecondaryAuthority()
        }

    if not settings.has_primary_api():
        logger.warning("⚠️ No primary availability API key configured; all domains resolve unavailable")

    return {
        "primary": SpaceshipAuthority(),
        "secondary": RdapAuthority()
    }
