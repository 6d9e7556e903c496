"""
Buy-link validation

Checks that the registrar purchase page for a domain answers before the
link is shown. Failures are appended to the validation log.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

import aiohttp

from config.settings import settings
from config.constants import ValidationSource, STATUS_ERROR, STATUS_NOT_FOUND
from core.models import ValidationLogEntry
from utils.formatters import build_purchase_url

logger = logging.getLogger(__name__)

FETCH_FAILED = "fetch_failed"


@dataclass(frozen=True)
class BuyLinkResult:
    ok: bool
    url: str
    error: Optional[str] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"ok": self.ok, "url": self.url}
        if not self.ok:
            data["error"] = self.error
            data["message"] = self.message
        return data


class BuyLinkValidator:
    """HEAD-checks purchase URLs; never raises"""

    def __init__(
        self,
        audit_log,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.audit_log = audit_log
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds or settings.buy_link_timeout_seconds)
        self.session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self.session

    async def validate(self, domain: str) -> BuyLinkResult:
        url = build_purchase_url(domain)

        try:
            async with self._get_session().head(url, allow_redirects=True, timeout=self.timeout) as response:
                status = response.status
        except Exception as e:
            await self._log(domain, STATUS_ERROR, f"Cart URL fetch failed: {e}")
            return BuyLinkResult(ok=False, url=url, error=FETCH_FAILED, message="Unable to validate buy link")

        if status == 404:
            await self._log(domain, STATUS_NOT_FOUND, f"Cart URL returned 404: {url}")
            return BuyLinkResult(ok=False, url=url, error=STATUS_NOT_FOUND, message="Buy link not accessible")

        if status >= 400:
            await self._log(domain, STATUS_ERROR, f"Cart URL returned {status}: {url}")
            return BuyLinkResult(ok=False, url=url, error=str(status), message="Buy link returned error")

        return BuyLinkResult(ok=True, url=url)

    async def _log(self, domain: str, status: str, message: str) -> None:
        logger.warning(f"⚠️ buy_link {status} for {domain}: {message}")
        try:
            await self.audit_log.append(ValidationLogEntry(
                domain=domain,
                source=ValidationSource.BUY_LINK,
                status=status,
                message=message
            ))
        except Exception as e:
            logger.error(f"Failed to log validation for {domain}: {e}")

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
