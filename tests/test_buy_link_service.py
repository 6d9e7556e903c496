"""
Buy-link validation tests
"""
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from config.constants import ValidationSource
from services.buy_link_service import BuyLinkValidator
from utils.formatters import build_purchase_url


def mock_session(status=None, error=None):
    session = MagicMock()
    session.closed = False
    if error is not None:
        session.head.side_effect = error
    else:
        response = MagicMock()
        response.status = status
        session.head.return_value.__aenter__.return_value = response
    return session


class TestBuyLinkValidator:

    async def test_reachable_link(self, audit_log):
        validator = BuyLinkValidator(audit_log, session=mock_session(200))

        result = await validator.validate("aihub.com")

        assert result.ok
        assert result.to_dict() == {"ok": True, "url": build_purchase_url("aihub.com")}
        assert len(audit_log) == 0

    async def test_not_found_is_logged(self, audit_log):
        validator = BuyLinkValidator(audit_log, session=mock_session(404))

        result = await validator.validate("aihub.com")

        assert not result.ok
        assert result.error == "404"
        entries = await audit_log.list_recent()
        assert [(e.source, e.status) for e in entries] == [(ValidationSource.BUY_LINK, "404")]

    async def test_server_error(self, audit_log):
        validator = BuyLinkValidator(audit_log, session=mock_session(503))

        result = await validator.validate("aihub.com")

        assert result.error == "503"
        assert result.to_dict()["message"] == "Buy link returned error"
        entries = await audit_log.list_recent()
        assert entries[0].status == "error"

    async def test_fetch_failure(self, audit_log):
        validator = BuyLinkValidator(
            audit_log,
            session=mock_session(error=aiohttp.ClientConnectionError("refused"))
        )

        result = await validator.validate("aihub.com")

        assert result.error == "fetch_failed"
        assert len(audit_log) == 1

    async def test_audit_failure_is_swallowed(self):
        audit_log = MagicMock()
        audit_log.append = AsyncMock(side_effect=RuntimeError("log store down"))
        validator = BuyLinkValidator(audit_log, session=mock_session(404))

        result = await validator.validate("aihub.com")

        assert result.error == "404"


class TestBuildPurchaseUrl:

    def test_plain(self):
        url = build_purchase_url("aihub.com", base_url="https://registrar.test/search", ref="", campaign="")
        assert url == "https://registrar.test/search?search=aihub.com"

    def test_affiliate_tracking(self):
        url = build_purchase_url("aihub.com", base_url="https://registrar.test/search", ref="abc123", campaign="launch")
        assert url == (
            "https://registrar.test/search?search=aihub.com&ref=abc123"
            "&utm_source=domaindrip&utm_medium=affiliate&utm_campaign=launch"
        )

    def test_defaults_from_settings(self, monkeypatch):
        from config.settings import settings
        monkeypatch.setattr(settings, "purchase_link_ref", "partner")
        monkeypatch.setattr(settings, "purchase_link_campaign", None)

        url = build_purchase_url("aihub.com")

        assert url.startswith(settings.purchase_link_base)
        assert "ref=partner" in url
        assert "utm_campaign" not in url
