"""
Availability authority tests: payload parsing and HTTP handling
"""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from config.settings import settings
from core.exceptions import MissingAPIKeyError, UpstreamUnavailableError
from services.authorities import (
    RdapAuthority,
    SimulatedPrimaryAuthority,
    SimulatedSecondaryAuthority,
    SpaceshipAuthority,
    build_authorities,
    parse_price,
    parse_primary_payload,
    parse_rdap_payload
)


def mock_session(status, payload=None):
    response = MagicMock()
    response.status = status
    response.reason = "Test"
    response.json = AsyncMock(return_value=payload)

    session = MagicMock()
    session.closed = False
    session.get.return_value.__aenter__.return_value = response
    return session


class TestParsing:

    def test_primary_payload(self):
        check = parse_primary_payload({"available": True, "status": "available", "price": "10.99"})
        assert check.available is True
        assert check.price == Decimal("10.99")

    def test_missing_flag(self):
        assert parse_primary_payload({"status": "ok"}).available is None
        assert parse_primary_payload({"available": "yes"}).available is None
        assert parse_primary_payload(["not", "an", "object"]).available is None

    @pytest.mark.parametrize("value, expected", [
        ("12.5", Decimal("12.5")),
        (9, Decimal("9")),
        ({"amount": "20"}, Decimal("20")),
        (0, None),
        (-3, None),
        ("free", None),
        (True, None),
        (None, None)
    ])
    def test_price(self, value, expected):
        assert parse_price(value) == expected

    def test_rdap_statuses(self):
        assert parse_rdap_payload({"status": ["Active", "client transfer prohibited"]}).statuses == [
            "active", "client transfer prohibited"
        ]
        assert parse_rdap_payload({"status": "active"}).statuses == ["active"]
        assert parse_rdap_payload({}).statuses == []


class TestSpaceship:

    async def test_missing_key(self):
        with pytest.raises(MissingAPIKeyError):
            await SpaceshipAuthority(api_key="").check("aihub.com")

    async def test_available(self):
        session = mock_session(200, {"available": True, "status": "available"})
        authority = SpaceshipAuthority(api_key="key", url="https://registrar.test/check", session=session)

        check = await authority.check("aihub.com")

        assert check.available is True
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"domain": "aihub.com"}
        assert kwargs["headers"]["Authorization"] == "Bearer key"

    async def test_non_200_is_upstream_error(self):
        authority = SpaceshipAuthority(api_key="key", session=mock_session(429))

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await authority.check("aihub.com")

        assert exc_info.value.http_status == 429


class TestRdap:

    async def test_not_found_means_no_record(self):
        authority = RdapAuthority(url="https://rdap.test/domain", session=mock_session(404))
        assert await authority.lookup("aihub.com") is None

    async def test_registered(self):
        session = mock_session(200, {"status": ["active"]})
        authority = RdapAuthority(url="https://rdap.test/domain/", session=session)

        lookup = await authority.lookup("aihub.com")

        assert lookup.statuses == ["active"]
        assert session.get.call_args.args[0] == "https://rdap.test/domain/aihub.com"

    async def test_server_error(self):
        authority = RdapAuthority(session=mock_session(500))
        with pytest.raises(UpstreamUnavailableError):
            await authority.lookup("aihub.com")

    async def test_transport_error(self):
        session = MagicMock()
        session.closed = False
        session.get.side_effect = aiohttp.ClientConnectionError("refused")

        with pytest.raises(UpstreamUnavailableError):
            await RdapAuthority(session=session).lookup("aihub.com")


class TestSimulation:

    async def test_deterministic(self):
        authority = SimulatedPrimaryAuthority()
        first = [await authority.check(f"name{i}.com") for i in range(20)]
        second = [await authority.check(f"name{i}.com") for i in range(20)]
        assert first == second

    async def test_secondary_never_finds_records(self):
        assert await SimulatedSecondaryAuthority().lookup("google.com") is None

    def test_build_in_simulation_mode(self, monkeypatch):
        monkeypatch.setattr(settings, "simulation_mode", True)
        authorities = build_authorities()
        assert isinstance(authorities["primary"], SimulatedPrimaryAuthority)
        assert isinstance(authorities["secondary"], SimulatedSecondaryAuthority)

    def test_build_live(self, monkeypatch):
        monkeypatch.setattr(settings, "simulation_mode", False)
        authorities = build_authorities()
        assert isinstance(authorities["primary"], SpaceshipAuthority)
        assert isinstance(authorities["secondary"], RdapAuthority)
