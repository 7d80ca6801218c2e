from __future__ import annotations

from typing import Sequence

import httpx

from ceprace.core.config import Settings, get_settings
from ceprace.core.exceptions import AllProvidersFailed, LookupTimeout
from ceprace.core.logging import get_logger
from ceprace.schemas.address import Address
from ceprace.services.providers import AddressProvider, build_provider_clients
from ceprace.services.race import RaceFailed, RaceTimedOut, race_first_success


_logger = get_logger(__name__)


async def race_providers(
    postal_code: str,
    providers: Sequence[AddressProvider],
    *,
    per_call_timeout: float,
    overall_timeout: float,
) -> Address:
    """Query every provider concurrently and return the first address found.

    Raises :class:`AllProvidersFailed` when every provider fails before
    ``overall_timeout`` and :class:`LookupTimeout` when the deadline passes
    without a success.
    """

    operations = {
        provider.name: _bind(provider, postal_code, per_call_timeout)
        for provider in providers
    }
    _logger.info(
        "Lookup started",
        postal_code=postal_code,
        providers=list(operations),
        per_call_timeout=per_call_timeout,
        overall_timeout=overall_timeout,
    )

    try:
        winner = await race_first_success(operations, overall_timeout)
    except RaceTimedOut as exc:
        _logger.warning(
            "Lookup timed out",
            postal_code=postal_code,
            timeout=overall_timeout,
            failures=exc.failures,
        )
        raise LookupTimeout(overall_timeout) from None
    except RaceFailed as exc:
        _logger.warning(
            "Lookup failed", postal_code=postal_code, failures=exc.failures
        )
        raise AllProvidersFailed(exc.failures) from None

    _logger.info(
        "Lookup resolved",
        postal_code=postal_code,
        provider=winner.name,
        elapsed=round(winner.elapsed, 3),
    )
    return winner.value


def _bind(provider: AddressProvider, postal_code: str, timeout: float):
    async def _call():
        return await provider.fetch(postal_code, timeout)

    return _call


async def lookup_postal_code(
    postal_code: str,
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Address:
    """Resolve ``postal_code`` against the configured providers."""

    settings = settings or get_settings()
    async with httpx.AsyncClient(
        transport=transport,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        follow_redirects=True,
    ) as client:
        providers = build_provider_clients(settings, client)
        return await race_providers(
            postal_code,
            providers,
            per_call_timeout=settings.per_call_timeout,
            overall_timeout=settings.overall_timeout,
        )
