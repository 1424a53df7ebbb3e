"""National holiday lookup with a static fallback."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from vacation_planner.config import Settings, get_settings
from vacation_planner.exceptions import ExternalServiceError
from vacation_planner.services.cache import TTLCache

logger = logging.getLogger(__name__)

# (month, day) of the fixed national holidays used when the lookup fails.
FALLBACK_HOLIDAYS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (4, 21),
    (5, 1),
    (9, 7),
    (10, 12),
    (11, 2),
    (11, 15),
    (12, 25),
)


def fallback_holidays(year: int) -> list[date]:
    """Return the fixed national holidays for ``year``."""
    return [date(year, month, day) for month, day in FALLBACK_HOLIDAYS]


def _parse_holiday_payload(payload: Any) -> list[date]:
    """Extract the ``date`` field of every event in the payload."""
    if not isinstance(payload, list):
        raise ExternalServiceError("Holiday payload is not a list")
    dates: set[date] = set()
    for event in payload:
        try:
            dates.add(date.fromisoformat(event["date"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ExternalServiceError(f"Malformed holiday event: {event!r}") from exc
    return sorted(dates)


class HolidayProvider:
    """Resolves public holidays for a year from the configured holiday API.

    Never raises: any failure of the remote lookup is logged and answered with
    :func:`fallback_holidays`. Successful lookups are cached per year.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        cache: TTLCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._cache = cache if cache is not None else TTLCache()
        self._transport = transport

    async def _fetch_remote(self, year: int) -> list[date]:
        url = f"{self._settings.holiday_api_url.rstrip('/')}/{year}"
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._settings.holiday_api_timeout_seconds,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise ExternalServiceError(f"Holiday lookup for {year} failed: {exc}") from exc
        return _parse_holiday_payload(payload)

    async def holidays(self, year: int) -> list[date]:
        """Return the sorted holiday dates of ``year``."""
        cache_key = ("holidays", year)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return list(cached)

        try:
            dates = await self._fetch_remote(year)
        except ExternalServiceError as exc:
            logger.warning("%s. Using fallback holiday list.", exc.message)
            return fallback_holidays(year)

        logger.info("Fetched %d holidays for %s", len(dates), year)
        self._cache.set(cache_key, tuple(dates), self._settings.holiday_cache_ttl_seconds)
        return dates


_holiday_provider: HolidayProvider | None = None


def get_holiday_provider() -> HolidayProvider:
    """FastAPI dependency for the process-wide holiday provider."""
    global _holiday_provider
    if _holiday_provider is None:
        _holiday_provider = HolidayProvider()
    return _holiday_provider


def set_holiday_provider(provider: HolidayProvider | None) -> None:
    """Override the provider (for testing or production wiring)."""
    global _holiday_provider
    _holiday_provider = provider
