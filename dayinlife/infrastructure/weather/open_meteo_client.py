"""Open-Meteo archive API client - Implements IWeatherProvider port.

Key Features:
- Historical daily weather (max/min temperature, precipitation, WMO code)
- Circuit breaker (5 failures → 60s timeout)
- Retry logic (exponential backoff) on timeouts, transport errors and 5xx
- Input validation before any request (coordinate ranges, no future dates)
"""
# mypy: warn-unused-ignores=False

import datetime as _dt
from typing import Any, Optional

import httpx
import structlog
from circuitbreaker import CircuitBreakerError, circuit
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from dayinlife.domain.shared.errors import (
    ExternalServiceError,
    TimeoutError,
    ValidationError,
    WeatherUnavailableError,
)
from dayinlife.domain.weather.conditions import describe
from dayinlife.domain.weather.models import HistoricalWeather
from dayinlife.infrastructure.config import (
    get_weather_api_url,
    get_weather_timeout_seconds,
)

logger = structlog.get_logger(__name__)

DAILY_FIELDS = "temperature_2m_max,temperature_2m_min,precipitation_sum,weathercode"


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, (httpx.TimeoutException, httpx.TransportError))


class OpenMeteoClient:
    """
    Open-Meteo archive client implementing IWeatherProvider port.

    Example:
        >>> async with OpenMeteoClient() as client:
        ...     weather = await client.fetch_historical(45.46, 9.19, date(2025, 1, 15))
        ...     print(weather.description)
    """

    BASE_URL = "https://archive-api.open-meteo.com/v1/archive"
    TIMEOUT_S = 10.0

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Archive endpoint (default: public Open-Meteo)
            timeout_seconds: Request timeout
            transport: Custom httpx transport (tests)
        """
        self.base_url = base_url or self.BASE_URL
        self.timeout_seconds = timeout_seconds or self.TIMEOUT_S
        self._transport = transport
        self._session: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_env(cls) -> "OpenMeteoClient":
        """Build from WEATHER_API_URL / WEATHER_TIMEOUT_SECONDS."""
        return cls(
            base_url=get_weather_api_url(),
            timeout_seconds=get_weather_timeout_seconds(),
        )

    async def __aenter__(self) -> "OpenMeteoClient":
        """Async context manager entry."""
        self._session = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.aclose()
            self._session = None

    async def fetch_historical(
        self, latitude: float, longitude: float, date: _dt.date
    ) -> HistoricalWeather:
        """
        Fetch observed weather of one day.

        Implements IWeatherProvider.fetch_historical() port.

        Raises:
            ValidationError: Coordinates out of range or date in the future
            WeatherUnavailableError: No data for the date
            TimeoutError: Request timed out (after retries)
            ExternalServiceError: HTTP or network error (after retries)
        """
        days = await self.fetch_range(latitude, longitude, date, date)
        return days[0]

    async def fetch_range(
        self,
        latitude: float,
        longitude: float,
        start_date: _dt.date,
        end_date: _dt.date,
    ) -> list[HistoricalWeather]:
        """
        Fetch observed weather for every day in [start_date, end_date].

        Raises:
            ValidationError: Invalid coordinates, future dates or end before start
            WeatherUnavailableError: No data for the range
            TimeoutError: Request timed out (after retries)
            ExternalServiceError: HTTP or network error (after retries)
        """
        self._validate(latitude, longitude, start_date)
        self._validate(latitude, longitude, end_date)
        if end_date < start_date:
            raise ValidationError("End date must be after or equal to start date")

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "daily": DAILY_FIELDS,
            "timezone": "auto",
        }

        try:
            data = await self._get_archive(params)
        except httpx.TimeoutException as e:
            logger.error("Open-Meteo API timeout", latitude=latitude, longitude=longitude)
            raise TimeoutError("Open-Meteo API timeout") from e
        except httpx.HTTPError as e:
            logger.error("Open-Meteo API error", error=str(e))
            raise ExternalServiceError(f"Failed to fetch weather data: {e}") from e
        except CircuitBreakerError as e:
            logger.warning("Open-Meteo circuit open", error=str(e))
            raise ExternalServiceError("Weather service temporarily unavailable") from e

        days = self._parse_daily(data)
        logger.debug(
            "Weather fetched",
            latitude=latitude,
            longitude=longitude,
            start_date=params["start_date"],
            days=len(days),
        )
        return days

    @circuit(  # type: ignore[misc]
        failure_threshold=5, recovery_timeout=60, name="open_meteo_archive"
    )
    @retry(  # type: ignore[misc]
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception(_is_retryable),
        reraise=True,
    )
    async def _get_archive(self, params: dict[str, Any]) -> dict[str, Any]:
        if not self._session:
            raise ExternalServiceError("Client not initialized, use async with")

        response = await self._session.get(self.base_url, params=params)
        if response.status_code >= 500:
            logger.warning("Open-Meteo server error", status=response.status_code)
        response.raise_for_status()
        payload: dict[str, Any] = response.json()
        return payload

    @staticmethod
    def _validate(latitude: float, longitude: float, date: _dt.date) -> None:
        if not -90 <= latitude <= 90:
            raise ValidationError("Invalid latitude: must be between -90 and 90")
        if not -180 <= longitude <= 180:
            raise ValidationError("Invalid longitude: must be between -180 and 180")
        if date > _dt.date.today():
            raise ValidationError("Date cannot be in the future")

    @staticmethod
    def _parse_daily(data: dict[str, Any]) -> list[HistoricalWeather]:
        daily = data.get("daily") or {}
        times = daily.get("time") or []
        if not times:
            raise WeatherUnavailableError("No weather data available for the specified date")

        def column(name: str) -> list[Any]:
            values = daily.get(name) or []
            return values + [None] * (len(times) - len(values))

        maxima = column("temperature_2m_max")
        minima = column("temperature_2m_min")
        precipitation = column("precipitation_sum")
        codes = column("weathercode")

        days: list[HistoricalWeather] = []
        for i, day in enumerate(times):
            if maxima[i] is None or minima[i] is None:
                raise WeatherUnavailableError(f"No temperature data available for {day}")
            code = int(codes[i]) if codes[i] is not None else None
            days.append(
                HistoricalWeather(
                    date=day,
                    temperature_max=maxima[i],
                    temperature_min=minima[i],
                    precipitation=precipitation[i],
                    weather_code=code,
                    description=describe(code),
                )
            )
        return days
