"""
Day Aggregation Service.

Builds the "day in a life" summary of one user: fans out to every data
source concurrently, runs the timeline pipeline and resolves weather.

Design Pattern: Service Layer + Dependency Injection
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, TypeVar, Union

import structlog

from dayinlife.application.day.models import DayProperties, DaySummary
from dayinlife.application.day.ports import (
    IActivitySource,
    ICheckinSource,
    IDailyMetricSource,
)
from dayinlife.domain.metrics.models import (
    DailyCalories,
    DailyHeartRate,
    DailySleep,
    DailySteps,
)
from dayinlife.domain.shared.errors import ValidationError
from dayinlife.domain.shared.value_objects import Coordinates, DayDate, UserId
from dayinlife.domain.timeline.assigner import CheckinAssigner
from dayinlife.domain.timeline.classifier import ActivityClassifier
from dayinlife.domain.timeline.materializer import EventMaterializer
from dayinlife.domain.timeline.models import Checkin
from dayinlife.domain.timeline.sequencer import EventSequencer
from dayinlife.domain.weather.models import WeatherSummary
from dayinlife.domain.weather.resolver import WeatherResolver

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class DayAggregationService:
    """
    Aggregates one user's day.

    Responsibilities:
    - Validate user id and date before touching any source
    - Fetch check-ins, Strava/Garmin activities and daily metrics concurrently
    - Absorb per-source failures (empty collection / None metric)
    - Classify, assign, sequence and materialize the timeline
    - Resolve weather when the caller provides coordinates

    Dependencies (injected via Ports):
    - checkin_source: ICheckinSource
    - strava_source / garmin_source: IActivitySource (one per provider)
    - steps_source / heart_rate_source / sleep_source / calories_source:
      IDailyMetricSource
    - materializer: EventMaterializer (photo lookup + static maps)
    - weather_resolver: WeatherResolver (weather cache + provider)

    Example:
        >>> service = DayAggregationService(
        ...     checkin_source=checkins,
        ...     strava_source=strava,
        ...     garmin_source=garmin,
        ...     steps_source=steps,
        ...     heart_rate_source=heart_rate,
        ...     sleep_source=sleep,
        ...     calories_source=calories,
        ...     materializer=materializer,
        ...     weather_resolver=resolver,
        ... )
        >>> summary = await service.aggregate_day("user_1", "2025-01-15", (45.46, 9.19))
    """

    def __init__(
        self,
        checkin_source: ICheckinSource,
        strava_source: IActivitySource,
        garmin_source: IActivitySource,
        steps_source: IDailyMetricSource[DailySteps],
        heart_rate_source: IDailyMetricSource[DailyHeartRate],
        sleep_source: IDailyMetricSource[DailySleep],
        calories_source: IDailyMetricSource[DailyCalories],
        materializer: EventMaterializer,
        weather_resolver: WeatherResolver,
        classifier: Optional[ActivityClassifier] = None,
        assigner: Optional[CheckinAssigner] = None,
        sequencer: Optional[EventSequencer] = None,
    ):
        self.checkin_source = checkin_source
        self.strava_source = strava_source
        self.garmin_source = garmin_source
        self.steps_source = steps_source
        self.heart_rate_source = heart_rate_source
        self.sleep_source = sleep_source
        self.calories_source = calories_source
        self.materializer = materializer
        self.weather_resolver = weather_resolver
        self.classifier = classifier or ActivityClassifier()
        self.assigner = assigner or CheckinAssigner()
        self.sequencer = sequencer or EventSequencer()

    async def aggregate_day(
        self,
        user_id: Any,
        date: Any,
        coordinates: Optional[Union[Coordinates, tuple[float, float]]] = None,
    ) -> DaySummary:
        """
        Aggregate the day of a user.

        Workflow:
        1. Validate input (no source is called on invalid input)
        2. Fetch all sources concurrently, each failure captured on its own
        3. Classifier → assigner → sequencer → materializer
        4. Weather (only with coordinates), concurrently with step 3's I/O
        5. Derive day properties

        Args:
            user_id: User identifier
            date: Calendar date, YYYY-MM-DD string or datetime.date
            coordinates: Optional (latitude, longitude) of the request

        Returns:
            DaySummary

        Raises:
            ValidationError: Missing user id, malformed date or coordinates
        """
        uid = UserId.from_string(user_id)
        day = DayDate.parse(date)
        if coordinates is not None and not isinstance(coordinates, Coordinates):
            try:
                latitude, longitude = coordinates
            except (TypeError, ValueError) as e:
                raise ValidationError(
                    "coordinates must be a (latitude, longitude) pair"
                ) from e
            coordinates = Coordinates.from_pair(latitude, longitude)

        start, end = day.utc_bounds()
        user = str(uid)
        log = logger.bind(user_id=user, date=str(day))

        results = await asyncio.gather(
            self.checkin_source.find_by_user_and_range(user, start, end),
            self.strava_source.find_by_user_and_range(user, start, end),
            self.garmin_source.find_by_user_and_range(user, start, end),
            self.steps_source.find_by_user_and_date(user, day.as_date()),
            self.heart_rate_source.find_by_user_and_date(user, day.as_date()),
            self.sleep_source.find_by_user_and_date(user, day.as_date()),
            self.calories_source.find_by_user_and_date(user, day.as_date()),
            return_exceptions=True,
        )

        checkins: list[Checkin] = self._settled("checkins", results[0], []) or []
        strava = self._settled("strava_activities", results[1], []) or []
        garmin = self._settled("garmin_activities", results[2], []) or []
        steps = self._settled("daily_steps", results[3], None)
        heart_rate = self._settled("daily_heart_rate", results[4], None)
        sleep = self._settled("daily_sleep", results[5], None)
        calories = self._settled("daily_calories", results[6], None)

        activities = [*strava, *garmin]

        classified = self.classifier.classify(activities)
        standalone = self.assigner.assign(checkins, classified.mapped)
        sequenced = self.sequencer.sequence(classified.mapped, classified.unmapped, standalone)

        events, weather = await asyncio.gather(
            self.materializer.materialize(sequenced),
            self._resolve_weather(day, checkins, coordinates),
        )

        properties = DayProperties.derive(
            checkin_count=len(checkins),
            activity_count=len(activities),
            weather=weather,
            steps=steps,
            heart_rate=heart_rate,
            sleep=sleep,
            calories=calories,
        )

        log.info(
            "Day aggregated",
            events=len(events),
            checkins=len(checkins),
            activities=len(activities),
            has_weather=weather is not None,
        )

        return DaySummary(
            date=str(day),
            events=events,
            weather=weather,
            properties=properties,
        )

    async def _resolve_weather(
        self,
        day: DayDate,
        checkins: list[Checkin],
        coordinates: Optional[Coordinates],
    ) -> Optional[WeatherSummary]:
        if coordinates is None:
            return None
        try:
            return await self.weather_resolver.resolve(day.as_date(), checkins)
        except Exception as e:
            logger.warning("Weather resolution failed", date=str(day), error=str(e))
            return None

    @staticmethod
    def _settled(source: str, result: Union[T, BaseException], default: T) -> T:
        """Unwrap a gather() result, replacing a failure with the default."""
        if isinstance(result, Exception):
            logger.warning("Data source failed", source=source, error=str(result))
            return default
        if isinstance(result, BaseException):
            raise result
        return result
