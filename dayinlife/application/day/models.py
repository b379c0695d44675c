"""
Day summary models.

DaySummary is the complete output for one user/date pair: ordered
events, optional weather and the derived day properties shown as tiles.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from dayinlife.domain.metrics.models import (
    DailyCalories,
    DailyHeartRate,
    DailySleep,
    DailySteps,
)
from dayinlife.domain.timeline.events import DayEvent
from dayinlife.domain.weather.models import WeatherSummary


# ═══════════════════════════════════════════════════════════
# PROPERTY TILES
# ═══════════════════════════════════════════════════════════


class WeatherProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    icon: str
    temp: int
    country: str


class SleepProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    duration: Optional[int] = Field(None, description="Seconds asleep")
    score: Optional[int] = None


class StepsProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: Optional[int] = None


class CountProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = Field(0, ge=0)


class HeartRateProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: Optional[int] = None
    max: Optional[int] = None
    resting: Optional[int] = None


class CaloriesProperty(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: Optional[int] = None
    active: Optional[int] = None
    bmr: Optional[int] = None


class DayProperties(BaseModel):
    """
    Derived day metrics.

    A metric is None when its source contributed nothing; the two
    counts are always present.
    """

    model_config = ConfigDict(frozen=True)

    weather: Optional[WeatherProperty] = None
    sleep: Optional[SleepProperty] = None
    steps: Optional[StepsProperty] = None
    checkins: CountProperty = Field(default_factory=CountProperty)
    activities: CountProperty = Field(default_factory=CountProperty)
    heart_rate: Optional[HeartRateProperty] = None
    calories: Optional[CaloriesProperty] = None

    @classmethod
    def derive(
        cls,
        *,
        checkin_count: int,
        activity_count: int,
        weather: Optional[WeatherSummary] = None,
        steps: Optional[DailySteps] = None,
        heart_rate: Optional[DailyHeartRate] = None,
        sleep: Optional[DailySleep] = None,
        calories: Optional[DailyCalories] = None,
    ) -> DayProperties:
        """Build the properties from the day's resolved inputs.

        Example:
            >>> props = DayProperties.derive(checkin_count=3, activity_count=1)
            >>> assert props.checkins.count == 3 and props.sleep is None
        """
        return cls(
            weather=(
                WeatherProperty(icon=weather.icon, temp=weather.temperature, country=weather.country)
                if weather
                else None
            ),
            sleep=(
                SleepProperty(duration=sleep.sleep_duration_seconds, score=sleep.sleep_score)
                if sleep
                else None
            ),
            steps=StepsProperty(count=steps.step_count) if steps else None,
            checkins=CountProperty(count=checkin_count),
            activities=CountProperty(count=activity_count),
            heart_rate=(
                HeartRateProperty(
                    min=heart_rate.min_heart_rate,
                    max=heart_rate.max_heart_rate,
                    resting=heart_rate.resting_heart_rate,
                )
                if heart_rate
                else None
            ),
            calories=(
                CaloriesProperty(
                    total=calories.total_calories,
                    active=calories.active_calories,
                    bmr=calories.bmr_calories,
                )
                if calories
                else None
            ),
        )


# ═══════════════════════════════════════════════════════════
# DAY SUMMARY
# ═══════════════════════════════════════════════════════════


class DaySummary(BaseModel):
    """
    Aggregated day of one user.

    Contains no wall-clock fields: identical inputs serialize to
    identical output.

    Example:
        >>> summary = await service.aggregate_day("user_1", "2025-01-15")
        >>> payload = summary.to_dict()
        >>> payload["events"][0]["type"]
        'checkin_group'
    """

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="YYYY-MM-DD")
    events: list[DayEvent] = Field(default_factory=list)
    weather: Optional[WeatherSummary] = None
    properties: DayProperties = Field(default_factory=DayProperties)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation."""
        return self.model_dump(mode="json")
