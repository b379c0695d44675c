"""
Daily physiological metrics.

One record per kind per user per day, as delivered by the metric
sources. All fields besides the date are optional: devices report
partial days.
"""

from __future__ import annotations

import datetime as _dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DailySteps(BaseModel):
    """Step count of a day."""

    model_config = ConfigDict(frozen=True)

    date: _dt.date
    step_count: Optional[int] = Field(None, ge=0)


class DailyHeartRate(BaseModel):
    """Heart-rate extremes of a day (bpm)."""

    model_config = ConfigDict(frozen=True)

    date: _dt.date
    min_heart_rate: Optional[int] = Field(None, ge=0)
    max_heart_rate: Optional[int] = Field(None, ge=0)
    resting_heart_rate: Optional[int] = Field(None, ge=0)


class DailySleep(BaseModel):
    """Sleep of the night ending on a day."""

    model_config = ConfigDict(frozen=True)

    date: _dt.date
    sleep_duration_seconds: Optional[int] = Field(None, ge=0)
    sleep_score: Optional[int] = Field(None, ge=0, le=100)
    deep_sleep_seconds: Optional[int] = Field(None, ge=0)
    light_sleep_seconds: Optional[int] = Field(None, ge=0)
    rem_sleep_seconds: Optional[int] = Field(None, ge=0)
    awake_seconds: Optional[int] = Field(None, ge=0)


class DailyCalories(BaseModel):
    """Energy expenditure of a day (kcal)."""

    model_config = ConfigDict(frozen=True)

    date: _dt.date
    total_calories: Optional[int] = Field(None, ge=0)
    active_calories: Optional[int] = Field(None, ge=0)
    bmr_calories: Optional[int] = Field(None, ge=0)
