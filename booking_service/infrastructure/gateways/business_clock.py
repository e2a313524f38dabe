"""
Business clock for the booking market's timezone.
"""

from datetime import datetime, time, timedelta, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from booking_service.application.interfaces.gateways import ClockInterface
from booking_service.config.settings import settings


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BusinessClock(ClockInterface):
    """
    Wall clock aware of the market's night hours.

    Night runs from ``night_start_hour`` to ``night_end_hour`` local time and
    may wrap around midnight. Delayed notifications go out at
    ``business_start_hour`` on the following business morning.
    """

    def __init__(
        self,
        tz_name: Optional[str] = None,
        night_start_hour: Optional[int] = None,
        night_end_hour: Optional[int] = None,
        business_start_hour: Optional[int] = None,
        now_func: Callable[[], datetime] = _utcnow,
    ):
        self.tz = ZoneInfo(tz_name or settings.BUSINESS_TIMEZONE)
        self.night_start_hour = (
            settings.NIGHT_START_HOUR if night_start_hour is None else night_start_hour
        )
        self.night_end_hour = (
            settings.NIGHT_END_HOUR if night_end_hour is None else night_end_hour
        )
        self.business_start_hour = (
            settings.BUSINESS_START_HOUR
            if business_start_hour is None
            else business_start_hour
        )
        self._now = now_func

    def now(self) -> datetime:
        return self._now().astimezone(timezone.utc)

    def localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=self.tz)
        return value.astimezone(timezone.utc)

    def is_night_time(self) -> bool:
        hour = self.now().astimezone(self.tz).hour
        if self.night_start_hour <= self.night_end_hour:
            return self.night_start_hour <= hour < self.night_end_hour
        return hour >= self.night_start_hour or hour < self.night_end_hour

    def next_business_time(self) -> datetime:
        local_now = self.now().astimezone(self.tz)
        start = datetime.combine(
            local_now.date(), time(hour=self.business_start_hour), tzinfo=self.tz
        )
        if start <= local_now:
            start = datetime.combine(
                local_now.date() + timedelta(days=1),
                time(hour=self.business_start_hour),
                tzinfo=self.tz,
            )
        return start.astimezone(timezone.utc)
