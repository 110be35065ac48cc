"""Pydantic schemas for contest API endpoints."""

from datetime import datetime
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from domain.models.contest import Contest, ContestStatus, iso_utc

IST = ZoneInfo("Asia/Kolkata")


def format_ist(value: datetime) -> str:
    """Human readable India Standard Time, e.g. ``10 Jan 2024, 08:00:00 PM``."""
    return value.astimezone(IST).strftime("%d %b %Y, %I:%M:%S %p")


class ContestResponse(BaseModel):
    """A contest as served to the browser client."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    platform: str
    url: str
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")
    start_time_ist: str = Field(alias="startTimeIST")
    end_time_ist: str = Field(alias="endTimeIST")
    duration: float  # Hours
    status: ContestStatus

    @field_serializer("start_time", "end_time")
    def _serialize_instant(self, value: datetime) -> str:
        return iso_utc(value)

    @classmethod
    def from_contest(cls, contest: Contest) -> "ContestResponse":
        return cls(
            id=contest.id,
            name=contest.name,
            platform=contest.platform,
            url=contest.url,
            start_time=contest.start_time,
            end_time=contest.end_time,
            start_time_ist=format_ist(contest.start_time),
            end_time_ist=format_ist(contest.end_time),
            duration=contest.duration_hours,
            status=contest.status or ContestStatus.UPCOMING,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
