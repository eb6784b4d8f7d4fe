"""UTC 时间类型

SQLite 读回的时间不带时区，PostgreSQL 读回的是带时区时间；
对外一律输出 ISO8601 + Z。
"""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, PlainSerializer


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_iso_z(value: datetime) -> str:
    return as_utc(value).isoformat().replace("+00:00", "Z")


UTCDateTime = Annotated[datetime, AfterValidator(as_utc), PlainSerializer(to_iso_z)]
