"""
Request DTOs and decoding helpers.

Bodies are decoded into the pydantic models below and validated before any
domain entity is built. Field names match case-insensitively, so both
``{"Name": ...}`` and ``{"name": ...}`` are accepted, and ``null`` values
fall back to the field default.
"""
import json
import re
from datetime import datetime, timezone
from typing import Annotated, Any, List

from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError, field_validator, model_validator
from werkzeug.exceptions import ClientDisconnected

from .errors import DecodeError, TransportReadError
from .models import ZERO_TIME

MAX_PLAYER_ID = 2 ** 32 - 1
MAX_REFERENCED_ID = 2 ** 64 - 1

_ID_PATTERN = re.compile(r'[0-9]+')

# RFC 3339 date-time; the offset may be left out and then means UTC
_TIMESTAMP_PATTERN = re.compile(
    r'(?P<base>[0-9]{4}-[0-9]{2}-[0-9]{2}[Tt ][0-9]{2}:[0-9]{2}:[0-9]{2})'
    r'(?:\.(?P<fraction>[0-9]+))?'
    r'(?P<offset>[Zz]|[+-][0-9]{2}:[0-9]{2})?'
)

PlayerId = Annotated[StrictInt, Field(ge=0, le=MAX_REFERENCED_ID)]


def read_request_body(req) -> bytes:
    """Read the raw request body, mapping stream failures to TransportReadError."""
    try:
        return req.get_data(cache=True)
    except (OSError, ClientDisconnected) as e:
        raise TransportReadError(f"Failed to read request body: {e}")


def parse_player_id(raw: str) -> int:
    if not _ID_PATTERN.fullmatch(raw):
        raise DecodeError(f"Not valid format of player ID {raw}: expected a non-negative integer")
    digits = raw.lstrip('0') or '0'
    if len(digits) > len(str(MAX_PLAYER_ID)) or int(digits) > MAX_PLAYER_ID:
        raise DecodeError(f"Not valid format of player ID {raw}: value out of range")
    return int(digits)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp.

    A time of day is required. Fractions beyond microseconds are truncated
    and values without an offset are UTC.
    """
    match = _TIMESTAMP_PATTERN.fullmatch(value.strip())
    if not match:
        raise DecodeError(f"Invalid time {value!r}: expected an RFC 3339 timestamp")

    text = match.group('base').replace('t', 'T').replace(' ', 'T')
    fraction = match.group('fraction')
    if fraction:
        text += '.' + fraction[:6].ljust(6, '0')
    offset = match.group('offset')
    if offset and offset not in ('Z', 'z'):
        text += offset

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise DecodeError(f"Invalid time {value!r}: expected an RFC 3339 timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _describe(error: ValidationError) -> str:
    details = []
    for err in error.errors():
        location = '.'.join(str(part) for part in err['loc'])
        details.append(f"{location}: {err['msg']}" if location else err['msg'])
    return '; '.join(details)


class RequestModel(BaseModel):

    @model_validator(mode='before')
    @classmethod
    def normalise_keys(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {str(k).lower(): v for k, v in data.items() if v is not None}
        return data

    @classmethod
    def from_body(cls, body: bytes):
        try:
            data = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"Malformed JSON body: {e}")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Malformed request body: {_describe(e)}")


class PlayerCreateRequest(RequestModel):
    name: StrictStr = ''


class GameCreateRequest(RequestModel):
    home_player_ids: List[PlayerId] = Field(default_factory=list, alias='homeplayerids')
    away_player_ids: List[PlayerId] = Field(default_factory=list, alias='awayplayerids')
    time: datetime = ZERO_TIME

    @field_validator('time', mode='before')
    @classmethod
    def parse_time(cls, value: Any) -> datetime:
        if not isinstance(value, str):
            raise ValueError("Time must be an RFC 3339 string")
        try:
            return parse_timestamp(value)
        except DecodeError as e:
            raise ValueError(e.message)
