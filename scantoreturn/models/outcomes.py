"""Typed results of remote record service calls."""
from dataclasses import dataclass
from typing import Union

from scantoreturn.models.tag import TagRecord


@dataclass
class Found:
    """Remote service returned an active binding."""
    record: TagRecord


@dataclass
class NotFound:
    """Remote service answered but the tag is not active (treated as NEW)."""
    tag_id: str


@dataclass
class TimedOut:
    """No answer within the lookup timeout; the request was cancelled."""
    timeout_sec: float


@dataclass
class Unreachable:
    """Transport failure: connection refused, DNS, TLS, non-2xx status..."""
    detail: str


@dataclass
class Malformed:
    """Transport succeeded but the body was not structured data (e.g. an HTML error page)."""
    detail: str


@dataclass
class Submitted:
    """Write was transmitted without a transport error. Not a storage confirmation."""
    tag_id: str


LookupOutcome = Union[Found, NotFound, TimedOut, Unreachable, Malformed]
WriteOutcome = Union[Submitted, Unreachable]
