from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence

from ...common.datetime_utils import parse_iso_date
from ...core.constants import PLACEHOLDER_TEXT
from ..model import ContentBlock


def text_or_placeholder(value: Any, placeholder: str = PLACEHOLDER_TEXT) -> str:
    s = "" if value is None else str(value).strip()
    return s or placeholder


def as_lines(value: Any) -> list[str]:
    """Malformed clause lists render as nothing instead of failing the layout."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(v) for v in value if v is not None]
    return []


def as_items(value: Any) -> list[Mapping[str, Any]]:
    """Table rows: only mapping entries of a list are kept."""
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        return []
    return [v for v in value if isinstance(v, Mapping)]


def as_number(value: Any) -> float:
    """Finite float or 0.0; NaN and infinities count as missing."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def as_int(value: Any, default: int) -> int:
    number = as_number(value)
    return int(number) if number else default


def as_date(value: Any):
    if not value:
        return None
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        return None


class DocumentBuilder(ABC):
    """Turns a source record into an ordered block sequence plus its page headers."""

    title: str = ""
    record_type: type = object

    @abstractmethod
    def header(self, record: Any) -> ContentBlock:
        raise NotImplementedError

    def continuation(self, record: Any) -> Optional[ContentBlock]:
        return None

    @abstractmethod
    def blocks(self, record: Any) -> list[ContentBlock]:
        raise NotImplementedError

    @abstractmethod
    def parse(self, data: Mapping[str, Any]) -> Any:
        raise NotImplementedError
