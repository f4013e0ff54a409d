"""
Location Annotator

A Location is a Span tagged with a display role and an optional caption.
Order among a diagnostic's locations is chosen by the caller; the first
entry is conventionally the primary offending site.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

from .fileset import FileSet
from .positions import from_ast_node, from_token_positions
from .source_location import Position, Span


class LocationType(Enum):
    """Display role of a location"""
    ERROR = "error"
    HELP = "help"


LocationTypeLike = Union[LocationType, str]


def _coerce_type(type: LocationTypeLike) -> LocationType:
    if isinstance(type, LocationType):
        return type
    try:
        return LocationType(type)
    except ValueError:
        raise ValueError(
            f"location type must be one of {[t.value for t in LocationType]}, got {type!r}"
        ) from None


@dataclass(frozen=True)
class Location:
    span: Span
    type: LocationType = LocationType.ERROR
    text: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _coerce_type(self.type))

    @property
    def is_help(self) -> bool:
        return self.type is LocationType.HELP

    def relabel(self, type: Optional[LocationTypeLike] = None, text: Optional[str] = None) -> "Location":
        """Copy with a new role and/or caption. The receiver is left untouched."""
        changes = {}
        if type is not None:
            changes["type"] = _coerce_type(type)
        if text is not None:
            changes["text"] = text
        return dataclasses.replace(self, **changes)

    def __str__(self) -> str:
        suffix = f" ({self.text})" if self.text else ""
        return f"{self.type.value}: {self.span}{suffix}"


def annotate(span: Span, type: LocationTypeLike = LocationType.ERROR, text: str = "") -> Location:
    return Location(span=span, type=_coerce_type(type), text=text)


def location_from_node(
    fileset: FileSet,
    node: Any,
    type: LocationTypeLike = LocationType.ERROR,
    text: str = "",
) -> Optional[Location]:
    """Resolve node and annotate it; None when the node has no usable span."""
    span = from_ast_node(fileset, node)
    if span is None:
        return None
    return annotate(span, type, text)


def location_from_positions(
    start: Position,
    end: Position,
    type: LocationTypeLike = LocationType.ERROR,
    text: str = "",
) -> Optional[Location]:
    span = from_token_positions(start, end)
    if span is None:
        return None
    return annotate(span, type, text)


def collect_locations(*locations: Optional[Location]) -> Tuple[Location, ...]:
    """Ordered locations with unresolved (None) entries dropped."""
    return tuple(loc for loc in locations if loc is not None)
