"""
Shared helpers for reshaping PLANKA "included" bags.
"""

import math
from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel

from planka_mcp.core.models import parse_response

M = TypeVar("M", bound=BaseModel)
P = TypeVar("P")


def parse_included(included: Optional[dict], model: Type[M], context: str) -> M:
    """Validate an included bag; a missing bag is treated as empty."""
    return parse_response(model, included or {}, context)


def _position_key(item: Any) -> float:
    position = getattr(item, "position", None)
    return math.inf if position is None else position


def by_position(items: Iterable[P]) -> List[P]:
    """Sort ascending by position. Items without a position keep their order at the end."""
    return sorted(items, key=_position_key)
