"""
Shared helpers for shaping tool results.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

DESCRIPTION_PREVIEW_CHARS = 100


def dump(model: BaseModel, *fields: str) -> Dict[str, Any]:
    """JSON-ready dict with camelCase keys, optionally limited to some fields."""
    data = model.model_dump(by_alias=True, mode="json")
    if not fields:
        return data
    aliases = {f: type(model).model_fields[f].alias or f for f in fields}
    return {aliases[f]: data[aliases[f]] for f in fields}


def preview(text: Optional[str], limit: int = DESCRIPTION_PREVIEW_CHARS) -> Optional[str]:
    if not text:
        return text
    if len(text) > limit:
        return text[:limit] + "..."
    return text
