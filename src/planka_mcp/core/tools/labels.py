from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.errors import PlankaValidationError
from planka_mcp.core.models import (
    LABEL_COLORS,
    CreateLabelInput,
    UpdateLabelInput,
    parse_input,
)
from planka_mcp.core.operations.labels import (
    create_label,
    delete_label,
    set_card_labels,
    update_label,
)
from planka_mcp.core.tools._format import dump

LabelAction = Literal["create", "update", "delete"]


def _require(value: Optional[str], field: str, action: str) -> str:
    if not value:
        raise PlankaValidationError(f"{field} is required for {action} action")
    return value


def _check_color(color: str) -> None:
    # Writes are limited to the known palette; reads accept any color string.
    if color not in LABEL_COLORS:
        raise PlankaValidationError(
            f"Invalid color '{color}'. Valid colors: {', '.join(LABEL_COLORS)}"
        )


async def planka_manage_labels(
    client: PlankaClient,
    action: LabelAction,
    board_id: Optional[str] = None,
    label_id: Optional[str] = None,
    name: Optional[str] = None,
    color: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create, update, or delete labels on a board.
    create needs board_id, name and color; update and delete need label_id.
    Valid colors: berry-red, pumpkin-orange, lagoon-blue, pink-tulip, light-mud,
    orange-peel, bright-moss, antique-blue, dark-granite, lagune-blue,
    sunny-grass, morning-sky, light-orange, midnight-blue, tank-green, gun-metal,
    wet-moss, red-burgundy, light-concrete, apricot-red, desert-sand, navy-blue,
    egg-yellow, coral-green, light-cocoa, modern-green, piggy-red.
    """
    if action == "create":
        board_id = _require(board_id, "board_id", action)
        name = _require(name, "name", action)
        color = _require(color, "color", action)
        _check_color(color)
        label = await create_label(
            client,
            parse_input(CreateLabelInput, board_id=board_id, name=name, color=color),
        )
        return {"success": True, "label": dump(label, "id", "name", "color")}

    if action == "update":
        label_id = _require(label_id, "label_id", action)
        updates: Dict[str, Any] = {}
        if name is not None:
            updates["name"] = name
        if color is not None:
            _check_color(color)
            updates["color"] = color
        label = await update_label(
            client, label_id, parse_input(UpdateLabelInput, **updates)
        )
        return {"success": True, "label": dump(label, "id", "name", "color")}

    if action == "delete":
        label_id = _require(label_id, "label_id", action)
        await delete_label(client, label_id)
        return {"success": True, "message": f"Label {label_id} deleted"}

    raise PlankaValidationError(f"Unknown action '{action}'")


async def planka_set_card_labels(
    client: PlankaClient,
    card_id: str,
    add_label_ids: Optional[List[str]] = None,
    remove_label_ids: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Add or remove labels from a card. Removals are applied first, so a label
    listed in both ends up on the card.
    """
    await set_card_labels(client, card_id, add_label_ids, remove_label_ids)
    return {
        "success": True,
        "cardId": card_id,
        "labelsAdded": len(add_label_ids or []),
        "labelsRemoved": len(remove_label_ids or []),
    }
