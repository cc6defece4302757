from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.errors import PlankaValidationError
from planka_mcp.core.models import CreateListInput, UpdateListInput, parse_input
from planka_mcp.core.operations.lists import create_list, delete_list, update_list
from planka_mcp.core.tools._format import dump

ListAction = Literal["create", "update", "delete"]


async def planka_manage_lists(
    client: PlankaClient,
    action: ListAction,
    board_id: Optional[str] = None,
    list_id: Optional[str] = None,
    name: Optional[str] = None,
    position: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Create, update, or delete lists on a board.
    create needs board_id and name; update and delete need list_id.
    """
    if action == "create":
        if not board_id:
            raise PlankaValidationError("board_id is required for create action")
        if not name:
            raise PlankaValidationError("name is required for create action")
        created = await create_list(
            client,
            parse_input(
                CreateListInput, board_id=board_id, name=name, position=position
            ),
        )
        return {"success": True, "list": dump(created, "id", "name", "position")}

    if action == "update":
        if not list_id:
            raise PlankaValidationError("list_id is required for update action")
        updates: Dict[str, Any] = {}
        if name is not None:
            updates["name"] = name
        if position is not None:
            updates["position"] = position
        updated = await update_list(
            client, list_id, parse_input(UpdateListInput, **updates)
        )
        return {"success": True, "list": dump(updated, "id", "name", "position")}

    if action == "delete":
        if not list_id:
            raise PlankaValidationError("list_id is required for delete action")
        await delete_list(client, list_id)
        return {"success": True, "message": f"List {list_id} deleted"}

    raise PlankaValidationError(f"Unknown action '{action}'")
