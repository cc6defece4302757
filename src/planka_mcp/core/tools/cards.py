from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.errors import PlankaError
from planka_mcp.core.models import (
    BatchCreateTasksInput,
    CardLabelInput,
    CardType,
    CreateCardInput,
    MoveCardInput,
    TaskItemInput,
    UpdateCardInput,
    parse_input,
)
from planka_mcp.core.operations.cards import (
    create_card,
    delete_card,
    get_card,
    move_card,
    update_card,
)
from planka_mcp.core.operations.labels import add_label_to_card
from planka_mcp.core.operations.tasks import create_tasks
from planka_mcp.core.tools._format import dump

log = logging.getLogger("planka_mcp.core.tools.cards")


async def planka_create_card(
    client: PlankaClient,
    list_id: str,
    name: str,
    description: Optional[str] = None,
    tasks: Optional[List[str]] = None,
    due_date: Optional[str] = None,
    label_ids: Optional[List[str]] = None,
    card_type: CardType = "project",
) -> Dict[str, Any]:
    """
    Create a new card in a list. Optionally add tasks (checklist items) and
    attach labels at the same time. Labels that cannot be attached are
    reported in labelErrors instead of failing the call.
    """
    data = parse_input(
        CreateCardInput,
        list_id=list_id,
        name=name,
        description=description,
        due_date=due_date,
        type=card_type,
    )
    task_items = [parse_input(TaskItemInput, name=t) for t in tasks or []]

    card = await create_card(client, data)

    if task_items:
        await create_tasks(
            client, BatchCreateTasksInput(card_id=card.id, tasks=task_items)
        )

    attached = 0
    label_errors: List[str] = []
    for label_id in label_ids or []:
        try:
            await add_label_to_card(
                client, CardLabelInput(card_id=card.id, label_id=label_id)
            )
            attached += 1
        except PlankaError as exc:
            log.warning("Could not attach label %s to card %s: %s", label_id, card.id, exc)
            label_errors.append(label_id)

    result: Dict[str, Any] = {
        "success": True,
        "card": dump(card, "id", "name", "list_id", "type"),
        "tasksCreated": len(task_items),
        "labelsAttached": attached,
    }
    if label_errors:
        result["labelErrors"] = label_errors
    return result


async def planka_get_card(client: PlankaClient, card_id: str) -> Dict[str, Any]:
    """Get full details of a card including tasks, comments, labels, and attachments."""
    details = await get_card(client, card_id)
    label_by_id = {lbl.id: lbl for lbl in details.labels}

    def _label(label_id: str) -> Dict[str, Any]:
        label = label_by_id.get(label_id)
        return {
            "id": label_id,
            "name": label.name if label else None,
            "color": label.color if label else None,
        }

    return {
        "card": dump(
            details.card,
            "id",
            "name",
            "description",
            "list_id",
            "board_id",
            "type",
            "due_date",
            "is_completed",
            "created_at",
        ),
        "taskLists": [dump(tl, "id", "name") for tl in details.task_lists],
        "tasks": [dump(t, "id", "name", "is_completed") for t in details.tasks],
        "comments": [dump(c, "id", "text", "created_at") for c in details.comments],
        "labels": [_label(cl.label_id) for cl in details.card_labels],
        "attachments": [dump(a, "id", "name") for a in details.attachments],
    }


async def planka_update_card(
    client: PlankaClient,
    card_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    due_date: Optional[str] = None,
    is_completed: Optional[bool] = None,
    clear_description: bool = False,
    clear_due_date: bool = False,
) -> Dict[str, Any]:
    """
    Update a card's properties (name, description, due date, completion status).
    Only the fields you pass are changed; use clear_description / clear_due_date
    to remove a value.
    """
    updates: Dict[str, Any] = {}
    if name is not None:
        updates["name"] = name
    if clear_description:
        updates["description"] = None
    elif description is not None:
        updates["description"] = description
    if clear_due_date:
        updates["due_date"] = None
    elif due_date is not None:
        updates["due_date"] = due_date
    if is_completed is not None:
        updates["is_completed"] = is_completed

    card = await update_card(client, card_id, parse_input(UpdateCardInput, **updates))
    return {
        "success": True,
        "card": dump(card, "id", "name", "description", "due_date", "is_completed"),
    }


async def planka_move_card(
    client: PlankaClient,
    card_id: str,
    list_id: str,
    position: Optional[float] = None,
    board_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Move a card to a different list or position. Use this for workflow
    transitions (e.g., 'To Do' -> 'In Progress'). Lower positions sort first.
    """
    values: Dict[str, Any] = {"card_id": card_id, "list_id": list_id}
    if position is not None:
        values["position"] = position
    if board_id is not None:
        values["board_id"] = board_id

    card = await move_card(client, parse_input(MoveCardInput, **values))
    return {"success": True, "card": dump(card, "id", "name", "list_id")}


async def planka_delete_card(client: PlankaClient, card_id: str) -> Dict[str, Any]:
    """Permanently delete a card. This cannot be undone."""
    await delete_card(client, card_id)
    return {"success": True, "message": f"Card {card_id} deleted"}
