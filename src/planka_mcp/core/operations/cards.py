from __future__ import annotations

from typing import Any, Dict

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.models import (
    Card,
    CardDetails,
    CardIncluded,
    CreateCardInput,
    ItemResponse,
    MoveCardInput,
    UpdateCardInput,
    parse_response,
    request_body,
)
from planka_mcp.core.operations._included import by_position, parse_included


async def create_card(client: PlankaClient, data: CreateCardInput) -> Card:
    """Create a card in a list. `type` is always sent; PLANKA 2.0 requires it."""
    path = f"/api/lists/{data.list_id}/cards"
    body = data.model_dump(
        by_alias=True, exclude={"list_id"}, exclude_none=True, mode="json"
    )
    payload = await client.post(path, json=body, tool="cards")
    return parse_response(ItemResponse[Card], payload, f"POST {path}").item


async def get_card(client: PlankaClient, card_id: str) -> CardDetails:
    """
    Get a card with task lists, tasks, comments, labels and attachments.

    Task lists and tasks are ordered by position; comments newest first.
    Labels, card labels and attachments are passed through as returned.
    """
    path = f"/api/cards/{card_id}"
    context = f"GET {path}"
    payload = await client.get(path, tool="cards")
    parsed = parse_response(ItemResponse[Card], payload, context)
    included = parse_included(parsed.included, CardIncluded, context)

    return CardDetails(
        card=parsed.item,
        task_lists=by_position(included.task_lists),
        tasks=by_position(included.tasks),
        comments=sorted(included.comments, key=lambda c: c.created_at, reverse=True),
        labels=included.labels,
        card_labels=included.card_labels,
        attachments=included.attachments,
    )


async def update_card(
    client: PlankaClient, card_id: str, data: UpdateCardInput
) -> Card:
    path = f"/api/cards/{card_id}"
    payload = await client.patch(path, json=request_body(data), tool="cards")
    return parse_response(ItemResponse[Card], payload, f"PATCH {path}").item


async def move_card(client: PlankaClient, data: MoveCardInput) -> Card:
    """Move a card to another list (optionally another board) and position."""
    body: Dict[str, Any] = {"listId": data.list_id, "position": data.position}
    if data.board_id:
        body["boardId"] = data.board_id

    path = f"/api/cards/{data.card_id}"
    payload = await client.patch(path, json=body, tool="cards")
    return parse_response(ItemResponse[Card], payload, f"PATCH {path}").item


async def delete_card(client: PlankaClient, card_id: str) -> None:
    await client.delete(f"/api/cards/{card_id}", tool="cards")
