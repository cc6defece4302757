from __future__ import annotations

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.models import (
    DEFAULT_POSITION,
    BoardList,
    CreateListInput,
    ItemResponse,
    UpdateListInput,
    parse_response,
    request_body,
)


async def create_list(client: PlankaClient, data: CreateListInput) -> BoardList:
    path = f"/api/boards/{data.board_id}/lists"
    body = {
        "name": data.name,
        "position": data.position if data.position is not None else DEFAULT_POSITION,
    }
    payload = await client.post(path, json=body, tool="lists")
    return parse_response(ItemResponse[BoardList], payload, f"POST {path}").item


async def update_list(
    client: PlankaClient, list_id: str, data: UpdateListInput
) -> BoardList:
    path = f"/api/lists/{list_id}"
    payload = await client.patch(path, json=request_body(data), tool="lists")
    return parse_response(ItemResponse[BoardList], payload, f"PATCH {path}").item


async def delete_list(client: PlankaClient, list_id: str) -> None:
    await client.delete(f"/api/lists/{list_id}", tool="lists")
