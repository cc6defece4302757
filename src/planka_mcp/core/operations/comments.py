from __future__ import annotations

from typing import List

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.models import (
    Comment,
    CreateCommentInput,
    ItemResponse,
    UpdateCommentInput,
    parse_response,
)
from planka_mcp.core.operations.cards import get_card


async def create_comment(client: PlankaClient, data: CreateCommentInput) -> Comment:
    path = f"/api/cards/{data.card_id}/comments"
    payload = await client.post(path, json={"text": data.text}, tool="comments")
    return parse_response(ItemResponse[Comment], payload, f"POST {path}").item


async def update_comment(
    client: PlankaClient, comment_id: str, data: UpdateCommentInput
) -> Comment:
    path = f"/api/comments/{comment_id}"
    payload = await client.patch(path, json={"text": data.text}, tool="comments")
    return parse_response(ItemResponse[Comment], payload, f"PATCH {path}").item


async def delete_comment(client: PlankaClient, comment_id: str) -> None:
    await client.delete(f"/api/comments/{comment_id}", tool="comments")


async def get_comments_for_card(client: PlankaClient, card_id: str) -> List[Comment]:
    """Comments come with the card details; newest first."""
    details = await get_card(client, card_id)
    return details.comments
