from __future__ import annotations

from typing import Any, Dict

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.models import CreateCommentInput, parse_input
from planka_mcp.core.operations.comments import create_comment, get_comments_for_card
from planka_mcp.core.tools._format import dump


async def planka_add_comment(
    client: PlankaClient, card_id: str, text: str
) -> Dict[str, Any]:
    """
    Add a comment to a card. Use this for status updates, notes, or agent
    activity logs. Markdown is supported.
    """
    comment = await create_comment(
        client, parse_input(CreateCommentInput, card_id=card_id, text=text)
    )
    return {"success": True, "comment": dump(comment, "id", "text", "created_at")}


async def planka_get_comments(client: PlankaClient, card_id: str) -> Dict[str, Any]:
    """Get all comments on a card, newest first."""
    comments = await get_comments_for_card(client, card_id)
    return {
        "cardId": card_id,
        "commentCount": len(comments),
        "comments": [dump(c, "id", "text", "created_at") for c in comments],
    }
