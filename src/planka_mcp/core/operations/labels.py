from __future__ import annotations

import logging
from typing import Optional, Sequence

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.errors import PlankaError
from planka_mcp.core.models import (
    CardLabel,
    CardLabelInput,
    CreateLabelInput,
    ItemResponse,
    Label,
    UpdateLabelInput,
    parse_response,
    request_body,
)
from planka_mcp.core.operations.cards import get_card

log = logging.getLogger("planka_mcp.core.operations.labels")


async def create_label(client: PlankaClient, data: CreateLabelInput) -> Label:
    path = f"/api/boards/{data.board_id}/labels"
    body = {"name": data.name, "color": data.color, "position": data.position}
    payload = await client.post(path, json=body, tool="labels")
    return parse_response(ItemResponse[Label], payload, f"POST {path}").item


async def update_label(
    client: PlankaClient, label_id: str, data: UpdateLabelInput
) -> Label:
    path = f"/api/labels/{label_id}"
    payload = await client.patch(path, json=request_body(data), tool="labels")
    return parse_response(ItemResponse[Label], payload, f"PATCH {path}").item


async def delete_label(client: PlankaClient, label_id: str) -> None:
    await client.delete(f"/api/labels/{label_id}", tool="labels")


async def add_label_to_card(client: PlankaClient, data: CardLabelInput) -> CardLabel:
    path = f"/api/cards/{data.card_id}/card-labels"
    payload = await client.post(path, json={"labelId": data.label_id}, tool="labels")
    return parse_response(ItemResponse[CardLabel], payload, f"POST {path}").item


async def remove_label_from_card(
    client: PlankaClient, card_id: str, label_id: str
) -> bool:
    """
    Detach a label from a card. Returns False when the label was not attached.

    PLANKA deletes the junction record by its own id, so the card is fetched to
    find it. The direct /card-labels endpoint is tried first, then the path
    nested under the card. Both are assumed to delete the same record.
    """
    details = await get_card(client, card_id)
    card_label = next(
        (cl for cl in details.card_labels if cl.label_id == label_id), None
    )
    if card_label is None:
        return False

    try:
        await client.delete(f"/api/card-labels/{card_label.id}", tool="labels")
    except PlankaError as exc:
        log.debug(
            "Direct card-label delete failed (%s); trying nested endpoint", exc
        )
        await client.delete(
            f"/api/cards/{card_id}/card-labels/{card_label.id}", tool="labels"
        )
    return True


def _is_already_attached(exc: PlankaError) -> bool:
    return "already" in str(exc).lower()


async def set_card_labels(
    client: PlankaClient,
    card_id: str,
    add_label_ids: Optional[Sequence[str]] = None,
    remove_label_ids: Optional[Sequence[str]] = None,
) -> None:
    """
    Apply label removals, then additions, one request at a time.
    A label in both lists ends up attached. Adding a label that is already
    attached is not an error.
    """
    for label_id in remove_label_ids or ():
        await remove_label_from_card(client, card_id, label_id)

    for label_id in add_label_ids or ():
        try:
            await add_label_to_card(
                client, CardLabelInput(card_id=card_id, label_id=label_id)
            )
        except PlankaError as exc:
            if not _is_already_attached(exc):
                raise
            log.debug("Label %s already on card %s", label_id, card_id)
