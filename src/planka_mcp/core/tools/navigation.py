from __future__ import annotations

from typing import Any, Dict, List, Optional

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.models import CardWithTaskCounts, Label
from planka_mcp.core.operations._included import by_position
from planka_mcp.core.operations.boards import get_board_with_task_counts
from planka_mcp.core.operations.projects import get_structure
from planka_mcp.core.tools._format import preview


async def planka_get_structure(
    client: PlankaClient, project_id: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Get the full project/board/list structure. Use this to understand what
    projects and boards exist before working with cards.
    Pass project_id to limit the result to one project.
    """
    structure = await get_structure(client, project_id)
    return [
        {
            "project": {"id": entry.project.id, "name": entry.project.name},
            "boards": [
                {
                    "id": b.board.id,
                    "name": b.board.name,
                    "lists": [{"id": lst.id, "name": lst.name} for lst in b.lists],
                }
                for b in entry.boards
            ],
        }
        for entry in structure
    ]


def _card_entry(
    card: CardWithTaskCounts, label_names: List[str], include_task_counts: bool
) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"id": card.id, "name": card.name}
    if card.description:
        entry["description"] = preview(card.description)
    if card.due_date:
        entry["dueDate"] = card.due_date
    if card.is_completed:
        entry["isCompleted"] = True
    if label_names:
        entry["labels"] = label_names
    if include_task_counts and card.task_count > 0:
        entry["tasks"] = f"{card.completed_task_count}/{card.task_count}"
    return entry


async def planka_get_board(
    client: PlankaClient, board_id: str, include_task_counts: bool = True
) -> Dict[str, Any]:
    """
    Get a board with all its lists, cards, and labels. Use this to see
    everything on a board. Cards show task progress as "completed/total".
    """
    details = await get_board_with_task_counts(client, board_id)

    label_by_id: Dict[str, Label] = {lbl.id: lbl for lbl in details.labels}
    labels_by_card: Dict[str, List[str]] = {}
    for cl in details.card_labels:
        label = label_by_id.get(cl.label_id)
        if label is not None:
            labels_by_card.setdefault(cl.card_id, []).append(label.name or label.color)

    cards_by_list: Dict[str, List[CardWithTaskCounts]] = {}
    for card in details.cards:
        cards_by_list.setdefault(card.list_id, []).append(card)

    return {
        "board": {"id": details.board.id, "name": details.board.name},
        "labels": [
            {"id": lbl.id, "name": lbl.name, "color": lbl.color}
            for lbl in details.labels
        ],
        "lists": [
            {
                "id": lst.id,
                "name": lst.name,
                "cards": [
                    _card_entry(
                        card, labels_by_card.get(card.id, []), include_task_counts
                    )
                    for card in by_position(cards_by_list.get(lst.id, []))
                ],
            }
            for lst in details.lists
            if not lst.is_system
        ],
    }
