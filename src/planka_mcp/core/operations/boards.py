from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.models import (
    Board,
    BoardDetails,
    BoardIncluded,
    BoardWithTaskCounts,
    Card,
    CardWithTaskCounts,
    ItemResponse,
    Task,
    TaskList,
    parse_response,
)
from planka_mcp.core.operations._included import by_position, parse_included


async def get_board(client: PlankaClient, board_id: str) -> BoardDetails:
    """Get a board together with its lists, cards, labels, task lists and tasks."""
    path = f"/api/boards/{board_id}"
    context = f"GET {path}"
    payload = await client.get(path, tool="boards")
    parsed = parse_response(ItemResponse[Board], payload, context)
    included = parse_included(parsed.included, BoardIncluded, context)

    return BoardDetails(
        board=parsed.item,
        lists=by_position(included.lists),
        cards=included.cards,
        labels=by_position(included.labels),
        card_labels=included.card_labels,
        task_lists=by_position(included.task_lists),
        tasks=included.tasks,
    )


def count_tasks_by_card(
    task_lists: Iterable[TaskList], tasks: Iterable[Task]
) -> Dict[str, Tuple[int, int]]:
    """
    Fold tasks into (total, completed) per card id.
    Tasks carry only a task list id, so the card is found through the task list.
    Tasks whose task list is unknown are skipped.
    """
    card_by_task_list = {tl.id: tl.card_id for tl in task_lists}
    counts: Dict[str, Tuple[int, int]] = {}

    for task in tasks:
        card_id = card_by_task_list.get(task.task_list_id)
        if card_id is None:
            continue
        total, completed = counts.get(card_id, (0, 0))
        counts[card_id] = (total + 1, completed + (1 if task.is_completed else 0))

    return counts


def with_task_counts(
    cards: Iterable[Card], counts: Dict[str, Tuple[int, int]]
) -> List[CardWithTaskCounts]:
    decorated: List[CardWithTaskCounts] = []
    for card in cards:
        total, completed = counts.get(card.id, (0, 0))
        decorated.append(
            CardWithTaskCounts(
                **card.model_dump(),
                task_count=total,
                completed_task_count=completed,
            )
        )
    return decorated


async def get_board_with_task_counts(
    client: PlankaClient, board_id: str
) -> BoardWithTaskCounts:
    """Get a board whose cards are decorated with task totals and completions."""
    details = await get_board(client, board_id)
    counts = count_tasks_by_card(details.task_lists, details.tasks)

    return BoardWithTaskCounts(
        board=details.board,
        lists=details.lists,
        cards=with_task_counts(details.cards, counts),
        labels=details.labels,
        card_labels=details.card_labels,
    )


async def get_cards_for_list(
    client: PlankaClient, board_id: str, list_id: str
) -> List[Card]:
    """Cards of one list, sorted by position."""
    details = await get_board(client, board_id)
    return by_position(c for c in details.cards if c.list_id == list_id)
