import pytest
import respx
from httpx import Response
from planka_mcp.core.models import BoardIncluded
from planka_mcp.core.operations.boards import (
    count_tasks_by_card,
    get_board,
    get_board_with_task_counts,
    get_cards_for_list,
)

BASE = "https://planka.example.com"


def test_count_tasks_by_card_follows_task_lists(load_fixture):
    included = BoardIncluded.model_validate(load_fixture("board.json")["included"])

    counts = count_tasks_by_card(included.task_lists, included.tasks)

    # t-orphan belongs to an unknown task list and is not counted anywhere
    assert counts == {"c1": (3, 2), "c2": (1, 0)}


def test_count_tasks_by_card_empty():
    assert count_tasks_by_card([], []) == {}


@pytest.mark.asyncio
@respx.mock
async def test_get_board_sorts_lists_and_labels(client, mock_login, load_fixture):
    mock_login()
    respx.get(f"{BASE}/api/boards/b1").mock(
        return_value=Response(200, json=load_fixture("board.json"))
    )

    async with client:
        details = await get_board(client, "b1")

    assert details.board.name == "Engineering"
    assert [lst.id for lst in details.lists] == ["l-todo", "l-done", "l-archive"]
    assert [lbl.id for lbl in details.labels] == ["lb-new", "lb-bug"]
    assert len(details.tasks) == 5


@pytest.mark.asyncio
@respx.mock
async def test_board_with_task_counts(client, mock_login, load_fixture):
    mock_login()
    respx.get(f"{BASE}/api/boards/b1").mock(
        return_value=Response(200, json=load_fixture("board.json"))
    )

    async with client:
        board = await get_board_with_task_counts(client, "b1")

    counts = {c.id: (c.task_count, c.completed_task_count) for c in board.cards}
    assert counts == {"c1": (3, 2), "c2": (1, 0), "c3": (0, 0)}
    assert board.cards[0].type == "project"


@pytest.mark.asyncio
@respx.mock
async def test_board_without_included(client, mock_login, load_fixture):
    mock_login()
    payload = load_fixture("board.json")
    del payload["included"]
    respx.get(f"{BASE}/api/boards/b1").mock(return_value=Response(200, json=payload))

    async with client:
        board = await get_board_with_task_counts(client, "b1")

    assert board.lists == []
    assert board.cards == []


@pytest.mark.asyncio
@respx.mock
async def test_cards_for_list_sorted_by_position(client, mock_login, load_fixture):
    mock_login()
    respx.get(f"{BASE}/api/boards/b1").mock(
        return_value=Response(200, json=load_fixture("board.json"))
    )

    async with client:
        cards = await get_cards_for_list(client, "b1", "l-todo")

    assert [c.id for c in cards] == ["c1", "c2"]
