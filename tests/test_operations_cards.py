import json

import pytest
import respx
from httpx import Response
from planka_mcp.core.models import CreateCardInput, MoveCardInput, UpdateCardInput
from planka_mcp.core.operations.cards import (
    create_card,
    delete_card,
    get_card,
    move_card,
    update_card,
)

BASE = "https://planka.example.com"

CARD_ITEM = {
    "id": "c9",
    "boardId": "b1",
    "listId": "l-todo",
    "name": "New card",
    "position": 65536,
    "type": "project",
    "createdAt": "2025-01-05T00:00:00.000Z",
}


@pytest.mark.asyncio
@respx.mock
async def test_get_card_orders_children(client, mock_login, load_fixture):
    mock_login()
    respx.get(f"{BASE}/api/cards/c1").mock(
        return_value=Response(200, json=load_fixture("card.json"))
    )

    async with client:
        details = await get_card(client, "c1")

    assert details.card.type == "story"
    assert [tl.id for tl in details.task_lists] == ["tl-a", "tl-b"]
    assert [t.id for t in details.tasks] == ["t1", "t2"]
    assert [c.id for c in details.comments] == ["cm-new", "cm-mid", "cm-old"]
    assert [a.name for a in details.attachments] == ["trace.log"]
    assert [cl.label_id for cl in details.card_labels] == ["lb-bug"]


@pytest.mark.asyncio
@respx.mock
async def test_create_card_posts_to_list(client, mock_login):
    mock_login()
    route = respx.post(f"{BASE}/api/lists/l-todo/cards").mock(
        return_value=Response(200, json={"item": CARD_ITEM})
    )

    async with client:
        card = await create_card(
            client, CreateCardInput(list_id="l-todo", name="New card", type="project")
        )

    assert card.id == "c9"
    assert json.loads(route.calls[0].request.content) == {
        "name": "New card",
        "position": 65536,
        "type": "project",
    }


@pytest.mark.asyncio
@respx.mock
async def test_create_card_sends_optional_fields(client, mock_login):
    mock_login()
    route = respx.post(f"{BASE}/api/lists/l-todo/cards").mock(
        return_value=Response(200, json={"item": {**CARD_ITEM, "type": "story"}})
    )

    async with client:
        await create_card(
            client,
            CreateCardInput(
                list_id="l-todo",
                name="New card",
                description="Details",
                due_date="2025-03-01T00:00:00.000Z",
                position=10,
                type="story",
            ),
        )

    body = json.loads(route.calls[0].request.content)
    assert body == {
        "name": "New card",
        "description": "Details",
        "dueDate": "2025-03-01T00:00:00.000Z",
        "position": 10,
        "type": "story",
    }


@pytest.mark.asyncio
@respx.mock
async def test_update_card_sends_only_set_fields(client, mock_login):
    mock_login()
    route = respx.patch(f"{BASE}/api/cards/c9").mock(
        return_value=Response(200, json={"item": {**CARD_ITEM, "isCompleted": True}})
    )

    async with client:
        card = await update_card(
            client, "c9", UpdateCardInput(is_completed=True, due_date=None)
        )

    assert card.is_completed is True
    assert json.loads(route.calls[0].request.content) == {
        "isCompleted": True,
        "dueDate": None,
    }


@pytest.mark.asyncio
@respx.mock
async def test_move_card_within_board(client, mock_login):
    mock_login()
    route = respx.patch(f"{BASE}/api/cards/c9").mock(
        return_value=Response(200, json={"item": {**CARD_ITEM, "listId": "l-done"}})
    )

    async with client:
        card = await move_card(client, MoveCardInput(card_id="c9", list_id="l-done"))

    assert card.list_id == "l-done"
    assert json.loads(route.calls[0].request.content) == {
        "listId": "l-done",
        "position": 65536,
    }


@pytest.mark.asyncio
@respx.mock
async def test_move_card_to_other_board(client, mock_login):
    mock_login()
    route = respx.patch(f"{BASE}/api/cards/c9").mock(
        return_value=Response(200, json={"item": {**CARD_ITEM, "boardId": "b2"}})
    )

    async with client:
        await move_card(
            client,
            MoveCardInput(card_id="c9", list_id="l-x", position=5, board_id="b2"),
        )

    assert json.loads(route.calls[0].request.content) == {
        "listId": "l-x",
        "position": 5,
        "boardId": "b2",
    }


@pytest.mark.asyncio
@respx.mock
async def test_delete_card(client, mock_login):
    mock_login()
    route = respx.delete(f"{BASE}/api/cards/c9").mock(
        return_value=Response(200, json={"item": CARD_ITEM})
    )

    async with client:
        assert await delete_card(client, "c9") is None

    assert route.called
