import json

import pytest
import respx
from httpx import Response
from planka_mcp.core.errors import PlankaValidationError
from planka_mcp.core.tools.tasks import (
    _task_names,
    planka_create_tasks,
    planka_delete_task,
    planka_update_task,
)

BASE = "https://planka.example.com"


def test_task_names_accepts_json_string():
    assert _task_names('["a", "b"]') == ["a", "b"]
    assert _task_names(["a"]) == ["a"]


@pytest.mark.parametrize("value", ["not json", '{"name": "a"}'])
def test_task_names_rejects_other_shapes(value):
    with pytest.raises(PlankaValidationError):
        _task_names(value)


@pytest.mark.asyncio
@respx.mock
async def test_create_tasks_uses_first_task_list(client, mock_login, load_fixture):
    mock_login()
    respx.get(f"{BASE}/api/cards/c1").mock(
        return_value=Response(200, json=load_fixture("card.json"))
    )

    def _created(request):
        body = json.loads(request.content)
        return Response(
            200,
            json={
                "item": {
                    "id": f"t-{body['name']}",
                    "taskListId": "tl-a",
                    "name": body["name"],
                    "position": body["position"],
                    "isCompleted": False,
                    "createdAt": "2025-01-05T00:00:00.000Z",
                }
            },
        )

    respx.post(f"{BASE}/api/task-lists/tl-a/tasks").mock(side_effect=_created)

    async with client:
        result = await planka_create_tasks(client, "c1", '["Write", "Review"]')

    assert result == {
        "success": True,
        "tasksCreated": 2,
        "tasks": [
            {"id": "t-Write", "name": "Write", "isCompleted": False},
            {"id": "t-Review", "name": "Review", "isCompleted": False},
        ],
    }


@pytest.mark.asyncio
@respx.mock
async def test_create_tasks_needs_at_least_one(client):
    async with client:
        with pytest.raises(PlankaValidationError):
            await planka_create_tasks(client, "c1", [])

    assert not respx.calls


@pytest.mark.asyncio
@respx.mock
async def test_update_and_delete_task(client, mock_login):
    mock_login()
    route = respx.patch(f"{BASE}/api/tasks/t1").mock(
        return_value=Response(
            200,
            json={
                "item": {
                    "id": "t1",
                    "taskListId": "tl-a",
                    "name": "Reproduce",
                    "position": 65536,
                    "isCompleted": True,
                    "createdAt": "2025-01-02T09:00:00.000Z",
                }
            },
        )
    )
    respx.delete(f"{BASE}/api/tasks/t1").mock(return_value=Response(204))

    async with client:
        updated = await planka_update_task(client, "t1", is_completed=True)
        deleted = await planka_delete_task(client, "t1")

    assert updated["task"] == {"id": "t1", "name": "Reproduce", "isCompleted": True}
    assert json.loads(route.calls[0].request.content) == {"isCompleted": True}
    assert deleted["success"] is True
