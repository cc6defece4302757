"""
Task (checklist item) operations.

PLANKA 2.0 keeps tasks inside task lists. Callers adding tasks to a card do
not need to know that: when the card has no task list yet, a default one named
"Tasks" is created first.
"""

from __future__ import annotations

from typing import List

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.models import (
    DEFAULT_POSITION,
    BatchCreateTasksInput,
    CreateTaskInput,
    CreateTaskListInput,
    ItemResponse,
    Task,
    TaskList,
    UpdateTaskInput,
    parse_response,
    request_body,
)
from planka_mcp.core.operations.cards import get_card

DEFAULT_TASK_LIST_NAME = "Tasks"


async def create_task_list(client: PlankaClient, data: CreateTaskListInput) -> TaskList:
    path = f"/api/cards/{data.card_id}/task-lists"
    body = {"name": data.name, "position": data.position}
    payload = await client.post(path, json=body, tool="tasks")
    return parse_response(ItemResponse[TaskList], payload, f"POST {path}").item


async def get_or_create_default_task_list(
    client: PlankaClient, card_id: str
) -> TaskList:
    """Return the card's first task list by position, creating "Tasks" if it has none."""
    details = await get_card(client, card_id)
    if details.task_lists:
        return details.task_lists[0]

    return await create_task_list(
        client,
        CreateTaskListInput(
            card_id=card_id, name=DEFAULT_TASK_LIST_NAME, position=DEFAULT_POSITION
        ),
    )


async def _post_task(
    client: PlankaClient, task_list_id: str, name: str, position: float
) -> Task:
    path = f"/api/task-lists/{task_list_id}/tasks"
    payload = await client.post(
        path, json={"name": name, "position": position}, tool="tasks"
    )
    return parse_response(ItemResponse[Task], payload, f"POST {path}").item


async def create_task(client: PlankaClient, data: CreateTaskInput) -> Task:
    task_list = await get_or_create_default_task_list(client, data.card_id)
    return await _post_task(client, task_list.id, data.name, data.position)


async def create_tasks(client: PlankaClient, data: BatchCreateTasksInput) -> List[Task]:
    """
    Create tasks in order, one request at a time.
    Tasks without an explicit position get DEFAULT_POSITION, 2x, 3x, ...
    """
    task_list = await get_or_create_default_task_list(client, data.card_id)

    created: List[Task] = []
    position = DEFAULT_POSITION
    for item in data.tasks:
        task = await _post_task(
            client,
            task_list.id,
            item.name,
            item.position if item.position is not None else position,
        )
        created.append(task)
        position += DEFAULT_POSITION

    return created


async def update_task(client: PlankaClient, task_id: str, data: UpdateTaskInput) -> Task:
    path = f"/api/tasks/{task_id}"
    payload = await client.patch(path, json=request_body(data), tool="tasks")
    return parse_response(ItemResponse[Task], payload, f"PATCH {path}").item


async def delete_task(client: PlankaClient, task_id: str) -> None:
    await client.delete(f"/api/tasks/{task_id}", tool="tasks")


async def delete_task_list(client: PlankaClient, task_list_id: str) -> None:
    """Delete a task list and every task in it."""
    await client.delete(f"/api/task-lists/{task_list_id}", tool="tasks")
