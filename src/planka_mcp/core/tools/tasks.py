from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.errors import PlankaValidationError
from planka_mcp.core.models import (
    BatchCreateTasksInput,
    UpdateTaskInput,
    parse_input,
)
from planka_mcp.core.operations.tasks import create_tasks, delete_task, update_task
from planka_mcp.core.tools._format import dump


def _task_names(tasks: Union[List[str], str]) -> List[str]:
    # Some MCP hosts send arrays as JSON-encoded strings.
    if isinstance(tasks, str):
        try:
            tasks = json.loads(tasks)
        except ValueError as exc:
            raise PlankaValidationError(
                "tasks must be a list of task names or a JSON array string"
            ) from exc
    if not isinstance(tasks, list):
        raise PlankaValidationError("tasks must be a list of task names")
    return tasks


async def planka_create_tasks(
    client: PlankaClient, card_id: str, tasks: Union[List[str], str]
) -> Dict[str, Any]:
    """
    Add one or more tasks (checklist items) to a card. A checklist named
    "Tasks" is created first if the card has none.
    """
    data = parse_input(
        BatchCreateTasksInput,
        card_id=card_id,
        tasks=[{"name": n} for n in _task_names(tasks)],
    )
    created = await create_tasks(client, data)
    return {
        "success": True,
        "tasksCreated": len(created),
        "tasks": [dump(t, "id", "name", "is_completed") for t in created],
    }


async def planka_update_task(
    client: PlankaClient,
    task_id: str,
    name: Optional[str] = None,
    is_completed: Optional[bool] = None,
) -> Dict[str, Any]:
    """Update a task's name or completion status."""
    updates: Dict[str, Any] = {}
    if name is not None:
        updates["name"] = name
    if is_completed is not None:
        updates["is_completed"] = is_completed

    task = await update_task(client, task_id, parse_input(UpdateTaskInput, **updates))
    return {"success": True, "task": dump(task, "id", "name", "is_completed")}


async def planka_delete_task(client: PlankaClient, task_id: str) -> Dict[str, Any]:
    """Delete a task from a card."""
    await delete_task(client, task_id)
    return {"success": True, "message": f"Task {task_id} deleted"}
