from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from planka_mcp.core.client import PlankaClient
from planka_mcp.core.models import (
    Board,
    BoardList,
    BoardStructure,
    ItemsResponse,
    PlankaModel,
    Project,
    ProjectsIncluded,
    ProjectsOverview,
    ProjectStructure,
)
from planka_mcp.core.operations._included import by_position, parse_included


class _BoardListsIncluded(PlankaModel):
    lists: List[BoardList] = Field(default_factory=list)


async def get_projects(client: PlankaClient) -> ProjectsOverview:
    """Fetch all projects; the response carries every visible board in `included`."""
    path = "/api/projects"
    parsed = await client.request_model(
        ItemsResponse[Project], "GET", path, tool="projects"
    )
    included = parse_included(parsed.included, ProjectsIncluded, f"GET {path}")
    return ProjectsOverview(projects=parsed.items, boards=included.boards)


async def _get_board_lists(client: PlankaClient, board_id: str) -> List[BoardList]:
    path = f"/api/boards/{board_id}"
    payload = await client.get(path, tool="projects")
    included = payload.get("included") if isinstance(payload, dict) else None
    return parse_included(included, _BoardListsIncluded, f"GET {path}").lists


async def get_structure(
    client: PlankaClient, project_id: Optional[str] = None
) -> List[ProjectStructure]:
    """
    Assemble projects -> boards -> lists.

    The projects response does not include lists, so each board costs one extra
    request. Boards are fetched one at a time in the order the server returned
    them; boards and lists are then sorted by position. Archive/trash lists
    (no name) are left out.
    """
    overview = await get_projects(client)

    projects = [
        p for p in overview.projects if project_id is None or p.id == project_id
    ]

    structures: List[ProjectStructure] = []
    for project in projects:
        boards: List[Board] = [b for b in overview.boards if b.project_id == project.id]
        entries: List[BoardStructure] = []
        for board in boards:
            lists = await _get_board_lists(client, board.id)
            entries.append(
                BoardStructure(
                    board=board,
                    lists=[lst for lst in by_position(lists) if not lst.is_system],
                )
            )
        structures.append(
            ProjectStructure(
                project=project,
                boards=sorted(entries, key=lambda e: e.board.position),
            )
        )

    return structures
