from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Generic, List, Literal, Optional, Type, TypeVar, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import PlankaValidationError

T = TypeVar("T", bound=BaseModel)

# Positions are spaced by this step so later inserts have room in between.
DEFAULT_POSITION = 65536

CardType = Literal["project", "story"]

LabelColor = Literal[
    "berry-red",
    "pumpkin-orange",
    "lagoon-blue",
    "pink-tulip",
    "light-mud",
    "orange-peel",
    "bright-moss",
    "antique-blue",
    "dark-granite",
    "lagune-blue",
    "sunny-grass",
    "morning-sky",
    "light-orange",
    "midnight-blue",
    "tank-green",
    "gun-metal",
    "wet-moss",
    "red-burgundy",
    "light-concrete",
    "apricot-red",
    "desert-sand",
    "navy-blue",
    "egg-yellow",
    "coral-green",
    "light-cocoa",
    "modern-green",
    "piggy-red",
]

LABEL_COLORS: tuple[str, ...] = get_args(LabelColor)


class PlankaModel(BaseModel):
    """
    Base for PLANKA payloads.
    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class RequestModel(PlankaModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


# --- Core Entities ---


class User(PlankaModel):
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    name: str
    avatar_url: Optional[Any] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class Project(PlankaModel):
    id: str
    name: str
    background: Optional[Any] = None
    background_image: Optional[Any] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class Board(PlankaModel):
    id: str
    project_id: str
    name: str
    position: float
    created_at: datetime
    updated_at: Optional[datetime] = None


class BoardList(PlankaModel):
    """A column on a board. Archive and trash lists have no name or position."""

    id: str
    board_id: str
    name: Optional[str]
    position: Optional[float]
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def is_system(self) -> bool:
        return self.name is None


class Card(PlankaModel):
    id: str
    board_id: str
    list_id: str
    creator_user_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    position: float
    type: CardType
    due_date: Optional[str] = None
    is_due_date_completed: Optional[bool] = None
    is_completed: Optional[bool] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class TaskList(PlankaModel):
    id: str
    card_id: str
    name: str
    position: float
    show_on_front_of_card: Optional[bool] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class Task(PlankaModel):
    # Tasks only know their task list; the card is reached through TaskList.card_id.
    id: str
    task_list_id: str
    name: str
    position: float
    is_completed: bool
    assignee_user_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class Label(PlankaModel):
    id: str
    board_id: str
    name: Optional[str]
    # Any string on read: the server palette may grow beyond LabelColor.
    color: str
    position: float
    created_at: datetime
    updated_at: Optional[datetime] = None


class CardLabel(PlankaModel):
    id: str
    card_id: str
    label_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class Comment(PlankaModel):
    id: str
    card_id: str
    user_id: str
    text: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class Attachment(PlankaModel):
    id: str
    card_id: str
    creator_user_id: Optional[str] = None
    name: str
    url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


# --- Response Wrappers ---


class ItemResponse(BaseModel, Generic[T]):
    item: T
    included: Optional[Dict[str, Any]] = None


class ItemsResponse(BaseModel, Generic[T]):
    items: List[T]
    included: Optional[Dict[str, Any]] = None


class AuthResponse(BaseModel):
    item: str  # JWT


class BoardIncluded(PlankaModel):
    lists: List[BoardList] = Field(default_factory=list)
    cards: List[Card] = Field(default_factory=list)
    labels: List[Label] = Field(default_factory=list)
    card_labels: List[CardLabel] = Field(default_factory=list)
    task_lists: List[TaskList] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    users: List[User] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class CardIncluded(PlankaModel):
    task_lists: List[TaskList] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)
    labels: List[Label] = Field(default_factory=list)
    card_labels: List[CardLabel] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    users: List[User] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


class ProjectsIncluded(PlankaModel):
    boards: List[Board] = Field(default_factory=list)
    users: List[User] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )


# --- Input Models (Request Payloads) ---


class CreateCardInput(RequestModel):
    list_id: str
    name: str = Field(min_length=1)
    description: Optional[str] = None
    position: float = DEFAULT_POSITION
    type: CardType
    due_date: Optional[str] = None


class UpdateCardInput(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[str] = None
    is_completed: Optional[bool] = None
    list_id: Optional[str] = None
    board_id: Optional[str] = None
    position: Optional[float] = None


class MoveCardInput(RequestModel):
    card_id: str
    list_id: str
    position: float = DEFAULT_POSITION
    board_id: Optional[str] = None


class CreateTaskListInput(RequestModel):
    card_id: str
    name: str = Field(min_length=1)
    position: float = DEFAULT_POSITION


class CreateTaskInput(RequestModel):
    card_id: str
    name: str = Field(min_length=1)
    position: float = DEFAULT_POSITION


class UpdateTaskInput(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    is_completed: Optional[bool] = None
    position: Optional[float] = None


class TaskItemInput(RequestModel):
    name: str = Field(min_length=1)
    position: Optional[float] = None


class BatchCreateTasksInput(RequestModel):
    card_id: str
    tasks: List[TaskItemInput] = Field(min_length=1)


class CreateLabelInput(RequestModel):
    board_id: str
    name: str = Field(min_length=1)
    color: LabelColor
    position: float = DEFAULT_POSITION


class UpdateLabelInput(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[LabelColor] = None
    position: Optional[float] = None


class CardLabelInput(RequestModel):
    card_id: str
    label_id: str


class CreateCommentInput(RequestModel):
    card_id: str
    text: str = Field(min_length=1)


class UpdateCommentInput(RequestModel):
    text: str = Field(min_length=1)


class CreateListInput(RequestModel):
    board_id: str
    name: str = Field(min_length=1)
    position: Optional[float] = None


class UpdateListInput(RequestModel):
    name: Optional[str] = Field(default=None, min_length=1)
    position: Optional[float] = None


# --- Aggregate Views (Output) ---


class CardWithTaskCounts(Card):
    task_count: int = 0
    completed_task_count: int = 0


class BoardDetails(PlankaModel):
    board: Board
    lists: List[BoardList]
    cards: List[Card]
    labels: List[Label]
    card_labels: List[CardLabel]
    task_lists: List[TaskList]
    tasks: List[Task]


class BoardWithTaskCounts(PlankaModel):
    board: Board
    lists: List[BoardList]
    cards: List[CardWithTaskCounts]
    labels: List[Label]
    card_labels: List[CardLabel]


class CardDetails(PlankaModel):
    card: Card
    task_lists: List[TaskList]
    tasks: List[Task]
    comments: List[Comment]
    labels: List[Label]
    card_labels: List[CardLabel]
    attachments: List[Attachment]


class ProjectsOverview(PlankaModel):
    projects: List[Project]
    boards: List[Board]


class BoardStructure(PlankaModel):
    board: Board
    lists: List[BoardList]


class ProjectStructure(PlankaModel):
    project: Project
    boards: List[BoardStructure]


# --- Helpers ---


def parse_input(model: Type[T], **values: Any) -> T:
    """Validate a request payload locally; raises PlankaValidationError on mismatch."""
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise PlankaValidationError(
            f"Invalid {model.__name__}: {exc.error_count()} validation error(s)",
            details=exc.errors(include_url=False, include_context=False),
        ) from exc


def request_body(data: BaseModel, *, exclude: Optional[set[str]] = None) -> Dict[str, Any]:
    """Serialize only the fields the caller set; explicit None is kept so it can clear."""
    return data.model_dump(
        by_alias=True, exclude_unset=True, exclude=exclude, mode="json"
    )


def parse_response(model: Type[T], payload: Any, context: str) -> T:
    """Validate an inbound payload; raises PlankaValidationError on mismatch."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise PlankaValidationError(
            f"Response did not match {model.__name__} ({context})",
            context=context,
            details=exc.errors(include_url=False, include_context=False),
        ) from exc
