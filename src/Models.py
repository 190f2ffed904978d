from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

FULL_TIME_CAPACITY = 80
INTERN_CAPACITY = 40
REFERENCE_SPRINT_DAYS = 15
DEFAULT_SPRINT_DAYS = 15

COMPLETION_KEYWORDS = ("complete", "concluído", "done", "fechado", "closed", "accepted")

REQUIRED_FIELDS = ("assignee", "hours", "status")


class Sentinel(str, Enum):
    """Placeholder names substituted when the source cell is missing.

    The values are the labels shown in the dashboard. Stats and indexes are
    keyed by ``.value`` so consumers can look them up with plain strings.
    """
    UNASSIGNED = "Não atribuído"
    OWNERLESS = "Tarefa sem responsável"
    NO_PROJECT = "Sem projeto"
    UNNAMED = "Sem nome"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ColumnMapping:
    assignee: Optional[str] = None
    hours: Optional[str] = None
    estimatedHours: Optional[str] = None
    status: Optional[str] = None
    project: Optional[str] = None
    tags: Optional[str] = None
    date: Optional[str] = None
    taskName: Optional[str] = None

    def missing_required(self) -> list[str]:
        return [f for f in REQUIRED_FIELDS if not getattr(self, f)]


@dataclass(frozen=True)
class CSVData:
    headers: list[str]
    rows: list[dict[str, str]]


@dataclass(frozen=True)
class Task:
    name: str
    estimatedHours: float
    actualHours: float
    status: str
    isCompleted: bool
    project: str
    date: Optional[str] = None


@dataclass(frozen=True)
class TaskSummary:
    """Row of the project -> task index."""
    name: str
    assignee: str
    hours: float
    estimatedHours: float
    isCompleted: bool
    status: str


@dataclass
class PersonStats:
    name: str
    totalHours: float = 0.0
    estimatedHours: float = 0.0
    tasksCompleted: int = 0
    tasksOpen: int = 0
    totalTasks: int = 0
    capacityUsage: float = 0.0
    isIntern: bool = False
    tasks: list[Task] = field(default_factory=list)


@dataclass
class ProjectStats:
    name: str
    totalTasks: int = 0
    completedTasks: int = 0
    openTasks: int = 0
    completionPercentage: float = 0.0
    estimatedHours: float = 0.0
    actualHours: float = 0.0


@dataclass
class DashboardData:
    personStats: list[PersonStats]
    projectStats: list[ProjectStats]
    totalHours: float
    totalTasks: int
    completedTasks: int
    openTasks: int
    tasksByProject: dict[str, list[TaskSummary]]


@dataclass(frozen=True)
class DashboardSettings:
    sprint_days: int = DEFAULT_SPRINT_DAYS
    intern_names: frozenset = frozenset()

    def with_interns(self, names) -> "DashboardSettings":
        return replace(self, intern_names=frozenset(names))

    def with_sprint_days(self, days: int) -> "DashboardSettings":
        return replace(self, sprint_days=days)
