from dataclasses import dataclass
from typing import Mapping, Optional

from Models import COMPLETION_KEYWORDS, ColumnMapping, Sentinel, Task
from TimeParser import parse_time_to_hours


@dataclass(frozen=True)
class ClassifiedRow:
    assignee: str
    hours: float
    estimatedHours: float
    status: str
    isCompleted: bool
    project: str
    taskName: str
    date: Optional[str] = None

    def to_task(self) -> Task:
        return Task(
            name=self.taskName,
            estimatedHours=self.estimatedHours,
            actualHours=self.hours,
            status=self.status,
            isCompleted=self.isCompleted,
            project=self.project,
            date=self.date,
        )


def cell(row: Mapping[str, str], column: Optional[str]) -> str:
    """Value of ``column`` in ``row`` as text, '' when unmapped or absent."""
    if not column:
        return ""
    value = row.get(column)
    if value is None:
        return ""
    return str(value)


def is_completed_status(status: str) -> bool:
    status = status.lower()
    return any(keyword in status for keyword in COMPLETION_KEYWORDS)


def normalize_assignee(row: Mapping[str, str], column: Optional[str]) -> str:
    if not column:
        return Sentinel.UNASSIGNED.value

    name = cell(row, column)
    if not name:
        return Sentinel.UNASSIGNED.value

    name = name.strip()
    # list-valued exports come out as "[Ana]" or "[]"
    if name.startswith("["):
        name = name[1:]
    if name.endswith("]"):
        name = name[:-1]
    name = name.strip()

    if not name or name == "[]":
        return Sentinel.OWNERLESS.value
    return name


def first_of_list(value: str) -> str:
    return value.split(",", 1)[0].strip()


def resolve_project(row: Mapping[str, str], mapping: ColumnMapping) -> str:
    if mapping.project:
        source = mapping.project
    elif mapping.tags:
        source = mapping.tags
    else:
        return Sentinel.NO_PROJECT.value
    return first_of_list(cell(row, source)) or Sentinel.NO_PROJECT.value


def classify_row(row: Mapping[str, str], mapping: ColumnMapping) -> ClassifiedRow:
    status = cell(row, mapping.status).lower().strip()
    return ClassifiedRow(
        assignee=normalize_assignee(row, mapping.assignee),
        hours=parse_time_to_hours(cell(row, mapping.hours)),
        estimatedHours=parse_time_to_hours(cell(row, mapping.estimatedHours)),
        status=status,
        isCompleted=is_completed_status(status),
        project=resolve_project(row, mapping),
        taskName=cell(row, mapping.taskName).strip() or Sentinel.UNNAMED.value,
        date=cell(row, mapping.date) if mapping.date and row.get(mapping.date) is not None else None,
    )
