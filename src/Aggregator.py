import logging
from typing import Iterable, Mapping, Optional

from Classifier import classify_row
from Models import (
    DEFAULT_SPRINT_DAYS, FULL_TIME_CAPACITY, INTERN_CAPACITY, REFERENCE_SPRINT_DAYS,
    ColumnMapping, DashboardData, DashboardSettings, PersonStats, ProjectStats, TaskSummary,
)

logger = logging.getLogger(__name__)


def capacity_for(name: str, sprint_days: float = DEFAULT_SPRINT_DAYS, intern_names=frozenset()) -> float:
    """
    Expected hours for ``name`` over a sprint of ``sprint_days``.

    80h (40h for interns) per 15-day reference sprint, scaled linearly.
    """
    base = INTERN_CAPACITY if name in intern_names else FULL_TIME_CAPACITY
    return base / REFERENCE_SPRINT_DAYS * sprint_days


def aggregate(rows: Iterable[Mapping[str, str]], mapping: ColumnMapping,
              sprint_days: float = DEFAULT_SPRINT_DAYS, intern_names: Optional[Iterable[str]] = None) -> DashboardData:
    """
    Builds the dashboard statistics from the raw CSV rows in one pass.

    Every row becomes exactly one task, however sparse it is. The result is
    rebuilt from scratch on each call; nothing is cached between calls.

    Args:
        rows: Raw rows keyed by CSV header.
        mapping: Which header feeds each field.
        sprint_days: Sprint length used for capacity. Must be positive;
            0 leaves every person with zero capacity and raises ZeroDivisionError.
        intern_names: People whose capacity is the intern capacity.

    Returns:
        DashboardData: People sorted by hours, projects by completion.
    """
    interns = frozenset(intern_names or ())

    people: dict[str, PersonStats] = {}
    projects: dict[str, ProjectStats] = {}
    tasks_by_project: dict[str, list[TaskSummary]] = {}

    total_hours = 0.0
    total_tasks = 0
    completed_tasks = 0
    open_tasks = 0

    for row in rows:
        info = classify_row(row, mapping)

        person = people.get(info.assignee)
        if person is None:
            person = people[info.assignee] = PersonStats(name=info.assignee)
        person.totalHours += info.hours
        person.estimatedHours += info.estimatedHours
        person.totalTasks += 1
        if info.isCompleted:
            person.tasksCompleted += 1
        else:
            person.tasksOpen += 1
        person.tasks.append(info.to_task())

        project = projects.get(info.project)
        if project is None:
            project = projects[info.project] = ProjectStats(name=info.project)
        project.totalTasks += 1
        project.estimatedHours += info.estimatedHours
        project.actualHours += info.hours
        if info.isCompleted:
            project.completedTasks += 1
        else:
            project.openTasks += 1

        tasks_by_project.setdefault(info.project, []).append(TaskSummary(
            name=info.taskName,
            assignee=info.assignee,
            hours=info.hours,
            estimatedHours=info.estimatedHours,
            isCompleted=info.isCompleted,
            status=info.status,
        ))

        total_hours += info.hours
        total_tasks += 1
        if info.isCompleted:
            completed_tasks += 1
        else:
            open_tasks += 1

    logger.debug("Aggregated %d rows into %d people and %d projects", total_tasks, len(people), len(projects))

    return DashboardData(
        personStats=finalize_people(people.values(), sprint_days, interns),
        projectStats=finalize_projects(projects.values()),
        totalHours=total_hours,
        totalTasks=total_tasks,
        completedTasks=completed_tasks,
        openTasks=open_tasks,
        tasksByProject=tasks_by_project,
    )


def aggregate_with(rows: Iterable[Mapping[str, str]], mapping: ColumnMapping, settings: DashboardSettings) -> DashboardData:
    return aggregate(rows, mapping, settings.sprint_days, settings.intern_names)


def finalize_people(people: Iterable[PersonStats], sprint_days: float, intern_names) -> list[PersonStats]:
    result = []
    for person in people:
        person.isIntern = person.name in intern_names
        person.capacityUsage = person.totalHours / capacity_for(person.name, sprint_days, intern_names) * 100
        result.append(person)
    # sorted() is stable: ties keep first-seen order
    return sorted(result, key=lambda p: p.totalHours, reverse=True)


def finalize_projects(projects: Iterable[ProjectStats]) -> list[ProjectStats]:
    result = []
    for project in projects:
        if project.totalTasks > 0:
            project.completionPercentage = project.completedTasks / project.totalTasks * 100
        else:
            project.completionPercentage = 0.0
        result.append(project)
    return sorted(result, key=lambda p: p.completionPercentage, reverse=True)
