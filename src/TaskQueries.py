from dataclasses import dataclass
from typing import Optional

from Models import DashboardData, PersonStats, Task, TaskSummary


@dataclass(frozen=True)
class AssignedTask:
    task: Task
    assignee: str
    isIntern: bool


@dataclass(frozen=True)
class Deviation:
    estimated: float
    actual: float
    difference: float
    percentage: float


def list_tasks(data: DashboardData, completed: Optional[bool] = None,
               person: Optional[str] = None, project: Optional[str] = None) -> list[AssignedTask]:
    """
    Flattens every person's tasks, in person order then row order.

    Args:
        data: Aggregated dashboard.
        completed: True for completed only, False for open only, None for all.
        person: Keep only tasks of this assignee.
        project: Keep only tasks of this project.
    """
    result = []
    for stats in data.personStats:
        if person is not None and stats.name != person:
            continue
        for task in stats.tasks:
            if completed is not None and task.isCompleted != completed:
                continue
            if project is not None and task.project != project:
                continue
            result.append(AssignedTask(task, stats.name, stats.isIntern))
    return result


def project_names(data: DashboardData) -> list[str]:
    return sorted({task.project for p in data.personStats for task in p.tasks})


def people_with_open_tasks(data: DashboardData) -> list[str]:
    return sorted(p.name for p in data.personStats if any(not t.isCompleted for t in p.tasks))


def estimate_deviation(person: PersonStats) -> Deviation:
    estimated = sum(t.estimatedHours for t in person.tasks)
    actual = sum(t.actualHours for t in person.tasks)
    diff = actual - estimated
    pct = diff / estimated * 100 if estimated > 0 else 0.0
    return Deviation(estimated, actual, diff, pct)


def find_person(data: DashboardData, name: str) -> Optional[PersonStats]:
    return next((p for p in data.personStats if p.name == name), None)


def project_tasks(data: DashboardData, project: str) -> list[TaskSummary]:
    """Tasks of ``project`` straight from the project index, in row order."""
    return list(data.tasksByProject.get(project, []))


# table rows for the detail dialogs

TASK_COLUMNS = ("Tarefa", "Responsável", "Projeto", "Status", "Estimado", "Real", "Concluída")
PROJECT_TASK_COLUMNS = ("Tarefa", "Responsável", "Status", "Estimado", "Real", "Concluída")
PEOPLE_COLUMNS = ("Nome", "Estagiário", "Tarefas", "Concluídas", "Em Aberto", "Horas", "% Capacidade")


def _hours(value: float) -> str:
    return f"{value:.1f}h"


def _yes_no(flag: bool) -> str:
    return "Sim" if flag else "Não"


def task_rows(tasks: list[AssignedTask]) -> list[tuple]:
    return [
        (t.task.name, t.assignee, t.task.project, t.task.status or "-",
         _hours(t.task.estimatedHours), _hours(t.task.actualHours), _yes_no(t.task.isCompleted))
        for t in tasks
    ]


def project_task_rows(data: DashboardData, project: str) -> list[tuple]:
    return [
        (t.name, t.assignee, t.status or "-", _hours(t.estimatedHours), _hours(t.hours), _yes_no(t.isCompleted))
        for t in project_tasks(data, project)
    ]


def people_rows(data: DashboardData) -> list[tuple]:
    return [
        (p.name, _yes_no(p.isIntern), str(p.totalTasks), str(p.tasksCompleted), str(p.tasksOpen),
         _hours(p.totalHours), f"{p.capacityUsage:.1f}%")
        for p in data.personStats
    ]
