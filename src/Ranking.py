from typing import Sequence

from Models import DashboardData, PersonStats

TOP_COUNT = 5


def get_top_performers(person_stats: Sequence[PersonStats], count: int = TOP_COUNT) -> list[PersonStats]:
    """People with the most completed tasks. Ties keep the incoming order."""
    return sorted(person_stats, key=lambda p: p.tasksCompleted, reverse=True)[:count]


def get_low_performers(person_stats: Sequence[PersonStats], count: int = TOP_COUNT) -> list[PersonStats]:
    # ranked on hours, not completed tasks like get_top_performers
    return sorted(person_stats, key=lambda p: p.totalHours)[:count]


def completion_rate(data: DashboardData) -> float:
    if data.totalTasks == 0:
        return 0.0
    return data.completedTasks / data.totalTasks * 100


def person_completion_rate(person: PersonStats) -> float:
    if person.totalTasks == 0:
        return 0.0
    return person.tasksCompleted / person.totalTasks * 100


def active_people(data: DashboardData) -> int:
    return len(data.personStats)


def capacity_band(usage: float) -> str:
    if usage >= 100:
        return "over"
    if usage >= 80:
        return "healthy"
    return "under"


def completion_band(percentage: float) -> str:
    if percentage >= 80:
        return "good"
    if percentage >= 50:
        return "fair"
    return "poor"
