import pytest

from Aggregator import aggregate, aggregate_with, capacity_for
from Models import ColumnMapping, DashboardSettings, Sentinel


def test_single_row_scenario():
    rows = [{"assignee": "Ana", "hours": "4h", "status": "Done", "project": "Alpha"}]
    mapping = ColumnMapping(assignee="assignee", hours="hours", status="status", project="project")

    data = aggregate(rows, mapping)

    assert len(data.personStats) == 1
    ana = data.personStats[0]
    assert ana.name == "Ana"
    assert ana.totalHours == 4
    assert ana.totalTasks == 1
    assert ana.tasksCompleted == 1
    assert ana.tasksOpen == 0

    assert len(data.projectStats) == 1
    alpha = data.projectStats[0]
    assert alpha.name == "Alpha"
    assert alpha.totalTasks == 1
    assert alpha.completedTasks == 1
    assert alpha.completionPercentage == 100


def test_every_row_becomes_a_task(mapping, sample_rows):
    data = aggregate(sample_rows, mapping)
    assert data.totalTasks == len(sample_rows)
    assert data.completedTasks == 2
    assert data.openTasks == 3
    assert data.totalHours == pytest.approx(4 + 2.5 + 1.5 + 6.5)


def test_people_sorted_by_hours(mapping, sample_rows):
    data = aggregate(sample_rows, mapping)
    assert [p.name for p in data.personStats] == ["Carla", "Ana", "Bruno", Sentinel.UNASSIGNED.value]
    hours = [p.totalHours for p in data.personStats]
    assert hours == sorted(hours, reverse=True)


def test_projects_sorted_by_completion_with_stable_ties(mapping, sample_rows):
    data = aggregate(sample_rows, mapping)
    assert [p.name for p in data.projectStats] == ["Alpha", Sentinel.NO_PROJECT.value, "Beta"]
    assert [p.completionPercentage for p in data.projectStats] == [50, 50, 0]


def test_person_invariants(mapping, sample_rows):
    data = aggregate(sample_rows, mapping)
    for p in data.personStats:
        assert p.totalTasks == p.tasksCompleted + p.tasksOpen == len(p.tasks)
    for p in data.projectStats:
        assert p.totalTasks == p.completedTasks + p.openTasks
    assert sum(p.totalHours for p in data.personStats) == pytest.approx(data.totalHours)
    assert sum(p.totalTasks for p in data.personStats) == data.totalTasks
    assert sum(p.totalTasks for p in data.projectStats) == data.totalTasks


def test_person_tasks_keep_row_order(mapping, sample_rows):
    data = aggregate(sample_rows, mapping)
    ana = next(p for p in data.personStats if p.name == "Ana")
    assert [t.name for t in ana.tasks] == ["Login", "Docs"]
    assert ana.estimatedHours == pytest.approx(3.0)


def test_project_hours(mapping, sample_rows):
    data = aggregate(sample_rows, mapping)
    alpha = next(p for p in data.projectStats if p.name == "Alpha")
    assert alpha.actualHours == pytest.approx(6.5)
    assert alpha.estimatedHours == pytest.approx(5.0)


def test_tasks_by_project_index(mapping, sample_rows):
    data = aggregate(sample_rows, mapping)
    assert set(data.tasksByProject) == {"Alpha", "Beta", Sentinel.NO_PROJECT.value}
    alpha = data.tasksByProject["Alpha"]
    assert [(t.name, t.assignee) for t in alpha] == [("Login", "Ana"), ("API", "Bruno")]
    assert alpha[1].hours == pytest.approx(2.5)
    assert alpha[1].status == "in progress"
    assert not alpha[1].isCompleted
    no_project = data.tasksByProject["Sem projeto"]
    assert [t.name for t in no_project] == [Sentinel.UNNAMED.value] * 2


def test_capacity_usage_for_interns():
    rows = [
        {"who": "Ana", "h": "40"},
        {"who": "Bruno", "h": "40"},
    ]
    mapping = ColumnMapping(assignee="who", hours="h")
    data = aggregate(rows, mapping, 15, {"Ana"})
    usage = {p.name: (p.capacityUsage, p.isIntern) for p in data.personStats}
    assert usage["Ana"] == (pytest.approx(100.0), True)
    assert usage["Bruno"] == (pytest.approx(50.0), False)


def test_capacity_scales_with_sprint_days():
    assert capacity_for("Ana") == pytest.approx(80)
    assert capacity_for("Ana", 30) == pytest.approx(160)
    assert capacity_for("Ana", 15, {"Ana"}) == pytest.approx(40)
    assert capacity_for("Ana", 5, frozenset({"Ana"})) == pytest.approx(40 / 3)


def test_capacity_usage_is_not_clamped():
    data = aggregate([{"who": "Ana", "h": "120"}], ColumnMapping(assignee="who", hours="h"))
    assert data.personStats[0].capacityUsage == pytest.approx(150.0)


def test_aggregate_is_idempotent(mapping, sample_rows):
    first = aggregate(sample_rows, mapping, 10, {"Ana"})
    second = aggregate(sample_rows, mapping, 10, {"Ana"})
    assert first == second
    assert first.personStats[0] is not second.personStats[0]


def test_changing_interns_recomputes(mapping, sample_rows):
    settings = DashboardSettings()
    before = aggregate_with(sample_rows, mapping, settings)
    after = aggregate_with(sample_rows, mapping, settings.with_interns(["Ana"]))
    ana_before = next(p for p in before.personStats if p.name == "Ana")
    ana_after = next(p for p in after.personStats if p.name == "Ana")
    assert not ana_before.isIntern
    assert ana_after.isIntern
    assert ana_after.capacityUsage == pytest.approx(ana_before.capacityUsage * 2)


def test_empty_input():
    data = aggregate([], ColumnMapping())
    assert data.personStats == []
    assert data.projectStats == []
    assert data.totalHours == 0
    assert data.totalTasks == 0
    assert data.tasksByProject == {}


def test_zero_sprint_days_is_rejected():
    with pytest.raises(ZeroDivisionError):
        aggregate([{"who": "Ana", "h": "1"}], ColumnMapping(assignee="who", hours="h"), 0)
