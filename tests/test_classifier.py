from Aggregator import aggregate
from Classifier import classify_row, first_of_list, is_completed_status, normalize_assignee
from Models import ColumnMapping, Sentinel


def test_classify_full_row(mapping, sample_rows):
    info = classify_row(sample_rows[0], mapping)
    assert info.assignee == "Ana"
    assert info.hours == 4.0
    assert info.estimatedHours == 3.0
    assert info.status == "done"
    assert info.isCompleted
    assert info.project == "Alpha"
    assert info.taskName == "Login"
    assert info.date == "2024-05-01"


def test_completion_keywords_are_substrings():
    for status in ("Done", "completed", "Concluído", "fechado", "Closed - won't fix", "ACCEPTED"):
        assert is_completed_status(status), status
    for status in ("to-do", "in progress", "", "review"):
        assert not is_completed_status(status), status


def test_assignee_brackets_are_stripped():
    assert normalize_assignee({"A": " [Carla] "}, "A") == "Carla"
    assert normalize_assignee({"A": "[Carla"}, "A") == "Carla"


def test_empty_list_assignee_is_ownerless():
    assert normalize_assignee({"A": "[]"}, "A") == Sentinel.OWNERLESS.value
    assert normalize_assignee({"A": "[[]]"}, "A") == Sentinel.OWNERLESS.value


def test_unmapped_assignee_is_unassigned():
    assert normalize_assignee({"A": "Ana"}, None) == Sentinel.UNASSIGNED.value
    assert Sentinel.UNASSIGNED.value != Sentinel.OWNERLESS.value


def test_empty_assignee_cell_is_unassigned():
    assert normalize_assignee({"A": ""}, "A") == Sentinel.UNASSIGNED.value
    assert normalize_assignee({}, "A") == Sentinel.UNASSIGNED.value


def test_blank_or_empty_list_assignee_is_ownerless():
    assert normalize_assignee({"A": "  "}, "A") == Sentinel.OWNERLESS.value
    assert normalize_assignee({"A": "[]"}, "A") == Sentinel.OWNERLESS.value
    assert normalize_assignee({"A": "[ ]"}, "A") == Sentinel.OWNERLESS.value


def test_empty_and_empty_list_cells_group_separately():
    data = aggregate([{"A": ""}, {"A": "[]"}, {}], ColumnMapping(assignee="A"))
    names = {p.name: p.totalTasks for p in data.personStats}
    assert names == {Sentinel.UNASSIGNED.value: 2, Sentinel.OWNERLESS.value: 1}


def test_date_absent_when_row_lacks_column():
    m = ColumnMapping(date="Due")
    assert classify_row({}, m).date is None
    assert classify_row({"Due": ""}, m).date == ""
    assert classify_row({"Due": "2024-05-01"}, m).date == "2024-05-01"


def test_project_takes_first_of_list():
    assert first_of_list(" Alpha , Beta") == "Alpha"
    info = classify_row({"P": "Alpha, Beta"}, ColumnMapping(project="P"))
    assert info.project == "Alpha"


def test_project_falls_back_to_tags():
    m = ColumnMapping(tags="T")
    assert classify_row({"T": "urgent, backend"}, m).project == "urgent"
    assert classify_row({"T": ""}, m).project == Sentinel.NO_PROJECT.value


def test_project_column_wins_over_tags():
    m = ColumnMapping(project="P", tags="T")
    assert classify_row({"P": "", "T": "urgent"}, m).project == Sentinel.NO_PROJECT.value


def test_empty_mapping_gives_defaults():
    info = classify_row({"anything": "x"}, ColumnMapping())
    assert info.assignee == Sentinel.UNASSIGNED.value
    assert info.hours == 0.0
    assert info.estimatedHours == 0.0
    assert info.status == ""
    assert not info.isCompleted
    assert info.project == Sentinel.NO_PROJECT.value
    assert info.taskName == Sentinel.UNNAMED.value
    assert info.date is None


def test_to_task_copies_fields(mapping, sample_rows):
    task = classify_row(sample_rows[1], mapping).to_task()
    assert task.name == "API"
    assert task.actualHours == 2.5
    assert task.project == "Alpha"
    assert not task.isCompleted
    assert task.date == ""
