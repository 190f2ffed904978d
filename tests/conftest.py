import pytest

from Models import ColumnMapping


@pytest.fixture
def mapping():
    return ColumnMapping(
        assignee="Assignee",
        hours="Actual",
        estimatedHours="Estimate",
        status="Status",
        project="Project",
        taskName="Name",
        date="Due",
    )


@pytest.fixture
def sample_rows():
    """Three people, two projects, one row with nothing filled in."""
    return [
        {"Assignee": "Ana", "Actual": "4h", "Estimate": "3", "Status": "Done", "Project": "Alpha", "Name": "Login", "Due": "2024-05-01"},
        {"Assignee": "Bruno", "Actual": "2:30", "Estimate": "2", "Status": "In Progress", "Project": "Alpha, Beta", "Name": "API", "Due": ""},
        {"Assignee": "Ana", "Actual": "1,5", "Estimate": "", "Status": "to-do", "Project": "Beta", "Name": "Docs", "Due": ""},
        {"Assignee": "[Carla]", "Actual": "6h 30m", "Estimate": "8h", "Status": "Closed", "Project": "", "Name": "", "Due": ""},
        {},
    ]
