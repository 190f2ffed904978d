from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QComboBox, QTableWidget, QTableWidgetItem,
    QAbstractItemView, QHeaderView
)

from Models import DashboardData, PersonStats
from TaskQueries import (
    AssignedTask, PEOPLE_COLUMNS, PROJECT_TASK_COLUMNS, TASK_COLUMNS, estimate_deviation, find_person,
    list_tasks, people_rows, project_names, project_task_rows, project_tasks, task_rows
)

ALL = "Todos"


def create_table(columns) -> QTableWidget:
    table = QTableWidget(0, len(columns))
    table.setHorizontalHeaderLabels(list(columns))
    table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    table.setSelectionBehavior(QAbstractItemView.SelectRows)
    table.setSortingEnabled(True)
    table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
    return table


def fill_table(table: QTableWidget, rows: list[tuple]):
    table.setSortingEnabled(False)
    table.setRowCount(len(rows))
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            table.setItem(r, c, QTableWidgetItem(value))
    table.setSortingEnabled(True)


class TasksDialog(QDialog):
    """All, open or completed tasks across people, filterable by person and project."""
    def __init__(self, data: DashboardData, title: str, completed=None, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.resize(1400, 700)
        self.data = data
        self.completed = completed

        layout = QVBoxLayout(self)

        filters = QHBoxLayout()
        filters.addWidget(QLabel("Pessoa:"))
        self.person_combo = QComboBox()
        self.person_combo.addItem(ALL)
        self.person_combo.addItems(sorted(p.name for p in data.personStats))
        self.person_combo.currentTextChanged.connect(self.refresh)
        filters.addWidget(self.person_combo)

        filters.addWidget(QLabel("Projeto:"))
        self.project_combo = QComboBox()
        self.project_combo.addItem(ALL)
        self.project_combo.addItems(project_names(data))
        self.project_combo.currentTextChanged.connect(self.refresh)
        filters.addWidget(self.project_combo)
        filters.addStretch()
        layout.addLayout(filters)

        self.summary = QLabel("")
        layout.addWidget(self.summary)

        self.table = create_table(TASK_COLUMNS)
        layout.addWidget(self.table, 1)
        self.refresh()

    def refresh(self, *_):
        person = self.person_combo.currentText()
        project = self.project_combo.currentText()
        tasks = list_tasks(
            self.data,
            completed=self.completed,
            person=None if person == ALL else person,
            project=None if project == ALL else project,
        )
        estimated = sum(t.task.estimatedHours for t in tasks)
        actual = sum(t.task.actualHours for t in tasks)
        self.summary.setText(f"{len(tasks)} tarefas | Estimado: {estimated:.1f}h | Real: {actual:.1f}h")
        fill_table(self.table, task_rows(tasks))


class PersonTasksDialog(QDialog):
    def __init__(self, person: PersonStats, parent=None):
        super().__init__(parent)
        title = f"Tarefas de {person.name}"
        if person.isIntern:
            title += " (Estagiário)"
        self.setWindowTitle(title)
        self.resize(1400, 700)

        layout = QVBoxLayout(self)
        dev = estimate_deviation(person)
        layout.addWidget(QLabel(
            f"Total de Tarefas: <b>{person.totalTasks}</b> | Concluídas: <b>{person.tasksCompleted}</b> | "
            f"Estimado: <b>{dev.estimated:.1f}h</b> | Real: <b>{dev.actual:.1f}h</b> | "
            f"Diferença: <b>{dev.difference:+.1f}h ({dev.percentage:+.1f}%)</b>"
        ))

        table = create_table(TASK_COLUMNS)
        fill_table(table, task_rows([AssignedTask(t, person.name, person.isIntern) for t in person.tasks]))
        layout.addWidget(table, 1)


class ProjectTasksDialog(QDialog):
    def __init__(self, data: DashboardData, project: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"Tarefas do Projeto: {project}")
        self.resize(1200, 600)

        layout = QVBoxLayout(self)
        tasks = project_tasks(data, project)
        done = sum(1 for t in tasks if t.isCompleted)
        layout.addWidget(QLabel(f"Total: <b>{len(tasks)}</b> | Concluídas: <b>{done}</b> | Em Aberto: <b>{len(tasks) - done}</b>"))

        table = create_table(PROJECT_TASK_COLUMNS)
        fill_table(table, project_task_rows(data, project))
        layout.addWidget(table, 1)


class PeopleDialog(QDialog):
    """Active people; double-click a row to see that person's tasks."""
    def __init__(self, data: DashboardData, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Pessoas Ativas")
        self.resize(1000, 600)
        self.data = data

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Clique duas vezes em uma pessoa para ver suas tarefas"))

        self.table = create_table(PEOPLE_COLUMNS)
        fill_table(self.table, people_rows(data))
        self.table.cellDoubleClicked.connect(self.open_person)
        layout.addWidget(self.table, 1)

    def open_person(self, row, _column):
        person = find_person(self.data, self.table.item(row, 0).text())
        if person is not None:
            PersonTasksDialog(person, self).exec()
