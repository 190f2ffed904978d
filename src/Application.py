import logging
import os
import sys

from PySide6.QtCore import Qt, QStandardPaths
from PySide6.QtWidgets import (QApplication, QMainWindow, QFileDialog,
                               QPushButton, QSplitter, QHBoxLayout, QVBoxLayout,
                               QWidget, QMessageBox, QLabel, QFrame, QSpinBox, QGridLayout, QComboBox
                               )
from PySide6.QtWebEngineWidgets import QWebEngineView

from Aggregator import aggregate_with
from DataHandler import CsvLoadError, DataModel, suggest_mapping
from Dialogs import PeopleDialog, ProjectTasksDialog, TasksDialog
from Mapper import ColumnMapperPanel, InternPanel
from Models import DashboardSettings
from Ranking import active_people, completion_rate, get_low_performers, get_top_performers
from Renderer import DashboardRenderer, EXPORT_FORMATS
from TaskQueries import project_names

logger = logging.getLogger(__name__)


def create_hline():
    line = QFrame()
    line.setFrameShape(QFrame.HLine)
    line.setFrameShadow(QFrame.Sunken)
    return line


def summary_card(title, on_click):
    card = QPushButton(title)
    card.clicked.connect(on_click)
    card.setEnabled(False)
    card.setMinimumHeight(60)
    return card


class DashboardApp(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Dashboard Operacional")
        self.resize(1920, 1080)

        self.data = DataModel()
        self.mapper = ColumnMapperPanel()
        self.interns = InternPanel()
        self.renderer = DashboardRenderer()

        self.settings = DashboardSettings()
        self.mapping = None
        self.dashboard = None

        # -------- UI --------
        root = QWidget()
        self.setCentralWidget(root)

        main_layout = QHBoxLayout(root)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # ---- Left panel ----
        self.content = QWidget()
        content_layout = QVBoxLayout(self.content)

        load_btn = QPushButton("Carregar CSV")
        load_btn.clicked.connect(self.load_csv)
        load_btn.setMinimumHeight(40)
        load_btn.setStyleSheet("font-weight: bold;")
        content_layout.addWidget(load_btn)
        content_layout.addWidget(create_hline())

        self.mapper.setEnabled(False)
        self.mapper.mapping_completed.connect(self.apply_mapping)
        content_layout.addWidget(self.mapper)
        content_layout.addWidget(create_hline())

        settings_grid = QGridLayout()
        settings_grid.addWidget(QLabel("Dias da sprint:"), 0, 0)
        self.sprint_days = QSpinBox()
        self.sprint_days.setRange(1, 365)
        self.sprint_days.setValue(self.settings.sprint_days)
        self.sprint_days.valueChanged.connect(self.update_sprint_days)
        settings_grid.addWidget(self.sprint_days, 0, 1)
        content_layout.addLayout(settings_grid)

        self.interns.setEnabled(False)
        self.interns.interns_changed.connect(self.update_interns)
        content_layout.addWidget(self.interns, 1)
        content_layout.addWidget(create_hline())

        content_layout.addWidget(QLabel("Exportar o dashboard para:"))
        export_layout = QHBoxLayout()
        for fmt in EXPORT_FORMATS:
            btn = QPushButton(fmt.upper())
            btn.clicked.connect(lambda checked=False, f=fmt: self.export(f))
            export_layout.addWidget(btn)
        content_layout.addLayout(export_layout)

        # ---- Right panel ----
        right = QWidget()
        right_layout = QVBoxLayout(right)

        cards = QHBoxLayout()
        self.hours_card = summary_card("Total de Horas", lambda checked=False: self.show_tasks("Todas as Tarefas"))
        self.tasks_card = summary_card("Total de Tarefas", lambda checked=False: self.show_tasks("Todas as Tarefas"))
        self.completed_card = summary_card("Tarefas Concluídas", lambda checked=False: self.show_tasks("Tarefas Concluídas", True))
        self.open_card = summary_card("Tarefas em Aberto", lambda checked=False: self.show_tasks("Tarefas em Aberto", False))
        self.people_card = summary_card("Pessoas Ativas", self.show_people)
        self.cards = (self.hours_card, self.tasks_card, self.completed_card, self.open_card, self.people_card)
        for card in self.cards:
            cards.addWidget(card)
        right_layout.addLayout(cards)

        project_row = QHBoxLayout()
        project_row.addWidget(QLabel("Projeto:"))
        self.project_combo = QComboBox()
        self.project_combo.setMinimumWidth(250)
        project_row.addWidget(self.project_combo)
        self.project_btn = QPushButton("Ver Tarefas do Projeto")
        self.project_btn.clicked.connect(self.show_project)
        self.project_btn.setEnabled(False)
        project_row.addWidget(self.project_btn)
        project_row.addStretch()
        right_layout.addLayout(project_row)

        self.rankings = QLabel("")
        self.rankings.setTextFormat(Qt.RichText)
        right_layout.addWidget(self.rankings)

        self.web = QWebEngineView()
        right_layout.addWidget(self.web, 1)

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.addWidget(self.content)
        self.splitter.addWidget(right)
        self.splitter.setStretchFactor(1, 3)

        main_layout.addWidget(self.splitter)

    def load_csv(self):
        downloads_path = QStandardPaths.writableLocation(QStandardPaths.DownloadLocation)

        if not downloads_path:
            downloads_path = QStandardPaths.writableLocation(QStandardPaths.HomeLocation)

        path, _ = QFileDialog.getOpenFileName(self, "CSV", downloads_path, "*.csv")

        if not path:
            return
        try:
            csv_data = self.data.load_csv(path)
        except CsvLoadError as e:
            logger.error("%s", e)
            QMessageBox.critical(self, "Erro", "Erro ao processar o arquivo CSV. Verifique se o formato está correto.")
            return

        self.web.setHtml("")
        self.renderer.current_figs = {}
        self.dashboard = None
        self.mapping = None
        self.settings = self.settings.with_interns(())
        self.mapper.build_from_headers(csv_data.headers, len(csv_data.rows), suggest_mapping(csv_data.headers))
        self.mapper.setEnabled(True)
        self.project_combo.clear()
        self.project_btn.setEnabled(False)
        for card in self.cards:
            card.setEnabled(False)
        self.interns.setEnabled(False)

    def apply_mapping(self, mapping):
        self.mapping = mapping
        self.refresh()
        self.interns.build_from_people(self.dashboard.personStats)
        self.interns.setEnabled(True)

    def update_interns(self, names):
        self.settings = self.settings.with_interns(names)
        self.refresh()

    def update_sprint_days(self, days):
        self.settings = self.settings.with_sprint_days(days)
        if self.mapping is not None:
            self.refresh()

    def refresh(self):
        if self.data.data is None or self.mapping is None:
            return
        self.dashboard = aggregate_with(self.data.data.rows, self.mapping, self.settings)
        self.show_summary()

        self.renderer.render(self.dashboard, self.settings.sprint_days)
        self.web.setHtml(self.renderer.to_html())

    def show_summary(self):
        d = self.dashboard
        self.hours_card.setText(f"Total de Horas\n{d.totalHours:.1f}h")
        self.tasks_card.setText(f"Total de Tarefas\n{d.totalTasks}")
        self.completed_card.setText(f"Tarefas Concluídas\n{d.completedTasks} ({completion_rate(d):.1f}%)")
        self.open_card.setText(f"Tarefas em Aberto\n{d.openTasks}")
        self.people_card.setText(f"Pessoas Ativas\n{active_people(d)}")
        for card in self.cards:
            card.setEnabled(True)

        current = self.project_combo.currentText()
        self.project_combo.clear()
        self.project_combo.addItems(project_names(d))
        if current:
            self.project_combo.setCurrentText(current)
        self.project_btn.setEnabled(self.project_combo.count() > 0)

        top = ", ".join(f"{p.name} ({p.tasksCompleted})" for p in get_top_performers(d.personStats))
        low = ", ".join(f"{p.name} ({p.totalHours:.1f}h)" for p in get_low_performers(d.personStats))
        self.rankings.setText(f"<b>Top 5:</b> {top}<br><b>Menos Ativas:</b> {low}")

    def show_tasks(self, title, completed=None):
        if self.dashboard is not None:
            TasksDialog(self.dashboard, title, completed, self).exec()

    def show_people(self, *_):
        if self.dashboard is not None:
            PeopleDialog(self.dashboard, self).exec()

    def show_project(self, *_):
        project = self.project_combo.currentText()
        if self.dashboard is not None and project:
            ProjectTasksDialog(self.dashboard, project, self).exec()

    def export(self, fmt):
        if not self.renderer.current_figs:
            QMessageBox.warning(self, "Exportar", "Não há dashboard para exportar.")
            return

        downloads_path = QStandardPaths.writableLocation(
            QStandardPaths.DownloadLocation) or QStandardPaths.writableLocation(QStandardPaths.HomeLocation)
        default_path = os.path.join(downloads_path, f"dashboard.{fmt}")

        path, _ = QFileDialog.getSaveFileName(self, "Exportar Dashboard", default_path, f"{fmt.upper()} (*.{fmt})")
        if not path:
            return

        try:
            self.renderer.export(path, fmt)
            QMessageBox.information(self, "Sucesso", f"Arquivo salvo: {path}")
        except (OSError, RuntimeError, ValueError) as e:
            logger.exception("Export to %s failed", path)
            QMessageBox.critical(self, "Erro ao Exportar", f"Erro ao salvar: {e}")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)

    window = DashboardApp()
    window.show()
    sys.exit(app.exec())
