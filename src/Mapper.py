from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QListWidget, QListWidgetItem, QComboBox,
    QFormLayout, QMessageBox, QPushButton
)

from Models import ColumnMapping, PersonStats

# field, label, required
FIELDS = (
    ("assignee", "Responsável / Pessoa *", True),
    ("hours", "Horas Trabalhadas *", True),
    ("estimatedHours", "Horas Estimadas", False),
    ("status", "Status *", True),
    ("project", "Projeto", False),
    ("tags", "Tags", False),
    ("date", "Data", False),
    ("taskName", "Nome da Tarefa", False),
)
PLACEHOLDER = "Selecione..."


class ColumnMapperPanel(QWidget):
    mapping_completed = Signal(object)

    def __init__(self):
        super().__init__()
        self.combos = {}
        self.layout = QVBoxLayout(self)

        self.info = QLabel("")
        self.layout.addWidget(self.info)

        form = QFormLayout()
        for name, label, _ in FIELDS:
            combo = QComboBox()
            combo.addItem(PLACEHOLDER)
            self.combos[name] = combo
            form.addRow(QLabel(label), combo)
        self.layout.addLayout(form)

        hint = QLabel("Se não houver campo de Projeto, a primeira tag será usada como projeto")
        hint.setStyleSheet("color: gray;")
        self.layout.addWidget(hint)

        self.submit_btn = QPushButton("Gerar Dashboard")
        self.submit_btn.setMinimumHeight(40)
        self.submit_btn.setStyleSheet("font-weight: bold;")
        self.submit_btn.clicked.connect(self.submit)
        self.layout.addWidget(self.submit_btn)

    def build_from_headers(self, headers: list[str], rows: int, suggested: ColumnMapping = None):
        self.info.setText(f"Encontramos <b>{len(headers)}</b> colunas e <b>{rows}</b> linhas no seu CSV.")
        for name, combo in self.combos.items():
            combo.blockSignals(True)
            combo.clear()
            combo.addItem(PLACEHOLDER)
            combo.addItems(headers)
            value = getattr(suggested, name) if suggested else None
            if value:
                combo.setCurrentText(value)
            combo.blockSignals(False)

    def get_mapping(self) -> ColumnMapping:
        picked = {}
        for name, combo in self.combos.items():
            if combo.currentIndex() > 0:
                picked[name] = combo.currentText()
        return ColumnMapping(**picked)

    def submit(self):
        mapping = self.get_mapping()
        if mapping.missing_required():
            QMessageBox.warning(self, "Mapeamento", "Por favor, selecione pelo menos Responsável, Horas e Status")
            return
        self.mapping_completed.emit(mapping)


class InternPanel(QWidget):
    """Checkable list of people; checked people get the intern capacity."""
    interns_changed = Signal(frozenset)

    def __init__(self):
        super().__init__()
        self.layout = QVBoxLayout(self)
        self.layout.addWidget(QLabel("Estagiários (capacidade 40h por sprint de 15 dias):"))

        self.people = QListWidget()
        self.people.setMinimumHeight(180)
        self.layout.addWidget(self.people)

        save_btn = QPushButton("Salvar Alterações")
        save_btn.clicked.connect(self.save)
        self.layout.addWidget(save_btn)

    def build_from_people(self, people: list[PersonStats]):
        self.people.clear()
        for person in people:
            item = QListWidgetItem(f"{person.name}  ({person.totalHours:.1f}h)")
            item.setData(Qt.UserRole, person.name)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Checked if person.isIntern else Qt.Unchecked)
            self.people.addItem(item)

    def get_interns(self) -> frozenset:
        names = []
        for i in range(self.people.count()):
            item = self.people.item(i)
            if item.checkState() == Qt.Checked:
                names.append(item.data(Qt.UserRole))
        return frozenset(names)

    def save(self):
        self.interns_changed.emit(self.get_interns())
