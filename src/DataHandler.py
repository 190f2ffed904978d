import logging
from dataclasses import fields

import pandas as pd

from Models import ColumnMapping, CSVData

logger = logging.getLogger(__name__)

# header names seen in Asana / Jira / ClickUp exports, per mapping field
FIELD_ALIASES = {
    'assignee': ('Assignee', 'Responsável', 'Assigned To', 'Owner'),
    'hours': ('Actual time', 'Time Tracked', 'Horas', 'Hours', 'Time Spent'),
    'estimatedHours': ('Estimated time', 'Time Estimate', 'Horas Estimadas', 'Original Estimate'),
    'status': ('Status', 'Section/Column', 'Completed'),
    'project': ('Projects', 'Project', 'Projeto'),
    'tags': ('Tags', 'Labels'),
    'date': ('Due Date', 'Date', 'Data', 'Completed At'),
    'taskName': ('Name', 'Task Name', 'Summary', 'Tarefa'),
}


class CsvLoadError(Exception):
    def __init__(self, path, reason):
        super().__init__(f"Could not read CSV '{path}': {reason}")
        self.path = path
        self.reason = reason


class DataModel:
    def __init__(self):
        self.data = None

    def load_csv(self, path: str) -> CSVData:
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise CsvLoadError(path, e) from e

        data = self.clean(df)
        logger.info("Loaded %s: %d rows, %d columns", path, len(data.rows), len(data.headers))
        self.data = data
        return data

    def clean(self, df: pd.DataFrame) -> CSVData:
        df.columns = [str(c).strip() for c in df.columns]
        # lines with only delimiters survive skip_blank_lines
        df = df[(df != "").any(axis=1)]
        return CSVData(headers=list(df.columns), rows=df.to_dict(orient="records"))


def suggest_mapping(headers: list[str]) -> ColumnMapping:
    lookup = {h.strip().lower(): h for h in headers}
    picked = {}
    for f in fields(ColumnMapping):
        for alias in FIELD_ALIASES.get(f.name, ()):
            if alias.lower() in lookup:
                picked[f.name] = lookup[alias.lower()]
                break
    return ColumnMapping(**picked)
