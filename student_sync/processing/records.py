"""Student rows read from the source CSV"""

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from student_sync.errors import RecordSourceError
from student_sync.reasoning.normalize import FIELD_CPF, FIELD_INEP, FIELD_NIS

NAME_COLUMN = "NomeDoAluno"


@dataclass(frozen=True)
class StudentRecord:
    name: str
    cpf: Optional[str] = None
    inep: Optional[str] = None
    nis: Optional[str] = None

    def raw_value(self, kind):
        return {
            FIELD_CPF: self.cpf,
            FIELD_INEP: self.inep,
            FIELD_NIS: self.nis,
        }[kind]


def _sniff_delimiter(sample):
    """Detect a CSV delimiter, defaulting to comma when uncertain."""
    try:
        return csv.Sniffer().sniff(sample, delimiters=",;").delimiter
    except csv.Error:
        return ","


def _cell(row, column):
    value = row.get(column)
    if value is None:
        return None
    return value.strip() or None


def load_students(path) -> List[StudentRecord]:
    """Read students in file order. Missing file or NomeDoAluno column is fatal."""
    path = Path(path)
    print(f"Reading CSV file: {path}")

    try:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            sample = handle.read(4096)
            handle.seek(0)
            reader = csv.DictReader(handle, delimiter=_sniff_delimiter(sample))

            fieldnames = [name.strip() for name in (reader.fieldnames or [])]
            if NAME_COLUMN not in fieldnames:
                raise RecordSourceError(f"Missing required column {NAME_COLUMN!r} in {path}")
            reader.fieldnames = fieldnames

            students = []
            for line_number, row in enumerate(reader, start=2):
                name = _cell(row, NAME_COLUMN)
                if not name:
                    if any((value or "").strip() for value in row.values() if isinstance(value, str)):
                        print(f"  ⚠️ Line {line_number}: no {NAME_COLUMN}, skipping row")
                    continue
                students.append(
                    StudentRecord(
                        name=name,
                        cpf=_cell(row, FIELD_CPF),
                        inep=_cell(row, FIELD_INEP),
                        nis=_cell(row, FIELD_NIS),
                    )
                )
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise RecordSourceError(f"Could not read {path}: {e}") from e

    print(f"CSV read successfully. {len(students)} students loaded.")
    return students
