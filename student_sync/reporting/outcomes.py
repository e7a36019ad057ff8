"""Per-student outcomes and the end-of-run report"""

import csv
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Tuple
from zoneinfo import ZoneInfo

STATUS_SUCCESS = "SUCCESS"
STATUS_NOT_FOUND = "NOT_FOUND"
STATUS_ERROR = "ERROR"

NOT_FOUND_FILE = "alunos_nao_encontrados.txt"
ERRORS_FILE = "alunos_erros_processamento.txt"
RESULTS_DIR = "results"

TIMEZONE = ZoneInfo("America/Sao_Paulo")


@dataclass(frozen=True)
class ProcessingOutcome:
    status: str
    message: str = ""
    fields_filled: Tuple[str, ...] = ()
    fields_rejected: Tuple[str, ...] = ()

    @classmethod
    def success(cls, fields_filled=(), fields_rejected=()):
        return cls(STATUS_SUCCESS, "", tuple(fields_filled), tuple(fields_rejected))

    @classmethod
    def not_found(cls):
        return cls(STATUS_NOT_FOUND, "Student not found in list after search")

    @classmethod
    def error(cls, exc, fields_filled=(), fields_rejected=()):
        return cls(STATUS_ERROR, describe_error(exc), tuple(fields_filled), tuple(fields_rejected))


def describe_error(exc):
    """One-line error message; Playwright errors append a multi-line call log"""
    lines = [line.strip() for line in str(exc).splitlines() if line.strip()]
    if not lines:
        return type(exc).__name__
    return lines[0]


@dataclass
class BatchReport:
    total: int = 0
    success_count: int = 0
    not_found: List[str] = field(default_factory=list)
    errors: List[Tuple[str, str]] = field(default_factory=list)
    files_written: List[str] = field(default_factory=list)

    @property
    def not_found_count(self):
        return len(self.not_found)

    @property
    def error_count(self):
        return len(self.errors)

    @property
    def processed(self):
        return self.success_count + self.not_found_count + self.error_count

    def is_consistent(self):
        """Every loaded student landed in exactly one bucket"""
        return self.processed == self.total


def _write_text(path, content):
    """Best-effort write; failures are printed, never raised"""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        print(f"File saved: {path}")
        return True
    except OSError as e:
        print(f"❌ Error saving {path}: {e}")
        return False


class OutcomeAggregator:
    def __init__(self):
        self.report = BatchReport()
        self._rows = []

    def set_total(self, total):
        self.report.total = total

    def record(self, name, outcome):
        if outcome.status == STATUS_SUCCESS:
            self.report.success_count += 1
        elif outcome.status == STATUS_NOT_FOUND:
            self.report.not_found.append(name)
        elif outcome.status == STATUS_ERROR:
            self.report.errors.append((name, outcome.message))
        else:
            raise ValueError(f"Unknown outcome status: {outcome.status}")

        self._rows.append(
            {
                "timestamp": datetime.now(TIMEZONE).isoformat(),
                "student_name": name,
                "result": outcome.status,
                "message": outcome.message,
                "fields_filled": " ".join(outcome.fields_filled),
                "fields_rejected": " ".join(outcome.fields_rejected),
            }
        )

    def print_summary(self):
        report = self.report
        print("\n" + "=" * 60)
        print("PROCESSING SUMMARY")
        print("=" * 60)
        print(f"Total students in CSV: {report.total}")
        print(f"  Saved successfully: {report.success_count}")
        print(f"  Not found: {report.not_found_count}")
        print(f"  Errors: {report.error_count}")
        if report.processed < report.total:
            print(f"  Not processed (run interrupted): {report.total - report.processed}")

    def write_not_found(self, output_dir):
        if not self.report.not_found:
            print("All students from the CSV were found in the list.")
            return None
        path = os.path.join(output_dir, NOT_FOUND_FILE)
        content = "Alunos NÃO encontrados:\n\n" + "\n".join(self.report.not_found) + "\n"
        return path if _write_text(path, content) else None

    def write_errors(self, output_dir):
        if not self.report.errors:
            print("No per-student processing errors recorded.")
            return None
        path = os.path.join(output_dir, ERRORS_FILE)
        lines = [f"{name}: {message}" for name, message in self.report.errors]
        content = "Erros:\n\n" + "\n".join(lines) + "\n"
        return path if _write_text(path, content) else None

    def write_results_csv(self, output_dir):
        if not self._rows:
            return None
        try:
            results_dir = os.path.join(output_dir, RESULTS_DIR)
            os.makedirs(results_dir, exist_ok=True)
            stamp = datetime.now(TIMEZONE).strftime("%Y%m%d_%H%M%S")
            path = os.path.join(results_dir, f"student_results_{stamp}.csv")
            fieldnames = [
                "timestamp",
                "student_name",
                "result",
                "message",
                "fields_filled",
                "fields_rejected",
            ]
            with open(path, "w", newline="", encoding="utf-8") as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(self._rows)
        except OSError as e:
            print(f"❌ Error saving CSV summary: {e}")
            return None
        print(f"\n📊 CSV summary written to: {path}")
        return path

    def finalize(self, output_dir=".") -> BatchReport:
        """Print the summary and write each report file independently"""
        self.print_summary()
        for writer in (self.write_not_found, self.write_errors, self.write_results_csv):
            path = writer(output_dir)
            if path:
                self.report.files_written.append(path)
        print("-" * 60)
        return self.report
