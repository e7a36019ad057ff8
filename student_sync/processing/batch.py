"""Batch loop over the CSV students"""

import time

from student_sync.config import TIMING
from student_sync.debug.rejected_fields import flush_rejected_fields
from student_sync.processing.processor import process_student
from student_sync.processing.records import load_students
from student_sync.reporting.outcomes import (
    STATUS_ERROR,
    STATUS_NOT_FOUND,
    STATUS_SUCCESS,
    OutcomeAggregator,
)
from student_sync.utils.logging import log_result
from student_sync.utils.timing import settle


def format_elapsed_time(seconds):
    """Format elapsed time in human-readable format"""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        mins = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{mins}m {secs}s"
    else:
        hours = int(seconds // 3600)
        mins = int((seconds % 3600) // 60)
        return f"{hours}h {mins}m"


def run_batch(driver, csv_path, output_dir=".", timing=None, debug_rejected=False, aggregator=None):
    """
    Process every student in CSV order against an authenticated session.

    NOT_FOUND and ERROR never stop the loop. A CSV that cannot be loaded raises
    RecordSourceError, but only after the (empty) report was finalized. The report is
    finalized exactly once even if the loop is interrupted.
    """
    timing = timing or TIMING
    aggregator = aggregator or OutcomeAggregator()
    start_time = time.time()

    try:
        students = load_students(csv_path)
        aggregator.set_total(len(students))
        print(f"Total students to process: {len(students)}")
        print(f"Names loaded: {', '.join(s.name for s in students)}")

        for index, student in enumerate(students, 1):
            print("\n" + "=" * 60)
            print(f"STUDENT {index}/{len(students)}: {student.name}")
            print("=" * 60)

            outcome = process_student(driver, student, debug_rejected=debug_rejected)
            aggregator.record(student.name, outcome)

            if outcome.status == STATUS_SUCCESS:
                log_result(student.name, outcome.status, "", outcome.fields_filled, output_dir)
            elif outcome.status == STATUS_NOT_FOUND:
                log_result(student.name, outcome.status, outcome.message, (), output_dir)
            elif outcome.status == STATUS_ERROR:
                log_result(student.name, outcome.status, outcome.message, outcome.fields_filled, output_dir)

            settle(timing["settle_after_record_ms"])
    finally:
        print(f"\n⏱️  Total time: {format_elapsed_time(time.time() - start_time)}")
        report = aggregator.finalize(output_dir)
        if debug_rejected:
            flush_rejected_fields(output_dir)

    return report
