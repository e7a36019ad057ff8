"""
Per-student state machine

    Navigate -> Search -> Locate -> OpenEdit -> FillFields -> Save -> Confirm

Exactly one outcome per student. Locate failing ends in NOT_FOUND with nothing else
attempted. Any exception in the later steps ends in ERROR; the edit form is left as is.
Whether the batch continues is the batch runner's call, not this module's.
"""

from student_sync.debug.rejected_fields import record_rejected_field
from student_sync.pages.students import (
    fill_field,
    is_student_listed,
    open_edit_form,
    open_students_list,
    save_and_confirm,
    search_student,
)
from student_sync.reasoning.normalize import FIELD_ORDER, normalize_field
from student_sync.reporting.outcomes import ProcessingOutcome


def fill_student_fields(driver, student, debug_rejected=False, filled=None, rejected=None):
    """
    Fill CPF, INEP, NIS in that order. Absent values are skipped silently, invalid ones
    are warned about and skipped; either way the form keeps its current value.

    Field kinds are appended to `filled` and `rejected` as they are handled, so a caller
    passing its own lists still sees the progress made before an exception.
    Returns (filled, rejected) tuples of field kinds.
    """
    filled = [] if filled is None else filled
    rejected = [] if rejected is None else rejected

    for kind in FIELD_ORDER:
        validated = normalize_field(kind, student.raw_value(kind))

        if validated is None:
            print(f"  ⏭️  {kind} not provided for {student.name}, leaving field as is")
            continue

        if not validated.accepted:
            print(f"  ⚠️ {validated.reason}. Not filling.")
            rejected.append(kind)
            if debug_rejected:
                record_rejected_field(
                    student_name=student.name,
                    field_kind=kind,
                    raw_value=validated.raw,
                    reason=validated.reason,
                )
            continue

        fill_field(driver, kind, validated.value)
        filled.append(kind)

    return tuple(filled), tuple(rejected)


def process_student(driver, student, debug_rejected=False) -> ProcessingOutcome:
    filled = []
    rejected = []

    try:
        open_students_list(driver)
        search_student(driver, student.name)

        if not is_student_listed(driver, student.name):
            print(f'⚠️ Student "{student.name}" NOT found. Skipping.')
            return ProcessingOutcome.not_found()

        print(f'Student "{student.name}" found. Editing...')
        open_edit_form(driver, student.name)

        fill_student_fields(driver, student, debug_rejected, filled, rejected)

        save_and_confirm(driver)
    except Exception as e:
        print(f'❌ Error processing "{student.name}": {e}')
        return ProcessingOutcome.error(e, filled, rejected)

    print(f"✓ Changes saved and confirmed for: {student.name}")
    return ProcessingOutcome.success(filled, rejected)
