from student_sync.debug import rejected_fields
from student_sync.errors import StepTimeout
from student_sync.pages import students
from student_sync.processing.processor import process_student
from student_sync.processing.records import StudentRecord
from student_sync.reporting.outcomes import STATUS_ERROR, STATUS_NOT_FOUND, STATUS_SUCCESS


def test_found_student_gets_normalized_cpf_typed_into_masked_input(app, driver):
    outcome = process_student(driver, StudentRecord(name="Ana Silva", cpf="123.456.789-00"))

    assert outcome.status == STATUS_SUCCESS
    assert outcome.fields_filled == ("CPF",)
    assert driver.field_fills() == [(students.field_input_selector("CPF"), "12345678900", True)]
    assert app.students["Ana Silva"]["CPF"] == "12345678900"
    assert app.saved == ["Ana Silva"]


def test_inep_and_nis_are_filled_directly_in_order(app, driver):
    record = StudentRecord(name="Bruno X", cpf="111.222.333-44", inep="12345678901", nis="109.87654.32-1")

    outcome = process_student(driver, record)

    assert outcome.status == STATUS_SUCCESS
    assert [(s, m) for s, _, m in driver.field_fills()] == [
        (students.field_input_selector("CPF"), True),
        (students.field_input_selector("INEP"), False),
        (students.field_input_selector("NIS"), False),
    ]
    assert app.students["Bruno X"] == {"CPF": "11122233344", "INEP": "12345678901", "NIS": "10987654321"}


def test_absent_fields_are_left_untouched(app, driver):
    app.students["Bruno X"]["CPF"] = "99988877766"

    outcome = process_student(driver, StudentRecord(name="Bruno X", cpf=""))

    assert outcome.status == STATUS_SUCCESS
    assert driver.field_fills() == []
    assert app.students["Bruno X"]["CPF"] == "99988877766"


def test_rejected_cpf_is_skipped_without_failing_the_student(app, driver):
    outcome = process_student(driver, StudentRecord(name="Ana Silva", cpf="999"))

    assert outcome.status == STATUS_SUCCESS
    assert outcome.fields_rejected == ("CPF",)
    assert driver.field_fills() == []
    assert app.saved == ["Ana Silva"]


def test_rejected_fields_are_collected_in_debug_mode(driver):
    process_student(driver, StudentRecord(name="Ana Silva", nis="12"), debug_rejected=True)

    pending = rejected_fields.pending_rejected_fields()
    assert [(p["student_name"], p["field"], p["raw_value"]) for p in pending] == [("Ana Silva", "NIS", "12")]


def test_unknown_student_is_not_found_and_nothing_is_filled(app, driver):
    outcome = process_student(driver, StudentRecord(name="Carla Z", cpf="abc"))

    assert outcome.status == STATUS_NOT_FOUND
    assert driver.field_fills() == []
    assert driver.editing is None
    assert app.saved == []


def test_name_match_is_exact_not_substring(app, driver):
    outcome = process_student(driver, StudentRecord(name="Ana"))

    assert outcome.status == STATUS_NOT_FOUND


def test_failure_on_confirm_becomes_error_outcome(app, driver):
    driver.fail_on[students.SAVE_BUTTON] = Exception("Target page, context or browser has been closed")

    outcome = process_student(driver, StudentRecord(name="Ana Silva", cpf="12345678900"))

    assert outcome.status == STATUS_ERROR
    assert "has been closed" in outcome.message
    assert outcome.fields_filled == ("CPF",)
    assert app.saved == []


def test_missing_dialog_is_an_error(app, driver):
    driver.dialog_never_appears = True

    outcome = process_student(driver, StudentRecord(name="Ana Silva"))

    assert outcome.status == STATUS_ERROR
    assert "did not appear" in outcome.message


def test_error_message_is_first_line_only(app, driver):
    driver.fail_on[students.EDIT_LINK] = StepTimeout("Timeout 30000ms exceeded.\n=== logs ===\nwaiting for locator")

    outcome = process_student(driver, StudentRecord(name="Ana Silva"))

    assert outcome.status == STATUS_ERROR
    assert outcome.message == "Timeout 30000ms exceeded."


def test_every_attempt_starts_from_the_student_list(driver):
    process_student(driver, StudentRecord(name="Ana Silva"))
    process_student(driver, StudentRecord(name="Carla Z"))

    assert driver.navigations == [students.STUDENTS_PATH, students.STUDENTS_PATH]


def test_fields_filled_before_a_failure_are_still_reported(app, driver):
    driver.fail_on[students.field_input_selector("NIS")] = Exception("element is not editable")
    record = StudentRecord(name="Bruno X", cpf="11122233344", inep="12", nis="10987654321")

    outcome = process_student(driver, record)

    assert outcome.status == STATUS_ERROR
    assert outcome.fields_filled == ("CPF",)
    assert outcome.fields_rejected == ("INEP",)
    assert app.saved == []
