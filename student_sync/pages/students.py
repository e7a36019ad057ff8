"""Student listing and edit form interactions"""

from student_sync.config import MASKED_FIELDS, TIMEOUTS
from student_sync.errors import StepTimeout

STUDENTS_PATH = "/dashboard/turmas/alunos"

SEARCH_INPUT = 'input[type="search"][class*="form-control"]'
ACTIONS_BUTTON = 'button.btn-outline-success.inline.p-1[data-toggle="dropdown"]'
EDIT_LINK = 'a.dropdown-item:has-text("Alterar o Cadastro")'
SAVE_BUTTON = 'button[type="submit"]:has-text("Salvar")'


def _quote(text):
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def student_name_selector(name):
    """Name cell in the results table, matched on the whole text"""
    return f"span.whitespace-normal:text-is({_quote(name)})"


def student_actions_selector(name):
    """Gear dropdown in the same table row as the student's name"""
    return f"{student_name_selector(name)} >> xpath=./ancestor::tr >> {ACTIONS_BUTTON}"


def field_input_selector(field_name):
    return f'input[name="{field_name}"], textarea[name="{field_name}"]'


def open_students_list(driver):
    driver.navigate(STUDENTS_PATH)
    if not driver.wait_visible(SEARCH_INPUT, TIMEOUTS["page_ms"]):
        raise StepTimeout("Student list search input did not appear")
    print("  ✓ Student list loaded")


def search_student(driver, name):
    print(f'Searching for student: "{name}"...')
    driver.fill(SEARCH_INPUT, name)


def is_student_listed(driver, name, timeout_ms=None):
    """Bounded wait for the exact name to show up in the search results"""
    return driver.wait_visible(student_name_selector(name), timeout_ms or TIMEOUTS["locate_ms"])


def open_edit_form(driver, name):
    """Open the row's action menu, then "Alterar o Cadastro" """
    driver.click(student_actions_selector(name))
    if not driver.wait_visible(EDIT_LINK, TIMEOUTS["field_ms"]):
        raise StepTimeout(f'Action menu for "{name}" did not show "Alterar o Cadastro"')

    driver.click(EDIT_LINK)
    driver.wait_for_load()
    if not driver.wait_visible(SAVE_BUTTON, TIMEOUTS["submit_ms"]):
        raise StepTimeout(f'Edit form for "{name}" did not load')
    print("  ✓ Edit form open")


def fill_field(driver, field_name, value):
    selector = field_input_selector(field_name)
    if not driver.wait_visible(selector, TIMEOUTS["field_ms"]):
        raise StepTimeout(f'Field "{field_name}" did not appear on the edit form')

    masked = field_name in MASKED_FIELDS
    driver.fill(selector, value, masked=masked)
    print(f"  ✓ Filled {field_name}: {value}" + (" (typed)" if masked else ""))


def save_and_confirm(driver):
    """Click "Salvar" with a dialog handler already registered; returns the dialog text"""
    if not driver.wait_visible(SAVE_BUTTON, TIMEOUTS["submit_ms"]):
        raise StepTimeout('"Salvar" button not visible')
    message = driver.click_and_accept_dialog(SAVE_BUTTON, TIMEOUTS["dialog_ms"])
    print(f'  ✓ Confirmation accepted: "{message}"')
    return message
