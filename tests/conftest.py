import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from student_sync.auth.store import SessionStore
from student_sync.errors import StepTimeout
from student_sync.pages import dashboard, login, students

SESSION_COOKIE_NAME = "laravel_session"


class FakeApp:
    """Server-side state of the target application shared across browser contexts"""

    def __init__(self, students=(), valid_cookies=(), login_id="secretaria@escola.test", password="s3nha"):
        self.students = {
            name: {"CPF": "", "INEP": "", "NIS": ""} for name in students
        }
        self.valid_cookies = set(valid_cookies)
        self.login_id = login_id
        self.password = password
        self.issued = 0
        self.saved = []

    def issue_cookie(self):
        self.issued += 1
        value = f"token-{self.issued}"
        self.valid_cookies.add(value)
        return {
            "name": SESSION_COOKIE_NAME,
            "value": value,
            "domain": "escola.test",
            "path": "/",
            "httpOnly": True,
            "secure": False,
            "sameSite": "Lax",
            "expires": -1,
        }


class FakeDriver:
    """Scripted stand-in for PlaywrightDriver; one instance is one browser context"""

    def __init__(self, app):
        self.app = app
        self.jar = []
        self.location = None
        self.login_form_open = False
        self.login_inputs = {}
        self.login_error = False
        self.search_text = ""
        self.menu_open_for = None
        self.editing = None
        self.form = {}
        self.submissions = 0
        self.fills = []
        self.navigations = []
        self.fail_on = {}
        self.dialog_never_appears = False

    # helpers

    @property
    def authenticated(self):
        return any(c.get("value") in self.app.valid_cookies for c in self.jar)

    def _maybe_fail(self, selector):
        if selector in self.fail_on:
            raise self.fail_on[selector]

    def _name_for(self, selector, factory):
        for name in self.app.students:
            if factory(name) == selector:
                return name
        return None

    def _field_for(self, selector):
        for kind in ("CPF", "INEP", "NIS"):
            if students.field_input_selector(kind) == selector:
                return kind
        return None

    # driver surface

    def navigate(self, path="/"):
        self.navigations.append(path)
        self.menu_open_for = None
        self.editing = None
        self.form = {}
        self.search_text = ""
        self.login_form_open = False
        self.login_error = False
        if path.startswith("/dashboard") and not self.authenticated:
            self.location = "/login"
        else:
            self.location = path

    def wait_for_load(self):
        pass

    def wait_visible(self, selector, timeout_ms):
        if selector == dashboard.DASHBOARD_MARKER:
            return self.location == dashboard.DASHBOARD_PATH and self.authenticated
        if selector == login.ACCESS_SYSTEM_LINK:
            return self.location == "/"
        if selector in (login.EMAIL_INPUT, login.PASSWORD_INPUT):
            return self.login_form_open
        if selector == login.CREDENTIALS_ERROR:
            return self.login_error
        if selector == students.SEARCH_INPUT:
            return self.location == students.STUDENTS_PATH
        if selector == students.EDIT_LINK:
            return self.menu_open_for is not None
        if selector == students.SAVE_BUTTON:
            return self.editing is not None
        kind = self._field_for(selector)
        if kind:
            return self.editing is not None
        name = self._name_for(selector, students.student_name_selector)
        if name:
            return (
                self.location == students.STUDENTS_PATH
                and bool(self.search_text)
                and self.search_text.lower() in name.lower()
            )
        return False

    def fill(self, selector, value, masked=False):
        self._maybe_fail(selector)
        self.fills.append((selector, value, masked))
        if selector == login.EMAIL_INPUT:
            self.login_inputs["email"] = value
        elif selector == login.PASSWORD_INPUT:
            self.login_inputs["password"] = value
        elif selector == students.SEARCH_INPUT:
            self.search_text = value
        elif self._field_for(selector) and self.editing is not None:
            self.form[self._field_for(selector)] = value
        else:
            raise Exception(f"Timeout 15000ms exceeded waiting for {selector}")

    def click(self, selector):
        self._maybe_fail(selector)
        if selector == login.ACCESS_SYSTEM_LINK and self.location == "/":
            self.login_form_open = True
            return
        if selector == login.SUBMIT_BUTTON and self.login_form_open:
            self.submissions += 1
            if (
                self.login_inputs.get("email") == self.app.login_id
                and self.login_inputs.get("password") == self.app.password
            ):
                self.jar = [c for c in self.jar if c["name"] != SESSION_COOKIE_NAME]
                self.jar.append({"name": "XSRF-TOKEN", "value": "xsrf", "domain": "escola.test"})
                self.jar.append(self.app.issue_cookie())
                self.location = dashboard.DASHBOARD_PATH
                self.login_form_open = False
            else:
                self.login_error = True
            return
        if selector == students.EDIT_LINK and self.menu_open_for:
            self.editing = self.menu_open_for
            self.form = dict(self.app.students[self.editing])
            self.menu_open_for = None
            return
        name = self._name_for(selector, students.student_actions_selector)
        if name and self.wait_visible(students.student_name_selector(name), 0):
            self.menu_open_for = name
            return
        raise Exception(f"Timeout 30000ms exceeded.\n=========================== logs ===========================\nwaiting for {selector}")

    def click_and_accept_dialog(self, selector, timeout_ms):
        self._maybe_fail(selector)
        if selector != students.SAVE_BUTTON or self.editing is None:
            raise Exception(f"Element not found: {selector}")
        if self.dialog_never_appears:
            raise StepTimeout(f"Confirmation dialog did not appear within {timeout_ms}ms")
        self.app.students[self.editing] = dict(self.form)
        self.app.saved.append(self.editing)
        self.editing = None
        return "Deseja realmente salvar as alterações?"

    def cookies(self):
        return list(self.jar)

    def add_cookies(self, cookies):
        self.jar.extend(cookies)

    def pause(self):
        pass

    # assertions

    def field_fills(self):
        return [(s, v, m) for s, v, m in self.fills if self._field_for(s)]


@pytest.fixture()
def app():
    return FakeApp(students=["Ana Silva", "Bruno X"])


@pytest.fixture()
def driver(app):
    fake = FakeDriver(app)
    fake.add_cookies([app.issue_cookie()])
    return fake


@pytest.fixture()
def store(tmp_path):
    return SessionStore(str(tmp_path / "authData.json"))


@pytest.fixture()
def test_timing():
    return {"settle_after_record_ms": 0, "keystroke_delay_ms": 0}


@pytest.fixture(autouse=True)
def clear_rejected_buffer():
    from student_sync.debug import rejected_fields

    rejected_fields._rejected_buffer.clear()
    yield
    rejected_fields._rejected_buffer.clear()
