"""
Session reuse decision

Flow:
    NoSession -> Restoring -> Authenticated
    NoSession -> Restoring -> LoginRequired -> Authenticated

A stored cookie that no longer reaches the dashboard is cleared from the store before
logging in again, so the next run does not retry it. A failed fresh login raises
LoginFailed and the run stops before any student is processed.
"""

from student_sync.auth.store import SessionCredential
from student_sync.config import SESSION_COOKIE_MARKERS
from student_sync.errors import ConfigError, LoginFailed
from student_sync.pages.dashboard import is_dashboard_loaded, open_dashboard
from student_sync.pages.login import perform_login, read_login_error

STATE_NO_SESSION = "NO_SESSION"
STATE_RESTORING = "RESTORING"
STATE_LOGIN_REQUIRED = "LOGIN_REQUIRED"
STATE_AUTHENTICATED = "AUTHENTICATED"


def find_session_cookie(cookies, markers=SESSION_COOKIE_MARKERS):
    """First cookie whose name contains one of the session markers (case-insensitive)"""
    for cookie in cookies:
        name = (cookie.get("name") or "").lower()
        if any(marker in name for marker in markers):
            return cookie
    return None


class SessionManager:
    def __init__(self, driver, store, login="", password=""):
        self.driver = driver
        self.store = store
        self.login_id = login
        self.password = password
        self.state = STATE_NO_SESSION
        self.login_attempts = 0
        self._stored = None
        self._loaded = False

    def _load_stored(self):
        if not self._loaded:
            self._stored = self.store.load()
            self._loaded = True
        return self._stored

    def _credential(self, stored=None, auth_cookie=None):
        # Configured credentials win; fall back to what was stored last time
        login = self.login_id or (stored.login if stored else "")
        password = self.password or (stored.password if stored else "")
        return SessionCredential(login=login, password=password, auth_cookie=auth_cookie)

    def try_restore(self) -> bool:
        """Install the stored cookie and check whether the dashboard is reachable"""
        self.state = STATE_RESTORING
        stored = self._load_stored()

        if stored is None or not stored.auth_cookie:
            self.state = STATE_LOGIN_REQUIRED
            return False

        print("Trying to restore session from stored cookie...")
        self.driver.add_cookies([stored.auth_cookie])
        open_dashboard(self.driver)

        if is_dashboard_loaded(self.driver):
            print("✓ Session restored, already on the dashboard")
            self.state = STATE_AUTHENTICATED
            return True

        print("⚠️ Session expired or cookie invalid. Clearing stored cookie...")
        self.store.save(self._credential(stored).without_cookie())
        self.state = STATE_LOGIN_REQUIRED
        return False

    def login(self):
        """Full interactive login; raises LoginFailed if the dashboard never shows up"""
        credential = self._credential(self._load_stored())
        if not credential.login or not credential.password:
            raise ConfigError("EMAIL and SENHA must be set to perform a full login")

        print("Starting full login...")
        self.login_attempts += 1
        perform_login(self.driver, credential.login, credential.password)

        if not is_dashboard_loaded(self.driver):
            reason = read_login_error(self.driver)
            message = "Login completed but the dashboard did not load"
            if reason:
                message = f"{message}: {reason}"
            raise LoginFailed(message)

        self.state = STATE_AUTHENTICATED
        print("✓ Login successful")

    def persist(self):
        """Store the freshly issued session cookie; call only after a successful login"""
        cookie = find_session_cookie(self.driver.cookies())
        if cookie is None:
            print("⚠️ No session cookie found after login; next run will log in again")
        self.store.save(self._credential(self._load_stored(), auth_cookie=cookie))

    def ensure_authenticated(self):
        """Restore the stored session or log in. Returns "restored" or "login"."""
        if self.try_restore():
            return "restored"

        self.login()
        self.persist()
        return "login"
