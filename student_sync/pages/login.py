"""Login portal interactions"""

from student_sync.config import TIMEOUTS
from student_sync.errors import LoginFailed
from student_sync.reporting.outcomes import describe_error

ACCESS_SYSTEM_LINK = 'text="Acessar o Sistema"'
EMAIL_INPUT = 'input[name="email"]'
PASSWORD_INPUT = 'input[name="password"]'
SUBMIT_BUTTON = 'button[type="submit"]:has-text("ENTRAR")'

CREDENTIALS_ERROR_TEXT = "Essas credenciais não foram encontradas em nossos registros."
CREDENTIALS_ERROR = f'li:has-text("{CREDENTIALS_ERROR_TEXT}")'


def open_login_portal(driver):
    """Open the base URL and wait for the "Acessar o Sistema" entry link"""
    driver.navigate("/")
    if not driver.wait_visible(ACCESS_SYSTEM_LINK, TIMEOUTS["page_ms"]):
        raise LoginFailed('Login portal did not show "Acessar o Sistema"')
    print('  ✓ "Acessar o Sistema" found')


def reveal_login_form(driver):
    """Click the entry link; the email and password inputs only render afterwards"""
    driver.click(ACCESS_SYSTEM_LINK)
    for selector in (EMAIL_INPUT, PASSWORD_INPUT):
        if not driver.wait_visible(selector, TIMEOUTS["page_ms"]):
            raise LoginFailed(f"Login form input did not appear: {selector}")
    print("  ✓ Email and password inputs visible")


def submit_credentials(driver, login, password):
    print(f"Filling email: {login}")
    driver.fill(EMAIL_INPUT, login)
    print("Filling password...")
    driver.fill(PASSWORD_INPUT, password)
    print('Submitting with "ENTRAR"...')
    driver.click(SUBMIT_BUTTON)
    driver.wait_for_load()


def read_login_error(driver):
    """Return the app's credential error text if it is on screen, else None"""
    if driver.wait_visible(CREDENTIALS_ERROR, TIMEOUTS["login_error_ms"]):
        return CREDENTIALS_ERROR_TEXT
    return None


def perform_login(driver, login, password):
    """Run the login steps; any step failure is reported as LoginFailed"""
    try:
        open_login_portal(driver)
        reveal_login_form(driver)
        submit_credentials(driver, login, password)
    except LoginFailed:
        raise
    except Exception as e:
        raise LoginFailed(f"Login step failed: {describe_error(e)}") from e
