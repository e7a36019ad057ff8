"""Dashboard landing view"""

from student_sync.config import TIMEOUTS

DASHBOARD_PATH = "/dashboard"

# Only rendered for an authenticated user
DASHBOARD_MARKER = 'h5:has-text("Matriculados")'


def open_dashboard(driver):
    driver.navigate(DASHBOARD_PATH)


def is_dashboard_loaded(driver, timeout_ms=None):
    """Check whether the dashboard marker becomes visible within a bounded wait"""
    print("Checking whether the dashboard is loaded...")
    loaded = driver.wait_visible(DASHBOARD_MARKER, timeout_ms or TIMEOUTS["dashboard_ms"])
    if loaded:
        print("  ✓ Dashboard loaded")
    else:
        print("  ⚠️ Dashboard not visible")
    return loaded
