#!/usr/bin/env python3
"""
Session Login Helper
Logs into the target application with EMAIL/SENHA from .env and stores the
session cookie in authData.json, without processing any student.
"""

import sys

from student_sync.auth.manager import SessionManager
from student_sync.auth.store import SessionStore
from student_sync.browser.driver import PlaywrightDriver
from student_sync.browser.session import close_browser, launch_browser
from student_sync.config import get_settings
from student_sync.errors import ConfigError, LoginFailed


def main():
    print("Refreshing stored session...")
    print("=" * 50)

    try:
        settings = get_settings()
    except ConfigError as e:
        print(f"\n✗ Error: {e}\n")
        sys.exit(1)

    context, page = launch_browser(headless=settings.headless)
    driver = PlaywrightDriver(page, settings.base_url)

    try:
        manager = SessionManager(driver, SessionStore(settings.auth_file), settings.login, settings.password)
        how = manager.ensure_authenticated()
    except (ConfigError, LoginFailed) as e:
        print(f"\n✗ Error: {e}\n")
        sys.exit(1)
    finally:
        close_browser(context)

    if how == "restored":
        print("\n✓ Stored session is still valid.")
    else:
        print(f"\n✓ Session saved to {settings.auth_file}! You can now run the sync.")
    print("Run: python -m student_sync.main alunos.csv\n")


if __name__ == "__main__":
    main()
