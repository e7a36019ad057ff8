#!/usr/bin/env python3
"""
Student CSV Sync - Main Orchestration
Authenticate once, then fill CPF/INEP/NIS for every student in the CSV.
"""

import argparse
import os
import sys

from student_sync.auth.manager import SessionManager
from student_sync.auth.store import SessionStore
from student_sync.browser.driver import PlaywrightDriver
from student_sync.browser.session import close_browser, launch_browser
from student_sync.errors import ConfigError, LoginFailed, RecordSourceError
from student_sync.processing.batch import run_batch
import student_sync.config as config


def build_parser():
    parser = argparse.ArgumentParser(
        description="Student CSV Sync - fill CPF, INEP and NIS on existing student records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment (.env):
  BASE_URL          Target application URL (required)
  EMAIL / SENHA     Login used when the stored session cookie is missing or expired
  ALUNOS_CSV        Default CSV path (./alunos.csv)

Examples:
  python -m student_sync.main
  python -m student_sync.main alunos.csv --speed fast
  python -m student_sync.main alunos.csv --debug-rejected --output-dir reports
        """,
    )
    parser.add_argument("csv_file", nargs="?", help="CSV with NomeDoAluno, CPF, INEP, NIS columns")
    parser.add_argument("--speed", choices=["fast"], help="Shorter settle delay between students")
    parser.add_argument("--headless", action="store_true", help="Run the browser without a window")
    parser.add_argument("--auth-file", help="Where the login and session cookie are stored")
    parser.add_argument("--output-dir", help="Directory for report files and log.jsonl")
    parser.add_argument(
        "--debug-rejected",
        action="store_true",
        help="Record every rejected CPF/INEP/NIS value to debug_rejected_fields.jsonl",
    )
    parser.add_argument(
        "--pause",
        action="store_true",
        help="Open the Playwright inspector before closing the browser",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        settings = config.get_settings()
    except ConfigError as e:
        print(f"❌ {e}")
        return 1

    timing = config.get_active_timing(args.speed)
    if args.speed:
        print(f"⚡ {args.speed} speed mode enabled\n")

    csv_path = args.csv_file or settings.csv_path
    output_dir = args.output_dir or settings.output_dir
    os.makedirs(output_dir, exist_ok=True)
    store = SessionStore(args.auth_file or settings.auth_file)

    context, page = launch_browser(headless=args.headless or settings.headless)
    driver = PlaywrightDriver(page, settings.base_url, keystroke_delay_ms=timing["keystroke_delay_ms"])

    try:
        manager = SessionManager(driver, store, settings.login, settings.password)
        how = manager.ensure_authenticated()
        print(f"✓ Authenticated ({how})\n")

        run_batch(
            driver,
            csv_path,
            output_dir=output_dir,
            timing=timing,
            debug_rejected=args.debug_rejected,
        )
    except (ConfigError, LoginFailed, RecordSourceError) as e:
        print(f"\n❌ {e}")
        return 1
    finally:
        if args.pause:
            driver.pause()
        print("\nClosing browser...")
        close_browser(context)

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
