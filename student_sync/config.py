"""Configuration, timing profiles and environment settings for the student sync"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from student_sync.errors import ConfigError


load_dotenv()

# ========================================
# TIMING PROFILES
# ========================================
# All delays are in milliseconds (ms)
# settle_after_record_ms: pause after each student so the app returns to a navigable state
# keystroke_delay_ms: delay between keys when typing into masked inputs (CPF)

TIMING_PROFILES = {
    "default": {
        "settle_after_record_ms": 3000,
        "keystroke_delay_ms": 100,
    },
    "fast": {
        "settle_after_record_ms": 1500,  # Still > 1000ms minimum
        "keystroke_delay_ms": 60,  # Still > 50ms minimum
    },
}

# ========================================
# BOUNDED WAITS
# ========================================
# Upper bounds for wait-until-visible checks, in milliseconds

TIMEOUTS = {
    "page_ms": 15000,  # Listing page / login portal ready
    "dashboard_ms": 10000,  # Dashboard marker after restore or login
    "locate_ms": 5000,  # Student name in search results
    "field_ms": 15000,  # Edit form inputs
    "submit_ms": 10000,  # Save button
    "dialog_ms": 10000,  # Native confirm dialog after save
    "login_error_ms": 2000,  # Credential error message after a failed login
}

# Fields typed key by key because the form applies an input mask
MASKED_FIELDS = {"CPF"}

# Cookie names issued by the target app after login
SESSION_COOKIE_MARKERS = ("laravel", "session")

# ========================================
# SAFETY VALIDATIONS
# ========================================
# Ensure timing values meet minimum thresholds
_MIN_KEYSTROKE_DELAY_MS = 50  # CPF mask drops keys typed faster than this
_MIN_SETTLE_MS = 1000  # The list page needs this long to accept a new search


def get_active_timing(speed=None):
    """Get the timing profile for a speed mode, falling back to default on violations"""
    timing = TIMING_PROFILES.get(speed or "default", TIMING_PROFILES["default"])

    violations = []
    for key, value in timing.items():
        if "keystroke" in key and value < _MIN_KEYSTROKE_DELAY_MS:
            violations.append(f"{key}={value}ms < {_MIN_KEYSTROKE_DELAY_MS}ms minimum")
        if "settle" in key and value < _MIN_SETTLE_MS:
            violations.append(f"{key}={value}ms < {_MIN_SETTLE_MS}ms minimum")

    if violations:
        print("⚠️ TIMING PROFILE VIOLATIONS - Falling back to default profile:")
        for violation in violations:
            print(f"  - {violation}")
        return TIMING_PROFILES["default"]

    return timing


TIMING = get_active_timing()


@dataclass(frozen=True)
class Settings:
    base_url: str
    login: str
    password: str
    csv_path: str
    auth_file: str
    output_dir: str
    headless: bool


def _env_flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def get_settings() -> Settings:
    """Read settings from the environment (.env is loaded at import).

    Raises ConfigError when BASE_URL is missing; nothing can run without it.
    """
    base_url = (os.getenv("BASE_URL") or "").strip()
    if not base_url:
        raise ConfigError("BASE_URL is not set. Add it to your .env file.")

    return Settings(
        base_url=base_url.rstrip("/"),
        login=os.getenv("EMAIL", ""),
        password=os.getenv("SENHA", ""),
        csv_path=os.getenv("ALUNOS_CSV", "./alunos.csv"),
        auth_file=os.getenv("AUTH_FILE", "authData.json"),
        output_dir=os.getenv("OUTPUT_DIR", "."),
        headless=_env_flag("HEADLESS"),
    )
