"""Playwright-backed UI automation driver

Page modules only talk to the app through this small surface, so tests can swap in a
scripted fake with the same methods.
"""

import time

from playwright.sync_api import TimeoutError as PlaywrightTimeout

from student_sync.config import TIMEOUTS, TIMING
from student_sync.errors import StepTimeout


class PlaywrightDriver:
    def __init__(self, page, base_url, timeouts=None, keystroke_delay_ms=None):
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.timeouts = timeouts or TIMEOUTS
        if keystroke_delay_ms is None:
            keystroke_delay_ms = TIMING["keystroke_delay_ms"]
        self.keystroke_delay_ms = keystroke_delay_ms

    def url_for(self, path):
        """Absolute URLs pass through; relative paths are joined to the base URL"""
        if path.startswith("http://") or path.startswith("https://"):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def navigate(self, path="/"):
        url = self.url_for(path)
        print(f"Navigating to: {url}")
        self.page.goto(url, wait_until="domcontentloaded", timeout=self.timeouts["page_ms"])

    def wait_for_load(self):
        self.page.wait_for_load_state("domcontentloaded")

    def wait_visible(self, selector, timeout_ms) -> bool:
        """Bounded wait for visibility. Returns False instead of raising on timeout."""
        try:
            self.page.locator(selector).first.wait_for(state="visible", timeout=timeout_ms)
            return True
        except PlaywrightTimeout:
            return False

    def fill(self, selector, value, masked=False):
        """Fill an input. Masked inputs are cleared and typed key by key so the mask keeps up."""
        locator = self.page.locator(selector).first
        locator.scroll_into_view_if_needed()
        locator.wait_for(state="visible", timeout=self.timeouts["field_ms"])

        if masked:
            locator.fill("")
            locator.press_sequentially(value, delay=self.keystroke_delay_ms)
            # Let the mask process the last key
            self.page.wait_for_timeout(300)
        else:
            locator.fill(value)

    def click(self, selector):
        locator = self.page.locator(selector).first
        locator.scroll_into_view_if_needed()
        locator.click()

    def click_and_accept_dialog(self, selector, timeout_ms) -> str:
        """
        Register a one-shot accept handler, click, then poll until the dialog was accepted.
        Returns the dialog message. Raises StepTimeout if no dialog shows up in time.
        """
        messages = []

        def _accept(dialog):
            messages.append(dialog.message)
            dialog.accept()

        self.page.once("dialog", _accept)
        self.click(selector)

        deadline = time.monotonic() + timeout_ms / 1000
        while not messages:
            if time.monotonic() >= deadline:
                self.page.remove_listener("dialog", _accept)
                raise StepTimeout(f"Confirmation dialog did not appear within {timeout_ms}ms")
            self.page.wait_for_timeout(100)

        return messages[0]

    def cookies(self):
        return self.page.context.cookies()

    def add_cookies(self, cookies):
        self.page.context.add_cookies(cookies)

    def pause(self):
        self.page.pause()
