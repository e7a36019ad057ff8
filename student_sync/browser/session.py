"""Browser session management"""

from playwright.sync_api import sync_playwright

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"


def launch_browser(headless=False):
    """
    Launch Chromium with a fresh context and return (context, page).
    Session reuse is handled through the stored auth cookie, not a browser profile.
    """
    print("Launching browser...")

    p = sync_playwright().start()

    browser = p.chromium.launch(
        headless=headless,
        args=["--start-maximized"],
    )
    context = browser.new_context(
        no_viewport=True,  # Use the window size
        user_agent=USER_AGENT,
        locale="pt-BR",
        timezone_id="America/Sao_Paulo",
    )

    page = context.new_page()

    return context, page


def close_browser(context):
    """Close the context and the browser that owns it"""
    browser = context.browser
    context.close()
    if browser:
        browser.close()
