"""
Browser fixtures for the acceptance scenarios.

Run with:  pytest acceptance
Env:
    HEADED=1|true   show the browser (with 50ms slow-mo)
    TRACE_DIR       where Playwright traces go (default: test-results)
"""

import os
import time
from pathlib import Path

import pytest
from playwright.sync_api import Error as PlaywrightError, sync_playwright


def _headed() -> bool:
    return os.getenv("HEADED", "").strip().lower() in ("1", "true")


@pytest.fixture(scope="session")
def playwright_instance():
    with sync_playwright() as playwright:
        yield playwright


@pytest.fixture
def page(playwright_instance):
    """A fresh Chromium page per scenario, traced to TRACE_DIR."""
    headed = _headed()
    browser = playwright_instance.chromium.launch(headless=not headed, slow_mo=50 if headed else 0)
    context = browser.new_context()

    trace_dir = Path(os.getenv("TRACE_DIR") or "test-results")
    trace_dir.mkdir(parents=True, exist_ok=True)
    trace_path = trace_dir / f"trace-{int(time.time() * 1000)}.zip"
    context.tracing.start(screenshots=True, snapshots=True)

    page = context.new_page()
    try:
        yield page
    finally:
        # Teardown must not mask the scenario's own failure
        for close in (lambda: context.tracing.stop(path=str(trace_path)),
                      page.close, context.close, browser.close):
            try:
                close()
            except PlaywrightError:
                pass
