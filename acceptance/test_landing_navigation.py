"""
Landing page navigation steps (generic: any feature, any field label).
"""

import re

from playwright.sync_api import expect
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/landing_navigation.feature")


def _pattern(text: str, exact: bool = False) -> re.Pattern:
    escaped = re.escape(text)
    return re.compile(f"^{escaped}$" if exact else escaped, re.IGNORECASE)


@given(parsers.parse('I open "{url}"'))
def open_url(page, url):
    page.goto(url)


@when(parsers.parse('I click the "{feature_name}" feature on the landing page'))
def click_landing_feature(page, feature_name):
    page.get_by_role("link", name=_pattern(feature_name)).click()


@then(parsers.parse('I should be on the "{page_name}" page'))
def should_be_on_page(page, page_name):
    # URL carries a slug of the page name; heading confirms the page rendered
    slug = re.sub(r"\s+", "-", page_name.strip().lower())
    expect(page).to_have_url(_pattern(slug))
    expect(page.get_by_role("heading", name=_pattern(page_name))).to_be_visible(timeout=5000)


@then(parsers.parse('I should see a "{label_text}" field'))
def should_see_field(page, label_text):
    name = label_text.strip()
    candidates = [
        page.get_by_label(_pattern(name, exact=True)).first,
        page.get_by_label(_pattern(name)).first,
        page.get_by_placeholder(_pattern(name)).first,
        page.get_by_role("textbox", name=_pattern(name)).first,
    ]
    for candidate in candidates:
        if candidate.is_visible():
            expect(candidate).to_be_visible()
            return

    if name.lower() == "password":
        expect(page.locator('input[type="password"]').first).to_be_visible()
        return

    raise AssertionError(f"Field not found by label/placeholder/role: {name}")
