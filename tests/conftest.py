"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest
import pytest_asyncio
from playwright.async_api import async_playwright

from site_composer import compose
from site_config import DEFAULT_CONFIG, SiteConfig
from site_surface import StaticSurface
from smoke_runner import build_rules

FIXED_YEAR = 2025


@pytest.fixture
def config() -> SiteConfig:
    return DEFAULT_CONFIG


@pytest.fixture
def custom_config() -> SiteConfig:
    return SiteConfig(
        phone_number="(555) 010-2030",
        scheduling_url="https://www.savvycal.com/wealthvibe/intro",
        contact_email="team@example.org",
        location_label="Cranberry Township, PA",
    )


@pytest.fixture
def document(config) -> str:
    return compose(config, year=FIXED_YEAR)


@pytest.fixture
def rules(config):
    return build_rules(config)


@pytest.fixture
def static_surface(document) -> StaticSurface:
    return StaticSurface(document)


@pytest_asyncio.fixture
async def browser_page():
    """A fresh Chromium page; skips the test when no browser is installed."""
    try:
        playwright = await async_playwright().start()
    except Exception as exc:
        pytest.skip(f"Playwright driver unavailable: {exc}")
    try:
        browser = await playwright.chromium.launch(headless=True)
    except Exception as exc:
        await playwright.stop()
        pytest.skip(f"Chromium unavailable: {exc}")
    page = await browser.new_page()
    try:
        yield page
    finally:
        await browser.close()
        await playwright.stop()
