"""Tests for the document composer."""

from __future__ import annotations

import json
import re

import pytest

from site_composer import button, compose, icon, render_smoke_panel
from site_config import SiteConfig
from site_content import REQUIRED_REGIONS, SERVICE_PILLARS
from site_surface import StaticSurface
from smoke_runner import RULES_SCRIPT_ID, AssertionReport, RuleResult, build_rules, render_report_html


def feature_lists(document: str):
    return re.findall(r'<ul class="feature__list">(.*?)</ul>', document)


class TestCompose:
    """compose() output structure."""

    def test_is_deterministic(self, config):
        assert compose(config, year=2025) == compose(config, year=2025)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("anchor", REQUIRED_REGIONS)
    async def test_each_region_exactly_once(self, static_surface, anchor):
        assert await static_surface.count_by_id(anchor) == 1

    @pytest.mark.asyncio
    async def test_phone_link_uses_dialable_target(self, static_surface, config):
        links = await static_surface.link_targets()
        assert config.dial_target in links
        assert "tel:+14129536415" in links

    @pytest.mark.asyncio
    async def test_scheduling_links(self, static_surface):
        links = await static_surface.link_targets()
        assert len([h for h in links if "calendly.com" in h]) == 3

    def test_services_feature_lists(self, document):
        lists = feature_lists(document)
        assert len(lists) == len(SERVICE_PILLARS) >= 3
        for items in lists:
            assert items.count("<li") >= 1

    @pytest.mark.asyncio
    async def test_pillar_anchors_unique(self, static_surface):
        for pillar in SERVICE_PILLARS:
            assert await static_surface.count_by_id(pillar.anchor) == 1

    @pytest.mark.asyncio
    async def test_mailto_and_brochure(self, static_surface, document):
        assert "mailto:hello@wealthvibe.co" in await static_surface.link_targets()
        assert await static_surface.count_by_id("brochure") == 1
        assert 'id="brochure" class="visually-hidden" aria-hidden="true"' in document

    def test_footer_year(self):
        assert "© 1999 Wealth Vibe. All rights reserved." in compose(year=1999)

    def test_text_is_escaped(self):
        config = SiteConfig(location_label="<b>Wexford</b> & co")
        document = compose(config, year=2025)
        assert "&lt;b&gt;Wexford&lt;/b&gt; &amp; co" in document
        assert "<b>Wexford</b>" not in document


class TestConfiguredAffordances:
    """Configured values flow into the document."""

    @pytest.mark.asyncio
    async def test_custom_targets(self, custom_config):
        surface = StaticSurface(compose(custom_config, year=2025))
        links = await surface.link_targets()

        assert "tel:+15550102030" in links
        assert "mailto:team@example.org" in links
        assert any("savvycal.com" in h for h in links)
        assert not any("calendly.com" in h for h in links)

    def test_custom_phone_display(self, custom_config):
        assert "(555) 010-2030" in compose(custom_config, year=2025)


class TestContactForm:
    """The contact form is intercepted client-side."""

    def test_form_never_submits(self, static_surface):
        forms = static_surface.forms()
        assert len(forms) == 1
        form = forms[0]
        assert "action" not in form.attrs
        assert "event.preventDefault()" in form.attrs["onsubmit"]

    def test_required_fields(self, static_surface):
        form = static_surface.forms()[0]
        required = {f.attrs.get("name") for f in form.required_fields}
        assert required == {"name", "email"}
        names = [f.attrs.get("name") for f in form.fields if f.tag in {"input", "textarea"}]
        assert names == ["name", "email", "message"]

    def test_submit_button(self, static_surface):
        buttons = [f for f in static_surface.forms()[0].fields if f.tag == "button"]
        assert [b.attrs.get("type") for b in buttons] == ["submit"]


class TestSmokePanel:
    """Panel placeholder and the embedded rule table."""

    def test_panel_starts_unrun(self, document):
        assert '<div class="tests" data-smoke-panel><div class="tests__header">Smoke Tests: 0/0 passed</div><ul></ul></div>' in document

    def test_rule_table_embedded(self, document, config):
        match = re.search(rf'<script type="application/json" id="{RULES_SCRIPT_ID}">(.*?)</script>', document)
        assert match
        embedded = json.loads(match.group(1))
        assert embedded == [r.to_dict() for r in build_rules(config)]

    def test_panel_can_be_disabled(self):
        document = compose(SiteConfig(show_smoke_panel=False), year=2025)
        assert "data-smoke-panel" not in document
        assert RULES_SCRIPT_ID not in document

    def test_panel_with_report(self):
        report = AssertionReport([RuleResult("A", True), RuleResult("B <x>", False)])
        markup = render_smoke_panel(report)
        assert "Smoke Tests: 1/2 passed" in markup
        assert '<li class="tests__ok">✓ A</li>' in markup
        assert '<li class="tests__fail">✗ B &lt;x&gt;</li>' in markup
        assert render_report_html(report) in markup


class TestPrimitives:
    def test_unknown_icon_renders_nothing(self):
        assert icon("unicorn") == ""

    def test_icon_size(self):
        assert 'width="28" height="28"' in icon("phone", 28)

    def test_link_button(self):
        html = button("Book", href="https://calendly.com/x?a=1&b=2", variant="secondary", new_tab=True)
        assert html.startswith('<a class="btn btn--secondary" href="https://calendly.com/x?a=1&amp;b=2"')
        assert 'target="_blank" rel="noreferrer"' in html

    def test_plain_button(self):
        assert button("Send", button_type="submit") == '<button class="btn btn--primary" type="submit">Send</button>'
