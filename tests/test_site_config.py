"""Tests for the deployment configuration."""

from __future__ import annotations

import json

import pytest

from site_config import (
    DEFAULT_CONFIG,
    ConfigError,
    SiteConfig,
    extract_domain,
    load_config,
    normalize_phone,
)


class TestPhoneNumbers:
    """Dialable and display forms of the phone number."""

    def test_default_dial_target(self):
        assert DEFAULT_CONFIG.dial_target == "tel:+14129536415"

    @pytest.mark.parametrize("raw", ["(412) 953-6415", "412.953.6415", "+1 412 953 6415", "4129536415"])
    def test_normalize_phone_accepts_human_formats(self, raw):
        assert normalize_phone(raw) == "+14129536415"

    def test_normalize_phone_keeps_international_numbers(self):
        assert normalize_phone("+44 20 7946 0958") == "+442079460958"

    def test_normalize_phone_without_digits(self):
        assert normalize_phone("call us") == ""

    def test_display_for_nanp_number(self):
        assert DEFAULT_CONFIG.phone_display == "(412) 953-6415"

    def test_display_for_international_number(self):
        config = SiteConfig(phone_number="+44 20 7946 0958")
        assert config.phone_display == "+442079460958"


class TestDerivedTargets:
    """Scheduling domain and mailto target."""

    def test_scheduling_domain(self):
        assert DEFAULT_CONFIG.scheduling_domain == "calendly.com"

    def test_scheduling_domain_strips_www_and_port(self):
        assert extract_domain("https://www.savvycal.com:443/me") == "savvycal.com"

    def test_mailto_target(self):
        assert DEFAULT_CONFIG.mailto_target == "mailto:hello@wealthvibe.co"


class TestLoadConfig:
    """load_config merges defaults, JSON file and overrides."""

    def test_defaults(self):
        assert load_config() == DEFAULT_CONFIG

    def test_none_overrides_are_ignored(self):
        config = load_config(overrides={"phone_number": None, "contact_email": "a@b.co"})
        assert config.phone_number == DEFAULT_CONFIG.phone_number
        assert config.contact_email == "a@b.co"

    def test_file_then_overrides(self, tmp_path):
        path = tmp_path / "site.json"
        path.write_text(json.dumps({
            "scheduling_url": "https://cal.com/wealthvibe",
            "location_label": "Sewickley, PA",
            "show_smoke_panel": False,
        }), encoding="utf-8")

        config = load_config(str(path), {"location_label": "Mars, PA"})

        assert config.scheduling_domain == "cal.com"
        assert config.location_label == "Mars, PA"
        assert config.show_smoke_panel is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "site.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(str(path))

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / "site.json"
        path.write_text(json.dumps({"fax": "123"}), encoding="utf-8")
        with pytest.raises(ConfigError, match="fax"):
            load_config(str(path))

    def test_non_string_value_rejected(self, tmp_path):
        path = tmp_path / "site.json"
        path.write_text(json.dumps({"phone_number": 4129536415}), encoding="utf-8")
        with pytest.raises(ConfigError, match="phone_number"):
            load_config(str(path))

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"phone_number": "call us"}, "phone_number"),
            ({"scheduling_url": "calendly.com/me"}, "scheduling_url"),
            ({"scheduling_url": "ftp://calendly.com/me"}, "scheduling_url"),
            ({"contact_email": "hello"}, "contact_email"),
            ({"location_label": "  "}, "location_label"),
        ],
    )
    def test_invalid_values(self, overrides, message):
        with pytest.raises(ConfigError, match=message):
            load_config(overrides=overrides)


class TestSchedulingHost:
    """Only a leading www. is dropped, and the host must survive that."""

    def test_www_inside_host_is_kept(self):
        assert extract_domain("https://bookwww.example.com/wealthvibe") == "bookwww.example.com"

    def test_leading_www_only(self):
        assert extract_domain("https://www.www-cal.com/x") == "www-cal.com"

    @pytest.mark.parametrize("url", ["https://www./x", "https://www.../x", "https://user@:8080/x"])
    def test_empty_host_rejected(self, url):
        with pytest.raises(ConfigError, match="scheduling_url"):
            load_config(overrides={"scheduling_url": url})
