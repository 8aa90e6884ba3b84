"""Tests for the build_site command line."""

from __future__ import annotations

import asyncio
import json

import pytest

import build_site
from site_content import ContentError


class TestBuildCommand:
    def test_writes_index(self, tmp_path, capsys):
        code = build_site.main(["build", "--output", str(tmp_path), "--year", "2024"])

        assert code == 0
        index = tmp_path / "index.html"
        assert index.exists()
        text = index.read_text(encoding="utf-8")
        assert text.startswith("<!DOCTYPE html>")
        assert "© 2024 Wealth Vibe" in text
        assert "✅ Build complete" in capsys.readouterr().out

    def test_overrides_reach_the_page(self, tmp_path):
        code = build_site.main([
            "build",
            "--output", str(tmp_path),
            "--phone", "555-010-2030",
            "--scheduling-url", "https://cal.com/wealthvibe",
            "--no-smoke-panel",
        ])

        assert code == 0
        text = (tmp_path / "index.html").read_text(encoding="utf-8")
        assert 'href="tel:+15550102030"' in text
        assert 'href="https://cal.com/wealthvibe"' in text
        assert "data-smoke-panel" not in text

    def test_invalid_config(self, tmp_path, capsys):
        code = build_site.main(["build", "--output", str(tmp_path), "--email", "nope"])

        assert code == 1
        assert "❌ Invalid configuration" in capsys.readouterr().out
        assert not (tmp_path / "index.html").exists()

    def test_content_defects_stop_the_build(self, tmp_path, monkeypatch, capsys):
        def broken():
            raise ContentError(["service pillar 'legacy' has an empty bullet list"])

        monkeypatch.setattr(build_site, "validate_content", broken)
        code = build_site.main(["build", "--output", str(tmp_path)])

        assert code == 1
        assert "empty bullet list" in capsys.readouterr().out
        assert not (tmp_path / "index.html").exists()

    def test_config_file(self, tmp_path):
        config_path = tmp_path / "site.json"
        config_path.write_text(json.dumps({"location_label": "Gibsonia, PA"}), encoding="utf-8")
        out = tmp_path / "out"

        code = build_site.main(["build", "--config", str(config_path), "--output", str(out)])

        assert code == 0
        assert "Gibsonia, PA" in (out / "index.html").read_text(encoding="utf-8")


class TestStaticVerify:
    def test_report_written(self, tmp_path, capsys):
        code = build_site.main(["verify", "--static", "--output", str(tmp_path)])

        assert code == 0
        report = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
        assert report["surface"] == "static"
        assert (report["passed"], report["total"]) == (8, 8)
        assert report["config"]["phone_number"] == "+14129536415"
        out = capsys.readouterr().out
        assert "Smoke Tests: 8/8 passed" in out
        assert "✅ All smoke checks passed" in out

    @pytest.fixture
    def broken_compose(self, monkeypatch):
        original = build_site.compose

        def compose_without_contact(config, year=None):
            return original(config, year=year).replace(' id="contact"', "", 1)

        monkeypatch.setattr(build_site, "compose", compose_without_contact)

    def test_failures_are_diagnostic(self, tmp_path, capsys, broken_compose):
        code = build_site.main(["verify", "--static", "--output", str(tmp_path)])

        assert code == 0
        out = capsys.readouterr().out
        assert "✗ #contact section exists" in out
        assert "1 smoke check(s) failed" in out

    def test_strict_exits_non_zero(self, tmp_path, broken_compose):
        code = build_site.main(["verify", "--static", "--strict", "--output", str(tmp_path)])

        assert code == 1
        report = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
        failed = [r["name"] for r in report["results"] if not r["pass"]]
        assert failed == ["#contact section exists"]


class TestBrowserVerifyErrors:
    def test_launch_failure_reported(self, tmp_path, monkeypatch, capsys):
        async def failing(document, rules, screenshot_path=None):
            raise build_site.VerificationError("launch", RuntimeError("no browser"))

        monkeypatch.setattr(build_site, "verify_in_browser", failing)
        code = build_site.main(["verify", "--output", str(tmp_path)])

        assert code == 1
        out = capsys.readouterr().out
        assert "Verification failed at launch: no browser" in out
        assert "python scripts/setup.py" in out

    def test_launch_error_keeps_its_cause(self, monkeypatch):
        cause = RuntimeError("Executable doesn't exist")

        def no_playwright():
            raise cause

        monkeypatch.setattr(build_site, "async_playwright", no_playwright)
        with pytest.raises(build_site.VerificationError) as info:
            asyncio.run(build_site.verify_in_browser("<html></html>", []))

        assert info.value.stage == "launch"
        assert info.value.cause is cause
        assert info.value.__cause__ is cause
