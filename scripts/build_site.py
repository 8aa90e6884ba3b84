#!/usr/bin/env python3
"""
Wealth Vibe site builder.
Composes the one-page site and runs its smoke checks, either in headless
Chromium (Playwright) or against a static parse of the document.
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from loguru import logger
from playwright.async_api import async_playwright

from site_composer import compose
from site_config import ConfigError, SiteConfig, load_config
from site_content import ContentError, validate_content
from site_surface import PageSurface, StaticSurface
from smoke_runner import AssertionReport, AssertionRule, VerificationRunner, build_rules


DEFAULT_VIEWPORT = {"width": 1440, "height": 900}


class VerificationError(Exception):
    """Raised when the document could not be attached to a browser surface."""

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Verification failed at {stage}: {cause}")


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def now_iso() -> str:
    return datetime.now().isoformat()


def write_text(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")


def write_json(path: Path, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def config_from_args(args: argparse.Namespace) -> SiteConfig:
    overrides: Dict[str, Any] = {
        "phone_number": args.phone,
        "scheduling_url": args.scheduling_url,
        "contact_email": args.email,
        "location_label": args.location,
    }
    if getattr(args, "no_smoke_panel", False):
        overrides["show_smoke_panel"] = False
    return load_config(args.config, overrides)


def build(config: SiteConfig, output_dir: Path, year: Optional[int] = None) -> Path:
    validate_content()
    ensure_dir(output_dir)
    document = compose(config, year=year)
    index_path = output_dir / "index.html"
    write_text(index_path, document)
    logger.info(f"Wrote {index_path} ({len(document)} bytes)")
    return index_path


async def verify_static(document: str, rules: Sequence[AssertionRule]) -> AssertionReport:
    surface = StaticSurface(document)
    runner = VerificationRunner(rules)
    return await runner.schedule(surface)


async def verify_in_browser(
    document: str,
    rules: Sequence[AssertionRule],
    screenshot_path: Optional[Path] = None,
) -> AssertionReport:
    stage = "launch"
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            context = await browser.new_context(viewport=DEFAULT_VIEWPORT, device_scale_factor=1)
            page = await context.new_page()
            runner = VerificationRunner(rules)
            try:
                stage = "attach"
                surface = PageSurface(page)
                await surface.attach(document)
                stage = "checks"
                report = await runner.schedule(surface)
                if screenshot_path is not None:
                    stage = "screenshot"
                    await page.screenshot(path=str(screenshot_path), full_page=True)
                    logger.info(f"Wrote {screenshot_path}")
            finally:
                runner.cancel()
                await context.close()
                await browser.close()
    except Exception as exc:
        raise VerificationError(stage, exc) from exc
    return report


def print_report(report: AssertionReport) -> None:
    print(f"\n{report.summary()}")
    for result in report.results:
        mark = "✓" if result.passed else "✗"
        line = f"  {mark} {result.name}"
        if result.error:
            line += f" ({result.error})"
        print(line)


async def run_verify(args: argparse.Namespace, config: SiteConfig) -> AssertionReport:
    output_dir = Path(args.output)
    ensure_dir(output_dir)
    document = compose(config, year=args.year)
    rules = build_rules(config)

    if args.static:
        surface_name = "static"
        report = await verify_static(document, rules)
    else:
        surface_name = "chromium"
        screenshot_path = output_dir / "screenshot.png" if args.screenshot else None
        report = await verify_in_browser(document, rules, screenshot_path)

    report_path = output_dir / "report.json"
    write_json(report_path, {
        "generated_at": now_iso(),
        "surface": surface_name,
        "config": config.to_dict(),
        **report.to_dict(),
    })
    logger.info(f"Wrote {report_path}")
    return report


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", "-c", help="Path to a JSON config file")
    parser.add_argument("--phone", help="Phone number for call links, e.g. +14129536415")
    parser.add_argument("--scheduling-url", help="Booking service URL for the scheduling links")
    parser.add_argument("--email", help="Contact email address")
    parser.add_argument("--location", help="Location label shown in the contact block")
    parser.add_argument("--year", type=int, help="Copyright year (defaults to the current year)")
    parser.add_argument("--output", "-o", default="./site-output", help="Output directory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build and verify the Wealth Vibe one-page site")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    build_cmd = sub.add_parser("build", help="Write the composed site to <output>/index.html")
    add_config_arguments(build_cmd)
    build_cmd.add_argument(
        "--no-smoke-panel",
        action="store_true",
        help="Leave the smoke-test panel and its script out of the page",
    )

    verify_cmd = sub.add_parser("verify", help="Compose the site and run its smoke checks")
    add_config_arguments(verify_cmd)
    verify_cmd.add_argument(
        "--static",
        action="store_true",
        help="Check a static parse of the document instead of launching Chromium",
    )
    verify_cmd.add_argument(
        "--screenshot",
        action="store_true",
        help="Save a full-page screenshot next to the report (Chromium only)",
    )
    verify_cmd.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any smoke check fails",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = config_from_args(args)
    except ConfigError as exc:
        print(f"❌ Invalid configuration: {exc}")
        return 1

    if args.command == "build":
        print("📦 Building site...")
        try:
            index_path = build(config, Path(args.output), year=args.year)
        except ContentError as exc:
            print("❌ Content defects found:")
            for defect in exc.defects:
                print(f"   - {defect}")
            return 1
        print("✅ Build complete")
        print(f"Site: {index_path}")
        return 0

    print("📦 Running smoke checks...")
    try:
        report = asyncio.run(run_verify(args, config))
    except VerificationError as exc:
        print(f"❌ {exc}")
        if exc.stage == "launch":
            print("   Run: python scripts/setup.py")
        return 1

    print_report(report)
    if report.all_passed:
        print("\n✅ All smoke checks passed")
    else:
        print(f"\n❌ {report.total - report.passed} smoke check(s) failed")
        if args.strict:
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
