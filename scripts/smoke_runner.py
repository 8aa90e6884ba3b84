#!/usr/bin/env python3
"""
Smoke-test runner for the rendered Wealth Vibe page.

A fixed, ordered table of assertion rules is evaluated against a rendering
surface once the surface has painted. Each rule is independent and read-only;
a rule that raises or finds nothing simply fails. The same table is embedded
in the page (as JSON) so a browser can fill the smoke panel on its own.
"""

import asyncio
import html
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence

from loguru import logger
from site_config import SiteConfig
from site_content import MIN_SERVICE_PILLARS, REQUIRED_REGIONS


FEATURE_LIST_CLASS = "feature__list"
PANEL_ATTRIBUTE = "data-smoke-panel"
RULES_SCRIPT_ID = "smoke-rules"


class Surface(Protocol):
    async def count_by_id(self, element_id: str) -> int: ...

    async def count_by_class(self, class_name: str) -> int: ...

    async def link_targets(self) -> List[str]: ...

    async def wait_for_paint(self) -> None: ...

    async def publish_report(self, report: "AssertionReport") -> None: ...


@dataclass(frozen=True)
class AssertionRule:
    name: str
    kind: str
    target: str
    minimum: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "kind": self.kind, "target": self.target, "minimum": self.minimum}


@dataclass(frozen=True)
class RuleResult:
    name: str
    passed: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "pass": self.passed, "error": self.error}


@dataclass(frozen=True)
class AssertionReport:
    results: List[RuleResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def all_passed(self) -> bool:
        return self.passed == self.total

    @property
    def failed(self) -> List[str]:
        return [r.name for r in self.results if not r.passed]

    def outcomes(self) -> List[tuple]:
        return [(r.name, r.passed) for r in self.results]

    def summary(self) -> str:
        return f"Smoke Tests: {self.passed}/{self.total} passed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "total": self.total,
            "results": [r.to_dict() for r in self.results],
        }


async def _check_region(surface: Surface, rule: AssertionRule) -> bool:
    return await surface.count_by_id(rule.target) > 0


async def _check_link_exact(surface: Surface, rule: AssertionRule) -> bool:
    return rule.target in await surface.link_targets()


async def _check_link_contains(surface: Surface, rule: AssertionRule) -> bool:
    return any(rule.target in href for href in await surface.link_targets())


async def _check_min_count(surface: Surface, rule: AssertionRule) -> bool:
    return await surface.count_by_class(rule.target) >= rule.minimum


RULE_CHECKS: Dict[str, Callable[[Surface, AssertionRule], Awaitable[bool]]] = {
    "region": _check_region,
    "link_exact": _check_link_exact,
    "link_contains": _check_link_contains,
    "min_count": _check_min_count,
}


def build_rules(config: SiteConfig) -> List[AssertionRule]:
    rules = [AssertionRule(f"#{anchor} section exists", "region", anchor) for anchor in REQUIRED_REGIONS]
    rules.append(AssertionRule("Phone link is present", "link_exact", config.dial_target))
    rules.append(AssertionRule(
        f"Scheduling CTA link present ({config.scheduling_domain})",
        "link_contains",
        config.scheduling_domain,
    ))
    rules.append(AssertionRule(
        f"Service features rendered (>={MIN_SERVICE_PILLARS})",
        "min_count",
        FEATURE_LIST_CLASS,
        minimum=MIN_SERVICE_PILLARS,
    ))
    return rules


def rules_to_json(rules: Sequence[AssertionRule]) -> str:
    # "</" would close the surrounding <script> element early
    return json.dumps([r.to_dict() for r in rules], ensure_ascii=False).replace("</", "<\\/")


async def evaluate_rule(surface: Surface, rule: AssertionRule) -> RuleResult:
    check = RULE_CHECKS.get(rule.kind)
    if check is None:
        logger.warning(f"Smoke rule '{rule.name}' has unknown kind '{rule.kind}'")
        return RuleResult(rule.name, False, f"unknown rule kind: {rule.kind}")
    try:
        return RuleResult(rule.name, bool(await check(surface, rule)))
    except Exception as exc:
        logger.warning(f"Smoke rule '{rule.name}' raised {type(exc).__name__}: {exc}")
        return RuleResult(rule.name, False, str(exc))


async def run_checks(surface: Surface, rules: Sequence[AssertionRule]) -> AssertionReport:
    results = []
    for rule in rules:
        results.append(await evaluate_rule(surface, rule))
    return AssertionReport(results)


def render_report_html(report: AssertionReport) -> str:
    items = []
    for result in report.results:
        css = "tests__ok" if result.passed else "tests__fail"
        mark = "✓" if result.passed else "✗"
        items.append(f'<li class="{css}">{mark} {html.escape(result.name)}</li>')
    return (
        f'<div class="tests__header">{html.escape(report.summary())}</div>'
        f'<ul>{"".join(items)}</ul>'
    )


class RunnerState(Enum):
    UNRUN = "unrun"
    RUNNING = "running"
    REPORTED = "reported"


class VerificationRunner:
    """Runs the smoke rules once per render cycle, after the surface first paints.

    ``schedule`` creates a single deferred task; ``cancel`` revokes it on teardown so
    nothing touches a detached surface; ``reset`` starts a new cycle.
    """

    def __init__(self, rules: Sequence[AssertionRule]):
        self.rules = list(rules)
        self.state = RunnerState.UNRUN
        self.report = AssertionReport()
        self._task: Optional["asyncio.Task[AssertionReport]"] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, surface: Surface) -> "asyncio.Task[AssertionReport]":
        # one task per render cycle; a cancelled cycle may be scheduled again
        if self._task is not None and not self._task.cancelled():
            return self._task
        logger.debug("Scheduling smoke checks after first paint")
        self._task = asyncio.get_running_loop().create_task(self._run_after_paint(surface))
        return self._task

    async def _run_after_paint(self, surface: Surface) -> AssertionReport:
        try:
            try:
                await surface.wait_for_paint()
            except Exception as exc:
                # a surface that never paints fails every rule; the cycle still completes
                logger.warning(f"Surface did not paint, failing all smoke checks: {exc}")
                self.state = RunnerState.RUNNING
                report = AssertionReport([RuleResult(r.name, False, f"paint failed: {exc}") for r in self.rules])
            else:
                self.state = RunnerState.RUNNING
                logger.debug(f"Running {len(self.rules)} smoke checks")
                report = await run_checks(surface, self.rules)
        except asyncio.CancelledError:
            self.state = RunnerState.UNRUN
            raise
        self.report = report
        self.state = RunnerState.REPORTED
        logger.debug(report.summary())
        try:
            await surface.publish_report(report)
        except Exception as exc:
            logger.warning(f"Could not display smoke report: {exc}")
        return report

    def cancel(self) -> bool:
        if not self.pending:
            return False
        logger.debug("Cancelling pending smoke checks")
        self._task.cancel()
        return True

    def reset(self) -> None:
        self.cancel()
        self._task = None
        self.state = RunnerState.UNRUN
        self.report = AssertionReport()
