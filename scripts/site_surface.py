#!/usr/bin/env python3
"""
Rendering surfaces the smoke runner can query.

StaticSurface parses a composed document once and answers from that parse.
PageSurface wraps a live Playwright page after the document is attached.
"""

from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import Page

from smoke_runner import PANEL_ATTRIBUTE, AssertionReport, render_report_html


@dataclass
class Element:
    tag: str
    attrs: Dict[str, Optional[str]]

    @property
    def id(self) -> Optional[str]:
        return self.attrs.get("id")

    @property
    def classes(self) -> List[str]:
        return (self.attrs.get("class") or "").split()


@dataclass
class FormInfo:
    attrs: Dict[str, Optional[str]]
    fields: List[Element] = field(default_factory=list)

    @property
    def required_fields(self) -> List[Element]:
        return [f for f in self.fields if "required" in f.attrs]


class _ElementIndex(HTMLParser):
    FORM_FIELDS = {"input", "textarea", "select", "button"}

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.elements: List[Element] = []
        self.forms: List[FormInfo] = []
        self._open_form: Optional[FormInfo] = None

    def handle_starttag(self, tag, attrs):
        element = Element(tag, dict(attrs))
        self.elements.append(element)
        if tag == "form":
            self._open_form = FormInfo(element.attrs)
            self.forms.append(self._open_form)
        elif tag in self.FORM_FIELDS and self._open_form is not None:
            self._open_form.fields.append(element)

    def handle_startendtag(self, tag, attrs):
        self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag):
        if tag == "form":
            self._open_form = None


class StaticSurface:
    """Read-only surface over a parsed HTML document.

    Paint is immediate and publishing only records the report, so the parsed
    document never changes after construction.
    """

    def __init__(self, document: str):
        index = _ElementIndex()
        index.feed(document)
        index.close()
        self.elements = index.elements
        self._forms = index.forms
        self.published: Optional[AssertionReport] = None

    async def count_by_id(self, element_id: str) -> int:
        return sum(1 for el in self.elements if el.id == element_id)

    async def count_by_class(self, class_name: str) -> int:
        return sum(1 for el in self.elements if class_name in el.classes)

    async def link_targets(self) -> List[str]:
        return [el.attrs["href"] or "" for el in self.elements if el.tag == "a" and "href" in el.attrs]

    async def wait_for_paint(self) -> None:
        return None

    async def publish_report(self, report: AssertionReport) -> None:
        self.published = report

    def forms(self) -> List[FormInfo]:
        return list(self._forms)


class PageSurface:
    """Live surface backed by a Playwright page the composed document is attached to."""

    def __init__(self, page: Page):
        self.page = page

    async def attach(self, document: str) -> None:
        await self.page.set_content(document, wait_until="domcontentloaded")
        await self.page.wait_for_selector("body", state="attached", timeout=15000)

    @property
    def attached(self) -> bool:
        return not self.page.is_closed()

    async def count_by_id(self, element_id: str) -> int:
        return await self.page.evaluate(
            """(id) => Array.from(document.querySelectorAll('[id]')).filter(el => el.id === id).length""",
            element_id,
        )

    async def count_by_class(self, class_name: str) -> int:
        return await self.page.evaluate(
            """(name) => document.getElementsByClassName(name).length""",
            class_name,
        )

    async def link_targets(self) -> List[str]:
        return await self.page.evaluate(
            """() => Array.from(document.querySelectorAll('a[href]')).map(a => a.getAttribute('href') || '')"""
        )

    async def wait_for_paint(self) -> None:
        await self.page.evaluate(
            """() => new Promise(resolve => requestAnimationFrame(() => resolve(true)))"""
        )

    async def publish_report(self, report: AssertionReport) -> None:
        if not self.attached:
            logger.debug("Page closed before the smoke report could be displayed")
            return
        await self.page.evaluate(
            """([selector, markup]) => {
                const panel = document.querySelector(selector);
                if (panel) {
                    panel.innerHTML = markup;
                }
            }""",
            [f"[{PANEL_ATTRIBUTE}]", render_report_html(report)],
        )

    async def panel_text(self) -> str:
        panel = await self.page.query_selector(f"[{PANEL_ATTRIBUTE}]")
        if not panel:
            return ""
        return (await panel.text_content() or "").strip()

    async def form_state(self) -> Dict[str, Any]:
        return await self.page.evaluate(
            """() => {
                const form = document.querySelector('#contact form');
                return {
                    present: !!form,
                    valid: form ? form.checkValidity() : null,
                    url: window.location.href,
                };
            }"""
        )
