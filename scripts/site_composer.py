#!/usr/bin/env python3
"""
Document composer for the Wealth Vibe one-page site.
Builds a single self-contained HTML document: inline CSS, inline SVG icons,
no external fetches. Composition is pure; the only inputs are the site
config and the copyright year.
"""

import html
from datetime import date
from typing import Iterable, Optional

from site_config import DEFAULT_CONFIG, SiteConfig
import site_content as content
from smoke_runner import (
    FEATURE_LIST_CLASS,
    PANEL_ATTRIBUTE,
    RULES_SCRIPT_ID,
    AssertionReport,
    build_rules,
    render_report_html,
    rules_to_json,
)


ICON_PATHS = {
    "phone": '<path d="M22 16.92v3a2 2 0 0 1-2.18 2 19.79 19.79 0 0 1-8.63-3.07 19.5 19.5 0 0 1-6-6 19.79 19.79 0 0 1-3.07-8.67A2 2 0 0 1 4.11 2h3a2 2 0 0 1 2 1.72c.12.9.32 1.78.59 2.64a2 2 0 0 1-.45 2.11L8 9a16 16 0 0 0 7 7l.53-1.22a2 2 0 0 1 2.11-.45c.86.27 1.74.47 2.64.59A2 2 0 0 1 22 16.92z"/>',
    "calendar": '<rect x="3" y="4" width="18" height="18" rx="2"/><line x1="16" y1="2" x2="16" y2="6"/><line x1="8" y1="2" x2="8" y2="6"/><line x1="3" y1="10" x2="21" y2="10"/>',
    "download": '<path d="M21 15v4a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2v-4"/><polyline points="7 10 12 15 17 10"/><line x1="12" y1="15" x2="12" y2="3"/>',
    "arrow-right": '<line x1="5" y1="12" x2="19" y2="12"/><polyline points="12 5 19 12 12 19"/>',
    "shield": '<path d="M12 22s8-4 8-10V5l-8-3-8 3v7c0 6 8 10 8 10z"/>',
    "piggy": '<path d="M5 11c-1.657 0-3 1.79-3 4s1.343 4 3 4h9c2.761 0 5-2.239 5-5 0-1.359-.547-2.589-1.431-3.479l1.431-1.521-2-1-1 1a7.976 7.976 0 0 0-3-1H8"/><circle cx="8" cy="11" r="1"/>',
    "landmark": '<path d="M2 9l10-5 10 5"/><path d="M4 10h16v10H4z"/><path d="M10 12v6M14 12v6"/>',
    "mail": '<path d="M22 12v7a2 2 0 0 1-2 2H4a2 2 0 0 1-2-2v-7"/><path d="M22 12V7a2 2 0 0 0-2-2H4A2 2 0 0 0 2 7v5"/><path d="M2 7l10 6L22 7"/>',
    "send": '<path d="M22 2L11 13"/><path d="M22 2l-7 20-4-9-9-4 20-7z"/>',
    "map-pin": '<path d="M21 10c0 7-9 12-9 12S3 17 3 10a9 9 0 1 1 18 0z"/><circle cx="12" cy="10" r="3"/>',
    "heart-hs": '<path d="M20.84 4.61a5.5 5.5 0 0 0-7.78 0L12 5.67l-1.06-1.06a5.5 5.5 0 0 0-7.78 7.78L12 21.23l8.84-8.84a5.5 5.5 0 0 0 0-7.78z"/>',
}

STYLESHEET = """
:root {
  --bg: #ffffff;
  --bg-soft: #fff7ed;
  --text: #0f172a;
  --muted: #475569;
  --card: #ffffff;
  --border: #e2e8f0;
  --brand1: #f59e0b;
  --brand2: #f43f5e;
  --shadow: 0 10px 20px rgba(2,8,23,0.06);
  --radius: 16px;
}
* { box-sizing: border-box; }
body { margin: 0; }
.site { min-height: 100vh; background: linear-gradient(180deg, var(--bg), var(--bg-soft)); color: var(--text); font-family: ui-sans-serif, system-ui, -apple-system, "Segoe UI", Roboto, "Helvetica Neue", Arial, "Noto Sans", sans-serif; }
.container { max-width: 1120px; margin: 0 auto; padding: 0 20px; }
.header { position: sticky; top: 0; z-index: 10; background: rgba(255,255,255,0.85); backdrop-filter: blur(8px); border-bottom: 1px solid var(--border); }
.header__row { display: flex; align-items: center; justify-content: space-between; padding: 12px 0; }
.brand { display: flex; align-items: center; gap: 12px; }
.brand__logo { width: 36px; height: 36px; border-radius: 12px; background: linear-gradient(135deg, #f59e0b, #f43f5e); display: grid; place-items: center; color: white; font-weight: 800; }
.brand__title { font-weight: 800; letter-spacing: -0.3px; }
.brand__tag { font-size: 12px; color: var(--muted); margin-top: -2px; }
nav a { font-size: 14px; color: #334155; text-decoration: none; margin: 0 10px; }
nav a:hover { color: #0f172a; }
.btn { display: inline-flex; align-items: center; gap: 8px; padding: 10px 14px; border-radius: 14px; text-decoration: none; border: 1px solid transparent; cursor: pointer; font-weight: 600; font-size: 15px; }
.btn--primary { background: #111827; color: white; }
.btn--secondary { background: white; color: #111827; border-color: var(--border); }
.section { padding: 64px 0; }
.section__intro { text-align: center; margin-bottom: 20px; }
.hero { display: grid; gap: 24px; grid-template-columns: 1fr; }
@media (min-width: 1024px) { .hero { grid-template-columns: 1fr 1fr; align-items: center; gap: 40px; } }
.headline { font-size: 36px; line-height: 1.1; font-weight: 800; }
.headline--section { font-size: 34px; }
@media (min-width: 640px) { .headline { font-size: 48px; } .headline--section { font-size: 34px; } }
.headline strong { background: linear-gradient(90deg, var(--brand1), var(--brand2)); -webkit-background-clip: text; background-clip: text; color: transparent; }
.lead { margin-top: 12px; font-size: 18px; color: #334155; max-width: 48ch; }
.actions { display: flex; gap: 12px; margin-top: 18px; flex-wrap: wrap; }
.stats { display: grid; grid-template-columns: repeat(3, 1fr); gap: 16px; margin-top: 24px; }
.stat { text-align: center; }
.stat__value { font-size: 28px; font-weight: 800; }
.card { background: var(--card); border: 1px solid var(--border); border-radius: var(--radius); box-shadow: var(--shadow); }
.card--dashed { border-style: dashed; }
.card__content { padding: 24px; }
.callout { display: flex; align-items: center; gap: 12px; }
.callout__body { flex: 1; }
.callout__body h3 { margin: 0; font-size: 18px; }
.callout__body p { margin: 0; }
.feature__head { display: flex; align-items: center; gap: 12px; margin-bottom: 12px; }
.feature__icon { background: linear-gradient(135deg, #ffedd5, #ffe4e6); padding: 8px; border-radius: 12px; }
.feature__title { font-size: 18px; font-weight: 700; }
.feature__list { list-style: none; padding: 0; margin: 0; display: grid; gap: 8px; }
.feature__item { display: grid; grid-template-columns: 18px 1fr; gap: 8px; color: #334155; }
.feature__item::before { content: "✔"; color: #0f172a; font-size: 14px; line-height: 1.6; }
.grid-3 { display: grid; gap: 16px; grid-template-columns: 1fr; }
.grid-2 { display: grid; gap: 16px; grid-template-columns: 1fr; }
.grid-2--spaced { margin-top: 20px; }
.grid-2--center { align-items: center; }
@media (min-width: 768px) { .grid-3 { grid-template-columns: repeat(3, 1fr); } .grid-2 { grid-template-columns: repeat(2, 1fr); } }
.vis { position: relative; border-radius: 20px; background: linear-gradient(135deg, #fff1d6, #ffe3ea); padding: 6px; box-shadow: var(--shadow); }
.vis__inner { border-radius: 14px; background: white; height: 0; padding-bottom: 56.25%; display: grid; place-items: center; color: #64748b; font-weight: 600; }
.about__bullets { list-style: none; padding: 0; margin: 16px 0 0; display: grid; gap: 10px; }
.quote { font-style: italic; color: #0f172a; }
.contact-form { display: grid; gap: 12px; }
.contact-form__label { font-size: 13px; }
.contact-form__field { width: 100%; border-radius: 12px; border: 1px solid var(--border); padding: 10px 12px; font: inherit; }
.contact-form__actions { display: flex; gap: 10px; align-items: center; flex-wrap: wrap; }
.contact-list { display: grid; gap: 12px; }
.contact-list__row { display: flex; align-items: center; gap: 10px; }
.contact-list a, .contact-form__actions a { text-decoration: none; }
.visually-hidden { position: absolute; left: -9999px; top: -9999px; }
.footer { border-top: 1px solid var(--border); background: #fff; margin-top: 48px; }
.footer__grid { display: grid; gap: 20px; grid-template-columns: 1fr; padding: 32px 0; }
@media (min-width: 768px) { .footer__grid { grid-template-columns: repeat(3, 1fr); } }
.footer__heading { font-weight: 700; }
.footer__legal { text-align: center; font-size: 12px; color: #64748b; padding-bottom: 24px; }
.muted { color: var(--muted); font-size: 14px; }
.tests { margin: 24px 0 0; border: 1px solid var(--border); border-radius: 12px; background: #fff; }
.tests__header { padding: 10px 14px; font-weight: 700; border-bottom: 1px solid var(--border); background: #f8fafc; }
.tests ul { list-style: none; margin: 0; padding: 10px 14px; display: grid; gap: 6px; }
.tests__ok { color: #065f46; }
.tests__fail { color: #b91c1c; }
"""

# Reads the rule table embedded next to it and fills the smoke panel after
# the first animation frame. Mirrors smoke_runner.RULE_CHECKS.
PANEL_SCRIPT = """
(function () {
  var source = document.getElementById('%(rules_id)s');
  var panel = document.querySelector('[%(panel_attr)s]');
  if (!source || !panel) { return; }
  var rules = JSON.parse(source.textContent);
  function hrefs() {
    return Array.prototype.map.call(document.querySelectorAll('a[href]'), function (a) { return a.getAttribute('href') || ''; });
  }
  function check(rule) {
    if (rule.kind === 'region') { return !!document.getElementById(rule.target); }
    if (rule.kind === 'link_exact') { return hrefs().indexOf(rule.target) !== -1; }
    if (rule.kind === 'link_contains') { return hrefs().some(function (h) { return h.indexOf(rule.target) !== -1; }); }
    if (rule.kind === 'min_count') { return document.getElementsByClassName(rule.target).length >= rule.minimum; }
    return false;
  }
  function run() {
    var results = rules.map(function (rule) {
      var pass = false;
      try { pass = check(rule); } catch (e) { pass = false; }
      return { name: rule.name, pass: pass };
    });
    var passed = results.filter(function (r) { return r.pass; }).length;
    var header = document.createElement('div');
    header.className = 'tests__header';
    header.textContent = 'Smoke Tests: ' + passed + '/' + results.length + ' passed';
    var list = document.createElement('ul');
    results.forEach(function (r) {
      var item = document.createElement('li');
      item.className = r.pass ? 'tests__ok' : 'tests__fail';
      item.textContent = (r.pass ? '\\u2713 ' : '\\u2717 ') + r.name;
      list.appendChild(item);
    });
    panel.replaceChildren(header, list);
  }
  var frame = window.requestAnimationFrame(run);
  window.addEventListener('pagehide', function () { window.cancelAnimationFrame(frame); });
})();
"""


def esc(value: str) -> str:
    return html.escape(value, quote=True)


def join(parts: Iterable[str]) -> str:
    return "".join(parts)


# -------------------------- primitives --------------------------

def icon(name: str, size: int = 20) -> str:
    paths = ICON_PATHS.get(name)
    if paths is None:
        return ""
    return (
        f'<svg width="{size}" height="{size}" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
        f'stroke-width="2" stroke-linecap="round" stroke-linejoin="round" aria-hidden="true">{paths}</svg>'
    )


def card(children: str, dashed: bool = False) -> str:
    css = "card card--dashed" if dashed else "card"
    return f'<div class="{css}"><div class="card__content">{children}</div></div>'


def button(
    label: str,
    href: Optional[str] = None,
    variant: str = "primary",
    icon_name: Optional[str] = None,
    button_type: str = "button",
    new_tab: bool = False,
) -> str:
    inner = (icon(icon_name) + " " if icon_name else "") + esc(label)
    css = f"btn btn--{variant}"
    if href is None:
        return f'<button class="{css}" type="{esc(button_type)}">{inner}</button>'
    extra = ' target="_blank" rel="noreferrer"' if new_tab else ""
    return f'<a class="{css}" href="{esc(href)}"{extra}>{inner}</a>'


def section(children: str, anchor: Optional[str] = None, css: str = "") -> str:
    id_attr = f' id="{esc(anchor)}"' if anchor else ""
    classes = f"section {css}".strip()
    return f'<section{id_attr} class="{classes}">{children}</section>'


def section_intro(title: str, lead: Optional[str] = None) -> str:
    lead_html = f'<p class="muted">{esc(lead)}</p>' if lead else ""
    return f'<div class="section__intro"><h2 class="headline headline--section">{esc(title)}</h2>{lead_html}</div>'


def feature(block: content.ContentBlock) -> str:
    items = join(f'<li class="feature__item">{esc(item)}</li>' for item in block.bullets)
    body = (
        f'<div class="feature__head"><div class="feature__icon">{icon(block.icon, 22)}</div>'
        f'<h3 class="feature__title">{esc(block.title)}</h3></div>'
        f'<ul class="{FEATURE_LIST_CLASS}">{items}</ul>'
    )
    return f'<article id="{esc(block.anchor)}">{card(body)}</article>'


# -------------------------- regions --------------------------

def render_header(config: SiteConfig) -> str:
    nav = join(f'<a href="#{anchor}">{esc(label)}</a>' for anchor, label in content.NAV_LINKS)
    return (
        '<header class="header"><div class="container header__row">'
        '<div class="brand">'
        f'<div class="brand__logo">{esc(content.BRAND_INITIALS)}</div>'
        f'<div><div class="brand__title">{esc(content.BRAND_NAME)}</div>'
        f'<div class="brand__tag">{esc(content.BRAND_TAGLINE)}</div></div>'
        '</div>'
        f'<nav>{nav}</nav>'
        f'{button(config.phone_display, href="#contact", icon_name="phone")}'
        '</div></header>'
    )


def render_hero(config: SiteConfig) -> str:
    stats = join(
        f'<div class="stat"><div class="stat__value">{esc(s.value)}</div><div class="muted">{esc(s.label)}</div></div>'
        for s in content.STATS
    )
    body = (
        '<div class="hero"><div>'
        f'<h1 class="headline">{esc(content.HERO_HEADLINE)} <strong>{esc(content.HERO_HIGHLIGHT)}</strong></h1>'
        f'<p class="lead">{esc(content.HERO_LEAD)}</p>'
        '<div class="actions">'
        f'{button("Book a Free Consultation", href=config.scheduling_url, icon_name="calendar")}'
        f'{button("Download Brochure", href="#brochure", variant="secondary", icon_name="download")}'
        '</div>'
        f'<div class="stats">{stats}</div>'
        '</div>'
        f'<div><div class="vis"><div class="vis__inner">{esc(content.HERO_VISUAL_LABEL)}</div></div></div>'
        '</div>'
    )
    return section(body, css="container")


def render_callout(callout: content.CalloutCard, config: SiteConfig) -> str:
    if callout.action == "schedule":
        action = button(callout.action_label, href=config.scheduling_url, variant="secondary", icon_name="arrow-right")
    else:
        action = button(callout.action_label, href="#contact", icon_name="arrow-right")
    body = (
        f'<div class="callout">{icon(callout.icon, 28)}'
        f'<div class="callout__body"><h3>{esc(callout.title)}</h3><p class="muted">{esc(callout.body)}</p></div>'
        f'{action}</div>'
    )
    return card(body, dashed=True)


def render_services(config: SiteConfig) -> str:
    pillars = join(feature(block) for block in content.SERVICE_PILLARS)
    callouts = join(render_callout(c, config) for c in content.CALLOUTS)
    body = (
        '<div class="container">'
        f'{section_intro(content.SERVICES_TITLE, content.SERVICES_LEAD)}'
        f'<div class="grid-3">{pillars}</div>'
        f'<div class="grid-2 grid-2--spaced">{callouts}</div>'
        '</div>'
    )
    return section(body, anchor="services")


def render_about() -> str:
    points = join(f'<li class="feature__item">{esc(p)}</li>' for p in content.ABOUT_POINTS)
    founder = card(f'<h3>{esc(content.FOUNDER_TITLE)}</h3><p class="muted">{esc(content.FOUNDER_BIO)}</p>')
    body = (
        '<div class="container"><div class="grid-2 grid-2--center">'
        f'<div><h2 class="headline headline--section">{esc(content.ABOUT_TITLE)}</h2>'
        f'<p class="lead">{esc(content.ABOUT_LEAD)}</p>'
        f'<ul class="about__bullets">{points}</ul></div>'
        f'<div>{founder}</div>'
        '</div></div>'
    )
    return section(body, anchor="about")


def render_testimonials() -> str:
    quotes = join(
        card(
            f'<p class="quote">“{esc(quote)}”</p>'
            f'<div class="muted">— {esc(content.TESTIMONIAL_ATTRIBUTION)}</div>'
        )
        for quote in content.TESTIMONIALS
    )
    body = (
        '<div class="container">'
        f'{section_intro(content.TESTIMONIALS_TITLE, content.TESTIMONIALS_LEAD)}'
        f'<div class="grid-3">{quotes}</div>'
        '</div>'
    )
    return section(body, anchor="testimonials")


def render_faq() -> str:
    cards = join(card(f'<h3>{esc(q.question)}</h3><p class="muted">{esc(q.answer)}</p>') for q in content.FAQ)
    body = f'<div class="container">{section_intro(content.FAQ_TITLE)}<div class="grid-2">{cards}</div></div>'
    return section(body, anchor="faq")


def render_contact_form(config: SiteConfig) -> str:
    # no action attribute: submission is intercepted in the page and goes nowhere
    return (
        '<form class="contact-form" onsubmit="event.preventDefault();">'
        '<label><div class="muted contact-form__label">Name</div>'
        '<input class="contact-form__field" name="name" required placeholder="Your name"></label>'
        '<label><div class="muted contact-form__label">Email</div>'
        '<input class="contact-form__field" name="email" type="email" required placeholder="you@example.com"></label>'
        '<label><div class="muted contact-form__label">Message</div>'
        '<textarea class="contact-form__field" name="message" rows="5" placeholder="How can we help?"></textarea></label>'
        '<div class="contact-form__actions">'
        f'{button("Send", icon_name="send", button_type="submit")}'
        f'<a class="muted" href="{esc(config.mailto_target)}">{icon("mail")} {esc(config.contact_email)}</a>'
        '</div>'
        '</form>'
    )


def render_smoke_panel(report: Optional[AssertionReport] = None) -> str:
    # an empty report is the runner's initial state: 0/0, no lines
    return f'<div class="tests" {PANEL_ATTRIBUTE}>{render_report_html(report or AssertionReport())}</div>'


def render_contact(config: SiteConfig) -> str:
    details = (
        '<div class="contact-list">'
        f'<div class="contact-list__row">{icon("phone")}'
        f'<a href="{esc(config.dial_target)}">{esc(config.phone_display)}</a></div>'
        f'<div class="contact-list__row">{icon("calendar")}'
        f'<a href="{esc(config.scheduling_url)}" target="_blank" rel="noreferrer">Book a consultation</a></div>'
        f'<div class="contact-list__row">{icon("map-pin")}<div>{esc(config.location_label)}</div></div>'
        '</div>'
    )
    panel = render_smoke_panel() if config.show_smoke_panel else ""
    body = (
        '<div class="container">'
        f'{section_intro(content.CONTACT_TITLE, content.CONTACT_LEAD)}'
        f'<div class="grid-2">{card(render_contact_form(config))}{card(details)}</div>'
        f'{panel}'
        '</div>'
    )
    return section(body, anchor="contact")


def render_brochure_anchor() -> str:
    return f'<div id="brochure" class="visually-hidden" aria-hidden="true">{esc(content.BROCHURE_PLACEHOLDER)}</div>'


def render_footer(year: int) -> str:
    links = join(f'<li><a href="#{anchor}">{esc(label)}</a></li>' for anchor, label in content.FOOTER_LINKS)
    return (
        '<footer class="footer"><div class="container footer__grid">'
        f'<div><div class="brand__title">{esc(content.BRAND_NAME)}</div>'
        f'<p class="muted">{esc(content.FOOTER_MISSION)}</p></div>'
        f'<div><div class="footer__heading">Quick Links</div><ul class="about__bullets">{links}</ul></div>'
        f'<div><div class="footer__heading">Compliance</div><p class="muted">{esc(content.COMPLIANCE_NOTE)}</p></div>'
        '</div>'
        f'<div class="container footer__legal">© {year} {esc(content.BRAND_NAME)}. All rights reserved.</div>'
        '</footer>'
    )


def render_panel_scripts(config: SiteConfig) -> str:
    if not config.show_smoke_panel:
        return ""
    script = PANEL_SCRIPT % {"rules_id": RULES_SCRIPT_ID, "panel_attr": PANEL_ATTRIBUTE}
    return (
        f'<script type="application/json" id="{RULES_SCRIPT_ID}">{rules_to_json(build_rules(config))}</script>'
        f'<script>{script}</script>'
    )


def compose(config: SiteConfig = DEFAULT_CONFIG, year: Optional[int] = None) -> str:
    """Return the complete HTML document for the site.

    The output depends only on ``config`` and ``year`` (current year when omitted),
    so repeated calls with the same arguments return identical documents.
    """
    year = year if year is not None else date.today().year
    body = join([
        render_header(config),
        render_hero(config),
        render_services(config),
        render_about(),
        render_testimonials(),
        render_faq(),
        render_contact(config),
        render_brochure_anchor(),
        render_footer(year),
    ])
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        f'<title>{esc(content.BRAND_NAME)} | {esc(content.BRAND_TAGLINE)}</title>'
        f"<style>{STYLESHEET}</style></head>"
        f'<body><div class="site">{body}</div>{render_panel_scripts(config)}</body></html>\n'
    )
