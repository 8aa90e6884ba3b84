#!/usr/bin/env python3
"""
Fixed page copy for the Wealth Vibe site.
Every record here is immutable and known at import time.
"""

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple


REQUIRED_REGIONS = ("services", "about", "testimonials", "faq", "contact")
MIN_SERVICE_PILLARS = 3


class ContentError(Exception):
    """Raised when the static page content has an authoring defect."""

    def __init__(self, defects: List[str]):
        self.defects = list(defects)
        super().__init__("; ".join(self.defects))


@dataclass(frozen=True)
class ContentBlock:
    anchor: str
    icon: str
    title: str
    bullets: Tuple[str, ...]


@dataclass(frozen=True)
class Stat:
    value: str
    label: str


@dataclass(frozen=True)
class CalloutCard:
    icon: str
    title: str
    body: str
    action_label: str
    # "contact" points at the contact region, "schedule" at the booking service
    action: str


@dataclass(frozen=True)
class Question:
    question: str
    answer: str


BRAND_NAME = "Wealth Vibe"
BRAND_INITIALS = "WV"
BRAND_TAGLINE = "No family left behind"

NAV_LINKS = (
    ("services", "Services"),
    ("about", "About"),
    ("testimonials", "Results"),
    ("faq", "FAQ"),
    ("contact", "Contact"),
)

FOOTER_LINKS = (
    ("services", "Services"),
    ("about", "About"),
    ("faq", "FAQ"),
    ("contact", "Contact"),
)

HERO_HEADLINE = "Live with purpose."
HERO_HIGHLIGHT = "Build wealth with clarity."
HERO_LEAD = (
    "Personalized protection, savings, and legacy planning for families and entrepreneurs. "
    "Creating wealth. Building futures."
)
HERO_VISUAL_LABEL = "Your Logo / Visual"

STATS = (
    Stat("40+", "Families guided"),
    Stat("3", "Core service pillars"),
    Stat("1:1", "Tailored strategies"),
)

SERVICES_TITLE = "What we do"
SERVICES_LEAD = "Simple, transparent strategies across protection, wealth, and legacy."

SERVICE_PILLARS = (
    ContentBlock(
        anchor="protection",
        icon="shield",
        title="Protection & Security",
        bullets=(
            "Notary Services",
            "Term & Mortgage Protection Insurance",
            "Long-Term Care & Social Security Guidance",
            "Visitor Insurance – when family/parents visit the USA",
            "Life Insurance (incl. IUL strategies)",
        ),
    ),
    ContentBlock(
        anchor="wealth",
        icon="piggy",
        title="Wealth & Savings",
        bullets=(
            "Medicare & ACA Health Plans",
            "Kids’ College Savings & Planning",
            "Tax Optimization Strategies",
            "Investment Solutions",
            "Social Security Analysis – find the right start time",
        ),
    ),
    ContentBlock(
        anchor="legacy",
        icon="landmark",
        title="Legacy & Planning",
        bullets=(
            "Estate Planning Essentials (Will & Trust awareness)",
            "Beneficiary reviews & account titling",
            "NetLaw planning package guidance",
            "Coordination with your attorney & CPA",
        ),
    ),
)

CALLOUTS = (
    CalloutCard(
        icon="heart-hs",
        title="Our promise",
        body="We meet you where you are. Advice first, products second. No pressure—ever.",
        action_label="Talk to a human",
        action="contact",
    ),
    CalloutCard(
        icon="calendar",
        title="Free 15-min clarity call",
        body="Bring your questions on college funding, IUL, Medicare, or estate basics. Leave with next steps.",
        action_label="Book now",
        action="schedule",
    ),
)

ABOUT_TITLE = "Why Wealth Vibe?"
ABOUT_LEAD = (
    "We’re a boutique financial wellness agency serving families, professionals, and community leaders. "
    "Our approach blends education with actionable plans—so you can protect today, grow tomorrow, "
    "and preserve your legacy."
)
ABOUT_POINTS = (
    "Transparent, client-first guidance",
    "Integrated view across protection, savings, and legacy",
    "Community-driven: workshops, youth financial literacy, and more",
)
FOUNDER_TITLE = "Founder"
FOUNDER_BIO = (
    "Ramdas Mayya — educator, organizer, and coach. Passionate about empowering families "
    "with clear, values-driven money decisions."
)

TESTIMONIALS_TITLE = "Community impact"
TESTIMONIALS_LEAD = "Real stories from families we’ve guided."
TESTIMONIAL_ATTRIBUTION = "Pittsburgh Family"
TESTIMONIALS = (
    "Straightforward, no-pressure guidance. We finally organized our insurance and college plan.",
    "Clear explanations and next steps—made a complex topic simple.",
    "Thoughtful planning that respects our values and goals.",
)

FAQ_TITLE = "Questions, meet answers"
FAQ = (
    Question("Do you charge for the first meeting?", "No—your initial clarity call is complimentary."),
    Question(
        "Do I need an attorney for estate basics?",
        "We explain the essentials and options (e.g., NetLaw). For complex needs, we coordinate with your attorney.",
    ),
    Question("Can you help compare IUL vs. Term?", "Yes—we outline pros/cons and align coverage with your goals and budget."),
    Question(
        "Do you offer workshops?",
        "Yes—community sessions on college planning, Medicare, Social Security timing, and more.",
    ),
)

CONTACT_TITLE = "Let’s talk"
CONTACT_LEAD = "Call, email, or message us—whatever’s easiest for you."

BROCHURE_PLACEHOLDER = "Brochure download placeholder"

FOOTER_MISSION = (
    "Live with purpose, love without condition, learn without end, act with discipline, and embrace change."
)
COMPLIANCE_NOTE = (
    "This site is for education only. Products and availability vary by state. "
    "Consult a licensed professional before making decisions."
)


def find_defects(
    pillars: Sequence[ContentBlock] = SERVICE_PILLARS,
    reserved_anchors: Sequence[str] = REQUIRED_REGIONS + ("brochure",),
) -> List[str]:
    defects: List[str] = []
    if len(pillars) < MIN_SERVICE_PILLARS:
        defects.append(f"expected at least {MIN_SERVICE_PILLARS} service pillars, found {len(pillars)}")
    for block in pillars:
        if not block.anchor:
            defects.append(f"service pillar '{block.title}' has no anchor")
        if not block.title.strip():
            defects.append(f"service pillar '{block.anchor}' has no title")
        if not block.bullets:
            defects.append(f"service pillar '{block.anchor}' has an empty bullet list")
        elif any(not b.strip() for b in block.bullets):
            defects.append(f"service pillar '{block.anchor}' has a blank bullet")
    counts = Counter(list(reserved_anchors) + [b.anchor for b in pillars if b.anchor])
    for anchor, count in sorted(counts.items()):
        if count > 1:
            defects.append(f"anchor '{anchor}' is used {count} times")
    return defects


def validate_content(pillars: Sequence[ContentBlock] = SERVICE_PILLARS) -> None:
    defects = find_defects(pillars)
    if defects:
        raise ContentError(defects)
