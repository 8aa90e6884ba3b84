#!/usr/bin/env python3
"""
Deployment configuration for the Wealth Vibe one-page site.
Holds the contact affordance targets that vary per deployment.
"""

import json
import re
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse


class ConfigError(Exception):
    """Raised when the site configuration is unreadable or invalid."""


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def normalize_phone(value: str) -> str:
    digits = re.sub(r"\D", "", value or "")
    if not digits:
        return ""
    if len(digits) == 10:
        digits = "1" + digits
    return "+" + digits


def extract_domain(url: str) -> str:
    host = urlparse(url).netloc.lower().split("@")[-1].split(":")[0]
    return host[4:] if host.startswith("www.") else host


@dataclass(frozen=True)
class SiteConfig:
    phone_number: str = "+14129536415"
    scheduling_url: str = "https://calendly.com/your-link"
    contact_email: str = "hello@wealthvibe.co"
    location_label: str = "Wexford, PA • Pittsburgh Metro"
    show_smoke_panel: bool = True

    @property
    def dialable_phone(self) -> str:
        return normalize_phone(self.phone_number)

    @property
    def dial_target(self) -> str:
        return f"tel:{self.dialable_phone}"

    @property
    def phone_display(self) -> str:
        dialable = self.dialable_phone
        # NANP numbers get the familiar (412) 953-6415 form
        if len(dialable) == 12 and dialable.startswith("+1"):
            d = dialable[2:]
            return f"({d[0:3]}) {d[3:6]}-{d[6:]}"
        return dialable

    @property
    def scheduling_domain(self) -> str:
        return extract_domain(self.scheduling_url)

    @property
    def mailto_target(self) -> str:
        return f"mailto:{self.contact_email}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = SiteConfig()

CONFIG_KEYS = tuple(f.name for f in fields(SiteConfig))


def validate_config(config: SiteConfig) -> SiteConfig:
    if not config.dialable_phone:
        raise ConfigError(f"phone_number has no digits: {config.phone_number!r}")
    parsed = urlparse(config.scheduling_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"scheduling_url must be an absolute http(s) URL: {config.scheduling_url!r}")
    if not config.scheduling_domain.strip("."):
        raise ConfigError(f"scheduling_url has no usable host: {config.scheduling_url!r}")
    if not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", config.contact_email or ""):
        raise ConfigError(f"contact_email is not an email address: {config.contact_email!r}")
    if not (config.location_label or "").strip():
        raise ConfigError("location_label must not be empty")
    return config


def parse_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(read_text(path))
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid JSON: {exc}")
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    if "show_smoke_panel" in data and not isinstance(data["show_smoke_panel"], bool):
        raise ConfigError("show_smoke_panel must be true or false")
    for key in CONFIG_KEYS:
        if key != "show_smoke_panel" and key in data and not isinstance(data[key], str):
            raise ConfigError(f"{key} must be a string")
    return data


def load_config(
    path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    base: SiteConfig = DEFAULT_CONFIG,
) -> SiteConfig:
    """Build a validated config from defaults, an optional JSON file and explicit overrides.

    Overrides whose value is None are ignored, so argparse namespaces can be passed through.
    """
    values: Dict[str, Any] = {}
    if path:
        values.update(parse_config_file(Path(path)))
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key not in CONFIG_KEYS:
            raise ConfigError(f"Unknown config key: {key}")
        values[key] = value
    return validate_config(replace(base, **values))
