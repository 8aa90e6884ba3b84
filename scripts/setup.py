#!/usr/bin/env python3
"""
Setup script for the Wealth Vibe site builder.
Installs the project with its dependencies and the Chromium browser
used by `build_site.py verify`.

Usage:
    python scripts/setup.py                  # runtime dependencies + Chromium
    python scripts/setup.py --dev            # also pytest / pytest-asyncio
    python scripts/setup.py --skip-browser   # no Chromium; `verify --static` only
"""

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence


PROJECT_ROOT = Path(__file__).resolve().parent.parent


def install_steps(dev: bool, skip_browser: bool) -> List[tuple]:
    target = f"{PROJECT_ROOT}[test]" if dev else str(PROJECT_ROOT)
    label = "site builder with test tools" if dev else "site builder"
    steps = [([sys.executable, "-m", "pip", "install", "-e", target], f"Installing {label}")]
    if not skip_browser:
        steps.append(([sys.executable, "-m", "playwright", "install", "chromium"], "Installing Chromium browser"))
    return steps


def run_command(cmd: Sequence[str], description: str) -> bool:
    """Run one install step and report status."""
    print(f"\n📦 {description}...")
    try:
        result = subprocess.run(list(cmd), check=True, capture_output=True, text=True)
    except (subprocess.CalledProcessError, OSError) as e:
        print(f"❌ {description} failed")
        stderr = getattr(e, "stderr", None) or str(e)
        print(stderr)
        return False
    print(f"✅ {description} completed")
    if result.stdout:
        print(result.stdout)
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Install the Wealth Vibe site builder")
    parser.add_argument("--dev", action="store_true", help="Also install the test extra (pytest, pytest-asyncio)")
    parser.add_argument(
        "--skip-browser",
        action="store_true",
        help="Do not download Chromium; only `verify --static` will work",
    )
    args = parser.parse_args(argv)

    print("🚀 Setting up the Wealth Vibe site builder...")

    if sys.version_info < (3, 8):
        print("❌ Python 3.8+ required")
        return 1

    for cmd, description in install_steps(args.dev, args.skip_browser):
        if not run_command(cmd, description):
            return 1

    print("\n✅ Setup complete! You can now run:")
    print("   python scripts/build_site.py build --output ./site-output")
    if args.skip_browser:
        print("   python scripts/build_site.py verify --static")
    else:
        print("   python scripts/build_site.py verify --screenshot")
    if args.dev:
        print("   pytest")
    else:
        print("   (re-run with --dev to install the test tools)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
