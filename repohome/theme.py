"""Shared visual constants and helpers for repohome."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

# ── Color Palette (GitHub Dark + Neon Accents) ──────────────────────────

SURFACE = "#161b22"
MUTED = "#8b949e"

CYAN = "#58a6ff"
GREEN = "#39d353"
YELLOW = "#e3b341"
RED = "#f85149"

# ── ASCII Banner ────────────────────────────────────────────────────────

BANNER = r"""
  _ __ ___ _ __   ___ | |__   ___  _ __ ___   ___
 | '__/ _ \ '_ \ / _ \| '_ \ / _ \| '_ ` _ \ / _ \
 | | |  __/ |_) | (_) | | | | (_) | | | | | |  __/
 |_|  \___| .__/ \___/|_| |_|\___/|_| |_| |_|\___|
          |_|"""

TAGLINE = "every clone in its place"


def error_text(message: str) -> Text:
    """Render a one-line error for stderr."""
    text = Text()
    text.append("error: ", style=Style(color=RED, bold=True))
    text.append(message)
    return text


def render_banner() -> Text:
    """Render the repohome ASCII banner as styled Rich Text."""
    text = Text(justify="center")
    for line in BANNER.strip("\n").split("\n"):
        text.append(line + "\n", style=Style(color=GREEN, bold=True))
    text.append(f"  {TAGLINE}\n", style=Style(color=MUTED, italic=True))
    return text
