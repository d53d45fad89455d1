"""
saptuner visual design system.

All colors, styles, labels and icons as named constants.
Import from here — never hardcode markup strings in other modules.
"""

from rich.style import Style
from rich.theme import Theme

from saptuner import __version__
from saptuner.orchestrator import ActivationState


# ── Brand ─────────────────────────────────────────────────────────────────────

APP_NAME = "saptuner"
APP_TAGLINE = "SAP system tuning with saptune and sapconf"
APP_VERSION = __version__


# ── Color palette ─────────────────────────────────────────────────────────────

COLOR_CRITICAL = "#E05252"      # Warm severity red
COLOR_WARNING  = "#D4870A"      # Amber
COLOR_PASS     = "#4DBD74"      # Calm sage-green
COLOR_INFO     = "#5BA3C9"      # Slate blue
COLOR_BRAND    = "#7B9FD4"      # Periwinkle blue
COLOR_DIM      = "#787878"      # Medium gray
COLOR_COMMAND  = "#C0C0C0"      # Light silver
COLOR_TEXT     = "#F0F0F0"      # Primary text


# ── Rich styles ───────────────────────────────────────────────────────────────

STYLE_CRITICAL = Style(color=COLOR_CRITICAL, bold=True)
STYLE_WARNING  = Style(color=COLOR_WARNING,  bold=True)
STYLE_PASS     = Style(color=COLOR_PASS,     bold=True)
STYLE_INFO     = Style(color=COLOR_INFO)
STYLE_DIM      = Style(color=COLOR_DIM)


# ── Icons ─────────────────────────────────────────────────────────────────────

ICON_PASS = "✅"
ICON_WARNING = "⚠️ "
ICON_ERROR = "❌"


# ── saptune state labels ──────────────────────────────────────────────────────
# (daemon status, configuration status) per state

STATE_LABELS: dict[ActivationState, tuple[str, str]] = {
    ActivationState.ACTIVE:         ("Running", "Present"),
    ActivationState.STOPPED:        ("Not Running", "Unknown"),
    ActivationState.NOT_CONFIGURED: ("Running", "Absent"),
    ActivationState.NOT_TUNED:      ("Running", "No solution applied"),
    ActivationState.UNKNOWN:        ("Unknown", "Unknown"),
}

STATE_STYLES: dict[ActivationState, Style] = {
    ActivationState.ACTIVE:         STYLE_PASS,
    ActivationState.STOPPED:        STYLE_WARNING,
    ActivationState.NOT_CONFIGURED: STYLE_WARNING,
    ActivationState.NOT_TUNED:      STYLE_WARNING,
    ActivationState.UNKNOWN:        STYLE_DIM,
}


# ── Rich Theme ────────────────────────────────────────────────────────────────

SAPTUNER_THEME = Theme(
    {
        "critical": f"{COLOR_CRITICAL} bold",
        "warning":  f"{COLOR_WARNING} bold",
        "pass":     f"{COLOR_PASS} bold",
        "info":     COLOR_INFO,
        "brand":    f"{COLOR_BRAND} bold",
        "dim":      COLOR_DIM,
        "command":  COLOR_COMMAND,
        "text":     COLOR_TEXT,
    }
)
