"""Human readable templates for ``log_event``, keyed by ``(domain, action)``."""

from __future__ import annotations

import json
from pathlib import Path

TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _read_templates(path: Path) -> dict[tuple[str, str], str]:
    try:
        catalog = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {("app", "load_error"): f"Event templates not found at {path}"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Unreadable event templates: {e}"[:200]}
    if not isinstance(catalog, dict):
        return {("app", "load_error"): "Event templates must be a JSON object"}
    return {
        (domain, action): text
        for domain, actions in catalog.items()
        if isinstance(actions, dict)
        for action, text in actions.items()
        if isinstance(text, str)
    }


def reload_event_templates(path: Path | None = None) -> None:
    """Re-read the catalog in place; unreadable files leave a single ``app/load_error`` entry."""
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(_read_templates(path or TEMPLATES_PATH))


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "TEMPLATES_PATH", "reload_event_templates"]
