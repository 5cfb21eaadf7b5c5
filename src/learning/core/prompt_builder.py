"""
Prompt templating for the advisor prompts. Templates use str.format placeholders;
literal braces in JSON examples must be doubled.
"""

from __future__ import annotations

from typing import Any, Iterable


class _BlankForMissing(dict):
    def __missing__(self, key: str) -> str:
        return ""


def build_from_template(template: str, **kwargs: Any) -> str:
    """Fill `template`; placeholders that are missing or None render as empty strings."""
    if not template:
        return ""
    values = _BlankForMissing((k, v) for k, v in kwargs.items() if v is not None)
    return template.format_map(values)


def join_or_default(items: Iterable[str], default: str, sep: str = ", ") -> str:
    """Join the non-blank strings in `items`, or return `default` when there are none."""
    cleaned = [s.strip() for s in items if isinstance(s, str) and s.strip()]
    return sep.join(cleaned) if cleaned else default
