"""CLI output styling utilities.

- Cyan bold for section headers
- Green for success messages (with checkmark)
- Dim for neutral/empty state messages
"""

from __future__ import annotations

__all__ = [
    "style_dim",
    "style_header",
    "style_success",
]

import click


def style_header(title: str) -> str:
    """Style a section header as "--- Title ---" in cyan bold."""
    return click.style(f"--- {title} ---", fg="cyan", bold=True)


def style_success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green")


def style_dim(message: str) -> str:
    return click.style(message, dim=True)
