"""Jinja2 environment for the TypeScript templates in ``generator/templates``."""

from __future__ import annotations

import functools
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


TEMPLATE_DIR = Path(__file__).parent / "templates"


@functools.lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Return the shared Jinja2 environment.

    ``trim_blocks`` and ``lstrip_blocks`` keep block tags from leaving blank
    lines in the output. Autoescaping is off for ``.ts.j2`` templates since
    the output is source code, not markup. Undefined variables raise.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2",), default=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_template(template_name: str, **context: object) -> str:
    """Render *template_name* with *context* and return the text."""
    return get_environment().get_template(template_name).render(**context)
