# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Packaged structure documents.

Templates live in src/fmrctl/templates/. The only placeholder they take is the
message header's ``prepared`` timestamp.
"""

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


def format_prepared(prepared: datetime | None = None) -> str:
    """SDMX header timestamp, e.g. 2025-02-14T12:25:49Z."""
    if prepared is None:
        prepared = datetime.now(timezone.utc)
    elif prepared.tzinfo is not None:
        prepared = prepared.astimezone(timezone.utc)
    return prepared.strftime("%Y-%m-%dT%H:%M:%SZ")


def list_templates() -> list[str]:
    return sorted(path.name for path in TEMPLATE_DIR.glob("*.j2"))


def render_structure_template(name: str, prepared: datetime | None = None) -> str:
    """Render a packaged structure document.

    Args:
        name: Template file name (e.g. sdmx_exr_structures.xml.j2)
        prepared: Header timestamp (default: now, UTC)

    Returns:
        The XML document as a string
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    template = env.get_template(name)
    return template.render(prepared=format_prepared(prepared))
