"""Template rendering utilities for consistent Jinja2 rendering across the project."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterator, List, Mapping

from jinja2 import Environment, FileSystemLoader

SCHEMA_REFERENCE_TEMPLATE = "schema_reference.md.jinja2"


def _get_template_directories() -> list[str]:
    """Resolve the template directory bundled with the package."""

    # Base dir is .../rest_schema/file_io
    base_dir = os.path.dirname(os.path.abspath(__file__))
    template_dir = os.path.abspath(os.path.join(base_dir, "../template"))

    if os.path.exists(template_dir):
        return [template_dir]
    return []


def tojson_filter(value):
    """Jinja2 filter to serialize objects to JSON."""

    return json.dumps(value, default=str)


def _walk_description(description: Mapping[str, Any], path: str, required: bool) -> Iterator[Dict[str, Any]]:
    yield {
        "path": path,
        "type": description.get("type"),
        "required": required,
        "description": description.get("description", ""),
    }

    if "items" in description:
        yield from _walk_description(description["items"], f"{path}[]", True)

    required_names = description.get("required") or []
    for name, member in (description.get("properties") or {}).items():
        child_path = f"{path}.{name}" if path else name
        yield from _walk_description(member, child_path, name in required_names)


def flatten_description(description: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Flatten a root object description into one row per nested field.

    Paths use ``.`` between object members and ``[]`` for list items.
    """
    rows: List[Dict[str, Any]] = []
    required_names = description.get("required") or []
    for name, member in (description.get("properties") or {}).items():
        rows.extend(_walk_description(member, name, name in required_names))
    return rows


class TemplateRenderer:
    """Unified template rendering utility."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            template_dirs = _get_template_directories()
        elif isinstance(template_dir, str):
            template_dirs = [template_dir]
        else:
            template_dirs = list(template_dir)

        self.template_dirs = template_dirs
        self.env = Environment(
            loader=FileSystemLoader(self.template_dirs),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=False,
        )
        self.env.filters["tojson"] = tojson_filter

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)

    def render_schema_reference(self, description: Mapping[str, Any], title: str = "Schema reference") -> str:
        """Render a markdown field reference for a root object description."""
        return self.render_template(
            SCHEMA_REFERENCE_TEMPLATE,
            title=title,
            description=description.get("description", ""),
            rows=flatten_description(description),
            schema=description,
        )
