"""Jinja2 rendering for generated course documents."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined


def _get_template_directories() -> list[str]:
    """Templates bundled in-package, next to the generator."""

    base_dir = Path(__file__).resolve().parent.parent
    template_dir = base_dir / "generator" / "templates"
    return [str(template_dir)] if template_dir.is_dir() else []


def md_cell(value) -> str:
    """Jinja2 filter making a value safe inside a Markdown table cell."""

    if value is None:
        return ""
    return " ".join(str(value).split()).replace("|", "\\|")


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
            undefined=StrictUndefined,
            autoescape=False,
        )
        self.env.filters["md_cell"] = md_cell

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)

