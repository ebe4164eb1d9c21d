"""Jinja2 email template loading and rendering."""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from legalconsult.notification.errors import RenderError, TemplateResolutionError


def default_template_dir() -> Path:
    return Path(__file__).resolve().parent / "email_templates"


class TemplateRenderer:
    """Load templates by file name from *template_dir* and render them to strings."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else default_template_dir()
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
        )

    def get_template(self, name: str) -> Template:
        try:
            return self.env.get_template(name)
        except TemplateNotFound as exc:
            raise TemplateResolutionError(f"Template {name!r} not found in {self.template_dir}") from exc
        except TemplateError as exc:
            raise TemplateResolutionError(f"Template {name!r} could not be loaded: {exc}") from exc

    def render(self, template: Template, model: Mapping[str, str]) -> str:
        try:
            return template.render(**model)
        except TemplateError as exc:
            raise RenderError(f"Template {template.name!r} failed to render: {exc}") from exc
