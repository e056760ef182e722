"""Endpoint path templates with ``{{.Field}}`` placeholders."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass

from wavely.data import Job, WavelyConfig

_ACTION = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)
_FIELD = re.compile(r"\s*\.([A-Za-z_][A-Za-z0-9_]*)\s*")
_JOB_FIELDS = {"UID": "uid", "Data": "data", "ContentType": "content_type"}


class TemplateError(Exception):
    """Raised for malformed templates or failed rendering."""


@dataclass(frozen=True)
class EndpointTemplate:
    """A parsed template: ("text", literal) and ("field", name) parts."""

    name: str
    parts: tuple[tuple[str, str], ...]

    def render(self, job: Job) -> str:
        out = []
        for kind, value in self.parts:
            if kind == "text":
                out.append(value)
            elif value in _JOB_FIELDS:
                out.append(html.escape(str(getattr(job, _JOB_FIELDS[value]))))
            else:
                raise TemplateError(
                    f"template: {self.name}: can't evaluate field {value} in type Job")
        return "".join(out)


def parse_template(name: str, text: str) -> EndpointTemplate:
    pieces = _ACTION.split(text)
    if "{{" in pieces[-1]:
        raise TemplateError(f"template: {name}: unclosed action")
    parts: list[tuple[str, str]] = []
    for i, piece in enumerate(pieces):
        if i % 2 == 0:
            if piece:
                parts.append(("text", piece))
            continue
        found = _FIELD.fullmatch(piece)
        if found is None:
            raise TemplateError(f"template: {name}: unsupported action {{{{{piece}}}}}")
        parts.append(("field", found.group(1)))
    return EndpointTemplate(name, tuple(parts))


def prepare_templates(cfg: WavelyConfig) -> None:
    """Parse the endpoint templates of ``cfg.current`` and store them on it."""
    current = cfg.current
    for kind in ("check", "revision", "write"):
        try:
            tpl = parse_template(kind, getattr(current.endpoints, kind))
        except TemplateError as exc:
            raise TemplateError(
                f"error in {kind} endpoint template [{current.name}]: {exc}") from exc
        setattr(current, f"parsed_{kind}_tpl", tpl)


def render_endpoint(tpl: EndpointTemplate, job: Job) -> str:
    return tpl.render(job)