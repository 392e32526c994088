"""HTML document rendering.

Templates are Jinja2 files under ``staytrail/templates``. Each template is
bound to a closed set of field names, checked when the template is loaded.
Values are escaped by the caller (exactly once), so autoescaping is off.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path

from jinja2 import BaseLoader, Environment, FileSystemLoader, Undefined, meta

from staytrail import metrics
from staytrail.core.exceptions import TemplateFieldError
from staytrail.models.models import RouteDifficulty
from staytrail.models.schemas.reporting import InvoiceData
from staytrail.models.schemas.routes import RouteRecord
from staytrail.utils.formatting import fmt_duration, fmt_number
from staytrail.utils.html import escape_html

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
MISSING_VALUE = "N/A"

INVOICE_TEMPLATE = "invoice.html"
INVOICE_FIELDS: frozenset[str] = frozenset(InvoiceData.model_fields)

ROUTES_TEMPLATE = "routes_report.html"
ROUTES_FIELDS: frozenset[str] = frozenset({"rows"})

DIFFICULTY_LABELS: dict[RouteDifficulty, str] = {
    RouteDifficulty.EASY: "Fácil",
    RouteDifficulty.MODERATE: "Moderado",
    RouteDifficulty.HARD: "Difícil",
    RouteDifficulty.EXPERT: "Experto",
}


class FallbackUndefined(Undefined):
    """Missing placeholders render as ``N/A`` instead of an empty string."""

    __slots__ = ()

    def __str__(self) -> str:
        return MISSING_VALUE


def build_environment(loader: BaseLoader | None = None) -> Environment:
    return Environment(
        loader=loader or FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=FallbackUndefined,
        keep_trailing_newline=True,
    )


class DocumentTemplate:
    """A template plus the closed set of fields it may reference."""

    def __init__(self, name: str, fields: Iterable[str], env: Environment | None = None) -> None:
        self.name = name
        self.fields = frozenset(fields)
        self._env = env or build_environment()
        source, _, _ = self._env.loader.get_source(self._env, name)  # type: ignore[union-attr]
        referenced = meta.find_undeclared_variables(self._env.parse(source))
        unknown = sorted(referenced - self.fields)
        if unknown:
            raise TemplateFieldError(name, unknown)
        self.referenced_fields = frozenset(referenced)
        self._template = self._env.get_template(name)

    def render(self, data: Mapping[str, object]) -> str:
        """Substitute every placeholder in one pass.

        Keys outside the declared field set are ignored; ``None`` and empty
        values fall back to ``N/A``.
        """
        context = {
            key: value
            for key, value in data.items()
            if key in self.fields and value is not None and value != ""
        }
        started = time.perf_counter()
        html = self._template.render(**context)
        metrics.document_render_observe(self.name, time.perf_counter() - started)
        return html


@lru_cache
def invoice_template() -> DocumentTemplate:
    return DocumentTemplate(INVOICE_TEMPLATE, INVOICE_FIELDS)


@lru_cache
def routes_template() -> DocumentTemplate:
    return DocumentTemplate(ROUTES_TEMPLATE, ROUTES_FIELDS)


def invoice_fields(invoice: InvoiceData) -> dict[str, str]:
    """Escape every invoice value once, ready for substitution."""
    return {name: escape_html(value) for name, value in invoice.model_dump().items()}


def render_invoice_html(invoice: InvoiceData) -> str:
    return invoice_template().render(invoice_fields(invoice))


def difficulty_label(route: RouteRecord) -> str:
    return DIFFICULTY_LABELS.get(route.difficulty_level, route.difficulty)


def cell(value: str | None) -> str:
    """Escape one table value; missing or blank values become ``N/A``."""
    if value is None or not str(value).strip():
        return MISSING_VALUE
    return escape_html(value)


def route_row(route: RouteRecord) -> dict[str, str]:
    """One table row; every user-supplied value escaped independently."""
    return {
        "name": cell(route.name),
        "description": cell(route.description),
        "distance": f"{fmt_number(route.distance)} km",
        "difficulty": cell(difficulty_label(route)),
        "estimated_time": fmt_duration(route.estimated_time),
        "start_location": cell(route.start_location),
        "end_location": cell(route.end_location),
    }


def render_routes_html(routes: Iterable[RouteRecord] | None) -> str:
    rows = [route_row(route) for route in routes or ()]
    logger.debug("Rendering route report with %d rows", len(rows))
    return routes_template().render({"rows": rows})
