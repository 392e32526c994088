"""Tests for template rendering of invoices and the route report."""
from __future__ import annotations

import datetime as dt

import pytest
from jinja2 import DictLoader

from staytrail.core.exceptions import TemplateFieldError
from staytrail.models.schemas.reporting import InvoiceData
from staytrail.models.schemas.routes import RouteRecord
from staytrail.services.documents.renderer import (
    INVOICE_FIELDS,
    DocumentTemplate,
    build_environment,
    invoice_template,
    render_invoice_html,
    render_routes_html,
    route_row,
)
from staytrail.services.reporting.aggregation import to_booking_detail
from staytrail.services.reporting.invoice_builder import build_invoice_data

NOW = dt.datetime(2025, 3, 7, 10, 0, tzinfo=dt.timezone.utc)


def _template(source: str, fields) -> DocumentTemplate:
    env = build_environment(DictLoader({"doc.html": source}))
    return DocumentTemplate("doc.html", fields, env=env)


def _invoice(**overrides) -> InvoiceData:
    values = {name: f"v-{name}" for name in INVOICE_FIELDS}
    values.update(overrides)
    return InvoiceData(**values)


def test_invoice_template_declares_exactly_the_invoice_fields():
    assert invoice_template().referenced_fields == INVOICE_FIELDS
    assert len(INVOICE_FIELDS) == 17


def test_every_occurrence_is_substituted():
    html = render_invoice_html(_invoice(accommodation_name="Cabaña Azul", total_price="116.00"))
    assert html.count("Cabaña Azul") == 2
    assert html.count("$ 116.00") == 2
    assert "{{" not in html


def test_missing_and_empty_fields_render_na():
    tpl = _template("<p>{{ a }}|{{ b }}|{{ c }}</p>", {"a", "b", "c"})
    assert tpl.render({"a": "x", "b": ""}) == "<p>x|N/A|N/A</p>"
    assert tpl.render({"a": None}) == "<p>N/A|N/A|N/A</p>"


def test_undeclared_keys_are_ignored():
    tpl = _template("{{ a }}", {"a"})
    assert tpl.render({"a": "1", "other": "2"}) == "1"


def test_prefix_names_do_not_collide():
    tpl = _template("{{ total }}/{{ total_price }}", {"total", "total_price"})
    assert tpl.render({"total": "A", "total_price": "B"}) == "A/B"


def test_template_with_unknown_field_is_rejected():
    with pytest.raises(TemplateFieldError) as excinfo:
        _template("{{ user_name }} {{ secret }}", {"user_name"})
    assert excinfo.value.code == "RPT004"
    assert excinfo.value.details["unknown_fields"] == ["secret"]


def test_values_escaped_exactly_once():
    html = render_invoice_html(_invoice(user_name="<b>Tom & Jerry</b>"))
    assert "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;" in html
    assert "&amp;amp;" not in html
    assert "<b>Tom" not in html


def test_output_is_byte_identical(record_factory):
    detail = to_booking_detail(record_factory())
    invoice = build_invoice_data(detail, now=NOW)
    assert render_invoice_html(invoice) == render_invoice_html(invoice)


def test_invoice_shows_tax_line(record_factory):
    detail = to_booking_detail(record_factory(total_price="116.00"))
    html = render_invoice_html(build_invoice_data(detail, now=NOW))
    assert "IVA (16%)" in html
    assert "$ 100.00" in html
    assert "$ 16.00" in html


def _route(**overrides) -> RouteRecord:
    values = dict(
        id="r1",
        name="Sendero <Norte>",
        description="Bosque & río",
        distance=12.0,
        difficulty="moderate",
        estimated_time=135,
        start_location="Valle",
        end_location="Cumbre",
    )
    values.update(overrides)
    return RouteRecord(**values)


def test_route_row_formats_fields():
    row = route_row(_route())
    assert row == {
        "name": "Sendero &lt;Norte&gt;",
        "description": "Bosque &amp; río",
        "distance": "12 km",
        "difficulty": "Moderado",
        "estimated_time": "2h 15m",
        "start_location": "Valle",
        "end_location": "Cumbre",
    }


def test_route_row_edge_values():
    row = route_row(_route(distance=7.5, difficulty="Extreme", estimated_time=None, description=None))
    assert row["distance"] == "7.5 km"
    assert row["difficulty"] == "Extreme"
    assert row["estimated_time"] == "N/A"
    assert row["description"] == "N/A"


def test_route_row_missing_locations_render_na():
    row = route_row(_route(description="  ", start_location=None, end_location=""))
    assert row["description"] == "N/A"
    assert row["start_location"] == "N/A"
    assert row["end_location"] == "N/A"


def test_routes_report_has_no_empty_cells():
    html = render_routes_html([RouteRecord(id="r1", name="Uno", distance=3.0, difficulty="easy")])
    assert "<td></td>" not in html
    assert "<td>Uno</td>" in html
    assert html.count("<td>N/A</td>") == 4


def test_difficulty_labels():
    labels = [
        route_row(_route(difficulty=value))["difficulty"]
        for value in ("easy", "moderate", "hard", "expert")
    ]
    assert labels == ["Fácil", "Moderado", "Difícil", "Experto"]


def test_routes_report_one_row_per_route():
    html = render_routes_html([_route(id="r1", name="Uno"), _route(id="r2", name="Dos")])
    assert html.count("<tr>") == 3  # header + two rows
    assert html.index("Uno") < html.index("Dos")
    assert "Sendero" not in html


def test_routes_report_empty():
    for routes in (None, []):
        html = render_routes_html(routes)
        assert html.count("<tr>") == 1
        assert "Reporte de Rutas" in html
