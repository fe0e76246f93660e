"""Inventory HTML renderer."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, TemplateError, select_autoescape

from license_report.constants import LEGAL_DISCLAIMER
from license_report.exceptions import RenderError
from license_report.models.policy import Verdict
from license_report.models.report import Report
from license_report.output.base import ReportRenderer

env = Environment(autoescape=select_autoescape(["html", "xml"], default_for_string=True))

_TEMPLATE = env.from_string(
    """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{{ project_name }} Third Party Dependency License Report</title>
  <style>
    body { font-family: Arial, sans-serif; margin: 2rem; }
    h1, h2, h3 { color: #1f2937; }
    table { border-collapse: collapse; width: 100%; margin-bottom: 1.5rem; }
    th, td { border: 1px solid #d1d5db; padding: 0.5rem; vertical-align: top; }
    th { background: #f3f4f6; text-align: left; }
    .badge { display: inline-block; padding: 0.2rem 0.5rem; border-radius: 0.4rem; font-weight: 600; }
    .badge.allowed { background: #d1fae5; color: #065f46; }
    .badge.violation { background: #fee2e2; color: #991b1b; }
    .badge.unknown { background: #fef3c7; color: #92400e; }
    .disclaimer { font-size: 0.85rem; color: #6b7280; }
  </style>
</head>
<body>
  <h1>{{ project_name }}</h1>
  <p>Generated at: {{ generated_at }}</p>
  <p>
    {{ total }} dependencies:
    <span class="badge allowed">{{ allowed }} allowed</span>
    <span class="badge violation">{{ violations }} violations</span>
    <span class="badge unknown">{{ unknowns }} unknown</span>
  </p>
  <p class="disclaimer">{{ disclaimer }}</p>
  <section>
    <h2>License inventory</h2>
    <table>
      <thead><tr><th>License</th><th>Dependencies</th></tr></thead>
      <tbody>
        {% for entry in inventory %}
        <tr>
          <td>{% if entry.url %}<a href="{{ entry.url }}">{{ entry.name }}</a>{% else %}{{ entry.name }}{% endif %} ({{ entry.id }})</td>
          <td>{{ entry.modules | join(", ") }}</td>
        </tr>
        {% endfor %}
      </tbody>
    </table>
  </section>
  <section>
    <h2>{{ title }}</h2>
    {% for scope, rows in scopes %}
    <h3>{{ scope }}</h3>
    <table>
      <thead><tr><th>Library</th><th>Version</th><th>Group</th><th>License</th><th>Verdict</th><th>Origin</th><th>Library URL</th></tr></thead>
      <tbody>
        {% for row in rows %}
        <tr>
          <td>{{ row.name }}</td>
          <td>{{ row.version }}</td>
          <td>{{ row.group }}</td>
          <td>
            {% for lic in row.licenses %}
              {% if lic.url %}<a href="{{ lic.url }}">{{ lic.name }}</a>{% else %}{{ lic.name }}{% endif %}{% if not loop.last %}<br />{% endif %}
            {% else %}
              Unknown
            {% endfor %}
          </td>
          <td><span class="badge {{ row.outcome }}">{{ row.outcome }}</span>{% if row.reason %} {{ row.reason }}{% endif %}</td>
          <td>{{ row.origin }}{% if row.import_source %} ({{ row.import_source }}){% endif %}</td>
          <td>{% if row.url %}<a href="{{ row.url }}">{{ row.url }}</a>{% endif %}</td>
        </tr>
        {% endfor %}
      </tbody>
    </table>
    {% endfor %}
  </section>
  {% if warnings %}
  <section>
    <h2>Warnings</h2>
    <ul>
      {% for warning in warnings %}<li>{{ warning }}</li>{% endfor %}
    </ul>
  </section>
  {% endif %}
</body>
</html>
"""
)


def _row(verdict: Verdict) -> dict[str, Any]:
    dep = verdict.dependency
    return {
        "name": dep.name,
        "version": dep.version,
        "group": dep.group,
        "url": dep.url,
        "licenses": [
            {"name": lic.name, "url": lic.url} for lic in verdict.licenses
        ],
        "outcome": verdict.outcome.value,
        "reason": verdict.reason,
        "origin": dep.origin.value,
        "import_source": dep.import_source,
    }


class InventoryHtmlRenderer(ReportRenderer):
    """Human-readable HTML inventory grouped by license and by scope."""

    name = "inventory-html"

    def __init__(self, output_path: Path, title: str = "Dependencies") -> None:
        super().__init__(output_path)
        self.title = title

    def render(self, report: Report) -> str:
        inventory = []
        for license_id, verdicts in report.license_inventory().items():
            canonical = next(
                (lic for v in verdicts for lic in v.licenses if lic.id == license_id),
                None,
            )
            inventory.append(
                {
                    "id": license_id,
                    "name": canonical.name if canonical and not canonical.is_unknown else license_id,
                    "url": canonical.url if canonical else None,
                    "modules": sorted({v.dependency.module_id for v in verdicts}),
                }
            )

        try:
            return _TEMPLATE.render(
                project_name=report.metadata.project_name,
                generated_at=report.metadata.generated_at.isoformat(),
                title=self.title,
                total=report.total_dependencies,
                allowed=len(report.allowed),
                violations=len(report.violations),
                unknowns=len(report.unknowns),
                disclaimer=LEGAL_DISCLAIMER,
                inventory=inventory,
                scopes=[
                    (scope, [_row(v) for v in verdicts])
                    for scope, verdicts in report.by_scope().items()
                ],
                warnings=report.metadata.warnings,
            )
        except TemplateError as e:
            raise RenderError(f"Cannot render HTML inventory: {e}") from e
