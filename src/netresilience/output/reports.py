"""Resilience report generation."""

import json
import logging
from datetime import datetime
from pathlib import Path

from jinja2 import Template

from ..analysis.critical import AnalysisResult, analyze_critical_structures
from ..analysis.paths import PathResult
from ..analysis.recovery import RecoveryResult, plan_recovery
from ..core.config import get_config
from ..core.exceptions import ValidationError
from ..core.utils import ensure_results_dir, euclidean_distance
from ..topology.metrics import TopologyMetrics, calculate_metrics
from ..topology.models import Graph, NodeId

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("html", "md", "json")

HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            line-height: 1.6; color: #333; max-width: 1200px;
            margin: 0 auto; padding: 20px; background: #f5f5f5;
        }
        .header {
            background: linear-gradient(135deg, #8b5cf6 0%, #3b82f6 100%);
            color: white; padding: 30px; border-radius: 10px; margin-bottom: 20px;
        }
        .header h1 { font-size: 2em; margin-bottom: 10px; }
        .header .meta { opacity: 0.9; font-size: 0.9em; }
        .card {
            background: white; border-radius: 10px; padding: 20px;
            margin-bottom: 20px; box-shadow: 0 2px 10px rgba(0,0,0,0.1);
        }
        .card h2 {
            color: #8b5cf6; border-bottom: 2px solid #eee;
            padding-bottom: 10px; margin-bottom: 15px;
        }
        .summary-grid {
            display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
            gap: 15px;
        }
        .summary-item {
            background: #f8f9fa; padding: 15px; border-radius: 8px; text-align: center;
        }
        .summary-item .value { font-size: 2em; font-weight: bold; color: #8b5cf6; }
        .summary-item .label { color: #666; font-size: 0.9em; }
        table { width: 100%; border-collapse: collapse; margin-top: 10px; }
        th, td { padding: 12px; text-align: left; border-bottom: 1px solid #eee; }
        th { background: #f8f9fa; font-weight: 600; }
        .status-badge {
            display: inline-block; padding: 5px 15px; border-radius: 20px;
            font-weight: bold; color: white;
        }
        .status-partitioned { background: #dc3545; }
        .status-at-risk { background: #f97316; }
        .status-resilient { background: #28a745; }
        .trace { font-family: monospace; font-size: 0.85em; white-space: pre-wrap; }
        .footer { text-align: center; padding: 20px; color: #666; font-size: 0.9em; }
    </style>
</head>
<body>
    <div class="header">
        <h1>{{ title }}</h1>
        <div class="meta">
            <strong>Generated:</strong> {{ timestamp }}<br>
            <strong>Hub:</strong> {{ hub or '-' }}
        </div>
    </div>

    <div class="card">
        <h2>Summary</h2>
        <div class="summary-grid">
            <div class="summary-item">
                <div class="value">{{ metrics.node_count }}</div>
                <div class="label">Sites</div>
            </div>
            <div class="summary-item">
                <div class="value">{{ metrics.active_edge_count }}/{{ metrics.edge_count }}</div>
                <div class="label">Links Up</div>
            </div>
            <div class="summary-item">
                <div class="value">{{ metrics.connected_components }}</div>
                <div class="label">Components</div>
            </div>
            <div class="summary-item">
                <div class="value">
                    <span class="status-badge status-{{ status }}">{{ status|upper }}</span>
                </div>
                <div class="label">Status</div>
            </div>
        </div>
    </div>

    <div class="card">
        <h2>Failed Links</h2>
        {% if failed_links %}
        <table>
            <tr><th>From</th><th>To</th></tr>
            {% for link in failed_links %}
            <tr><td>{{ link.source }}</td><td>{{ link.target }}</td></tr>
            {% endfor %}
        </table>
        {% else %}
        <p>All links are up.</p>
        {% endif %}
    </div>

    <div class="card">
        <h2>Critical Links (Bridges)</h2>
        {% if bridges %}
        <table>
            <tr><th>From</th><th>To</th></tr>
            {% for link in bridges %}
            <tr><td>{{ link.source }}</td><td>{{ link.target }}</td></tr>
            {% endfor %}
        </table>
        {% else %}
        <p>No bridges detected.</p>
        {% endif %}
    </div>

    <div class="card">
        <h2>Critical Sites (Articulation Points)</h2>
        {% if articulation_points %}
        <ul>
            {% for site in articulation_points %}
            <li>{{ site }}</li>
            {% endfor %}
        </ul>
        {% else %}
        <p>No articulation points detected.</p>
        {% endif %}
    </div>

    {% if path %}
    <div class="card">
        <h2>Shortest Path</h2>
        {% if path.found %}
        <p>{{ path.route|join(' → ') }} ({{ path.hops }} hops)</p>
        {% else %}
        <p>No path exists from {{ path.source }} to {{ path.target }}.</p>
        {% endif %}
    </div>
    {% endif %}

    <div class="card">
        <h2>Recovery Plan</h2>
        {% if recovery %}
        <table>
            <tr><th>Disconnected Site</th><th>Reconnect To</th><th>Distance</th></tr>
            {% for link in recovery %}
            <tr><td>{{ link.source }}</td><td>{{ link.target }}</td><td>{{ link.distance }}</td></tr>
            {% endfor %}
        </table>
        {% else %}
        <p>All sites are reachable from the hub. No recovery needed.</p>
        {% endif %}
    </div>

    {% if trace %}
    <div class="card">
        <h2>Analysis Trace</h2>
        <div class="trace">{{ trace|join('\\n') }}</div>
    </div>
    {% endif %}

    <div class="footer">
        Generated by netresilience
    </div>
</body>
</html>
"""

MARKDOWN_TEMPLATE = """# {{ title }}

**Generated:** {{ timestamp }}
**Hub:** {{ hub or '-' }}

---

## Summary

| Metric | Value |
|--------|-------|
| Sites | {{ metrics.node_count }} |
| Links Up | {{ metrics.active_edge_count }}/{{ metrics.edge_count }} |
| Components | {{ metrics.connected_components }} |
| Status | **{{ status|upper }}** |

---

## Failed Links

{% if failed_links %}
{% for link in failed_links %}
- {{ link.source }} - {{ link.target }}
{% endfor %}
{% else %}
All links are up.
{% endif %}

## Critical Links (Bridges)

{% if bridges %}
{% for link in bridges %}
- {{ link.source }} - {{ link.target }}
{% endfor %}
{% else %}
No bridges detected.
{% endif %}

## Critical Sites (Articulation Points)

{% if articulation_points %}
{% for site in articulation_points %}
- {{ site }}
{% endfor %}
{% else %}
No articulation points detected.
{% endif %}
{% if path %}

## Shortest Path

{% if path.found %}
{{ path.route|join(' → ') }} ({{ path.hops }} hops)
{% else %}
No path exists from {{ path.source }} to {{ path.target }}.
{% endif %}
{% endif %}

## Recovery Plan

{% if recovery %}
| Disconnected Site | Reconnect To | Distance |
|-------------------|--------------|----------|
{% for link in recovery %}
| {{ link.source }} | {{ link.target }} | {{ link.distance }} |
{% endfor %}
{% else %}
All sites are reachable from the hub. No recovery needed.
{% endif %}

---

*Generated by netresilience*
"""


def resilience_status(metrics: TopologyMetrics, analysis: AnalysisResult | None) -> str:
    """Classify the topology as partitioned, at-risk or resilient."""
    if metrics.connected_components > 1:
        return "partitioned"
    if analysis and (analysis.bridges or analysis.articulation_points):
        return "at-risk"
    return "resilient"


class ReportGenerator:
    """Generate network resilience reports."""

    def __init__(self, graph: Graph, title: str | None = None):
        self.graph = graph
        self.metrics = calculate_metrics(graph)
        self.analysis: AnalysisResult | None = None
        self.data: dict = {
            "title": title or get_config().report.title,
            "timestamp": datetime.now().isoformat(),
            "hub": None,
            "metrics": self.metrics.to_dict(),
            "status": resilience_status(self.metrics, None),
            "failed_links": [self._link(e.source, e.target) for e in graph.failed_edges()],
            "bridges": [],
            "articulation_points": [],
            "path": None,
            "recovery": [],
            "disconnected": [],
            "trace": [],
        }

    def _link(self, u: NodeId, v: NodeId) -> dict:
        return {"source": self.graph.label(u), "target": self.graph.label(v)}

    def set_analysis(self, analysis: AnalysisResult, include_trace: bool = False) -> None:
        """Set data from critical structure analysis."""
        self.analysis = analysis
        self.data.update(
            {
                "bridges": [self._link(u, v) for u, v in analysis.bridges],
                "articulation_points": [
                    self.graph.label(n) for n in self.graph.node_ids() if n in analysis.articulation_points
                ],
                "status": resilience_status(self.metrics, analysis),
            }
        )
        if include_trace:
            self.data["trace"] = list(analysis.trace)

    def set_path(self, path: PathResult) -> None:
        """Set data from a shortest path query."""
        self.data["path"] = {
            "source": self.graph.label(path.source),
            "target": self.graph.label(path.target),
            "found": path.found,
            "hops": path.hops,
            "route": [self.graph.label(n) for n in path.path],
        }

    def set_recovery(self, recovery: RecoveryResult) -> None:
        """Set data from a recovery plan."""
        positions = {n.id: n.position for n in self.graph.nodes}
        rows = []
        for edge in recovery.recovery_edges:
            row = self._link(edge.source, edge.target)
            row["distance"] = round(
                euclidean_distance(positions[edge.source], positions[edge.target]), 1
            )
            rows.append(row)

        self.data.update(
            {
                "hub": self.graph.label(recovery.hub),
                "recovery": rows,
                "disconnected": [self.graph.label(n) for n in recovery.disconnected_nodes],
            }
        )

    def generate_html(self, output_file: str | None = None) -> str:
        """Generate HTML report."""
        template = Template(HTML_TEMPLATE, autoescape=True)
        html = template.render(**self.data)

        if output_file:
            output_path = Path(output_file)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html)

        return html

    def generate_markdown(self, output_file: str | None = None) -> str:
        """Generate Markdown report."""
        template = Template(MARKDOWN_TEMPLATE)
        md = template.render(**self.data)

        if output_file:
            output_path = Path(output_file)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(md)

        return md

    def generate_json(self, output_file: str | None = None) -> str:
        """Generate JSON report."""
        json_str = json.dumps(self.data, indent=2, default=str)

        if output_file:
            output_path = Path(output_file)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(json_str)

        return json_str


def generate_report(
    graph: Graph,
    output_format: str = "html",
    output_file: str | None = None,
    hub_id: NodeId | None = None,
    include_trace: bool = False,
) -> str:
    """
    Generate a resilience report for a topology.

    Args:
        graph: Topology snapshot
        output_format: Report format (html, md, json)
        output_file: Output file path (auto-generated if None)
        hub_id: Preferred hub for recovery planning
        include_trace: Include the analysis trace (HTML only)

    Returns:
        Path to generated report
    """
    if output_format not in REPORT_FORMATS:
        raise ValidationError(
            f"Unknown report format: {output_format}", f"expected one of {', '.join(REPORT_FORMATS)}"
        )

    generator = ReportGenerator(graph)
    generator.set_analysis(analyze_critical_structures(graph), include_trace=include_trace)
    if graph.nodes:
        generator.set_recovery(plan_recovery(graph, hub_id))

    if not output_file:
        results_dir = ensure_results_dir()
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_file = str(results_dir / f"resilience_{timestamp}.{output_format}")

    if output_format == "html":
        generator.generate_html(output_file)
    elif output_format == "md":
        generator.generate_markdown(output_file)
    elif output_format == "json":
        generator.generate_json(output_file)

    logger.debug("Wrote %s report to %s", output_format, output_file)
    return output_file
