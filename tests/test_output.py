"""Tests for export and report generation."""

import csv
import json

import pytest

from netresilience.analysis import analyze_critical_structures, find_shortest_path, plan_recovery
from netresilience.core.config import Config, set_config
from netresilience.core.exceptions import ValidationError
from netresilience.output import (
    ReportGenerator,
    export_csv,
    export_json,
    generate_report,
    link_rows,
    resilience_status,
)
from netresilience.topology import calculate_metrics, toggle_edge


class TestExport:
    """Test JSON and CSV export."""

    def test_export_result_json(self, tmp_path, path_graph):
        """Test result objects export through to_dict."""
        out = export_json(analyze_critical_structures(path_graph), str(tmp_path / "a" / "r.json"))
        data = json.loads(open(out).read())
        assert data["articulation_points"] == ["B"]
        assert len(data["bridges"]) == 2

    def test_export_sets(self, tmp_path):
        """Test sets serialize as sorted lists."""
        out = export_json({"ids": {"b", "a"}}, str(tmp_path / "s.json"), pretty=False)
        assert json.loads(open(out).read()) == {"ids": ["a", "b"]}

    def test_link_rows_csv(self, tmp_path, path_graph):
        """Test per-link table with bridge flags."""
        broken = toggle_edge(path_graph, "A", "B")
        rows = link_rows(broken, analyze_critical_structures(broken))
        assert rows[0]["active"] is False
        assert rows[0]["bridge"] is False

        out = export_csv(rows, str(tmp_path / "links.csv"))
        with open(out, newline="") as f:
            written = list(csv.DictReader(f))
        assert len(written) == 2
        assert written[0]["source_label"] == "A"

    def test_export_csv_empty(self, tmp_path):
        """Test nothing is written for no rows."""
        target = tmp_path / "empty.csv"
        assert export_csv([], str(target)) == str(target)
        assert not target.exists()


class TestReports:
    """Test resilience report generation."""

    def test_status(self, path_graph, cycle_graph):
        """Test status classification."""
        assert resilience_status(calculate_metrics(cycle_graph), analyze_critical_structures(cycle_graph)) == "resilient"
        assert resilience_status(calculate_metrics(path_graph), analyze_critical_structures(path_graph)) == "at-risk"
        broken = toggle_edge(path_graph, "A", "B")
        assert resilience_status(calculate_metrics(broken), None) == "partitioned"

    def test_markdown_report(self, sample):
        """Test Markdown content after a failure."""
        broken = toggle_edge(sample, "1", "11")
        generator = ReportGenerator(broken, title="Cebu Drill")
        generator.set_analysis(analyze_critical_structures(broken))
        generator.set_recovery(plan_recovery(broken))
        generator.set_path(find_shortest_path(broken, "1", "13"))

        md = generator.generate_markdown()
        assert md.startswith("# Cebu Drill")
        assert "Cebu Hub - Quezon Hub" in md
        assert "PARTITIONED" in md
        assert "No path exists from Cebu Hub to Tayabas." in md
        assert "| Quezon Hub | Cebu Hub |" in md.replace("  ", " ")

    def test_html_report_escapes(self, tmp_path):
        """Test labels are escaped in HTML."""
        from netresilience.topology import TopologyBuilder

        graph = TopologyBuilder().add_node("A", label="<b>x</b>").add_node("B").add_link("A", "B").build()
        generator = ReportGenerator(graph)
        generator.set_analysis(analyze_critical_structures(graph), include_trace=True)
        html = generator.generate_html(str(tmp_path / "r.html"))
        assert "&lt;b&gt;x&lt;/b&gt;" in html
        assert "<b>x</b>" not in html
        assert (tmp_path / "r.html").exists()

    def test_json_report(self, sample):
        """Test JSON report carries analysis data."""
        generator = ReportGenerator(sample)
        generator.set_analysis(analyze_critical_structures(sample))
        data = json.loads(generator.generate_json())
        assert data["metrics"]["node_count"] == 13
        assert data["status"] == "at-risk"
        assert "Cebu City" in data["articulation_points"]

    def test_generate_report_default_path(self, tmp_path, sample):
        """Test reports land in the configured results directory."""
        set_config(Config(results_dir=tmp_path / "results"))
        try:
            path = generate_report(sample, output_format="json")
        finally:
            set_config(Config())
        assert path.startswith(str(tmp_path / "results"))
        assert json.loads(open(path).read())["hub"] == "Cebu Hub"

    def test_generate_report_unknown_format(self, tmp_path, sample):
        """Test an unknown format is rejected before writing."""
        out = tmp_path / "report.pdf"
        with pytest.raises(ValidationError):
            generate_report(sample, output_format="pdf", output_file=str(out))
        assert not out.exists()
