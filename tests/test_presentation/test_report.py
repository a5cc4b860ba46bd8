"""Tests for the HTML report writer."""

from __future__ import annotations

from dvsim.engine import ConvergenceLoop
from dvsim.presentation import HtmlReport, ReportConfig
from dvsim.scenarios import SQUARE, run_scenario


def _report(tmp_path, **kwargs) -> HtmlReport:
    return HtmlReport(ReportConfig(output_dir=tmp_path / "out", prefix="square", **kwargs))


class TestHtmlReport:
    """Pages for the square scenario."""

    def test_mutation_page(self, tmp_path, square_mutation):
        report = _report(tmp_path)
        path = report.write_mutation(square_mutation)
        assert path.name == "square-001.html"
        page = path.read_text(encoding="utf-8")
        assert "<h2>t=0</h2>" in page
        assert '<link rel="stylesheet" href="styles.css">' in page
        assert page.count("<table>") == 4
        assert "&infin;" in page

    def test_round_pages(self, tmp_path, square_mutation):
        report = _report(tmp_path)
        ConvergenceLoop(on_round=report.write_round).run(square_mutation.world)
        assert [p.name for p in report.pages] == ["square-001.html", "square-002.html"]

        first = report.pages[0].read_text(encoding="utf-8")
        assert "<h2>t=1</h2>" in first
        assert "&infin;&#8594;9(B)" in first
        assert (
            "d<sub>A</sub>(C)=min(C(A,B)+d<sub>B</sub>(C), C(A,D)+d<sub>D</sub>(C))"
            "=min(2+7, 8+4)=9"
        ) in first
        assert first.count('<div class="details">') == 4

        second = report.pages[1].read_text(encoding="utf-8")
        assert "<h2>t=2</h2>" in second
        # Only B and D are relaxed in the second round
        assert second.count('<div class="details">') == 2

    def test_details_optional(self, tmp_path, square_mutation):
        report = _report(tmp_path, show_details=False, stylesheet=None)
        ConvergenceLoop(on_round=report.write_round).run(square_mutation.world)
        page = report.pages[0].read_text(encoding="utf-8")
        assert "details" not in page
        assert "stylesheet" not in page

    def test_full_scenario(self, tmp_path):
        report = _report(tmp_path)
        run_scenario(SQUARE, on_mutation=report.write_mutation, on_round=report.write_round)
        # mutation + 2 rounds, twice
        assert len(report.pages) == 6
        assert all(p.exists() for p in report.pages)
        assert report.pages[-1].name == "square-006.html"
        assert "<h2>t=4</h2>" in report.pages[-1].read_text(encoding="utf-8")
