from __future__ import annotations

from pathlib import Path

from bay_allocation.allocation.allocation_models import Finding, Severity
from bay_allocation.allocation.transform_usecase import run_bay_level_transform
from bay_allocation.data.client_files import load_client_data
from bay_allocation.presentation.console import (
    _format_table,
    render_transform_summary,
    render_validation_report,
)

from builders import write_client_files


def test_clean_report_is_ready() -> None:
    text = render_validation_report([])

    assert "No issues found" in text
    assert "Status: READY FOR IMPORT" in text


def test_errors_block_import() -> None:
    findings = [
        Finding("Pick", Severity.ERROR, "Missing Location", "Pick locations not in Location sheet", 2, ("NOWHERE",)),
        Finding("ArticleLocation", Severity.WARNING, "Invalid Location Size", "Odd size", 1, ("Article 1 @ A = 0.75",)),
    ]

    text = render_validation_report(findings)

    assert "Found 1 errors and 1 warnings" in text
    assert "Pick - Missing Location" in text
    assert "Examples: NOWHERE" in text
    assert text.index("ERRORS") < text.index("WARNINGS")
    assert "Status: NOT READY (errors present)" in text


def test_warnings_alone_stay_ready() -> None:
    findings = [Finding("Pick", Severity.WARNING, "Overflow-Only Article", "Only overflowed", 1, ("3",))]

    assert "Status: READY FOR IMPORT" in render_validation_report(findings)


def test_transform_summary(tmp_path: Path) -> None:
    data = load_client_data(*write_client_files(tmp_path), area="D")
    result = run_bay_level_transform(data)

    text = render_transform_summary(result, tmp_path / "out.xlsx")

    assert "Picks Used:            5 (from 5 total)" in text
    assert "Synthesized Locations: 1" in text
    assert "Overflow:              1" in text
    assert "Slots assigned:        4 (100.0%)" in text
    assert "2×PP3" in text
    assert f"Output file: {tmp_path / 'out.xlsx'}" in text


def test_table_right_aligns_numeric_columns() -> None:
    table = _format_table([("0,25", 2, "50.0%"), ("1,00", 120, "100.0%")], ["size", "used", "utilization"])
    lines = table.splitlines()

    assert lines[0] == "size used utilization"
    assert lines[2] == "0,25    2 50.0%"
    assert lines[3] == "1,00  120 100.0%"


def test_table_reports_omitted_rows() -> None:
    table = _format_table([(f"P{i}", i) for i in range(4)], ["pattern", "bays"], max_rows=2)

    assert "... (2 more rows omitted) ..." in table
    assert "P3" not in table
