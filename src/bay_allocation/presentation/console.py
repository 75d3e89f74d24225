from __future__ import annotations

import io
from pathlib import Path
from typing import List, Optional, Sequence

from bay_allocation.allocation.allocation_engine import slot_utilization
from bay_allocation.allocation.allocation_models import BayTransformResult, Finding, Severity
from bay_allocation.allocation.bay_inventory import composition_patterns
from bay_allocation.allocation.size_classifier import format_weight


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_table(rows: Sequence[Sequence[object]], headers: List[str], max_rows: int | None = None) -> str:
    """Plain text table; columns holding only numbers are right-aligned."""
    output = io.StringIO()
    rows = list(rows)

    shown = rows if max_rows is None else rows[:max_rows]
    omitted = len(rows) - len(shown)

    widths = [len(h) for h in headers]
    for row in shown:
        for i, v in enumerate(row):
            widths[i] = max(widths[i], len(str(v)))

    numeric = [bool(shown) and all(_is_number(r[i]) for r in shown) for i in range(len(headers))]

    def fmt(r):
        return " ".join(
            str(r[i]).rjust(widths[i]) if numeric[i] else str(r[i]).ljust(widths[i])
            for i in range(len(headers))
        ).rstrip()

    print(fmt(headers), file=output)
    print(" ".join("-" * w for w in widths), file=output)
    for row in shown:
        print(fmt(row), file=output)

    if omitted:
        print(f"... ({omitted} more rows omitted) ...", file=output)

    return output.getvalue()


def render_validation_report(findings: List[Finding]) -> str:
    out = io.StringIO()

    print("=" * 70, file=out)
    print("VALIDATION SUMMARY", file=out)
    print("=" * 70, file=out)

    errors = [f for f in findings if f.severity is Severity.ERROR]
    warnings = [f for f in findings if f.severity is Severity.WARNING]

    if not findings:
        print("\nNo issues found. Data is fully consistent.", file=out)
    else:
        print(f"\nFound {len(errors)} errors and {len(warnings)} warnings", file=out)

        for title, group in (("ERRORS (must fix)", errors), ("WARNINGS (review recommended)", warnings)):
            if not group:
                continue
            print(f"\n{title}:", file=out)
            for f in group:
                print(f"\n  {f.scope} - {f.category}", file=out)
                print(f"  {f.description}", file=out)
                print(f"  Count: {f.count:,}", file=out)
                print(f"  Examples: {', '.join(f.examples)}", file=out)

    status = "READY FOR IMPORT" if not errors else "NOT READY (errors present)"
    print(f"\nStatus: {status}", file=out)
    print("=" * 70, file=out)
    return out.getvalue()


def render_transform_summary(result: BayTransformResult, output_path: Optional[Path] = None) -> str:
    outcome = result.outcome
    out = io.StringIO()

    print("=" * 70, file=out)
    print("BAY-LEVEL TRANSFORMATION", file=out)
    print("=" * 70, file=out)
    print(f"Picks Used:            {len(outcome.events):,} (from {result.total_events:,} total)", file=out)
    print(f"Master Locations:      {len(result.master_locations):,}", file=out)
    print(f"Synthesized Locations: {len(result.resolution.synthesized):,}", file=out)
    print(f"Bays:                  {len(result.bays):,}", file=out)
    print(f"Article-Bay Slots:     {len(outcome.allocations):,}", file=out)
    print(f"Overflow:              {len(outcome.overflows):,}", file=out)
    print(f"Already Served:        {outcome.already_served:,}", file=out)
    print(f"Unroutable Picks:      {outcome.unroutable:,}", file=out)
    print(file=out)

    utilization = slot_utilization(result.bays, outcome)
    total = sum(u.total for u in utilization)
    used = sum(u.used for u in utilization)
    pct = f"{used / total:.1%}" if total else "N/A"

    print("== Slot Utilization ==\n", file=out)
    print(f"Total slots available: {total:,}", file=out)
    print(f"Slots assigned:        {used:,} ({pct})", file=out)
    print(f"Unused slots:          {total - used:,}\n", file=out)
    print(
        _format_table(
            [
                (format_weight(u.size_class), u.used, u.total, f"{u.utilization_pct:.1f}%", u.overflow)
                for u in utilization
            ],
            ["size", "used", "available", "utilization", "overflow"],
        ),
        file=out,
    )

    print("== Bay Compositions ==\n", file=out)
    print(
        _format_table(composition_patterns(result.bays), ["pattern", "bays"], max_rows=10),
        file=out,
    )

    if output_path is not None:
        print(f"Output file: {output_path}", file=out)

    return out.getvalue()
