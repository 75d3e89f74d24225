# src/bay_allocation/presentation/sheets.py
"""
Output tables for one transform run.

Presentation-layer only:
- No file I/O
- No allocation logic
Column names follow the import template (camelCase).
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

import pandas as pd

from bay_allocation.allocation.allocation_engine import event_timestamp, slot_utilization
from bay_allocation.allocation.allocation_models import (
    BayTransformResult,
    DemandEvent,
    Finding,
    Provenance,
)
from bay_allocation.allocation.bay_inventory import composition_patterns, is_even_zone
from bay_allocation.allocation.size_classifier import format_capacity_layout, format_weight
from bay_allocation.utils.dates import EPOCH, format_pick_date

# First pickList number handed out to the template
PICK_LIST_BASE = 10081994

REMARK_NO_MASTER_DATA = "NO_MASTER_DATA"
REMARK_SYNTHETIC_BAY = "SYNTHETIC_BAY"


def _pick_date(event: DemandEvent) -> str:
    date_part = event.picked_at.split(" ")[0] if event.picked_at else ""
    return format_pick_date(date_part or event.delivery_date)


# ------------------------------------------------------------
# Import sheets
# ------------------------------------------------------------
def pick_sheet(result: BayTransformResult) -> pd.DataFrame:
    """Bay-level picks, grouped by bay then article (first-seen order)."""
    locations = result.resolution.locations
    grouped: Dict[str, Dict[int, List[dict]]] = {}

    for idx, event in enumerate(result.outcome.events):
        loc = locations.get(event.location_code.strip())
        if loc is None or loc.bay_code not in result.bays:
            continue

        grouped.setdefault(loc.bay_code, {}).setdefault(event.article, []).append(
            {
                "pickList": PICK_LIST_BASE + idx,
                "location": loc.bay_code,
                "article": event.article,
                "quantity": event.quantity,
                "pickTime": _pick_date(event),
                "salesOrder": event.order_number,
                "salesOrderCategory": event.order_type,
                "originalPickLocation": loc.code,
            }
        )

    rows = [row for articles in grouped.values() for picks in articles.values() for row in picks]
    return pd.DataFrame(
        rows,
        columns=[
            "pickList", "location", "article", "quantity", "pickTime",
            "salesOrder", "salesOrderCategory", "originalPickLocation",
        ],
    )


def location_sheet(result: BayTransformResult) -> pd.DataFrame:
    rows = [
        {
            "location": bay.code,
            "seqWMS": "",
            "zone": is_even_zone(bay.code),
            "x": "",
            "y": "",
            "pickSide": "",
            "capacityLayout": format_capacity_layout(bay.capacity_layout),
            "locationGroup": bay.code,
            "slotTypeComposition": bay.composition,
            "totalLocations": bay.total_slots,
            "provenance": bay.provenance.value,
        }
        for bay in result.bays.values()
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "location", "seqWMS", "zone", "x", "y", "pickSide", "capacityLayout",
            "locationGroup", "slotTypeComposition", "totalLocations", "provenance",
        ],
    )


def article_location_sheet(result: BayTransformResult) -> pd.DataFrame:
    article_master = {a.article: a for a in result.articles}

    rows = []
    for rec in result.outcome.allocations:
        art = article_master.get(rec.article)
        bay = result.bays.get(rec.bay_code)
        location_class = bay.location_class if bay is not None else ""

        rows.append(
            {
                "article": rec.article,
                "location": rec.bay_code,
                "articleDescription": art.description if art else "",
                "articleCategory": "",
                "articleVolume": art.volume if art else 0,
                "locationSize": rec.size_class.weight,
                "locationGroup": rec.bay_code,
                "remarkOne": "C" if location_class == "C" else "R",
                "remarkTwo": "" if art else REMARK_NO_MASTER_DATA,
                "remarkThree": REMARK_SYNTHETIC_BAY if rec.bay_provenance is Provenance.SYNTHESIZED else "",
                "remarkFour": "",
                "remarkFive": "",
                "originalPickLocation": rec.source_location,
            }
        )

    return pd.DataFrame(
        rows,
        columns=[
            "article", "location", "articleDescription", "articleCategory", "articleVolume",
            "locationSize", "locationGroup", "remarkOne", "remarkTwo", "remarkThree",
            "remarkFour", "remarkFive", "originalPickLocation",
        ],
    )


# ------------------------------------------------------------
# Reference sheets
# ------------------------------------------------------------
def overflow_sheet(result: BayTransformResult) -> pd.DataFrame:
    rows = [
        {
            "article": o.article,
            "location": o.bay_code,
            "locationSize": o.size_class.weight,
            "originalPickLocation": o.source_location,
            "pickTime": o.picked_at,
            "reason": o.reason,
        }
        for o in result.outcome.overflows
    ]
    return pd.DataFrame(
        rows,
        columns=["article", "location", "locationSize", "originalPickLocation", "pickTime", "reason"],
    )


def location_mapping_sheet(result: BayTransformResult) -> pd.DataFrame:
    rows = []
    for code, loc in result.resolution.locations.items():
        audit = result.resolution.audit.get(code)
        rows.append(
            {
                "originalLocation": code,
                "bayLocation": loc.bay_code,
                "slotType": loc.slot_type,
                "slotTypeDescription": loc.slot_type_description,
                "provenance": loc.provenance.value,
                "inLocations": audit.in_locations if audit else False,
                "inArticles": audit.in_articles if audit else False,
                "inPicks": audit.in_picks if audit else False,
                "pickCount": audit.pick_count if audit else 0,
            }
        )
    return pd.DataFrame(
        rows,
        columns=[
            "originalLocation", "bayLocation", "slotType", "slotTypeDescription", "provenance",
            "inLocations", "inArticles", "inPicks", "pickCount",
        ],
    )


def utilization_sheet(result: BayTransformResult) -> pd.DataFrame:
    rows = [
        {
            "locationSize": format_weight(u.size_class),
            "totalSlots": u.total,
            "usedSlots": u.used,
            "unusedSlots": u.unused,
            "utilizationPct": u.utilization_pct,
            "overflow": u.overflow,
        }
        for u in slot_utilization(result.bays, result.outcome)
    ]
    return pd.DataFrame(
        rows,
        columns=["locationSize", "totalSlots", "usedSlots", "unusedSlots", "utilizationPct", "overflow"],
    )


def dataset_info_sheet(
    result: BayTransformResult,
    input_files: str = "",
    transformation_date: Optional[date] = None,
) -> pd.DataFrame:
    stamps = [event_timestamp(e) for e in result.outcome.events]
    stamps = [s for s in stamps if s != EPOCH]
    start = min(stamps).date().isoformat() if stamps else "N/A"
    end = max(stamps).date().isoformat() if stamps else "N/A"

    info = [
        ("Total Picks", result.total_events),
        ("Picks Used", len(result.outcome.events)),
        ("Total Bays", len(result.bays)),
        ("Total Locations", len(result.master_locations)),
        ("Synthesized Locations", len(result.resolution.synthesized)),
        ("Total Articles", len(result.articles)),
        ("Article-Location Pairs", len(result.outcome.allocations)),
        ("Overflow", len(result.outcome.overflows)),
        ("Date Range Start", start),
        ("Date Range End", end),
        ("Transformation Date", (transformation_date or date.today()).isoformat()),
        ("Input Files", input_files),
        ("Aggregation Level", "Bay"),
        ("Capacity Format", "Slot sizes, 2 decimals (European commas)"),
    ]
    return pd.DataFrame(info, columns=["Metric", "Value"]).astype({"Value": str})


def bay_analysis_sheet(result: BayTransformResult, limit: int = 20) -> pd.DataFrame:
    return pd.DataFrame(composition_patterns(result.bays, limit), columns=["Pattern", "BayCount"])


def validation_report_sheet(findings: List[Finding]) -> pd.DataFrame:
    rows = [
        {
            "Sheet": f.scope,
            "Severity": f.severity.value,
            "Category": f.category,
            "Description": f.description,
            "Count": f.count,
            "Examples": ", ".join(f.examples),
        }
        for f in findings
    ]
    return pd.DataFrame(rows, columns=["Sheet", "Severity", "Category", "Description", "Count", "Examples"])


def build_sheets(result: BayTransformResult, input_files: str = "") -> Dict[str, pd.DataFrame]:
    """All sheets in workbook order: import sheets first, then reference."""
    return {
        "Pick": pick_sheet(result),
        "Location": location_sheet(result),
        "ArticleLocation": article_location_sheet(result),
        "Overflow": overflow_sheet(result),
        "LocationMapping": location_mapping_sheet(result),
        "SlotUtilization": utilization_sheet(result),
        "DatasetInfo": dataset_info_sheet(result, input_files),
        "BayAnalysis": bay_analysis_sheet(result),
        "ValidationReport": validation_report_sheet(result.findings),
    }
