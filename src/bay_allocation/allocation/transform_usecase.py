"""
Bay-Level Transform Use Case

Purpose:
- Turn client location/article/pick exports into bay-level slot assignments
- Enforce the per-bay, per-size slot capacity
- Validate the result before anything is written

Important:
- No file output here (see presentation/)
- ONE pass over the picks per run; every run recomputes from scratch
"""

from __future__ import annotations

from typing import Optional

from bay_allocation.allocation.allocation_engine import allocate, order_events
from bay_allocation.allocation.allocation_models import BayTransformResult
from bay_allocation.allocation.bay_inventory import build
from bay_allocation.allocation.integrity_validator import validate
from bay_allocation.allocation.location_resolver import resolve
from bay_allocation.data.client_files import ClientData
from bay_allocation.utils.logger import get_logger

logger = get_logger(__name__)


def run_bay_level_transform(
    data: ClientData,
    max_events: Optional[int] = None,
) -> BayTransformResult:
    logger.info(
        "Running bay-level transform | locations=%s articles=%s picks=%s max_picks=%s",
        len(data.master_locations),
        len(data.articles),
        len(data.events),
        max_events,
    )

    # ------------------------------------------------------------
    # Most recent picks first, capped (only these may synthesize locations)
    # ------------------------------------------------------------
    considered = order_events(data.events, max_events)
    logger.info("Using %s most recent picks (from %s total)", len(considered), len(data.events))

    # ------------------------------------------------------------
    # Location -> bay mapping and bay inventories
    # ------------------------------------------------------------
    resolution = resolve(data.master_locations, data.articles, considered)
    bays = build(resolution.locations)

    # ------------------------------------------------------------
    # Slot allocation
    # ------------------------------------------------------------
    outcome = allocate(considered, resolution.locations, bays, max_events)

    # ------------------------------------------------------------
    # Referential integrity
    # ------------------------------------------------------------
    findings = validate(
        bays,
        outcome.allocations,
        outcome.overflows,
        outcome.events,
        resolution.locations,
        resolution.unknown_article_locations,
    )

    return BayTransformResult(
        master_locations=data.master_locations,
        articles=data.articles,
        total_events=len(data.events),
        resolution=resolution,
        bays=bays,
        outcome=outcome,
        findings=findings,
        max_events=max_events,
    )
