"""
Slot allocation engine (FIFO by recency).

Picks are scanned newest first. The first pick of an article in a bay
claims one slot of the size class of the location it was picked from;
later picks of the same article/bay are absorbed. When the bay has no
free slot of that size left, the pick overflows.

Single greedy pass, no backtracking. Usage counters are owned by one
call to allocate() and only ever go up.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from bay_allocation.allocation.allocation_models import (
    AllocationOutcome,
    AllocationRecord,
    Bay,
    DemandEvent,
    Location,
    OverflowRecord,
    SizeClass,
    SizeUtilization,
)
from bay_allocation.utils.dates import parse_pick_timestamp
from bay_allocation.utils.logger import get_logger

logger = get_logger(__name__)


# ----------------------------
# Ordering
# ----------------------------

def event_timestamp(event: DemandEvent) -> datetime:
    return parse_pick_timestamp(event.picked_at, event.delivery_date)


def order_events(
    events: Iterable[DemandEvent],
    max_events: Optional[int] = None,
) -> List[DemandEvent]:
    """
    Newest first. Undated picks sort as EPOCH (oldest). Ties keep input
    order, so ordering an already ordered list is a no-op.
    """
    if max_events is not None and max_events < 0:
        raise ValueError(f"max_events must be >= 0, got {max_events}")

    # sorted() stays stable with reverse=True
    ordered = sorted(events, key=event_timestamp, reverse=True)

    if max_events is not None:
        ordered = ordered[:max_events]
    return ordered


# ----------------------------
# Allocation
# ----------------------------

def allocate(
    events: Iterable[DemandEvent],
    locations: Mapping[str, Location],
    bays: Mapping[str, Bay],
    max_events: Optional[int] = None,
) -> AllocationOutcome:
    ordered = order_events(events, max_events)

    usage: Dict[Tuple[str, SizeClass], int] = {
        (code, size): 0 for code in bays for size in SizeClass
    }
    served: Set[Tuple[int, str]] = set()

    allocations: List[AllocationRecord] = []
    overflows: List[OverflowRecord] = []
    unroutable = 0
    already_served = 0

    for event in ordered:
        source = event.location_code.strip()
        location = locations.get(source)
        bay = bays.get(location.bay_code) if location is not None else None

        if bay is None:
            unroutable += 1
            continue

        key = (event.article, bay.code)
        if key in served:
            already_served += 1
            continue

        # Size of the pick location, not of the article
        size = location.size_class
        used = usage[(bay.code, size)]

        if used < bay.available(size):
            allocations.append(
                AllocationRecord(
                    article=event.article,
                    bay_code=bay.code,
                    size_class=size,
                    source_location=source,
                    bay_provenance=bay.provenance,
                )
            )
            usage[(bay.code, size)] = used + 1
            served.add(key)
        else:
            overflows.append(
                OverflowRecord(
                    article=event.article,
                    bay_code=bay.code,
                    size_class=size,
                    source_location=source,
                    picked_at=event.picked_at,
                )
            )

    logger.info(
        "Allocated %s article-bay slots from %s picks | overflow=%s already_served=%s unroutable=%s",
        len(allocations),
        len(ordered),
        len(overflows),
        already_served,
        unroutable,
    )

    return AllocationOutcome(
        allocations=allocations,
        overflows=overflows,
        events=ordered,
        usage=usage,
        unroutable=unroutable,
        already_served=already_served,
    )


# ----------------------------
# Utilization
# ----------------------------

def slot_utilization(
    bays: Mapping[str, Bay],
    outcome: AllocationOutcome,
) -> List[SizeUtilization]:
    """Totals per size class, largest first."""
    rows = []
    for size in (SizeClass.LARGE, SizeClass.MEDIUM, SizeClass.SMALL):
        total = sum(b.available(size) for b in bays.values())
        used = sum(outcome.usage.get((code, size), 0) for code in bays)
        overflow = sum(1 for o in outcome.overflows if o.size_class is size)
        rows.append(SizeUtilization(size_class=size, total=total, used=used, overflow=overflow))
    return rows
