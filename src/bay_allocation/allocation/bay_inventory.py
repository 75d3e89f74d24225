"""
Bay inventory builder.

Groups resolved locations by bay. Each member location is one physical
slot, so a bay's capacity layout is the ordered list of its members' size
classes and its inventory is the count per size class.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from bay_allocation.allocation.allocation_models import (
    Bay,
    Location,
    Provenance,
    SizeClass,
)
from bay_allocation.utils.logger import get_logger

logger = get_logger(__name__)

_LEADING_DIGITS = re.compile(r"^\s*(\d+)")


def composition_signature(locations: Iterable[Location]) -> str:
    """Slot types by count, descending: "2×BLL,5×PP5" style, ties in first-seen order."""
    counts: Dict[str, int] = {}
    for loc in locations:
        counts[loc.slot_type] = counts.get(loc.slot_type, 0) + 1

    ordered = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return ",".join(f"{count}×{slot_type}" for slot_type, count in ordered)


def is_even_zone(bay_code: str) -> bool:
    """Zone flag used by the import template: true for even bay numbers."""
    parts = bay_code.split("-")
    bay_part = parts[1] if len(parts) > 1 and parts[1] else "0"
    m = _LEADING_DIGITS.match(bay_part)
    if not m:
        return False
    return int(m.group(1)) % 2 == 0


def build(locations: Union[Mapping[str, Location], Iterable[Location]]) -> Dict[str, Bay]:
    if isinstance(locations, Mapping):
        locations = locations.values()

    grouped: Dict[str, List[Location]] = {}
    for loc in locations:
        grouped.setdefault(loc.bay_code, []).append(loc)

    bays: Dict[str, Bay] = {}
    for bay_code, members in grouped.items():
        layout: Tuple[SizeClass, ...] = tuple(m.size_class for m in members)

        inventory = {size: 0 for size in SizeClass}
        inventory.update(Counter(layout))

        provenance = (
            Provenance.FROM_MASTER
            if any(m.provenance is Provenance.FROM_MASTER for m in members)
            else Provenance.SYNTHESIZED
        )

        bays[bay_code] = Bay(
            code=bay_code,
            capacity_layout=layout,
            inventory=inventory,
            members=tuple(m.code for m in members),
            composition=composition_signature(members),
            provenance=provenance,
            location_class=members[0].location_class,
        )

    total_slots = sum(b.total_slots for b in bays.values())
    logger.info("Built inventory for %s bays (%s total slots)", len(bays), total_slots)
    return bays


def composition_patterns(bays: Mapping[str, Bay], limit: int = 20) -> List[Tuple[str, int]]:
    """Most common bay compositions, by number of bays."""
    counts: Dict[str, int] = {}
    for bay in bays.values():
        counts[bay.composition] = counts.get(bay.composition, 0) + 1
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:limit]
