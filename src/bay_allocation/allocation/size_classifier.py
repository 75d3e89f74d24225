"""
Slot type -> size class lookup (Vertaaltabel).

Pure functions only. Unknown or reserve slot types count as LARGE so a
real slot is never dropped from a bay's inventory.
"""

from __future__ import annotations

from typing import Dict, Iterable

from bay_allocation.allocation.allocation_models import SizeClass


SLOT_TYPE_SIZES: Dict[str, SizeClass] = {
    # Pallet slots
    "BLH": SizeClass.LARGE,     # Blokpallet hoog
    "BLN": SizeClass.LARGE,     # Blokpallet dubbele locatie
    "BLL": SizeClass.MEDIUM,    # Blokpallet laag
    # Shelf slots
    "PP5": SizeClass.MEDIUM,
    "PP3": SizeClass.SMALL,
    "PP7": SizeClass.SMALL,
    "PP9": SizeClass.SMALL,
    "PK": SizeClass.SMALL,
    "PLK": SizeClass.SMALL,
    "PLV": SizeClass.SMALL,
}

UNKNOWN_SLOT_TYPE = "UNKNOWN"

VALID_WEIGHTS = frozenset(s.weight for s in SizeClass)


def classify(slot_type: str) -> SizeClass:
    return SLOT_TYPE_SIZES.get((slot_type or "").strip(), SizeClass.LARGE)


def format_weight(size_class: SizeClass) -> str:
    """0.25 -> "0,25" (European decimal, two places)."""
    return f"{size_class.weight:.2f}".replace(".", ",")


def format_capacity_layout(layout: Iterable[SizeClass]) -> str:
    """Render a layout as "0,25-0,25-0,50", one element per physical slot."""
    return "-".join(format_weight(s) for s in layout)
