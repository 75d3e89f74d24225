"""
Bay Allocation Domain Models

Rules:
- No I/O
- No formatting
- Pure data containers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


# ------------------------------------------------------------
# Enumerations
# ------------------------------------------------------------
class SizeClass(Enum):
    """Standardized slot size. The value is the template weight, for display only."""

    SMALL = 0.25
    MEDIUM = 0.50
    LARGE = 1.00

    @property
    def weight(self) -> float:
        return self.value


class Provenance(Enum):
    FROM_MASTER = "FromMaster"
    SYNTHESIZED = "Synthesized"


class Severity(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


# ------------------------------------------------------------
# Input records (already parsed by the data layer)
# ------------------------------------------------------------
@dataclass(frozen=True)
class MasterLocationRecord:
    location: str
    aisle: str
    bay: str
    slot_type: str = ""
    slot_type_description: str = ""
    location_class: str = ""
    area: str = ""


@dataclass(frozen=True)
class ArticleRecord:
    article: int
    description: str = ""
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    pick_location: str = ""

    @property
    def volume(self) -> int:
        return round(self.length * self.width * self.height)


@dataclass(frozen=True)
class DemandEvent:
    sequence: int           # row position in the input file
    article: int
    location_code: str
    picked_at: str = ""
    delivery_date: str = ""
    quantity: int = 1
    order_number: str = ""
    order_type: str = ""


# ------------------------------------------------------------
# Resolved warehouse structure
# ------------------------------------------------------------
@dataclass(frozen=True)
class Location:
    code: str
    bay_code: str
    size_class: SizeClass
    slot_type: str
    provenance: Provenance
    slot_type_description: str = ""
    location_class: str = ""

    @property
    def is_synthesized(self) -> bool:
        return self.provenance is Provenance.SYNTHESIZED


@dataclass
class LocationAudit:
    """Traceability flags for one raw location code."""

    location: str
    in_locations: bool = False
    in_articles: bool = False
    in_picks: bool = False
    pick_count: int = 0


@dataclass
class LocationResolution:
    locations: Dict[str, Location]
    audit: Dict[str, LocationAudit]
    unknown_article_locations: List[Tuple[int, str]] = field(default_factory=list)
    unresolvable_codes: List[str] = field(default_factory=list)

    @property
    def synthesized(self) -> List[Location]:
        return [loc for loc in self.locations.values() if loc.is_synthesized]


@dataclass(frozen=True)
class Bay:
    code: str
    capacity_layout: Tuple[SizeClass, ...]
    inventory: Dict[SizeClass, int]
    members: Tuple[str, ...]
    composition: str
    provenance: Provenance
    location_class: str = ""

    @property
    def total_slots(self) -> int:
        return len(self.capacity_layout)

    def available(self, size_class: SizeClass) -> int:
        return self.inventory.get(size_class, 0)


# ------------------------------------------------------------
# Allocation output
# ------------------------------------------------------------
@dataclass(frozen=True)
class AllocationRecord:
    article: int
    bay_code: str
    size_class: SizeClass
    source_location: str
    bay_provenance: Provenance

    @property
    def key(self) -> Tuple[int, str]:
        return (self.article, self.bay_code)


@dataclass(frozen=True)
class OverflowRecord:
    article: int
    bay_code: str
    size_class: SizeClass
    source_location: str
    picked_at: str
    reason: str = "capacity exhausted"

    @property
    def key(self) -> Tuple[int, str]:
        return (self.article, self.bay_code)


@dataclass
class AllocationOutcome:
    allocations: List[AllocationRecord]
    overflows: List[OverflowRecord]
    events: List[DemandEvent]                        # ordered + capped events actually scanned
    usage: Dict[Tuple[str, SizeClass], int]
    unroutable: int = 0
    already_served: int = 0


@dataclass(frozen=True)
class SizeUtilization:
    size_class: SizeClass
    total: int
    used: int
    overflow: int

    @property
    def unused(self) -> int:
        return self.total - self.used

    @property
    def utilization_pct(self) -> float:
        return round(self.used / self.total * 100, 1) if self.total else 0.0


# ------------------------------------------------------------
# Validation
# ------------------------------------------------------------
@dataclass(frozen=True)
class Finding:
    scope: str
    severity: Severity
    category: str
    description: str
    count: int
    examples: Tuple[str, ...] = ()

    @property
    def is_blocking(self) -> bool:
        return self.severity is Severity.ERROR


# ------------------------------------------------------------
# Final run object
# ------------------------------------------------------------
@dataclass
class BayTransformResult:
    master_locations: List[MasterLocationRecord]
    articles: List[ArticleRecord]
    total_events: int                                 # after area filter, before the cap
    resolution: LocationResolution
    bays: Dict[str, Bay]
    outcome: AllocationOutcome
    findings: List[Finding]
    max_events: Optional[int] = None

    @property
    def ready_for_use(self) -> bool:
        return not any(f.is_blocking for f in self.findings)
