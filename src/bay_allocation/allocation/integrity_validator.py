"""
Referential integrity validation.

Runs a fixed battery of consistency checks over one transform run:
- primary keys (bays, article-bay pairs)
- foreign keys (pick -> bay, assignment -> bay, pick -> location mapping)
- capacity layout values and the slot capacity constraint

Each check is independent and always runs. Only problems produce a
Finding; an empty list means the data is fully consistent. ERROR findings
block the "ready for use" status, WARNING findings do not.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from bay_allocation.allocation.allocation_models import (
    AllocationRecord,
    Bay,
    DemandEvent,
    Finding,
    Location,
    OverflowRecord,
    Severity,
    SizeClass,
)
from bay_allocation.allocation.size_classifier import VALID_WEIGHTS
from bay_allocation.utils.logger import get_logger

logger = get_logger(__name__)

MAX_EXAMPLES = 5


def _sample(values: Iterable[object], limit: int = MAX_EXAMPLES) -> Tuple[str, ...]:
    """First `limit` distinct values, in first-seen order."""
    seen: List[str] = []
    for v in values:
        s = str(v)
        if s not in seen:
            seen.append(s)
            if len(seen) == limit:
                break
    return tuple(seen)


def _pair(article: int, bay_code: str) -> str:
    return f"{article}-{bay_code}"


class _Context:
    """Lookup sets shared by the checks, built once per validate() call."""

    def __init__(
        self,
        bays: Sequence[Bay],
        allocations: Sequence[AllocationRecord],
        overflows: Sequence[OverflowRecord],
        events: Sequence[DemandEvent],
        locations: Mapping[str, Location],
    ):
        self.bays = bays
        self.allocations = allocations
        self.overflows = overflows
        self.events = events
        self.locations = locations

        self.bay_codes: Set[str] = {b.code for b in bays}
        self.allocation_keys: Set[Tuple[int, str]] = {a.key for a in allocations}
        self.overflow_keys: Set[Tuple[int, str]] = {o.key for o in overflows}

    def event_bay(self, event: DemandEvent) -> Optional[str]:
        loc = self.locations.get(event.location_code.strip())
        if loc is None or loc.bay_code not in self.bay_codes:
            return None
        return loc.bay_code


# ============================================
# CHECK 1: Pick.location -> Location
# ============================================
def check_pick_locations(ctx: _Context) -> Optional[Finding]:
    invalid = [e for e in ctx.events if ctx.event_bay(e) is None]
    if not invalid:
        return None
    return Finding(
        scope="Pick",
        severity=Severity.ERROR,
        category="Missing Location",
        description="Picks reference locations that do not resolve to a known bay",
        count=len(invalid),
        examples=_sample(e.location_code for e in invalid),
    )


# ============================================
# CHECK 2: allocated articles originate from demand
# ============================================
def check_allocated_articles(ctx: _Context) -> List[Finding]:
    findings = []
    demand_articles = {e.article for e in ctx.events}
    allocated_articles = {a.article for a in ctx.allocations}

    orphans = [a.article for a in ctx.allocations if a.article not in demand_articles]
    if orphans:
        findings.append(
            Finding(
                scope="ArticleLocation",
                severity=Severity.ERROR,
                category="Allocation Without Demand",
                description="Assigned articles that never appear in the pick history",
                count=len(set(orphans)),
                examples=_sample(orphans),
            )
        )

    overflow_only = [
        o.article for o in ctx.overflows
        if o.article not in allocated_articles and o.article in demand_articles
    ]
    if overflow_only:
        findings.append(
            Finding(
                scope="Pick",
                severity=Severity.WARNING,
                category="Overflow-Only Article",
                description="Picked articles without any slot assignment (all bays overflowed)",
                count=len(set(overflow_only)),
                examples=_sample(overflow_only),
            )
        )
    return findings


# ============================================
# CHECK 3: ArticleLocation.location -> Location
# ============================================
def check_allocation_bays(ctx: _Context) -> Optional[Finding]:
    invalid = [a for a in ctx.allocations if a.bay_code not in ctx.bay_codes]
    if not invalid:
        return None
    return Finding(
        scope="ArticleLocation",
        severity=Severity.ERROR,
        category="Missing Location",
        description="ArticleLocation references bays not in the Location set",
        count=len(invalid),
        examples=_sample(a.bay_code for a in invalid),
    )


# ============================================
# CHECK 4: every demanded article-bay pair is accounted for
# ============================================
def check_pair_completeness(ctx: _Context) -> List[Finding]:
    demand_pairs: Dict[Tuple[int, str], None] = {}
    for e in ctx.events:
        bay_code = ctx.event_bay(e)
        if bay_code is not None:
            demand_pairs.setdefault((e.article, bay_code), None)

    overflowed = []
    missing = []
    for key in demand_pairs:
        if key in ctx.allocation_keys:
            continue
        if key in ctx.overflow_keys:
            overflowed.append(key)
        else:
            missing.append(key)

    findings = []
    if missing:
        findings.append(
            Finding(
                scope="Pick",
                severity=Severity.ERROR,
                category="Missing Article-Location Pair",
                description="Picked article-bay pairs neither assigned nor logged as overflow",
                count=len(missing),
                examples=_sample(_pair(*k) for k in missing),
            )
        )
    if overflowed:
        findings.append(
            Finding(
                scope="Pick",
                severity=Severity.WARNING,
                category="Overflow Article-Location Pair",
                description="Picked article-bay pairs that overflowed (bay size class full)",
                count=len(overflowed),
                examples=_sample(_pair(*k) for k in overflowed),
            )
        )
    return findings


# ============================================
# CHECK 5: capacity layout holds only 0.25 / 0.50 / 1.00
# ============================================
def _is_valid_size(value: object) -> bool:
    return isinstance(value, SizeClass) and value.weight in VALID_WEIGHTS


def _display_size(value: object) -> str:
    return f"{value.weight:.2f}" if isinstance(value, SizeClass) else str(value)


def check_capacity_layouts(ctx: _Context) -> Optional[Finding]:
    invalid = []
    for bay in ctx.bays:
        bad = [v for v in bay.capacity_layout if not _is_valid_size(v)]
        if bad:
            invalid.append(f"{bay.code} (invalid: {', '.join(_display_size(v) for v in bad)})")

    if not invalid:
        return None
    return Finding(
        scope="Location",
        severity=Severity.ERROR,
        category="Invalid Capacity Layout Values",
        description="Capacity layout contains values other than 0.25, 0.50 or 1.00",
        count=len(invalid),
        examples=_sample(invalid),
    )


# ============================================
# CHECK 6: assignment size class
# ============================================
def check_allocation_sizes(ctx: _Context) -> Optional[Finding]:
    invalid = [a for a in ctx.allocations if not _is_valid_size(a.size_class)]
    if not invalid:
        return None
    return Finding(
        scope="ArticleLocation",
        severity=Severity.WARNING,
        category="Invalid Location Size",
        description="locationSize values outside 0.25, 0.50, 1.00",
        count=len(invalid),
        examples=_sample(
            f"Article {a.article} @ {a.bay_code} = {_display_size(a.size_class)}" for a in invalid
        ),
    )


# ============================================
# CHECK 7: duplicate primary keys
# ============================================
def check_duplicates(ctx: _Context) -> List[Finding]:
    findings = []

    bay_counts = Counter(b.code for b in ctx.bays)
    dup_bays = [(code, n) for code, n in bay_counts.items() if n > 1]
    if dup_bays:
        findings.append(
            Finding(
                scope="Location",
                severity=Severity.ERROR,
                category="Duplicate Location",
                description="Duplicate bay locations found",
                count=len(dup_bays),
                examples=_sample(f"{code} ({n}×)" for code, n in dup_bays),
            )
        )

    pair_counts = Counter(a.key for a in ctx.allocations)
    dup_pairs = [(key, n) for key, n in pair_counts.items() if n > 1]
    if dup_pairs:
        findings.append(
            Finding(
                scope="ArticleLocation",
                severity=Severity.ERROR,
                category="Duplicate Article-Location Pair",
                description="Duplicate article-location pairs found",
                count=len(dup_pairs),
                examples=_sample(f"{_pair(*key)} ({n}×)" for key, n in dup_pairs),
            )
        )
    return findings


# ============================================
# CHECK 8: original pick location is in the mapping
# ============================================
def check_original_locations(ctx: _Context) -> Optional[Finding]:
    invalid = [
        e for e in ctx.events
        if e.location_code.strip() and e.location_code.strip() not in ctx.locations
    ]
    if not invalid:
        return None
    return Finding(
        scope="Pick",
        severity=Severity.WARNING,
        category="Invalid Original Location",
        description="originalPickLocation references not in LocationMapping",
        count=len(invalid),
        examples=_sample(e.location_code for e in invalid),
    )


# ============================================
# CHECK 9: assigned <= available per bay and size
# ============================================
def check_capacity_constraint(ctx: _Context) -> Optional[Finding]:
    assigned = Counter((a.bay_code, a.size_class) for a in ctx.allocations)

    violations = []
    for bay in ctx.bays:
        for size in SizeClass:
            n = assigned.get((bay.code, size), 0)
            available = bay.available(size)
            if n > available:
                violations.append(
                    f"{bay.code} size {size.weight:.2f}: {n} assigned > {available} available"
                )

    if not violations:
        return None
    return Finding(
        scope="ArticleLocation",
        severity=Severity.ERROR,
        category="Capacity Constraint Violation",
        description="More articles assigned than available slots",
        count=len(violations),
        examples=_sample(violations),
    )


CHECKS: Sequence[Callable[[_Context], Union[Optional[Finding], List[Finding]]]] = (
    check_pick_locations,
    check_allocated_articles,
    check_allocation_bays,
    check_pair_completeness,
    check_capacity_layouts,
    check_allocation_sizes,
    check_duplicates,
    check_original_locations,
    check_capacity_constraint,
)


def unknown_article_location_finding(
    unknown: Sequence[Tuple[int, str]],
) -> Optional[Finding]:
    """Article master rows pointing at pick locations missing from the location master."""
    if not unknown:
        return None
    return Finding(
        scope="LocationMapping",
        severity=Severity.WARNING,
        category="Unknown Article Location",
        description="Article master references pick locations not in the location master",
        count=len(unknown),
        examples=_sample(f"{article} → {code}" for article, code in unknown),
    )


def validate(
    bays: Union[Mapping[str, Bay], Iterable[Bay]],
    allocations: Sequence[AllocationRecord],
    overflows: Sequence[OverflowRecord],
    events: Sequence[DemandEvent],
    locations: Mapping[str, Location],
    unknown_article_locations: Sequence[Tuple[int, str]] = (),
) -> List[Finding]:
    if isinstance(bays, Mapping):
        bays = bays.values()

    ctx = _Context(list(bays), list(allocations), list(overflows), list(events), locations)

    findings: List[Finding] = []
    for check in CHECKS:
        result = check(ctx)
        if result is None:
            continue
        if isinstance(result, Finding):
            findings.append(result)
        else:
            findings.extend(result)

    extra = unknown_article_location_finding(unknown_article_locations)
    if extra is not None:
        findings.append(extra)

    errors, warnings = count_by_severity(findings)
    if errors:
        logger.warning("Validation found %s errors and %s warnings", errors, warnings)
    else:
        logger.info("Validation passed with %s warnings", warnings)

    return findings


def count_by_severity(findings: Iterable[Finding]) -> Tuple[int, int]:
    findings = list(findings)
    errors = sum(1 for f in findings if f.severity is Severity.ERROR)
    return errors, len(findings) - errors


def has_blocking_errors(findings: Iterable[Finding]) -> bool:
    return any(f.is_blocking for f in findings)
