"""
Location -> bay reconciliation.

Three sources mention raw location codes: the location master, the article
master (pick location) and the pick history. The master seeds the mapping;
picks that reference codes missing from the master get a synthesized
placeholder so they can still be routed to a bay. Article references are
only cross-checked.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from bay_allocation.allocation.allocation_models import (
    ArticleRecord,
    DemandEvent,
    Location,
    LocationAudit,
    LocationResolution,
    MasterLocationRecord,
    Provenance,
    SizeClass,
)
from bay_allocation.allocation.size_classifier import UNKNOWN_SLOT_TYPE, classify
from bay_allocation.utils.logger import get_logger

logger = get_logger(__name__)

LOCATION_SEPARATOR = "-"
SYNTHESIZED_DESCRIPTION = "Not in master data"


def bay_code_for(aisle: str, bay: str) -> str:
    return f"{aisle}{LOCATION_SEPARATOR}{bay}"


def infer_bay_code(raw_code: str) -> Optional[str]:
    """
    "Z99-14-02" -> "Z99-14". Returns None when the code has no
    aisle/bay shape (no separator, or an empty aisle or bay part).
    """
    parts = raw_code.split(LOCATION_SEPARATOR)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    return bay_code_for(parts[0], parts[1])


def resolve(
    master_locations: Iterable[MasterLocationRecord],
    articles: Iterable[ArticleRecord],
    events: Iterable[DemandEvent],
) -> LocationResolution:
    locations: Dict[str, Location] = {}
    audit: Dict[str, LocationAudit] = {}
    duplicates = 0

    # ------------------------------------------------------------
    # Seed from the location master
    # ------------------------------------------------------------
    for row in master_locations:
        code = row.location.strip()
        if code in locations:
            duplicates += 1
            continue

        slot_type = row.slot_type.strip() or UNKNOWN_SLOT_TYPE
        locations[code] = Location(
            code=code,
            bay_code=bay_code_for(row.aisle.strip(), row.bay.strip()),
            size_class=classify(slot_type),
            slot_type=slot_type,
            provenance=Provenance.FROM_MASTER,
            slot_type_description=row.slot_type_description.strip() or "Unknown",
            location_class=row.location_class.strip(),
        )
        audit[code] = LocationAudit(location=code, in_locations=True)

    if duplicates:
        logger.warning("Location master has %s duplicate location codes (first row kept)", duplicates)

    # ------------------------------------------------------------
    # Cross-check article pick locations (report only)
    # ------------------------------------------------------------
    unknown_article_locations = []
    for art in articles:
        code = art.pick_location.strip()
        if not code:
            continue
        if code in audit:
            audit[code].in_articles = True
        else:
            unknown_article_locations.append((art.article, code))

    if unknown_article_locations:
        logger.warning(
            "%s articles reference pick locations missing from the location master",
            len(unknown_article_locations),
        )

    # ------------------------------------------------------------
    # Cross-check picks, synthesize missing locations
    # ------------------------------------------------------------
    unresolvable: List[str] = []
    seen_unresolvable: Set[str] = set()
    synthesized = 0

    for event in events:
        code = event.location_code.strip()
        if not code:
            continue

        if code in audit:
            entry = audit[code]
            entry.in_picks = True
            entry.pick_count += 1
            continue

        if code in seen_unresolvable:
            continue

        bay_code = infer_bay_code(code)
        if bay_code is None:
            seen_unresolvable.add(code)
            unresolvable.append(code)
            continue

        locations[code] = Location(
            code=code,
            bay_code=bay_code,
            size_class=SizeClass.LARGE,
            slot_type=UNKNOWN_SLOT_TYPE,
            provenance=Provenance.SYNTHESIZED,
            slot_type_description=SYNTHESIZED_DESCRIPTION,
        )
        audit[code] = LocationAudit(location=code, in_picks=True, pick_count=1)
        synthesized += 1

    logger.info(
        "Mapped %s unique locations (%s synthesized from picks, %s unresolvable)",
        len(locations),
        synthesized,
        len(unresolvable),
    )

    return LocationResolution(
        locations=locations,
        audit=audit,
        unknown_article_locations=unknown_article_locations,
        unresolvable_codes=unresolvable,
    )
