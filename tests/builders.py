from __future__ import annotations

import itertools
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from bay_allocation.allocation.allocation_models import (
    DemandEvent,
    Location,
    MasterLocationRecord,
    Provenance,
    SizeClass,
)


def make_master(
    code: str,
    slot_type: str = "BLH",
    location_class: str = "R",
    area: str = "D",
    aisle: Optional[str] = None,
    bay: Optional[str] = None,
) -> MasterLocationRecord:
    parts = code.split("-")
    return MasterLocationRecord(
        location=code,
        aisle=aisle if aisle is not None else parts[0],
        bay=bay if bay is not None else parts[1],
        slot_type=slot_type,
        slot_type_description=f"{slot_type} slot",
        location_class=location_class,
        area=area,
    )


def make_location(
    code: str,
    bay_code: str,
    size_class: SizeClass,
    provenance: Provenance = Provenance.FROM_MASTER,
    slot_type: str = "",
) -> Location:
    default_types = {SizeClass.SMALL: "PP3", SizeClass.MEDIUM: "BLL", SizeClass.LARGE: "BLH"}
    return Location(
        code=code,
        bay_code=bay_code,
        size_class=size_class,
        slot_type=slot_type or default_types[size_class],
        provenance=provenance,
    )


def location_map(locations: Iterable[Location]) -> Dict[str, Location]:
    return {loc.code: loc for loc in locations}


class EventFactory:
    """Builds DemandEvents with increasing input sequence numbers."""

    def __init__(self):
        self._seq = itertools.count()

    def __call__(
        self,
        article: int,
        location_code: str,
        picked_at: str = "01-12-25 08:00",
        delivery_date: str = "",
        quantity: int = 1,
        order_number: str = "",
        order_type: str = "",
    ) -> DemandEvent:
        return DemandEvent(
            sequence=next(self._seq),
            article=article,
            location_code=location_code,
            picked_at=picked_at,
            delivery_date=delivery_date,
            quantity=quantity,
            order_number=order_number,
            order_type=order_type,
        )


LOCATIONS_CSV = """Warehouse,Location Class,Location,Area,Aisle,Bay,Slot Type,Slot Type Description
85,C,D01-02-01,D,D01,02,PP3,Plank DKW 3 artikelen
85,C,D01-02-02,D,D01,02,PP3,Plank DKW 3 artikelen
85,R,D01-03-01,D,D01,03,BLL,Blokpallet laag
85,R,R05-01-01,R,R05,01,BLH,Blokpallet hoog
85,R,,D,D01,04,PP3,Plank DKW 3 artikelen
"""

ARTICLES_CSV = """Artikelnummer,Artikeloms Verkoop,Lengte St Eenheid,Breedte St Eenheid,Hoogte St Eenheid,Picklocatie
1001,Koffie 1kg,"12,5",10,4,D01-02-01
1002,Thee,20,10,5,D01-99-01
abc,Kapot,1,1,1,D01-02-01
"""

PICKS_CSV = """Artikelnummer,Locatiecode,Aantal basiseenheden,Pick datumtijd,Leverdatum,Pickorder nummer,Order_type
1001,D01-02-01,3,09-12-25 10:00,10-12-25,PO1,STD
1002,D01-02-02,,08-12-25 09:00,09-12-25,PO2,STD
1001,D01-03-01,1,07-12-25 08:00,,PO3,RUSH
1003,D01-02-01,2,garbage,,PO4,STD
1004,D77-01-05,1,06-12-25 12:00,,PO5,STD
xyz,D01-02-01,1,05-12-25 10:00,,PO6,STD
1005,,1,05-12-25 10:00,,PO7,STD
1006,D01-02-01,two,05-12-25 10:00,,PO8,STD
1007,R05-01-01,1,05-12-25 10:00,,PO9,STD
"""


def write_client_files(folder: Path) -> Tuple[Path, Path, Path]:
    """Small but complete client export: locations, articles, picks."""
    locations = folder / "Locations.csv"
    articles = folder / "Artikelinformatie.csv"
    picks = folder / "picks.csv"
    locations.write_text(LOCATIONS_CSV, encoding="utf-8")
    articles.write_text(ARTICLES_CSV, encoding="utf-8")
    picks.write_text(PICKS_CSV, encoding="utf-8")
    return locations, articles, picks
