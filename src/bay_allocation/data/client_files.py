# src/bay_allocation/data/client_files.py
"""
Client export readers.

Three CSV exports feed the transform:
- Locations.csv          (location master)
- Artikelinformatie.csv  (article master)
- pick history           (one row per pick)

Everything is read as text; rows that cannot be parsed are skipped and
counted, never fatal. A missing file or a missing required column is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from bay_allocation.allocation.allocation_models import (
    ArticleRecord,
    DemandEvent,
    MasterLocationRecord,
)
from bay_allocation.utils.logger import get_logger

logger = get_logger(__name__)


LOCATION_COLUMNS = ["Location", "Aisle", "Bay"]
ARTICLE_COLUMNS = ["Artikelnummer"]
PICK_COLUMNS = ["Artikelnummer", "Locatiecode"]


@dataclass
class ReadStats:
    source: str
    rows_read: int = 0
    rows_kept: int = 0
    rows_skipped: int = 0       # malformed
    rows_filtered: int = 0      # outside the pick area


@dataclass
class ClientData:
    master_locations: List[MasterLocationRecord]
    articles: List[ArticleRecord]
    events: List[DemandEvent]
    stats: List[ReadStats] = field(default_factory=list)


# ------------------------------------------------------------
# Field parsing
# ------------------------------------------------------------
def parse_int(value: str) -> Optional[int]:
    value = (value or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_european_decimal(value: str) -> float:
    """ "12,5" -> 12.5. Empty or garbage -> 0.0 """
    value = (value or "").strip().replace(",", ".")
    if not value:
        return 0.0
    try:
        return float(value)
    except ValueError:
        return 0.0


# ------------------------------------------------------------
# CSV access
# ------------------------------------------------------------
def read_table(path: Path, required: Sequence[str], encoding: str = "utf-8") -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing required input file: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding=encoding)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{path.name} is missing required columns: {', '.join(missing)}")

    logger.info("Read %s rows from %s", len(df), path.name)
    return df


def _records(df: pd.DataFrame) -> List[Dict[str, str]]:
    return df.to_dict("records")


def _log_stats(stats: ReadStats) -> None:
    if stats.rows_skipped:
        logger.warning("%s: skipped %s malformed rows", stats.source, stats.rows_skipped)
    if stats.rows_filtered:
        logger.info("%s: %s rows outside the pick area", stats.source, stats.rows_filtered)


# ------------------------------------------------------------
# Row builders
# ------------------------------------------------------------
def load_locations(df: pd.DataFrame, area: str = "") -> tuple[List[MasterLocationRecord], ReadStats]:
    stats = ReadStats(source="locations", rows_read=len(df))
    rows: List[MasterLocationRecord] = []

    for r in _records(df):
        code = r.get("Location", "").strip()
        if not code:
            stats.rows_skipped += 1
            continue

        row_area = r.get("Area", "").strip()
        if area and row_area != area:
            stats.rows_filtered += 1
            continue

        rows.append(
            MasterLocationRecord(
                location=code,
                aisle=r.get("Aisle", "").strip(),
                bay=r.get("Bay", "").strip(),
                slot_type=r.get("Slot Type", "").strip(),
                slot_type_description=r.get("Slot Type Description", "").strip(),
                location_class=r.get("Location Class", "").strip(),
                area=row_area,
            )
        )

    stats.rows_kept = len(rows)
    _log_stats(stats)
    return rows, stats


def load_articles(df: pd.DataFrame) -> tuple[List[ArticleRecord], ReadStats]:
    stats = ReadStats(source="articles", rows_read=len(df))
    rows: List[ArticleRecord] = []

    for r in _records(df):
        article = parse_int(r.get("Artikelnummer", ""))
        if article is None:
            stats.rows_skipped += 1
            continue

        rows.append(
            ArticleRecord(
                article=article,
                description=r.get("Artikeloms Verkoop", "").strip(),
                length=parse_european_decimal(r.get("Lengte St Eenheid", "")),
                width=parse_european_decimal(r.get("Breedte St Eenheid", "")),
                height=parse_european_decimal(r.get("Hoogte St Eenheid", "")),
                pick_location=r.get("Picklocatie", "").strip(),
            )
        )

    stats.rows_kept = len(rows)
    _log_stats(stats)
    return rows, stats


def load_picks(df: pd.DataFrame, area: str = "") -> tuple[List[DemandEvent], ReadStats]:
    stats = ReadStats(source="picks", rows_read=len(df))
    events: List[DemandEvent] = []

    for idx, r in enumerate(_records(df)):
        code = r.get("Locatiecode", "").strip()
        article = parse_int(r.get("Artikelnummer", ""))
        if not code or article is None:
            stats.rows_skipped += 1
            continue

        if area and not code.startswith(area):
            stats.rows_filtered += 1
            continue

        raw_qty = r.get("Aantal basiseenheden", "").strip()
        quantity = parse_int(raw_qty) if raw_qty else 1
        if quantity is None:
            stats.rows_skipped += 1
            continue

        events.append(
            DemandEvent(
                sequence=idx,
                article=article,
                location_code=code,
                picked_at=r.get("Pick datumtijd", "").strip(),
                delivery_date=r.get("Leverdatum", "").strip(),
                quantity=quantity,
                order_number=r.get("Pickorder nummer", "").strip(),
                order_type=r.get("Order_type", "").strip(),
            )
        )

    stats.rows_kept = len(events)
    _log_stats(stats)
    return events, stats


def load_client_data(
    locations_path: Path,
    articles_path: Path,
    picks_path: Path,
    area: str = "",
    encoding: str = "utf-8",
) -> ClientData:
    master, loc_stats = load_locations(read_table(locations_path, LOCATION_COLUMNS, encoding), area)
    articles, art_stats = load_articles(read_table(articles_path, ARTICLE_COLUMNS, encoding))
    events, pick_stats = load_picks(read_table(picks_path, PICK_COLUMNS, encoding), area)

    return ClientData(
        master_locations=master,
        articles=articles,
        events=events,
        stats=[loc_stats, art_stats, pick_stats],
    )
