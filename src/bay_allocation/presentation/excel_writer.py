from pathlib import Path
from typing import Dict, Iterable

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from bay_allocation.allocation.allocation_models import DemandEvent
from bay_allocation.utils.dates import EPOCH, parse_pick_timestamp
from bay_allocation.utils.logger import get_logger

logger = get_logger(__name__)

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _autosize_columns(ws):
    """
    Autosize Excel columns based on content length.
    """
    for col in ws.columns:
        max_len = 0
        col_letter = get_column_letter(col[0].column)
        for cell in col:
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 2, 40)


def _freeze_panes(ws):
    """
    Freeze header row.
    """
    ws.freeze_panes = "A2"


def _bold_header(ws):
    for cell in ws[1]:
        cell.font = Font(bold=True)


def _format_count(count: int) -> str:
    if count >= 1000:
        return f"{int(count / 1000 + 0.5)}K"
    return str(count)


def descriptive_filename(events: Iterable[DemandEvent], prefix: str = "Client") -> str:
    """
    Client_Full_Aug-Dec-2025_100K-picks.xlsx

    Date range comes from the pick ordering date (see parse_pick_timestamp);
    undated picks still count towards the pick total.
    """
    events = list(events)
    dates = []
    for e in events:
        d = parse_pick_timestamp(e.picked_at, e.delivery_date)
        if d != EPOCH:
            dates.append(d)

    parts = [prefix, "Full"]
    if dates:
        first, last = min(dates), max(dates)
        start_month, end_month = MONTH_NAMES[first.month - 1], MONTH_NAMES[last.month - 1]
        if start_month == end_month:
            parts.append(f"{start_month}-{last.year}")
        else:
            parts.append(f"{start_month}-{end_month}-{last.year}")
    parts.append(f"{_format_count(len(events))}-picks")

    return "_".join(parts) + ".xlsx"


def write_workbook(
    sheets: Dict[str, pd.DataFrame],
    output_dir: Path,
    filename: str,
) -> Path:
    """
    Write all sheets to one workbook, header row frozen and bold.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    file_path = output_dir / filename

    try:
        with pd.ExcelWriter(file_path, engine="openpyxl") as writer:
            for sheet_name, df in sheets.items():
                df.to_excel(writer, sheet_name=sheet_name, index=False)

                ws = writer.book[sheet_name]

                _freeze_panes(ws)
                _bold_header(ws)
                _autosize_columns(ws)
    except Exception:
        logger.error("Failed to write workbook %s", file_path, exc_info=True)
        raise

    logger.info("Wrote %s sheets to %s", len(sheets), file_path)
    return file_path
