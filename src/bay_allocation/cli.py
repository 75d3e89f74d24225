import argparse
import sys
from pathlib import Path

from bay_allocation.allocation.transform_usecase import run_bay_level_transform
from bay_allocation.data.client_files import load_client_data
from bay_allocation.presentation.console import (
    render_transform_summary,
    render_validation_report,
)
from bay_allocation.presentation.excel_writer import descriptive_filename, write_workbook
from bay_allocation.presentation.sheets import build_sheets
from bay_allocation.utils.config import config
from bay_allocation.utils.file_utils import cleanup_old_files
from bay_allocation.utils.logger import get_logger, set_console_level

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bay-level slot allocation from client location/article/pick exports"
    )

    parser.add_argument(
        "--locations",
        type=Path,
        default=config.locations_path,
        help=f"Location master CSV (default: {config.locations_path})",
    )
    parser.add_argument(
        "--articles",
        type=Path,
        default=config.articles_path,
        help=f"Article master CSV (default: {config.articles_path})",
    )
    parser.add_argument(
        "--picks",
        type=Path,
        default=config.picks_path,
        help=f"Pick history CSV (default: {config.picks_path})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.OUTPUT_DIR,
        help=f"Workbook destination (default: {config.OUTPUT_DIR})",
    )
    parser.add_argument(
        "--max-picks",
        type=int,
        default=config.MAX_PICKS,
        help=f"Use only the N most recent picks (default: {config.MAX_PICKS})",
    )
    parser.add_argument(
        "--area",
        type=str,
        default=config.PICK_AREA,
        help="Pick area filter; pass an empty string to disable (default: %(default)r)",
    )
    parser.add_argument(
        "--no-excel",
        action="store_true",
        help="Run and validate only, do not write the workbook",
    )
    parser.add_argument(
        "--cleanup",
        action="store_true",
        help="Delete workbooks older than REPORT_RETENTION_DAYS from the output directory",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only show warnings and errors on the console (the log file is unchanged)",
    )
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)

    if args.quiet:
        set_console_level("WARNING")

    if args.max_picks < 0:
        raise SystemExit("--max-picks must be >= 0")

    data = load_client_data(
        args.locations,
        args.articles,
        args.picks,
        area=args.area.strip(),
        encoding=config.CSV_ENCODING,
    )

    result = run_bay_level_transform(data, max_events=args.max_picks)

    output_path = None
    if not args.no_excel:
        input_files = ", ".join(p.name for p in (args.locations, args.articles, args.picks))
        output_path = write_workbook(
            build_sheets(result, input_files=input_files),
            args.output_dir,
            descriptive_filename(result.outcome.events, prefix=config.OUTPUT_PREFIX),
        )

    if args.cleanup:
        cleanup_old_files(str(args.output_dir))

    print(render_transform_summary(result, output_path))
    print(render_validation_report(result.findings))

    if not result.ready_for_use:
        logger.error("Transform finished with blocking validation errors")
        sys.exit(1)


if __name__ == "__main__":
    main()
