"""
CleanMap - Neighborhood Cleanliness Aggregation

CLI entry point for aggregating and submitting cleanliness reports.
"""

import argparse
import logging
import sys

from cleanmap.engine.classification import rating_label
from cleanmap.engine.grid import to_fixed
from cleanmap.rendering.export import AreaStatisticsExporter
from cleanmap.service import ReportService, new_report
from cleanmap.storage.report_store import JsonReportStore
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("cleanmap.log")
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CleanMap - Neighborhood Cleanliness Aggregation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Aggregate all stored reports into area statistics
  python main.py aggregate

  # Rate a spot in Sao Paulo
  python main.py submit --lat -23.5505 --lng -46.6333 --rating 8 \\
                        --user-id u-123 --user-name "Ana"
        """
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Data directory (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    aggregate = subparsers.add_parser("aggregate", help="Aggregate reports per area")
    aggregate.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Directory for the area table (default: {settings.OUTPUT_ROOT})"
    )

    submit = subparsers.add_parser("submit", help="Submit a new report")
    submit.add_argument("--lat", type=float, required=True, help="Latitude")
    submit.add_argument("--lng", type=float, required=True, help="Longitude")
    submit.add_argument("--rating", type=int, required=True, help="Rating (0-10)")
    submit.add_argument(
        "--radius",
        type=float,
        default=settings.DEFAULT_RADIUS_METERS,
        help=f"Display radius in meters (default: {settings.DEFAULT_RADIUS_METERS})"
    )
    submit.add_argument("--user-id", help="Submitter identifier")
    submit.add_argument("--user-name", help="Submitter display name")

    return parser


def run_aggregate(service: ReportService, output_dir: str) -> int:
    statistics = service.refresh()
    if statistics is None:
        print("Could not load reports, see log for details.")
        return 1

    print(f"{len(statistics)} area(s)")
    for stat in statistics:
        print(
            f"  {stat.cell_id}: {to_fixed(stat.average_rating, 1)}/10 "
            f"({rating_label(stat.average_rating)}, {stat.total_reports} report(s))"
        )

    output_path = AreaStatisticsExporter().export(statistics, output_dir=output_dir)
    print(f"Area table: {output_path}")
    return 0


def run_submit(service: ReportService, args: argparse.Namespace) -> int:
    candidate = new_report(
        latitude=args.lat,
        longitude=args.lng,
        rating=args.rating,
        user_id=args.user_id,
        user_name=args.user_name,
        radius=args.radius,
    )
    try:
        report_id = service.submit_report(candidate)
    except ValueError as e:
        print(f"Invalid report: {e}")
        return 1

    if report_id is None:
        print("Could not save report, see log for details.")
        return 1

    print(f"Report saved: {report_id}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    logger.info(f"Using data root {args.data_root}")
    store = JsonReportStore(args.data_root, filename=settings.REPORTS_FILENAME)
    service = ReportService(store)

    if args.command == "aggregate":
        return run_aggregate(service, args.output_dir)
    return run_submit(service, args)


if __name__ == "__main__":
    sys.exit(main())
