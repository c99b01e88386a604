# cli.py
import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from .durations import calculate_min_flight_times
from .exceptions import TicketReportError
from .load import load_tickets
from .preprocess import INPUT_FORMATS
from .prices import calculate_price_statistics, sorted_prices
from .report import render_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


def analyze(path: str, route: Optional[Tuple[str, str]] = None, input_format: str = 'split') -> List[str]:
    """
    Runs the whole pipeline on one tickets file and returns the report lines.
    Raises TicketReportError if the file cannot be loaded.
    """
    tickets = load_tickets(path, route, input_format)
    if not tickets:
        return render_report(0, {}, None)

    min_times = calculate_min_flight_times(tickets)
    stats = calculate_price_statistics(sorted_prices(tickets))
    return render_report(len(tickets), min_times, stats)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ticket-report',
        description='Report minimum flight time per carrier and price statistics for a tickets JSON file.',
    )
    parser.add_argument('file', help='Path to the tickets JSON file')
    parser.add_argument('--origin', help='Keep only tickets whose origin_name equals this value')
    parser.add_argument('--destination', help='Keep only tickets whose destination_name equals this value')
    parser.add_argument(
        '--format',
        dest='input_format',
        choices=INPUT_FORMATS,
        default='split',
        help="Record shape: 'split' date/time fields (dd.mm.yy, H:MM) or 'iso' departure_at/arrival_at",
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress messages')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.origin is None) != (args.destination is None):
        parser.error('--origin and --destination must be given together')

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )

    route = (args.origin, args.destination) if args.origin is not None else None
    try:
        lines = analyze(args.file, route, args.input_format)
    except TicketReportError as e:
        logger.error("Error processing file: %s", e)
        return EXIT_FATAL

    for line in lines:
        print(line)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
