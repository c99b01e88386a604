import logging
from datetime import timedelta
from functools import reduce
from typing import Dict, Iterable, Iterator, Tuple

from .schema import Ticket

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


class DurationError(ValueError):
    """Raised when a ticket's flight duration cannot be computed."""

    pass


def flight_duration(ticket: Ticket) -> int:
    """
    Returns the flight time of a ticket in whole minutes.

    A negative difference means the arrival date did not record the crossing
    of midnight, so one day is added. If the result is still negative the
    dates are inconsistent and a DurationError is raised.
    """
    try:
        elapsed = ticket.arrival_at - ticket.departure_at
        if elapsed < timedelta(0):
            elapsed += timedelta(days=1)
    except (TypeError, OverflowError) as e:
        raise DurationError(str(e)) from e

    if elapsed < timedelta(0):
        raise DurationError(f"arrival {ticket.arrival_at} is more than a day before departure {ticket.departure_at}")
    return int(elapsed.total_seconds() // 60)


def _carrier_durations(tickets: Iterable[Ticket]) -> Iterator[Tuple[str, int]]:
    for ticket in tickets:
        try:
            yield ticket.carrier, flight_duration(ticket)
        except DurationError as e:
            logger.warning("Skipping flight time of carrier %r: %s", ticket.carrier, e)


def _keep_minimum(min_times: Dict[str, int], item: Tuple[str, int]) -> Dict[str, int]:
    carrier, minutes = item
    current = min_times.get(carrier)
    if current is not None and current <= minutes:
        return min_times
    return {**min_times, carrier: minutes}


def calculate_min_flight_times(tickets: Iterable[Ticket]) -> Dict[str, int]:
    """
    Folds the tickets into a mapping of carrier -> minimum flight time in minutes.

    Args:
        tickets: Parsed tickets; the collection is only read.

    Returns:
        One entry per carrier with at least one computable duration, in the
        order carriers were first seen. Empty if no duration could be computed.
    """
    logger.info("Calculating minimum flight times...")
    return reduce(_keep_minimum, _carrier_durations(tickets), {})
