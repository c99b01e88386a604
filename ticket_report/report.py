from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Dict, List, Optional

from .prices import PRICE_PRECISION
from .schema import PriceStatistics

CENTS = Decimal('0.01')

NO_TICKETS = "No flight data found in the file."
NO_DURATIONS = "No flight time data."
NO_PRICES = "Prices are not available in the data."


def format_amount(value: Decimal) -> str:
    """
    Formats a price: no fractional part when the value is whole,
    otherwise exactly two decimals.

    Report statistics are already rounded to whole units, so only the
    first form shows up in a report.
    """
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        if value == value.to_integral_value():
            return f"{value.quantize(Decimal(1)):f}"
        return f"{value.quantize(CENTS, rounding=ROUND_HALF_UP):f}"


def format_duration(minutes: int) -> str:
    return f"{minutes // 60} h {minutes % 60} min"


def render_min_flight_times(min_times: Dict[str, int]) -> List[str]:
    lines = ["Minimum flight time per carrier:"]
    if not min_times:
        lines.append(NO_DURATIONS)
    for carrier, minutes in min_times.items():
        lines.append(f"{carrier}: {format_duration(minutes)}")
    return lines


def render_price_statistics(stats: Optional[PriceStatistics]) -> List[str]:
    if stats is None:
        return [NO_PRICES]
    return [
        f"Average price: {format_amount(stats.mean)}",
        f"Median price: {format_amount(stats.median)}",
        f"Difference between average and median: {format_amount(stats.difference)}",
    ]


def render_report(ticket_count: int, min_times: Dict[str, int], stats: Optional[PriceStatistics]) -> List[str]:
    """
    Builds the report lines for the analysed tickets.

    Args:
        ticket_count: Number of tickets that survived parsing.
        min_times: Carrier -> minimum flight time in minutes.
        stats: Price statistics, or None if there were no prices.

    Returns:
        The lines to print, without trailing newlines.
    """
    if ticket_count == 0:
        return [NO_TICKETS]
    return render_min_flight_times(min_times) + [""] + render_price_statistics(stats)
