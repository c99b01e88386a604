import logging
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, List, Optional, Sequence

from .schema import PriceStatistics, Ticket

logger = logging.getLogger(__name__)

WHOLE_UNIT = Decimal(1)
# Enough digits for an exact sum of prices up to 1e99 with 99 decimal places.
PRICE_PRECISION = 300


def sorted_prices(tickets: Iterable[Ticket]) -> List[Decimal]:
    """Returns every ticket price in ascending order, duplicates included."""
    return sorted(ticket.price for ticket in tickets)


def round_half_up(value: Decimal) -> Decimal:
    return value.quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)


def median(prices: Sequence[Decimal]) -> Decimal:
    """
    Median of an ascending sequence: the middle element for an odd count,
    the average of the two middle elements for an even count.
    """
    size = len(prices)
    if size % 2 == 0:
        return (prices[size // 2 - 1] + prices[size // 2]) / 2
    return prices[size // 2]


def calculate_price_statistics(prices: Sequence[Decimal]) -> Optional[PriceStatistics]:
    """
    Calculates mean, median and their absolute difference.

    Mean and median are each rounded to a whole unit (half up) before the
    difference is taken.

    Args:
        prices: Ascending sequence of ticket prices.

    Returns:
        The statistics, or None when there are no prices.
    """
    if not prices:
        logger.info("No prices to summarise.")
        return None

    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        mean = round_half_up(sum(prices, Decimal(0)) / len(prices))
        middle = round_half_up(median(prices))
        difference = abs(mean - middle)
    return PriceStatistics(mean=mean, median=middle, difference=difference)
