import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Tuple, Union

from .schema import ParseFailure, Ticket

logger = logging.getLogger(__name__)

DATE_FORMAT = '%d.%m.%y'
TIME_FORMAT = '%H:%M'
INPUT_FORMATS = ('split', 'iso')
DATE_PATTERN = re.compile(r'[0-9]{2}\.[0-9]{2}\.[0-9]{2}')
TIME_PATTERN = re.compile(r'[0-9]{1,2}:[0-9]{2}')
MAX_PRICE_EXPONENT = 99


def _text(value: Any) -> str:
    return '' if value is None else str(value)


def parse_split_datetime(date_str: str, time_str: str) -> datetime:
    """
    Combines a 'dd.mm.yy' date and an 'H:MM' / 'HH:MM' time into one datetime.
    Two-digit years always mean 2000-2099.
    Raises ValueError if either part does not match.
    """
    if not DATE_PATTERN.fullmatch(date_str):
        raise ValueError(f"date must look like dd.mm.yy: {date_str!r}")
    if not TIME_PATTERN.fullmatch(time_str):
        raise ValueError(f"time must look like H:MM or HH:MM: {time_str!r}")
    parsed = datetime.strptime(f"{date_str} {time_str}", f"{DATE_FORMAT} {TIME_FORMAT}")
    if parsed.year < 2000:
        parsed = parsed.replace(year=parsed.year + 100)
    return parsed


def parse_iso_datetime(value: str) -> datetime:
    """
    Parses a naive ISO-8601 date-time such as '2018-05-12T16:20'.
    Values carrying a UTC offset are rejected.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        raise ValueError(f"timezone offsets are not supported: {value}")
    return parsed


def parse_price(value: Any) -> Decimal:
    """
    Parses a price from a number or numeric string.
    A missing price counts as zero; negative and non-finite prices are invalid,
    as are prices of 1e100 or more or with more than 99 decimal places.
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"not a number: {value!r}") from None
    if not price.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    if price < 0:
        raise ValueError(f"price cannot be negative: {price}")
    if price.adjusted() > MAX_PRICE_EXPONENT or price.as_tuple().exponent < -MAX_PRICE_EXPONENT:
        raise ValueError(f"price out of range: {value!r}")
    return price


def _read_datetime(raw: Dict[str, Any], input_format: str, leg: str) -> datetime:
    if input_format == 'iso':
        return parse_iso_datetime(_text(raw.get(f'{leg}_at')))
    return parse_split_datetime(_text(raw.get(f'{leg}_date')), _text(raw.get(f'{leg}_time')))


def _describe(raw: Dict[str, Any], input_format: str, leg: str) -> str:
    if input_format == 'iso':
        return f"{leg}_at={raw.get(f'{leg}_at')!r}"
    return f"date={raw.get(f'{leg}_date')!r}, time={raw.get(f'{leg}_time')!r}"


def parse_record(raw: Dict[str, Any], input_format: str = 'split') -> Union[Ticket, ParseFailure]:
    """
    Converts one raw ticket record into a Ticket.

    Args:
        raw: The record as read from the tickets array.
        input_format: 'split' for separate date/time fields,
            'iso' for combined departure_at/arrival_at strings.

    Returns:
        A Ticket when every field parsed, otherwise a ParseFailure naming
        the carrier and the first field that failed.
    """
    if input_format not in INPUT_FORMATS:
        raise ValueError(f"Unknown input format: {input_format}. Must be one of {INPUT_FORMATS}")

    carrier = _text(raw.get('carrier'))

    moments = {}
    for leg in ('departure', 'arrival'):
        try:
            moments[leg] = _read_datetime(raw, input_format, leg)
        except (TypeError, ValueError) as e:
            return ParseFailure(carrier, leg, f"{_describe(raw, input_format, leg)}: {e}")

    try:
        price = parse_price(raw.get('price'))
    except ValueError as e:
        return ParseFailure(carrier, 'price', str(e))

    return Ticket(carrier=carrier, departure_at=moments['departure'], arrival_at=moments['arrival'], price=price)


def parse_records(records: Iterable[Dict[str, Any]], input_format: str = 'split') -> Tuple[Ticket, ...]:
    """
    Parses every record, keeping the tickets and logging one warning per rejected record.
    """
    tickets = []
    rejected = 0
    for raw in records:
        result = parse_record(raw, input_format)
        if isinstance(result, ParseFailure):
            rejected += 1
            logger.warning("Skipping ticket of carrier %r: invalid %s (%s)", result.carrier, result.field, result.reason)
        else:
            tickets.append(result)

    logger.info("Parsed %d of %d records", len(tickets), len(tickets) + rejected)
    return tuple(tickets)
