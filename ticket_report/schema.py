# ticket_report/schema.py

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Ticket:
    carrier: str
    departure_at: datetime
    arrival_at: datetime
    price: Decimal


@dataclass(frozen=True)
class ParseFailure:
    carrier: str
    field: str
    reason: str


@dataclass(frozen=True)
class PriceStatistics:
    mean: Decimal
    median: Decimal
    difference: Decimal
