import logging
from datetime import datetime
from decimal import Decimal

import pytest

from ticket_report.durations import DurationError, calculate_min_flight_times, flight_duration
from ticket_report.schema import Ticket


def ticket(carrier, departure, arrival, price='100'):
    return Ticket(carrier=carrier, departure_at=departure, arrival_at=arrival, price=Decimal(price))


def test_same_day_duration():
    assert flight_duration(ticket('TK', datetime(2018, 5, 12, 16, 20), datetime(2018, 5, 12, 22, 10))) == 350


def test_arrival_equal_to_departure_is_zero():
    moment = datetime(2018, 5, 12, 10, 0)
    assert calculate_min_flight_times([ticket('TK', moment, moment)]) == {'TK': 0}


def test_midnight_rollover():
    t = ticket('TK', datetime(2018, 5, 12, 23, 50), datetime(2018, 5, 12, 0, 10))
    assert flight_duration(t) == 20


def test_dates_encoding_next_day():
    t = ticket('TK', datetime(2018, 5, 12, 23, 50), datetime(2018, 5, 13, 0, 10))
    assert flight_duration(t) == 20


def test_multi_day_flight():
    t = ticket('TK', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 14, 11, 30))
    assert flight_duration(t) == 2 * 1440 + 90


def test_inconsistent_dates_raise():
    t = ticket('TK', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 10, 10, 0))
    with pytest.raises(DurationError):
        flight_duration(t)


def test_partial_minutes_are_truncated():
    t = ticket('TK', datetime(2018, 5, 12, 10, 0, 0), datetime(2018, 5, 12, 10, 5, 59))
    assert flight_duration(t) == 5


def test_minimum_per_carrier():
    tickets = [
        ticket('TK', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 12, 15, 0)),
        ticket('S7', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 12, 17, 30)),
        ticket('TK', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 12, 13, 45)),
        ticket('', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 12, 11, 0)),
        ticket('TK', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 12, 14, 0)),
    ]
    min_times = calculate_min_flight_times(tickets)
    assert min_times == {'TK': 225, 'S7': 450, '': 60}
    assert list(min_times) == ['TK', 'S7', '']


def test_failing_ticket_is_skipped(caplog):
    tickets = [
        ticket('TK', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 9, 10, 0)),
        ticket('S7', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 12, 11, 0)),
    ]
    with caplog.at_level(logging.WARNING):
        min_times = calculate_min_flight_times(tickets)
    assert min_times == {'S7': 60}
    assert len(caplog.records) == 1
    assert 'TK' in caplog.records[0].getMessage()


def test_all_failing_gives_empty_map():
    tickets = [ticket('TK', datetime(2018, 5, 12, 10, 0), datetime(2018, 5, 9, 10, 0))]
    assert calculate_min_flight_times(tickets) == {}


def test_durations_are_never_negative():
    base = datetime(2018, 5, 12, 12, 0)
    tickets = [ticket(str(hour), base, base.replace(hour=hour)) for hour in range(24)]
    min_times = calculate_min_flight_times(tickets)
    assert len(min_times) == 24
    assert min_times['0'] == 720
    assert all(minutes >= 0 for minutes in min_times.values())
