import json

import pytest


def make_record(carrier='TK', departure=('12.05.18', '16:20'), arrival=('12.05.18', '22:10'), price='12400',
                origin_name='Владивосток', destination_name='Тель-Авив'):
    return {
        'origin': 'VVO',
        'origin_name': origin_name,
        'destination': 'TLV',
        'destination_name': destination_name,
        'departure_date': departure[0],
        'departure_time': departure[1],
        'arrival_date': arrival[0],
        'arrival_time': arrival[1],
        'carrier': carrier,
        'stops': 0,
        'price': price,
    }


@pytest.fixture
def write_tickets(tmp_path):
    """Writes a tickets document and returns its path as a string."""

    def _write(records, name='tickets.json', encoding='utf-8'):
        path = tmp_path / name
        path.write_text(json.dumps({'tickets': records}, ensure_ascii=False), encoding=encoding)
        return str(path)

    return _write
