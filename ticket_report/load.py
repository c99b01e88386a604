import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from .exceptions import MalformedInput, TicketFileNotFound, UnreadableInput
from .preprocess import parse_records
from .schema import Ticket

logger = logging.getLogger(__name__)

TICKETS_KEY = 'tickets'
ROUTE_COLUMNS = ('origin_name', 'destination_name')


def read_ticket_entries(path: str) -> List[Any]:
    """
    Reads the tickets document and returns its raw ticket array.

    Raises:
        TicketFileNotFound: the path is missing or is not a regular file.
        UnreadableInput: the file cannot be read or is not valid UTF-8.
        MalformedInput: the content is not JSON or has no tickets array.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise TicketFileNotFound(f"File {path} not found.")

    logger.info("Loading tickets from %s", file_path)
    try:
        text = file_path.read_text(encoding='utf-8-sig')
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableInput(f"Could not read {path}: {e}") from e

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInput(f"{path} is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MalformedInput(f"{path}: expected a JSON object at the top level.")
    entries = document.get(TICKETS_KEY)
    if not isinstance(entries, list):
        raise MalformedInput(f"{path}: missing '{TICKETS_KEY}' array.")

    return entries


def to_frame(entries: List[Any]) -> pd.DataFrame:
    """
    Builds a DataFrame of ticket records, one row per JSON object.
    Entries that are not objects are skipped with a warning.
    Missing fields come out as None, never NaN; missing route names
    come out as empty strings.
    """
    records = []
    for position, entry in enumerate(entries):
        if isinstance(entry, dict):
            records.append(entry)
        else:
            logger.warning("Skipping ticket #%d: expected an object, got %s", position, type(entry).__name__)

    df = pd.DataFrame(records, dtype=object)
    for col in ROUTE_COLUMNS:
        if col not in df.columns:
            df[col] = ''
    df = df.astype(object).where(df.notna(), None)
    df[list(ROUTE_COLUMNS)] = df[list(ROUTE_COLUMNS)].fillna('')
    return df


def filter_by_route(df: pd.DataFrame, origin: str, destination: str) -> pd.DataFrame:
    """Keeps rows whose origin and destination names match exactly."""
    mask = (df['origin_name'] == origin) & (df['destination_name'] == destination)
    return df[mask]


def load_records(path: str, route: Optional[Tuple[str, str]] = None) -> List[Dict[str, Any]]:
    """
    Loads the raw ticket records of a file, optionally keeping only one route.

    Args:
        path: Path to the tickets JSON file.
        route: (origin_name, destination_name) pair, or None to keep everything.

    Returns:
        The retained records as plain dicts.
    """
    df = to_frame(read_ticket_entries(path))
    total = len(df)
    if route is not None:
        df = filter_by_route(df, *route)
        logger.info("%d of %d records match route %s -> %s", len(df), total, *route)
    return df.to_dict(orient='records')


def load_tickets(path: str, route: Optional[Tuple[str, str]] = None, input_format: str = 'split') -> Tuple[Ticket, ...]:
    """Loads, filters and parses a tickets file into an immutable tuple of tickets."""
    records = load_records(path, route)
    return parse_records(records, input_format)
