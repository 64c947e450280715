"""
Event Loader - Reads the cosmic event dataset.

The dataset is a JSON array of records with ``name``, ``date``, ``type``,
``importance`` and ``description`` fields. It is read once at startup;
records that fail validation are dropped with a warning so that one bad
entry cannot put a marker in the wrong lane or at an undefined position.
"""

import json
import logging
import math
import numbers
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from cosmic_calendar.data.models import CosmicEvent, EventType, FULL_YEAR
from cosmic_calendar.utils.error_handler import (
    DataLoadError, MalformedRecordError, create_data_load_error_with_guidance
)
from cosmic_calendar.utils.timestamp_parser import TimestampParser


DEFAULT_DATA_FILE = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    'resources', 'cosmic_events.json'
)

REQUIRED_FIELDS = ('name', 'date', 'type', 'importance')


class EventLoader:
    """
    Loads and validates cosmic events.

    After a load, ``dropped_records`` holds the MalformedRecordError for every
    record that was rejected.
    """

    def __init__(self, data_file: Optional[Union[str, Path]] = None):
        """
        Args:
            data_file: Path to the JSON dataset. Defaults to the bundled dataset.
        """
        self.data_file = str(data_file) if data_file else DEFAULT_DATA_FILE
        self.dropped_records: List[MalformedRecordError] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    def load(self) -> List[CosmicEvent]:
        """
        Read, parse and validate the dataset.

        Returns:
            list: Valid events, in file order

        Raises:
            DataLoadError: If the file cannot be read, is not a JSON array,
                or contains no valid record
        """
        try:
            with open(self.data_file, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            raise create_data_load_error_with_guidance(self.data_file, e) from e

        if not isinstance(records, list):
            raise DataLoadError(
                "Event data file is malformed",
                source=self.data_file,
                recovery_suggestions=[
                    f"Expected a JSON array of events, got {type(records).__name__}"
                ]
            )

        events = self.parse_records(records)
        if not events:
            raise DataLoadError(
                "Event data file contains no valid events",
                source=self.data_file,
                recovery_suggestions=["Check the error log for rejected records"]
            )

        self.logger.info(f"Loaded {len(events)} cosmic events from {self.data_file}")
        return events

    def parse_records(self, records: List[Any]) -> List[CosmicEvent]:
        """
        Validate raw records, dropping malformed ones and duplicate names.

        Args:
            records: Decoded JSON records

        Returns:
            list: Valid events; the first record wins when a name repeats
        """
        self.dropped_records = []
        events = []
        seen_names = set()

        for index, record in enumerate(records):
            try:
                event = self.parse_record(record, index)
                if event.name in seen_names:
                    raise MalformedRecordError(
                        f"Duplicate event name '{event.name}'", index, record
                    )
            except MalformedRecordError as e:
                self.logger.warning(f"Dropping event record: {e.details}")
                self.dropped_records.append(e)
                continue

            seen_names.add(event.name)
            events.append(event)

        if self.dropped_records:
            self.logger.warning(
                f"Dropped {len(self.dropped_records)} of {len(records)} event records"
            )
        return events

    @staticmethod
    def parse_record(record: Dict[str, Any], index: Optional[int] = None) -> CosmicEvent:
        """
        Convert one raw record into a CosmicEvent.

        Raises:
            MalformedRecordError: If the record is not an object, misses a
                required field, or carries an invalid value
        """
        if not isinstance(record, dict):
            raise MalformedRecordError("Record is not an object", index, record)

        missing = [field for field in REQUIRED_FIELDS if record.get(field) in (None, '')]
        if missing:
            raise MalformedRecordError(
                f"Missing required field(s): {', '.join(missing)}", index, record
            )

        name = record['name']
        if not isinstance(name, str):
            raise MalformedRecordError("Field 'name' must be a string", index, record)

        try:
            event_type = EventType(record['type'])
        except ValueError:
            raise MalformedRecordError(
                f"Unknown event type '{record['type']}' "
                f"(expected one of {', '.join(EventType.values())})",
                index, record
            )

        date = TimestampParser.parse_timestamp(record['date'])
        if date is None:
            raise MalformedRecordError(f"Unparseable date '{record['date']}'", index, record)
        if not FULL_YEAR.contains(date):
            raise MalformedRecordError(
                f"Date {date} lies outside the simulated year", index, record
            )

        importance = record['importance']
        if (isinstance(importance, bool) or not isinstance(importance, numbers.Real)
                or not math.isfinite(importance) or importance <= 0):
            raise MalformedRecordError(
                f"Field 'importance' must be a positive finite number, got {importance!r}",
                index, record
            )

        description = record.get('description') or ''

        return CosmicEvent(
            name=name,
            date=date,
            type=event_type,
            importance=float(importance),
            description=str(description)
        )
