"""
Saved input snapshots.

The calculator keeps a single opaque snapshot of its inputs. Stores are
handed to the application explicitly (see strcalc.main.create_app) and
loading never fails: anything missing, malformed or unreadable falls back
to the default inputs.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError

from strcalc.calculations.metrics import coerce_inputs, default_inputs
from strcalc.config import get_settings
from strcalc.db.database import SessionLocal, get_db_context
from strcalc.db.models import InputSnapshot

logger = logging.getLogger(__name__)


class SnapshotStore(Protocol):
    def load(self) -> Dict[str, float]:
        ...

    def save(self, inputs: Mapping[str, float]) -> None:
        ...


def parse_snapshot(raw: Any) -> Dict[str, float]:
    """
    Turn a stored record into a complete input set.

    Accepts a mapping or its JSON text. Fields missing from the record keep
    their defaults; a record that is not a mapping is discarded.
    """
    if raw is None:
        return default_inputs()

    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding unreadable input snapshot: {e}")
            return default_inputs()

    if not isinstance(raw, Mapping):
        logger.warning(
            f"Discarding input snapshot of type {type(raw).__name__}, expected an object"
        )
        return default_inputs()

    return coerce_inputs(raw, base=default_inputs())


class MemorySnapshotStore:
    """Snapshot store held in process memory."""

    def __init__(self, initial: Any = None) -> None:
        self._data = initial
        self.saves = 0

    def load(self) -> Dict[str, float]:
        return parse_snapshot(self._data)

    def save(self, inputs: Mapping[str, float]) -> None:
        self._data = json.dumps(dict(inputs))
        self.saves += 1


class SqlSnapshotStore:
    """Snapshot store backed by one row of the input_snapshots table."""

    def __init__(self, session_factory=SessionLocal, key: Optional[str] = None):
        self.session_factory = session_factory
        self.key = key or get_settings().snapshot_key

    def load(self) -> Dict[str, float]:
        try:
            with get_db_context(self.session_factory) as db:
                row = db.get(InputSnapshot, self.key)
                raw = row.data if row is not None else None
        except (SQLAlchemyError, ValueError) as e:
            # ValueError: the data column holds text that is not JSON
            logger.warning(f"Could not read input snapshot '{self.key}': {e}")
            return default_inputs()

        if raw is None:
            logger.info(f"No saved input snapshot '{self.key}', using defaults")
        return parse_snapshot(raw)

    def save(self, inputs: Mapping[str, float]) -> None:
        try:
            with get_db_context(self.session_factory) as db:
                row = db.get(InputSnapshot, self.key)
                if row is None:
                    row = InputSnapshot(key=self.key)
                    db.add(row)
                row.data = dict(inputs)
        except SQLAlchemyError as e:
            logger.error(f"Failed to save input snapshot '{self.key}': {e}")
            raise

        logger.info(f"Saved input snapshot '{self.key}'")
