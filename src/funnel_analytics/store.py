"""In-memory event store backed by a JSON or Parquet file."""

import json
import os
import tempfile
import threading
from collections.abc import Sequence
from functools import cached_property
from pathlib import Path
from typing import Optional, Union

import duckdb
import ibis
import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import structlog
from pydantic import TypeAdapter, ValidationError

from funnel_analytics.engine.frame import events_to_frame
from funnel_analytics.schemas import Event

log = structlog.get_logger()

_EVENT_LIST = TypeAdapter(list[Event])


def _is_parquet(path: Path) -> bool:
    return path.suffix.lower() == ".parquet"


def read_events(path: Union[str, Path]) -> list[Event]:
    """
    Read events from a JSON array file or a Parquet file.

    Raises
    ------
    OSError
        If the file cannot be read.
    ValueError
        If the content is not an array of valid event objects.
    """
    path = Path(path)
    if _is_parquet(path):
        if not path.exists():
            raise FileNotFoundError(f"Events file not found: {path}")
        df = ibis.read_parquet(str(path)).execute()
        # Missing values come back as NaN; the model expects None.
        rows = df.astype(object).where(df.notna(), None).to_dict("records")
    else:
        with open(path, "r", encoding="utf-8") as f:
            rows = json.load(f)
        if not isinstance(rows, list):
            raise ValueError("Events file must contain a JSON array of event objects.")
    return _EVENT_LIST.validate_python(rows)


def write_events(path: Union[str, Path], events: Sequence[Event]) -> None:
    """Write events to `path`, replacing any existing file atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [event.model_dump() for event in events]

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=path.suffix)
    try:
        if _is_parquet(path):
            os.close(fd)
            pq.write_table(pa.Table.from_pylist(records), tmp_name)
        else:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(
                    [{k: v for k, v in r.items() if v is not None} for r in records],
                    f,
                    indent=2,
                )
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class EventSnapshot:
    """An immutable view of the event collection at one point in time."""

    def __init__(self, events: Sequence[Event]):
        self.events: tuple[Event, ...] = tuple(events)

    def __len__(self) -> int:
        return len(self.events)

    @cached_property
    def frame(self) -> pd.DataFrame:
        """The prepared aggregation frame, built on first use."""
        return events_to_frame(self.events)


class EventStore:
    """
    Owns the current snapshot of the event collection.

    The collection is loaded on first access and kept until `invalidate` is
    called. A reader keeps whichever snapshot it obtained, so a reload never
    changes data under an in-flight aggregation.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._snapshot: Optional[EventSnapshot] = None
        # Bumped on every invalidation; a load that overlaps one is not cached.
        self._generation = 0
        self._lock = threading.RLock()

    def snapshot(self) -> EventSnapshot:
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        with self._lock:
            if self._snapshot is None:
                generation = self._generation
                loaded = self._load()
                if loaded is None:
                    # Not cached, so the next call retries the load.
                    return EventSnapshot(())
                if generation != self._generation:
                    return loaded
                self._snapshot = loaded
            return self._snapshot

    def events(self) -> tuple[Event, ...]:
        return self.snapshot().events

    def invalidate(self) -> None:
        """Drop the cached snapshot; the next read reloads from disk."""
        with self._lock:
            self._generation += 1
            self._snapshot = None
        log.info("event_store.invalidated", path=str(self.path))

    def replace(self, events: Sequence[Event]) -> None:
        """Persist a new collection and drop the cached snapshot."""
        write_events(self.path, events)
        log.info("event_store.written", path=str(self.path), count=len(events))
        self.invalidate()

    def _load(self) -> Optional[EventSnapshot]:
        try:
            events = read_events(self.path)
        except (
            OSError,
            ValueError,
            ValidationError,
            pa.ArrowException,
            duckdb.Error,
        ) as e:
            log.error("event_store.load.failed", path=str(self.path), error=str(e))
            return None
        log.info("event_store.loaded", path=str(self.path), count=len(events))
        return EventSnapshot(events)
