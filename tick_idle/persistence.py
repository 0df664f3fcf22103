"""
Save/load for the economy.

- The whole game is one JSON blob stored under a single slot key.
- An MD5 checksum over the serialized payload travels with the blob.
  A mismatch is logged as a warning and the load goes ahead anyway.
- Loading replays offline time since the last save through the engine.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
from datetime import datetime, timezone
from tempfile import NamedTemporaryFile
from typing import Any, Callable, Dict, Protocol

from tick_idle.engine import Engine
from tick_idle.signals import OFFLINE
from tick_idle.types import SnapshotError

logger = logging.getLogger(__name__)

CHECKSUM_KEY = "checksum"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SaveSlot(Protocol):
    """Single-key storage for the save blob."""

    def read(self) -> str | None: ...

    def write(self, blob: str) -> None: ...

    def clear(self) -> None: ...


class MemorySlot:
    """In-process slot, mostly for tests and headless runs."""

    def __init__(self, blob: str | None = None) -> None:
        self.blob = blob

    def read(self) -> str | None:
        return self.blob

    def write(self, blob: str) -> None:
        self.blob = blob

    def clear(self) -> None:
        self.blob = None


class FileSlot:
    """JSON file slot with atomic writes (temp file + os.replace)."""

    def __init__(self, directory: str, key: str = "SaveData") -> None:
        self.path = os.path.join(directory, f"{key}.json")

    def read(self) -> str | None:
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, blob: str) -> None:
        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=directory,
            prefix=".save-",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp.write(blob)
            tmp.flush()
            os.fsync(tmp.fileno())
            temp_name = tmp.name
        try:
            os.replace(temp_name, self.path)
        except OSError:
            os.remove(temp_name)
            raise

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)


def _canonical(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def compute_checksum(payload: Dict[str, Any]) -> str:
    """MD5 of the payload serialized in key order, excluding the checksum itself."""
    body = {k: v for k, v in payload.items() if k != CHECKSUM_KEY}
    return hashlib.md5(_canonical(body).encode("utf-8")).hexdigest()


def encode_save(engine: Engine, saved_at: datetime) -> str:
    """Serialize the engine into a checksummed blob."""
    payload: Dict[str, Any] = engine.snapshot()
    payload["time"]["last_save"] = saved_at.isoformat()
    payload[CHECKSUM_KEY] = compute_checksum(payload)
    return _canonical(payload)


def decode_save(blob: str) -> tuple[Dict[str, Any], bool]:
    """Parse a blob. Returns (payload, checksum_ok). Raises ValueError if unparseable."""
    data = json.loads(blob)
    if not isinstance(data, dict):
        raise ValueError("save blob is not a JSON object")
    stored = data.get(CHECKSUM_KEY)
    return data, stored == compute_checksum(data)


class SaveSystem:
    """Saves, loads and autosaves an engine through one slot."""

    def __init__(
        self,
        engine: Engine,
        slot: SaveSlot,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        self._engine = engine
        self._slot = slot
        self._now = now
        self._interval = engine.economy.config.save_interval
        self._timer = 0.0
        self.last_save_time: datetime | None = None

    def save(self) -> bool:
        """Write the current state. Returns False if the slot write fails."""
        saved_at = self._now()
        try:
            self._slot.write(encode_save(self._engine, saved_at))
        except OSError:
            logger.exception("failed to write save data")
            return False
        self.last_save_time = saved_at
        self._timer = 0.0
        logger.info("game saved")
        return True

    def load(self, offline: bool = True) -> bool:
        """Restore from the slot, then replay offline time.

        Returns False (state untouched) when there is no save or it cannot be
        parsed or restored. A checksum mismatch only logs a warning.
        """
        try:
            blob = self._slot.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("failed to read save data: %s", exc)
            return False
        if blob is None:
            logger.info("no save data found")
            return False
        try:
            data, checksum_ok = decode_save(blob)
        except ValueError:
            logger.error("failed to parse save data")
            return False
        if not checksum_ok:
            logger.warning("save data checksum mismatch; save data may be corrupted")

        before = self._engine.snapshot()
        try:
            self._engine.restore(data)
        except (SnapshotError, AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.error("failed to restore save data: %s", exc)
            self._engine.restore(before)
            return False

        self.last_save_time = _parse_timestamp(data.get("time", {}).get("last_save"))
        logger.info("game loaded")
        if offline:
            self._process_offline()
        return True

    def _process_offline(self) -> int:
        if self.last_save_time is None:
            return 0
        elapsed = (self._now() - self.last_save_time).total_seconds()
        ticks = self._engine.catch_up(elapsed)
        bus = self._engine.economy.bus
        if ticks and bus is not None:
            bus.publish(OFFLINE, seconds=elapsed, ticks=ticks)
        return ticks

    def autosave(self, real_dt: float) -> bool:
        """Advance the autosave timer; saves when the interval elapses."""
        self._timer += real_dt
        if self._timer < self._interval:
            return False
        return self.save()

    def clear(self) -> None:
        self._slot.clear()
        self.last_save_time = None
        self._timer = 0.0


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.warning("ignoring unreadable last-save timestamp %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
