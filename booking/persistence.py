"""JSON file persistence for the in-memory stores.

Failures come back as ``Err`` values instead of exceptions so the caller can
decide how to surface them. Nothing is retried and a corrupt file is never
replaced by an empty store.
"""

import os
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from booking.errors import FileAccessError, SerializationError, StoreError
from booking.result import Err, Ok, Result


class JsonFilePersistence[I: BaseModel]:
    """Loads and saves an id -> record mapping as a JSON object."""

    def __init__(self, path: str | Path, identifiable_class: type[I]):
        self.path = Path(path)
        self.identifiable_class = identifiable_class
        self._adapter = TypeAdapter(dict[int, identifiable_class])  # type: ignore[valid-type]

    def load(self) -> Result[dict[int, I], StoreError]:
        """Read the mapping. A missing file is an empty store."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.info(f"No persisted data at {self.path}, starting empty")
            return Ok({})
        except OSError as e:
            logger.error(f"Error reading {self.path}: {e!r}")
            return Err(FileAccessError(e))

        try:
            records = self._adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Error decoding {self.path}: {e!r}")
            return Err(SerializationError(e))

        mismatched = [k for k, record in records.items() if record.id != k]  # type: ignore[attr-defined]
        if mismatched:
            logger.error(f"Record keys {mismatched} do not match their ids in {self.path}")
            return Err(SerializationError(ValueError(f"mismatched keys: {mismatched}")))

        logger.info(f"Loaded {len(records)} records from {self.path}")
        return Ok(records)

    def save(self, records: dict[int, I]) -> Result[None, StoreError]:
        """Write the mapping, replacing the file atomically."""
        try:
            payload = self._adapter.dump_json(records, indent=2)
        except (ValueError, TypeError) as e:
            logger.error(f"Error encoding records for {self.path}: {e!r}")
            return Err(SerializationError(e))

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Error writing {self.path}: {e!r}")
            return Err(FileAccessError(e))

        logger.debug(f"Saved {len(records)} records to {self.path}")
        return Ok(None)
