"""
Registry store for token records.

The registry is an append-only, ordered collection. ``TokenStore`` is the
contract callers depend on; ``JsonFileTokenStore`` keeps the whole collection
in a single JSON array that is read in full and rewritten in full on every
create.

Concurrent ``create()`` calls are not isolated from each other: two callers
may read the same snapshot, compute the same id, and the later write wins.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from src.models.token import TokenRecord
from src.services.validation_service import ValidationService
from src.utils.exceptions import StorageUnavailable, TokenRegistryErrorCodes


def utc_now_iso() -> str:
    """Current instant as ISO-8601 with millisecond precision and a ``Z`` suffix"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TokenStore(ABC):
    """Standard interface for token registry backends"""

    @abstractmethod
    def list(self) -> List[TokenRecord]:
        """Return every record in insertion order"""
        raise NotImplementedError

    @abstractmethod
    def create(self, fields: Mapping[str, Any]) -> TokenRecord:
        """Validate ``fields``, append a new record and return it"""
        raise NotImplementedError


class JsonFileTokenStore(TokenStore):
    """Whole-file JSON implementation of the token registry"""

    def __init__(self, data_file: str, clock: Optional[Callable[[], str]] = None):
        self.data_file = Path(data_file)
        self.clock = clock or utc_now_iso
        self.logger = structlog.get_logger()

    def initialize(self) -> None:
        """Create the data directory and an empty array file if absent"""
        try:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            if not self.data_file.exists():
                self._write_all([])
                self.logger.info("Initialized token data file", path=str(self.data_file))
        except OSError as e:
            self.logger.error("Failed to initialize token data file", path=str(self.data_file), error=str(e))
            raise StorageUnavailable(
                f"Cannot initialize {self.data_file}: {e}", TokenRegistryErrorCodes.STORAGE_WRITE_FAILED
            ) from e

    def list(self) -> List[TokenRecord]:
        return self._read_all()

    def create(self, fields: Mapping[str, Any]) -> TokenRecord:
        cleaned = ValidationService.validate_token_fields(fields)

        records = self._read_all()
        record = TokenRecord.from_dict({**cleaned, "id": len(records) + 1, "timestamp": self.clock()})
        records.append(record)
        self._write_all(records)

        self.logger.info("Token record created", record_id=record.id, token_name=record.token_name)
        return record

    def _read_all(self) -> List[TokenRecord]:
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.error("Failed to read token data", path=str(self.data_file), error=str(e))
            raise StorageUnavailable(f"Cannot read {self.data_file}: {e}") from e

        if not isinstance(raw, list):
            self.logger.error("Token data is not an array", path=str(self.data_file))
            raise StorageUnavailable(f"{self.data_file} does not contain a JSON array")

        try:
            return [TokenRecord.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            self.logger.error("Token data holds a malformed record", path=str(self.data_file), error=str(e))
            raise StorageUnavailable(f"{self.data_file} holds a malformed record: {e}") from e

    def _write_all(self, records: List[TokenRecord]) -> None:
        payload: List[Dict[str, Any]] = [record.to_dict() for record in records]
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.data_file.parent), prefix=f".{self.data_file.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.data_file)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            self.logger.error("Failed to write token data", path=str(self.data_file), error=str(e))
            raise StorageUnavailable(
                f"Cannot write {self.data_file}: {e}", TokenRegistryErrorCodes.STORAGE_WRITE_FAILED
            ) from e
