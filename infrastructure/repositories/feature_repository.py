"""JSON-file backed repository for the route guide feature database."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from application.dto import FeatureRecordDTO
from core.logging_config import get_logger
from domain.common.exceptions import FeatureDatasetLoadException


logger = get_logger(__name__)

_records_adapter = TypeAdapter(List[FeatureRecordDTO])


class JsonFeatureRepository:
    """Load `[{name, location: {latitude, longitude}}, ...]` from a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser().resolve()

    def _read_bytes(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as exc:
            raise FeatureDatasetLoadException(str(self.path), exc.strerror or str(exc)) from exc

    def load(self) -> List[FeatureRecordDTO]:
        raw = self._read_bytes()
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise FeatureDatasetLoadException(str(self.path), f"invalid JSON: {exc}") from exc

        try:
            records = _records_adapter.validate_python(payload)
        except ValidationError as exc:
            first = exc.errors()[0]
            where = ".".join(str(loc) for loc in first.get("loc", ()))
            raise FeatureDatasetLoadException(
                str(self.path), f"malformed record at {where or '<root>'}: {first.get('msg', 'invalid')}"
            ) from exc

        logger.info("dataset_loaded", path=str(self.path), features=len(records))
        return records
