"""
Analysis Store - JSON-backed persistence for analysis runs.

Records are kept in memory and, when a storage path is given, mirrored to
a JSON file after every write. Only the review status is mutable once a
record is created.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from treatment_assistant.errors import InvalidStatusError, PersistenceError
from treatment_assistant.models.analysis import AnalysisRecord, ReviewStatus


logger = logging.getLogger(__name__)


def parse_status(value) -> ReviewStatus:
    """
    Parse a review status case-insensitively.

    Raises:
        InvalidStatusError: If the value is not one of the allowed statuses
    """
    if isinstance(value, ReviewStatus):
        return value
    if not isinstance(value, str):
        raise InvalidStatusError(value)
    try:
        return ReviewStatus(value.strip().lower())
    except ValueError:
        raise InvalidStatusError(value) from None


class AnalysisStore:
    """
    Storage for analysis runs keyed by an opaque identifier.

    Read and write failures raise PersistenceError with a generic message;
    the underlying error is only logged.
    """

    STORAGE_KEY = "analysis_runs"

    def __init__(self, storage_path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            storage_path: Path to JSON file for persistence. In-memory if None.
        """
        self.storage_path = Path(storage_path) if storage_path else None
        self._items: dict[str, AnalysisRecord] = {}

        if self.storage_path and self.storage_path.exists():
            self._load_from_storage()

    def create(self, record: AnalysisRecord) -> str:
        """
        Persist a new analysis record.

        Args:
            record: The record to store

        Returns:
            The record ID
        """
        self._items[record.id] = record
        try:
            self._save_to_storage()
        except PersistenceError:
            del self._items[record.id]
            raise

        logger.info(f"Stored analysis run {record.id} ({record.risk_score})")
        return record.id

    def get(self, analysis_id: str) -> Optional[AnalysisRecord]:
        """Get a record by ID, or None if unknown."""
        return self._items.get(analysis_id)

    def list_analyses(
        self,
        status: Optional[Union[str, ReviewStatus]] = None,
        limit: Optional[int] = None,
    ) -> list[AnalysisRecord]:
        """
        List records, newest first.

        Args:
            status: Only return records with this review status
            limit: Maximum number of records to return

        Returns:
            Matching records sorted by creation time descending
        """
        records = list(self._items.values())
        if status is not None:
            wanted = parse_status(status)
            records = [r for r in records if r.status == wanted]

        records.sort(key=lambda r: r.created_at, reverse=True)
        if limit is not None:
            records = records[:limit]
        return records

    def update_status(
        self,
        analysis_id: str,
        status: Union[str, ReviewStatus],
    ) -> Optional[AnalysisRecord]:
        """
        Transition the review status of a record.

        The status is checked before anything is written.

        Args:
            analysis_id: ID of the record
            status: New status (pending, approved, modified, rejected)

        Returns:
            The updated record, or None if the ID is unknown

        Raises:
            InvalidStatusError: If the status is not allowed
        """
        new_status = parse_status(status)

        record = self._items.get(analysis_id)
        if record is None:
            return None

        updated = record.model_copy(update={"status": new_status})
        self._items[analysis_id] = updated
        try:
            self._save_to_storage()
        except PersistenceError:
            self._items[analysis_id] = record
            raise

        logger.info(f"Analysis {analysis_id} status: {record.status.value} -> {new_status.value}")
        return updated

    def count(self) -> int:
        return len(self._items)

    def _load_from_storage(self) -> None:
        """Load records from the JSON file."""
        try:
            with open(self.storage_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load analysis store {self.storage_path}: {e}")
            raise PersistenceError() from e

        for item_id, item_data in data.get(self.STORAGE_KEY, {}).items():
            try:
                self._items[item_id] = AnalysisRecord.model_validate(item_data)
            except ValidationError as e:
                logger.warning(f"Failed to deserialize analysis {item_id}: {e}")

        logger.info(f"Loaded {len(self._items)} analysis runs")

    def _save_to_storage(self) -> None:
        """Write all records to the JSON file."""
        if not self.storage_path:
            return

        payload = {
            self.STORAGE_KEY: {
                item_id: item.model_dump(mode="json")
                for item_id, item in self._items.items()
            }
        }
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.storage_path.with_suffix(self.storage_path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            tmp_path.replace(self.storage_path)
        except OSError as e:
            logger.error(f"Failed to save analysis store {self.storage_path}: {e}")
            raise PersistenceError() from e
