"""
Persistence of the last acted-upon inventory snapshot.

The record is a JSON list of inventory items. Saves go through a temporary
file in the same directory followed by os.replace, so a failed write never
leaves a half-written record behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, List, Union

from ..models.inventory import InventoryItem
from ..utils.error_handling import PersistError, RecordCorruptError
from ..utils.logging import get_logger


class JsonSnapshotStore:
    """Loads and saves the inventory record as a JSON document."""

    def __init__(self, record_file: Union[str, Path]):
        """
        Initialize the snapshot store.

        Args:
            record_file: Path of the JSON record file
        """
        self.record_file = Path(record_file)
        self.logger = get_logger("snapshot.store")

    def load(self) -> List[InventoryItem]:
        """
        Load the previous inventory record.

        Returns:
            The persisted snapshot, or an empty list when no record exists.

        Raises:
            RecordCorruptError: If the record exists but cannot be read or parsed.
        """
        self.logger.info("Loading previous inventory record.")
        try:
            with open(self.record_file, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            self.logger.info("No previous record found. Starting from an empty record.")
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise RecordCorruptError(
                f"Could not read inventory record {self.record_file}: {e}"
            ) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise RecordCorruptError(
                f"Inventory record {self.record_file} is not valid JSON: {e}"
            ) from e

        snapshot = self._parse_record(data)
        self.logger.debug(
            "Loaded inventory record", extra={"item_count": len(snapshot)}
        )
        return snapshot

    def _parse_record(self, data: Any) -> List[InventoryItem]:
        # Versioned documents wrap the list as {"version": N, "items": [...]}.
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            data = data["items"]

        if not isinstance(data, list):
            raise RecordCorruptError(
                f"Inventory record {self.record_file} must contain a list of items"
            )

        try:
            return [InventoryItem.from_dict(entry) for entry in data]
        except ValueError as e:
            raise RecordCorruptError(
                f"Inventory record {self.record_file} has an invalid entry: {e}"
            ) from e

    def save(self, snapshot: List[InventoryItem]) -> None:
        """
        Replace the record with the full snapshot.

        Raises:
            PersistError: If the record could not be written. The previous
                record is left untouched.
        """
        self.logger.info("Saving new inventory record.")
        tmp_path = None
        try:
            self.record_file.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.record_file.parent,
                prefix=f".{self.record_file.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(
                    [item.to_dict() for item in snapshot],
                    f,
                    indent=2,
                    ensure_ascii=False,
                )
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.record_file)
        except Exception as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PersistError(
                f"Could not save inventory record {self.record_file}: {e}"
            ) from e

        self.logger.info(
            "Inventory record saved successfully.",
            extra={"item_count": len(snapshot)},
        )
