"""
JSON file key-value store.

Each key is persisted as one JSON document in the data directory. Values are
pydantic models, written with model_dump_json and read back with
model_validate_json.
"""

import os
import tempfile
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ..core.error_handling import StorageError

M = TypeVar("M", bound=BaseModel)


class JsonFileStore:
    """
    Key-value store mapping string keys to JSON files.

    Attributes:
        data_dir (Path):
            The directory holding one `<key>.json` file per key.

    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def contains(self, key: str) -> bool:
        return self._path(key).is_file()

    def get_item(self, key: str, model: type[M]) -> M | None:
        """
        Reads the value stored under a key.

        Args:
            key (str): The storage key.
            model (type[M]): The model to validate the document against.

        Returns:
            M | None: The stored value, or None if the key is absent.

        Raises:
            StorageError: If the document cannot be read or validated.

        """
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            return model.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise StorageError(f"Cannot read '{key}' from {path}: {e}") from e

    def set_item(self, key: str, value: BaseModel) -> bool:
        """
        Writes a value under a key.

        The document is written to a temporary file first and moved into
        place, so a failed write never leaves a truncated document behind.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value.model_dump_json(indent=2))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return True

    def remove_item(self, key: str) -> bool:
        self._path(key).unlink(missing_ok=True)
        return True
