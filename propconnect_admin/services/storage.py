import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class FileStorage:
    """
    Durable key/value storage for the console, modelled on browser localStorage.

    All keys live in a single JSON object on disk; values are strings (callers serialize
    their records themselves). Writes replace the file atomically.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        """
        Load every stored item.

        A missing file is an empty store. A file that is not UTF-8 encoded JSON object is
        logged and treated as empty so a damaged store never blocks startup.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as e:
            logger.warning(f"Storage file '{self.path}' is not valid UTF-8: {e}")
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Storage file '{self.path}' is not valid JSON: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Storage file '{self.path}' does not hold an object.")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(items, tmp)
            os.replace(tmp_path, self.path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)
        logger.debug(f"Stored item '{key}'.")

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key not in items:
            return
        del items[key]
        self._write_all(items)
        logger.debug(f"Removed item '{key}'.")


class MemoryStorage:
    """In-process storage with the FileStorage interface; nothing survives a restart."""

    def __init__(self, items: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
