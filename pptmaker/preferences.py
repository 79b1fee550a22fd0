import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger("pptmaker.prefs")


class Preferences:
    """
    Small on-device key-value store: one JSON object in one file.

    Reads go through an in-memory copy; every write rewrites the file via a
    temp file and os.replace so a crash never leaves half a document behind.
    Single-threaded use only.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data
        data: Dict[str, Any] = {}
        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text("utf-8"))
                if isinstance(loaded, dict):
                    data = loaded
                else:
                    logger.warning("prefs file %s is not an object, starting empty", self.path)
            except (OSError, ValueError) as e:
                logger.warning("prefs read failed path=%s err=%r", self.path, e)
        self._data = data
        return data

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(self._load(), ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def get_int(self, key: str) -> int:
        """Integer value for `key`; 0 when missing or not an integer."""
        value = self._load().get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return 0
        return value

    def set(self, key: str, value: Any) -> None:
        self._load()[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._flush()
