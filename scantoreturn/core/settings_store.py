"""Persisted remote endpoint setting (user-overridable, defaults to the built-in locator)."""
import json
import logging
from pathlib import Path
from typing import Optional

from scantoreturn.config import DEFAULT_ENDPOINT, ENDPOINT_KEY, SETTINGS_PATH

logger = logging.getLogger(__name__)


class EndpointSettings:
    """Remote endpoint stored under one key in a JSON settings file.

    An empty endpoint selects offline/demo mode. Like the tag cache, read and
    write failures are logged and never raised.
    """

    def __init__(self, path: Path = SETTINGS_PATH, default: str = DEFAULT_ENDPOINT) -> None:
        self._path = Path(path)
        self._default = default

    def _read(self) -> Optional[dict]:
        try:
            data = json.loads(self._path.read_text())
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Settings: cannot read %s (%s)", self._path, e)
            return None
        return data if isinstance(data, dict) else None

    def _write(self, data: dict) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            logger.warning("Settings: write to %s failed (%s)", self._path, e)

    def get_endpoint(self) -> str:
        """Saved endpoint; on first read the default is saved so it shows up as configured."""
        data = self._read()
        if data is not None and isinstance(data.get(ENDPOINT_KEY), str):
            return data[ENDPOINT_KEY]
        self.set_endpoint(self._default)
        return self._default

    def set_endpoint(self, url: str) -> None:
        data = self._read() or {}
        data[ENDPOINT_KEY] = (url or "").strip()
        self._write(data)

    def reset(self) -> str:
        """Restore the built-in endpoint and return it."""
        self.set_endpoint(self._default)
        return self._default
