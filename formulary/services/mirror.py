import json
import logging
from pathlib import Path

from pydantic import ValidationError

from formulary.config import get_settings
from formulary.models.forms import Form, forms_from_json, forms_to_json

logger = logging.getLogger(__name__)

CACHE_KEY = "cachedForms"


class MirrorStore:
    """Offline copy of the full form collection in a local JSON file.

    The file is a JSON object of keyed blobs; the forms live under CACHE_KEY as
    the same array the API returns. Every save overwrites the whole blob, and
    nothing here ever raises: a missing or unreadable cache behaves as empty.
    """

    def __init__(self, path: Path, key: str = CACHE_KEY):
        self.path = path
        self.key = key

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    def _write_all(self, data: dict) -> None:
        """Write to a sibling temp file, then swap it in so readers never see a partial file."""
        temp = self.path.with_suffix(self.path.suffix + ".tmp")
        temp.write_text(json.dumps(data, indent=2))
        temp.replace(self.path)

    def load(self) -> list[Form]:
        try:
            blob = self._read_all().get(self.key)
            if blob is None:
                return []
            return forms_from_json(blob)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable form cache at %s: %s", self.path, e)
            return []

    def save(self, forms: list[Form]) -> None:
        try:
            blob = forms_to_json(forms)
            try:
                all_blobs = self._read_all()
            except ValueError:
                all_blobs = {}
            all_blobs[self.key] = blob
            self._write_all(all_blobs)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not write form cache to %s: %s", self.path, e)


def get_mirror_store() -> MirrorStore:
    return MirrorStore(get_settings().cache_file)
