# app/storage.py
import json
import logging
import os
import stat
import tempfile
from typing import Dict, List, Any

from .config import settings

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

# Mode for data files created by the first save
DEFAULT_FILE_MODE = 0o644

# Resource name -> file name inside the data directory
STORE_TIMES = "store_times"
STORE_OVERWRITES = "store_overwrites"
RESOURCE_FILES = {
    STORE_TIMES: "store_times.json",
    STORE_OVERWRITES: "store_overwrite.json",
}


class StorageError(Exception):
    """Raised when a resource file is missing, unreadable or not a JSON array."""


class JsonFileStore:
    """
    Keeps each resource as one JSON array file in ``data_dir``.

    Every call hits the disk: ``load`` reads the whole file and ``save``
    replaces the whole file. There is no locking, so two concurrent writers
    to the same resource can overwrite each other's changes.
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def path_for(self, resource: str) -> str:
        try:
            file_name = RESOURCE_FILES[resource]
        except KeyError:
            raise StorageError(f"Unknown resource '{resource}'")
        return os.path.join(self.data_dir, file_name)

    def load(self, resource: str) -> List[Record]:
        path = self.path_for(resource)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {resource} from {path}: {e}", exc_info=True)
            raise StorageError(f"Could not load '{resource}' from {path}") from e

        if not isinstance(data, list):
            logger.error(f"{path} does not contain a JSON array (found {type(data).__name__})")
            raise StorageError(f"'{resource}' file {path} is not a JSON array")
        return data

    def save(self, resource: str, records: List[Record]) -> None:
        path = self.path_for(resource)
        # Write next to the target and rename over it so readers never see a partial file
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{resource}-", suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2)
            # mkstemp creates 0600; keep the permissions the data file already had
            try:
                mode = stat.S_IMODE(os.stat(path).st_mode)
            except FileNotFoundError:
                mode = DEFAULT_FILE_MODE
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {resource} to {path}: {e}", exc_info=True)
            raise StorageError(f"Could not save '{resource}' to {path}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)


# Dependency to get the record store for FastAPI endpoints
def get_store() -> JsonFileStore:
    return JsonFileStore(settings.data_dir)
