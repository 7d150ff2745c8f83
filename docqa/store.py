import logging
import os
import time
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Flat directory of uploaded documents.

    Filenames are the only identifiers: there is no index or metadata file,
    and nothing is ever updated or deleted. Uploads are stored as
    ``<stem>-<unix ms><ext>`` so two uploads of the same file do not
    overwrite each other.
    """

    def __init__(self, directory: str = "Documents"):
        os.makedirs(directory, exist_ok=True)
        self.directory = Path(directory)

    # ------------------ Internal helpers ------------------
    @staticmethod
    def _base_name(name: Optional[str]) -> str:
        # Drop any client-supplied directories, with either separator.
        base = (name or "").replace("\\", "/").split("/")[-1]
        return base or "file"

    @staticmethod
    def _timestamped(name: str) -> str:
        path = Path(name)
        return f"{path.stem}-{int(time.time() * 1000)}{path.suffix}"

    # ------------------ Public API ------------------
    def list_documents(self) -> List[str]:
        """
        Names of the files directly inside the directory, sorted.
        """
        return sorted(entry.name for entry in os.scandir(self.directory) if entry.is_file())

    def save(self, filename: Optional[str], data: bytes) -> str:
        """
        Write an uploaded file and return the name it was stored under.
        """
        stored_name = self._timestamped(self._base_name(filename))
        (self.directory / stored_name).write_bytes(data)
        logger.info("Stored upload %r as %s (%d bytes)", filename, stored_name, len(data))
        return stored_name

    def path_for(self, name: str) -> Path:
        return self.directory / self._base_name(name)

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()
