from enum import Enum
from pathlib import Path
import threading


class FileStatus(Enum):
    NEW = "new"
    EXISTING = "existing"
    DELETED = "deleted"


class FileList:
    """
    Files seen by the watcher, shared between the watcher thread and the
    main loop. Every access goes through the lock.
    """

    def __init__(self):
        self._files: dict[Path, FileStatus] = {}
        self._lock = threading.Lock()

    def mark(self, path: Path, status: FileStatus) -> None:
        with self._lock:
            self._files[path] = status

    def take_new(self) -> list[Path]:
        """Returns NEW files in insertion order and flips them to EXISTING"""
        with self._lock:
            new = [path for path, status in self._files.items() if status is FileStatus.NEW]
            for path in new:
                self._files[path] = FileStatus.EXISTING
        return new

    def status(self, path: Path) -> FileStatus | None:
        with self._lock:
            return self._files.get(path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)
