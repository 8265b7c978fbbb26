from pathlib import Path
import logging
import threading
from watch.base import FrameSourceBase
from watch.file_list import FileList, FileStatus

logger = logging.getLogger(__name__)


class DirectoryFrameSource(FrameSourceBase):
    """
    Polls a directory for image files on a background thread.

    A created file is reported as NEW once its size is unchanged between two
    scans, so half-written screenshots are not picked up. Removed files are
    reported as DELETED. The thread sleeps on stop_event between scans and
    exits as soon as it is set.
    """

    def __init__(
        self,
        directory: Path,
        extension: str,
        file_list: FileList,
        stop_event: threading.Event,
        poll_interval: float = 0.2,
        process_existing: bool = False,
    ):
        self.directory = Path(directory)
        self.extension = extension.lower()
        self.file_list = file_list
        self.stop_event = stop_event
        self.poll_interval = poll_interval
        self.process_existing = process_existing

        self._known: set[Path] = set()
        self._pending: dict[Path, int] = {}  # путь -> размер на прошлом проходе
        self._thread: threading.Thread | None = None

    def _list_files(self) -> dict[Path, int]:
        files = {}
        for item in self.directory.iterdir():
            if item.suffix.lower() != self.extension:
                continue
            try:
                if item.is_file():
                    files[item] = item.stat().st_size
            except OSError:
                # файл удалили между iterdir и stat
                continue
        return files

    def prime(self) -> None:
        """Records files already present so only later ones count as new"""
        status = FileStatus.NEW if self.process_existing else FileStatus.EXISTING
        for path in sorted(self._list_files(), key=lambda p: p.name):
            self._known.add(path)
            self.file_list.mark(path, status)
        logger.info(f"Watching {self.directory} ({len(self._known)} existing {self.extension} files)")

    def scan(self) -> None:
        """One polling pass over the directory"""
        current = self._list_files()

        for path in sorted(self._known - current.keys()):
            self._known.discard(path)
            self.file_list.mark(path, FileStatus.DELETED)
            logger.debug(f"Removed: {path.name}")

        for path in list(self._pending):
            if path not in current:
                del self._pending[path]

        for path, size in sorted(current.items()):
            if path in self._known:
                continue
            if size > 0 and self._pending.get(path) == size:
                del self._pending[path]
                self._known.add(path)
                self.file_list.mark(path, FileStatus.NEW)
                logger.debug(f"Added: {path.name}")
            else:
                self._pending[path] = size

    def _run(self) -> None:
        while not self.stop_event.wait(self.poll_interval):
            try:
                self.scan()
            except Exception as e:
                logger.error(f"Error scanning {self.directory}: {e}", exc_info=True)

    def start(self) -> None:
        if self._thread is not None:
            return
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Image directory could not be found: {self.directory}")

        self.prime()
        self._thread = threading.Thread(target=self._run, name="frame-watcher", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self.stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
