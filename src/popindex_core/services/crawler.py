"""
Crawler Service - builds the file index.

Walks a directory tree and writes one FileRecord per entry. Only
metadata is read, never file contents.

The walk runs on a producer thread and feeds a bounded queue; the calling
thread drains the queue into fixed-size batches and commits each full
batch, plus one final partial batch at end of stream. The producer blocks
while the queue is full, so memory stays bounded when writes fall behind.
"""

import logging
import queue
import threading
import time
from pathlib import Path
from typing import Callable, List, Optional

from ..config import DEFAULT_BATCH_SIZE, DEFAULT_QUEUE_SIZE
from ..ports.fs_port import FSPort, DirEntry
from ..ports.db_port import DBPort
from ..domain.models import FileRecord, ScanProgress, valid_text

logger = logging.getLogger(__name__)

# End-of-stream marker put by the producer
_END = object()

# How long a blocked producer waits before re-checking the stop flag
_PUT_POLL_SECONDS = 0.1


def entry_to_record(entry: DirEntry) -> FileRecord:
    """Build the index record for one directory entry."""
    name = valid_text(entry.name)
    ext = Path(name).suffix.lower().lstrip(".")
    return FileRecord(
        path=valid_text(entry.path),
        name=name,
        extension=ext or None,
        size=max(0, entry.size_bytes),
        last_modified=entry.mtime,
        is_dir=entry.is_dir,
    )


class CrawlerService:
    """
    Service for scanning directories and building the file index.

    Scans are best-effort: unreadable entries are counted and skipped.
    Store failures abort the scan.
    """

    def __init__(
        self,
        fs: FSPort,
        db: DBPort,
        batch_size: int = DEFAULT_BATCH_SIZE,
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ):
        """
        Initialize the crawler service.

        Args:
            fs: Filesystem adapter (must be read-only)
            db: Database adapter
            batch_size: Records per committed batch
            queue_size: Maximum records buffered between walk and writes
        """
        if batch_size < 1 or queue_size < 1:
            raise ValueError("batch_size and queue_size must be >= 1")
        self.fs = fs
        self.db = db
        self.batch_size = batch_size
        self.queue_size = queue_size

    def scan(
        self,
        root: str,
        progress_callback: Optional[Callable[[ScanProgress], None]] = None,
    ) -> ScanProgress:
        """
        Index the root and everything below it.

        Args:
            root: Directory to index
            progress_callback: Called after every committed batch and at the end

        Returns:
            Final ScanProgress

        Raises:
            StoreWriteError: If a batch fails to commit (earlier batches stay)
        """
        root_path = Path(root).expanduser().resolve()
        progress = ScanProgress(root=str(root_path), current_path=str(root_path))
        started = time.monotonic()
        logger.info("Scanning %s", root_path)

        records: "queue.Queue" = queue.Queue(maxsize=self.queue_size)
        stop = threading.Event()
        failures: List[BaseException] = []

        producer = threading.Thread(
            target=self._produce,
            args=(root_path, records, stop, progress, failures),
            name="popindex-walk",
            daemon=True,
        )
        producer.start()

        batch: List[FileRecord] = []
        try:
            while True:
                item = records.get()
                if item is _END:
                    break
                batch.append(item)
                if len(batch) >= self.batch_size:
                    self._flush(batch, progress, progress_callback)
                    batch = []

            if batch:
                self._flush(batch, progress, progress_callback)
        except BaseException:
            stop.set()
            raise
        finally:
            producer.join()

        if failures:
            raise failures[0]

        if progress.entries_found == 0:
            logger.warning("Nothing indexed under %s (missing or unreadable root)", root_path)

        progress.is_complete = True
        progress.elapsed_seconds = time.monotonic() - started
        if progress_callback:
            progress_callback(progress)

        logger.info(
            "Indexed %d entries (%d dirs, %d skipped) in %.2fs",
            progress.entries_found, progress.dirs_found, progress.errors,
            progress.elapsed_seconds,
        )
        return progress

    def _produce(
        self,
        root: Path,
        records: "queue.Queue",
        stop: threading.Event,
        progress: ScanProgress,
        failures: List[BaseException],
    ):
        """Walk the tree and push records until done or told to stop."""
        def on_error(path: str, error: OSError):
            progress.errors += 1

        try:
            for entry in self.fs.walk(root, on_error=on_error):
                record = entry_to_record(entry)
                progress.entries_found += 1
                if record.is_dir:
                    progress.dirs_found += 1
                progress.current_path = record.path
                if not self._put(records, record, stop):
                    return
        except Exception as e:
            logger.exception("Directory walk failed under %s", root)
            failures.append(e)
        finally:
            self._put(records, _END, stop)

    @staticmethod
    def _put(records: "queue.Queue", item, stop: threading.Event) -> bool:
        """Blocking put that gives up once stop is set."""
        while not stop.is_set():
            try:
                records.put(item, timeout=_PUT_POLL_SECONDS)
                return True
            except queue.Full:
                continue
        return False

    def _flush(
        self,
        batch: List[FileRecord],
        progress: ScanProgress,
        progress_callback: Optional[Callable[[ScanProgress], None]],
    ):
        self.db.upsert_batch(batch)
        progress.batches_written += 1
        logger.debug("Committed batch %d (%d records)", progress.batches_written, len(batch))
        if progress_callback:
            progress_callback(progress)
