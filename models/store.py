"""Flat-file persistence: an in-memory record list mirrored to a delimited text file."""

import copy
import logging
import os
import threading
from pathlib import Path
from typing import Callable, Generic, List, Optional, TypeVar, Union

from .codecs import DELIMITER, RecordCodec, is_storable_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FlatFileStore(Generic[T]):
    """
    Ordered collection of records keyed by id, mirrored to one file.

    Every mutating call rewrites the whole file before it returns. The new
    contents go to a temporary sibling file that is then moved over the
    original, and the in-memory list only changes once that has worked, so
    memory and disk agree after every call whether it succeeded or not.

    All public methods hold `lock`, a re-entrant lock callers can also take
    to group several operations into one critical section.
    """

    def __init__(self, path: Union[str, Path], codec: RecordCodec[T]):
        self.path = Path(path)
        self.codec = codec
        self.lock = threading.RLock()
        self.load_errors: List[str] = []
        self._records: List[T] = []
        self.load_all()

    # =========================================================================
    # Loading
    # =========================================================================

    def load_all(self) -> int:
        """
        Read the backing file into memory, replacing the current contents.

        The first line is a header. Blank lines are ignored. Lines that fail
        to decode as UTF-8 or to parse are logged, kept in `load_errors` and skipped.
        """
        with self.lock:
            self._records = []
            self.load_errors = []
            if not self.path.exists():
                logger.info("No data file at %s, starting empty", self.path)
                return 0

            with open(self.path, "rb") as fp:
                raw_lines = fp.read().splitlines()

            seen = set()
            for line_no, raw in enumerate(raw_lines[1:], start=2):
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError as e:
                    text = raw.decode("utf-8", errors="replace")
                    self._drop(line_no, text, f"not UTF-8: {e.reason}")
                    continue
                if not line.strip():
                    continue
                fields = [f.strip() for f in line.split(DELIMITER)]
                try:
                    record = self.codec.parse(fields)
                except ValueError as e:
                    self._drop(line_no, line, str(e))
                    continue
                key = self.codec.key(record)
                if key in seen:
                    self._drop(line_no, line, f"duplicate id {key!r}")
                    continue
                seen.add(key)
                self._records.append(record)

            logger.info("Loaded %d records from %s", len(self._records), self.path)
            return len(self._records)

    def _drop(self, line_no: int, line: str, reason: str) -> None:
        message = f"{self.path.name}:{line_no}: {reason}: {line!r}"
        self.load_errors.append(message)
        logger.warning("Skipping unparseable line %s", message)

    # =========================================================================
    # Queries
    # =========================================================================

    def find_all(self) -> List[T]:
        """Copies of all records, in file order."""
        with self.lock:
            return copy.deepcopy(self._records)

    def find_by_id(self, record_id: str) -> Optional[T]:
        with self.lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            return copy.deepcopy(self._records[index])

    def find_where(self, predicate: Callable[[T], bool]) -> List[T]:
        """Copies of all records matching predicate."""
        with self.lock:
            return [copy.deepcopy(r) for r in self._records if predicate(r)]

    def count(self) -> int:
        with self.lock:
            return len(self._records)

    def _index_of(self, record_id: str) -> Optional[int]:
        for i, record in enumerate(self._records):
            if self.codec.key(record) == record_id:
                return i
        return None

    # =========================================================================
    # Mutations
    # =========================================================================

    def save(self, record: Optional[T]) -> bool:
        """
        Append a new record.

        False if it is None, its id already exists, or one of its fields
        holds a delimiter or line break.
        """
        if record is None:
            return False
        with self.lock:
            key = self.codec.key(record)
            if self._index_of(key) is not None:
                logger.debug("Refusing to save duplicate id %r to %s", key, self.path)
                return False
            return self._commit(self._records + [copy.deepcopy(record)])

    def update(self, record: Optional[T]) -> bool:
        """Replace the record sharing this record's id. False if there is none."""
        if record is None:
            return False
        with self.lock:
            key = self.codec.key(record)
            index = self._index_of(key)
            if index is None:
                logger.debug("No record %r in %s to update", key, self.path)
                return False
            records = list(self._records)
            records[index] = copy.deepcopy(record)
            return self._commit(records)

    def delete_by_id(self, record_id: str) -> bool:
        """Remove the record with this id. False if nothing was removed."""
        with self.lock:
            index = self._index_of(record_id)
            if index is None:
                return False
            records = list(self._records)
            del records[index]
            return self._commit(records)

    def _commit(self, records: List[T]) -> bool:
        """Write records to disk and, only if that worked, make them current."""
        rows = [self.codec.format(r) for r in records]
        for row in rows:
            bad = [field for field in row if not is_storable_text(field)]
            if bad:
                logger.warning(
                    "Refusing to write %r to %s: delimiter or line break in a field",
                    bad[0],
                    self.path,
                )
                return False
        try:
            self._rewrite(rows)
        except OSError:
            logger.exception("Failed to write %s; keeping previous contents", self.path)
            return False
        self._records = records
        return True

    def _rewrite(self, rows: List[List[str]]) -> None:
        lines = [DELIMITER.join(self.codec.header)]
        lines.extend(DELIMITER.join(row) for row in rows)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8", newline="\n") as fp:
                fp.write("\n".join(lines) + "\n")
                fp.flush()
                os.fsync(fp.fileno())
            os.replace(tmp_path, self.path)
        except OSError:
            if tmp_path.exists():
                tmp_path.unlink()
            raise
        logger.debug("Wrote %d records to %s", len(rows), self.path)
