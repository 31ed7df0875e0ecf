"""Credential store: username -> (SHA-256 password hash, starting cash).

On-disk format is one record per line::

    <username>,<sha256 hex>,<cash>

No header and no escaping. Line order carries no meaning.

Passwords are hashed with unsalted SHA-256. That is weak against offline
guessing and is kept only for compatibility with existing store files.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from models.account import UserRecord
from simulation.errors import CryptoUnavailable, PersistenceError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Return the lowercase hex SHA-256 of *password*'s UTF-8 bytes."""
    try:
        digest = hashlib.new("sha256")
    except ValueError as exc:
        raise CryptoUnavailable("SHA-256 is not available in this Python build.") from exc
    digest.update(password.encode("utf-8"))
    return digest.hexdigest()


class CredentialStore:
    """In-memory credential map backed by a text file.

    The file is read once in ``__init__`` and rewritten in full by ``save``.
    A missing file is an empty store. An unreadable file is logged and also
    treated as empty. Lines that do not split into three fields are skipped
    silently; three-field lines with an invalid hash or cash value are
    skipped with a warning.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._records: dict[str, UserRecord] = {}
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def __contains__(self, username: object) -> bool:
        return username in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[UserRecord]:
        return iter(self._records.values())

    def get(self, username: str) -> UserRecord | None:
        return self._records.get(username)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, record: UserRecord) -> None:
        """Insert *record* and flush the whole store to disk.

        The caller checks for duplicates. If the write fails the record
        stays in memory and ``PersistenceError`` propagates.
        """
        self._records[record.username] = record
        self.save()

    # ------------------------------------------------------------------
    # Disk I/O
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory records with the contents of the file."""
        self._records = {}
        try:
            with self._path.open(encoding="utf-8") as fh:
                lines = fh.read().splitlines()
        except FileNotFoundError:
            logger.debug("No credential store at %s; starting empty.", self._path)
            return
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "Could not read credential store %s (%s); starting empty.",
                self._path,
                exc,
            )
            return

        for lineno, line in enumerate(lines, start=1):
            try:
                record = UserRecord.from_line(line)
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed record on line %d of %s: %s",
                    lineno,
                    self._path,
                    exc.errors()[0]["msg"],
                )
                continue
            if record is None:
                continue
            self._records[record.username] = record

        logger.info("Loaded %d account(s) from %s", len(self._records), self._path)

    def save(self) -> None:
        """Write every record to a temp file beside the store, then rename it in place."""
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                for record in self._records.values():
                    fh.write(record.to_line())
                    fh.write("\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                _discard(tmp_name)
            raise PersistenceError(f"Error saving users to {self._path}: {exc}") from exc
        logger.debug("Saved %d account(s) to %s", len(self._records), self._path)


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except OSError as exc:
        logger.debug("Could not remove temp file %s: %s", path, exc)
