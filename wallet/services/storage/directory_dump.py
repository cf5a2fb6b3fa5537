"""
Directory Dump Storage (Format A)

One file per record type inside a directory:

    accounts.dump   id;phone;balance
    payments.dump   id;account_id;amount;category;status
    favorites.dump  id;account_id;amount;name;category

One record per line, fields joined with ';', lines ending in '\\n'.

TRADEOFFS:
- Files are written one after another with no staging directory.
  A failure part-way leaves earlier files on disk.
- accounts.dump and payments.dump are required on import, so they are
  always written (possibly empty). favorites.dump is optional on import;
  an export with no favorites removes any favorites.dump left behind.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional, TypeVar

import structlog

from wallet.models.ledger import Favorite, LedgerSnapshot, Payment
from wallet.services.storage.interface import (
    LedgerStorageInterface,
    MissingDumpError,
    StorageError,
)
from wallet.services.storage.records import (
    ACCOUNT_COLUMNS,
    FAVORITE_COLUMNS,
    PAYMENT_COLUMNS,
    account_to_row,
    favorite_to_row,
    join_row,
    payment_to_row,
    row_to_account,
    row_to_favorite,
    row_to_payment,
    split_row,
)


ACCOUNTS_FILE = "accounts.dump"
PAYMENTS_FILE = "payments.dump"
FAVORITES_FILE = "favorites.dump"

RECORD_TERMINATOR = "\n"

T = TypeVar("T")

logger = structlog.get_logger(__name__)


def payment_chunk_name(index: int) -> str:
    """
    File name for the index-th payment chunk (1-based).

    The first chunk is unsuffixed: payments.dump, payments2.dump, ...
    """
    if index < 1:
        raise ValueError(f"Chunk index must be >= 1, got {index}")
    if index == 1:
        return PAYMENTS_FILE
    return f"payments{index}.dump"


class DirectoryDumpStorage(LedgerStorageInterface):
    """
    Directory dump implementation of ledger storage.

    The directory must already exist; it is never created implicitly.
    """

    def __init__(self, directory: Path | str):
        self._directory = Path(directory).resolve()

    @property
    def location(self) -> str:
        return str(self._directory)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def _write_lines(self, path: Path, lines: Iterable[str]) -> None:
        """Write records to a file, one per line."""
        try:
            with path.open("w", encoding="utf-8", newline="") as handle:
                for line in lines:
                    handle.write(line + RECORD_TERMINATOR)
        except OSError as e:
            logger.error("dump_write_failed", path=str(path), error=str(e))
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug("dump_written", path=str(path))

    def _check_directory(self) -> None:
        if not self._directory.is_dir():
            raise StorageError(f"Dump directory does not exist: {self._directory}")

    def save(self, snapshot: LedgerSnapshot) -> None:
        """Write accounts, payments and (if any) favorites dumps."""
        self._check_directory()

        self._write_lines(
            self._directory / ACCOUNTS_FILE,
            (join_row(account_to_row(a)) for a in snapshot.accounts),
        )
        self._write_lines(
            self._directory / PAYMENTS_FILE,
            (join_row(payment_to_row(p)) for p in snapshot.payments),
        )
        favorites_path = self._directory / FAVORITES_FILE
        if snapshot.favorites:
            self._write_lines(
                favorites_path,
                (join_row(favorite_to_row(f)) for f in snapshot.favorites),
            )
        else:
            # A leftover file from an earlier export would resurrect old favorites
            try:
                favorites_path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to remove {favorites_path}: {e}") from e

    def write_payment_chunks(
        self,
        payments: list[Payment],
        records: int,
    ) -> list[Path]:
        """
        Write payments split across numbered files.

        Args:
            payments: Payments to write, in order
            records: Maximum number of payments per file

        Returns:
            Paths of the files written, in chunk order.
            Empty if there were no payments.
        """
        if records <= 0:
            raise ValueError(f"Records per file must be positive, got {records}")
        if not payments:
            return []
        self._check_directory()

        written = []
        for start in range(0, len(payments), records):
            chunk = payments[start:start + records]
            path = self._directory / payment_chunk_name(len(written) + 1)
            self._write_lines(path, (join_row(payment_to_row(p)) for p in chunk))
            written.append(path)

        logger.info(
            "payment_chunks_written",
            directory=str(self._directory),
            files=len(written),
            payments=len(payments),
        )
        return written

    # -------------------------------------------------------------------------
    # Import
    # -------------------------------------------------------------------------

    def _read_records(
        self,
        path: Path,
        columns: list[str],
        parse: Callable[[list[str], Path, Optional[int]], T],
        required: bool = True,
    ) -> list[T]:
        """Parse every non-blank line of a dump file."""
        if not path.exists():
            if required:
                logger.error("dump_missing", path=str(path))
                raise MissingDumpError(path)
            return []

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

        records = []
        for number, line in enumerate(content.split(RECORD_TERMINATOR), start=1):
            if not line.strip():
                continue
            fields = split_row(line, columns, path, number)
            records.append(parse(fields, path, number))
        return records

    def load(self) -> LedgerSnapshot:
        """Read all three dumps. favorites.dump may be absent."""
        accounts = self._read_records(
            self._directory / ACCOUNTS_FILE, ACCOUNT_COLUMNS, row_to_account
        )
        payments = self._read_records(
            self._directory / PAYMENTS_FILE, PAYMENT_COLUMNS, row_to_payment
        )
        favorites: list[Favorite] = self._read_records(
            self._directory / FAVORITES_FILE,
            FAVORITE_COLUMNS,
            row_to_favorite,
            required=False,
        )
        return LedgerSnapshot(
            accounts=accounts,
            payments=payments,
            favorites=favorites,
        )
