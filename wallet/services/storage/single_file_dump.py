"""
Single File Dump Storage (Format B)

Accounts only, in one file:

    1;+992000000001;100000|2;+992000000002;0|

Records end with '|', fields are joined with ';'. There is no trailing
newline. Used for quick partial exports where payments and favorites
don't matter.
"""

from pathlib import Path

import structlog

from wallet.models.ledger import LedgerSnapshot
from wallet.services.storage.interface import (
    LedgerStorageInterface,
    MissingDumpError,
    StorageError,
)
from wallet.services.storage.records import (
    ACCOUNT_COLUMNS,
    account_to_row,
    join_row,
    row_to_account,
    split_row,
)


RECORD_SEPARATOR = "|"

logger = structlog.get_logger(__name__)


class SingleFileDumpStorage(LedgerStorageInterface):
    """
    Single-file implementation of ledger storage.

    Payments and favorites in a saved snapshot are ignored;
    a loaded snapshot never contains any.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path).resolve()

    @property
    def location(self) -> str:
        return str(self._path)

    def save(self, snapshot: LedgerSnapshot) -> None:
        """Write all accounts, each followed by the record separator."""
        content = "".join(
            join_row(account_to_row(account)) + RECORD_SEPARATOR
            for account in snapshot.accounts
        )
        try:
            self._path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error("dump_write_failed", path=str(self._path), error=str(e))
            raise StorageError(f"Failed to write {self._path}: {e}") from e

        if snapshot.payments or snapshot.favorites:
            logger.debug(
                "single_file_dump_skipped_records",
                path=str(self._path),
                payments=len(snapshot.payments),
                favorites=len(snapshot.favorites),
            )

    def load(self) -> LedgerSnapshot:
        """Parse accounts, skipping empty segments."""
        if not self._path.exists():
            raise MissingDumpError(self._path)
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e

        accounts = []
        # Records have no line numbers here, so report their position instead
        for position, segment in enumerate(content.split(RECORD_SEPARATOR), start=1):
            segment = segment.strip("\r\n")
            if not segment:
                continue
            fields = split_row(segment, ACCOUNT_COLUMNS, self._path, position)
            accounts.append(row_to_account(fields, self._path, position))

        return LedgerSnapshot(accounts=accounts)
