"""
Wallet Service

This module owns the ledger: accounts, payments and favorites, and every
operation that mutates them.

DESIGN DECISION: The service enforces the ledger invariants:
- Phones are unique, balances never go negative
- Payments and favorites always reference an existing account
- A failed operation leaves the ledger exactly as it was

The service is NOT thread-safe. It assumes one logical owner at a time;
wrap it behind a lock or a single worker before sharing it between
concurrent callers. Only payment summation runs on several threads.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from wallet.audit import AuditLogger
from wallet.config import WalletSettings, get_settings
from wallet.errors import (
    AccountNotFoundError,
    AlreadyRejectedError,
    DuplicateAccountError,
    DuplicatePhoneError,
    DuplicateRecordError,
    FavoriteNotFoundError,
    InsufficientBalanceError,
    InvalidAmountError,
    LedgerError,
    PaymentNotFoundError,
)
from wallet.models.ledger import (
    Account,
    Favorite,
    LedgerSnapshot,
    Payment,
    PaymentStatus,
    new_record_id,
)
from wallet.queries import PaymentAggregator
from wallet.services.storage import (
    AuditStorageInterface,
    DirectoryDumpStorage,
    LedgerStorageInterface,
    SingleFileDumpStorage,
    StorageError,
)


class WalletService:
    """
    In-memory ledger of accounts, payments and favorites.

    Records are kept in insertion order. Lookup dicts are maintained
    alongside the ordered lists and updated on every append.
    """

    def __init__(
        self,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[WalletSettings] = None,
    ):
        self._audit_logger = audit_logger
        self._settings = settings

        self._next_account_id = 0
        self._accounts: list[Account] = []
        self._payments: list[Payment] = []
        self._favorites: list[Favorite] = []

        self._accounts_by_id: dict[int, Account] = {}
        self._account_ids_by_phone: dict[str, int] = {}
        self._payments_by_id: dict[str, Payment] = {}
        self._favorites_by_id: dict[str, Favorite] = {}

    @property
    def settings(self) -> WalletSettings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def accounts(self) -> list[Account]:
        return list(self._accounts)

    @property
    def payments(self) -> list[Payment]:
        return list(self._payments)

    @property
    def favorites(self) -> list[Favorite]:
        return list(self._favorites)

    @contextmanager
    def _audited(self, operation: str, **details) -> Iterator[None]:
        """Record a failed operation in the audit log, then re-raise."""
        try:
            yield
        except (LedgerError, StorageError) as e:
            if self._audit_logger:
                self._audit_logger.log_error(operation, e, details)
            raise

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def register_account(self, phone: str) -> Account:
        """
        Register a new account with a zero balance.

        Raises:
            DuplicatePhoneError: If the phone is already registered
        """
        with self._audited("register_account", phone=phone):
            if phone in self._account_ids_by_phone:
                raise DuplicatePhoneError(phone)

            account = Account(id=self._next_account_id + 1, phone=phone, balance=0)
            self._append_account(account)

        if self._audit_logger:
            self._audit_logger.log_account_registered(account.id, account.phone)
        return account

    def find_account_by_id(self, account_id: int) -> Account:
        account = self._accounts_by_id.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def deposit(self, account_id: int, amount: int) -> None:
        """
        Credit an account. Deposits are not recorded as payments.

        Raises:
            InvalidAmountError: If amount <= 0
            AccountNotFoundError: If the account doesn't exist
        """
        with self._audited("deposit", account_id=account_id, amount=amount):
            self._check_amount(amount)
            account = self.find_account_by_id(account_id)
            account.balance += amount

        if self._audit_logger:
            self._audit_logger.log_deposit(account_id, amount, account.balance)

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    def pay(self, account_id: int, amount: int, category: str) -> Payment:
        """
        Debit an account and record the payment as in progress.

        The payment is built before anything is mutated, so a failure
        never leaves a debited balance without its payment.

        Raises:
            InvalidAmountError: If amount <= 0
            AccountNotFoundError: If the account doesn't exist
            InsufficientBalanceError: If balance < amount
        """
        with self._audited("pay", account_id=account_id, amount=amount, category=category):
            self._check_amount(amount)
            account = self.find_account_by_id(account_id)
            if account.balance < amount:
                raise InsufficientBalanceError(account_id, account.balance, amount)

            payment = Payment(
                id=self._new_record_id(self._payments_by_id),
                account_id=account_id,
                amount=amount,
                category=category,
                status=PaymentStatus.IN_PROGRESS,
            )
            account.balance -= amount
            self._append_payment(payment)

        if self._audit_logger:
            self._audit_logger.log_payment_created(
                payment.id, payment.account_id, payment.amount, payment.category
            )
        return payment

    def find_payment_by_id(self, payment_id: str) -> Payment:
        payment = self._payments_by_id.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment

    def reject(self, payment_id: str) -> None:
        """
        Mark a payment as failed and refund its amount.

        Rejecting is not repeatable: a second call raises instead of
        refunding twice.

        Raises:
            PaymentNotFoundError: If the payment doesn't exist
            AlreadyRejectedError: If the payment has already failed
            AccountNotFoundError: If the payment's account is gone
        """
        with self._audited("reject", payment_id=payment_id):
            payment = self.find_payment_by_id(payment_id)
            if payment.status == PaymentStatus.FAIL:
                raise AlreadyRejectedError(payment_id)
            account = self.find_account_by_id(payment.account_id)

            payment.status = PaymentStatus.FAIL
            account.balance += payment.amount

        if self._audit_logger:
            self._audit_logger.log_payment_rejected(
                payment.id, payment.account_id, payment.amount
            )

    def repeat(self, payment_id: str) -> Payment:
        """Issue a new payment with the same account, amount and category."""
        with self._audited("repeat", payment_id=payment_id):
            original = self.find_payment_by_id(payment_id)
        return self.pay(original.account_id, original.amount, original.category)

    # -------------------------------------------------------------------------
    # Favorites
    # -------------------------------------------------------------------------

    def favorite_payment(self, payment_id: str, name: str) -> Favorite:
        """Save a payment as a named template."""
        with self._audited("favorite_payment", payment_id=payment_id, name=name):
            payment = self.find_payment_by_id(payment_id)
            favorite = Favorite(
                id=self._new_record_id(self._favorites_by_id),
                account_id=payment.account_id,
                amount=payment.amount,
                name=name,
                category=payment.category,
            )
            self._append_favorite(favorite)

        if self._audit_logger:
            self._audit_logger.log_favorite_created(favorite.id, payment.id, name)
        return favorite

    def find_favorite_by_id(self, favorite_id: str) -> Favorite:
        favorite = self._favorites_by_id.get(favorite_id)
        if favorite is None:
            raise FavoriteNotFoundError(favorite_id)
        return favorite

    def pay_from_favorite(self, favorite_id: str) -> Payment:
        """Issue a new payment from a favorite template."""
        with self._audited("pay_from_favorite", favorite_id=favorite_id):
            favorite = self.find_favorite_by_id(favorite_id)
        return self.pay(favorite.account_id, favorite.amount, favorite.category)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def sum_payments(self, parallelism: Optional[int] = None) -> int:
        """
        Total amount of all payments, failed ones included.

        Args:
            parallelism: Worker count. Defaults to settings.sum_parallelism.
        """
        if parallelism is None:
            parallelism = self.settings.sum_parallelism
        return PaymentAggregator(self._payments).sum_payments(parallelism)

    def export_account_history(self, account_id: int) -> list[Payment]:
        """
        Copies of one account's payments, in the order they were made.

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        self.find_account_by_id(account_id)
        return [
            payment.model_copy()
            for payment in self._payments
            if payment.account_id == account_id
        ]

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def snapshot(self) -> LedgerSnapshot:
        """Deep copy of the whole ledger."""
        return LedgerSnapshot(
            accounts=[a.model_copy() for a in self._accounts],
            payments=[p.model_copy() for p in self._payments],
            favorites=[f.model_copy() for f in self._favorites],
        )

    def load(self, snapshot: LedgerSnapshot) -> None:
        """
        Append imported records to the ledger.

        The whole batch is validated before anything is appended, so a
        rejected import leaves the ledger unchanged.

        Raises:
            DuplicateAccountError: If an account ID is already taken
            DuplicatePhoneError: If a phone is already registered
            DuplicateRecordError: If a payment/favorite ID is already taken
            AccountNotFoundError: If a record references a missing account
        """
        self._validate_batch(snapshot)

        for account in snapshot.accounts:
            self._append_account(account.model_copy())
        for payment in snapshot.payments:
            self._append_payment(payment.model_copy())
        for favorite in snapshot.favorites:
            self._append_favorite(favorite)

    def export_to(self, storage: LedgerStorageInterface) -> None:
        """Save the ledger through any storage backend."""
        snapshot = self.snapshot()
        storage.save(snapshot)
        if self._audit_logger:
            self._audit_logger.log_ledger_exported(
                storage.location,
                len(snapshot.accounts),
                len(snapshot.payments),
                len(snapshot.favorites),
            )

    def import_from(self, storage: LedgerStorageInterface) -> None:
        """Load records from any storage backend and append them."""
        with self._audited("import", source=storage.location):
            snapshot = storage.load()
            self.load(snapshot)
        if self._audit_logger:
            self._audit_logger.log_ledger_imported(
                storage.location,
                len(snapshot.accounts),
                len(snapshot.payments),
                len(snapshot.favorites),
            )

    def export(self, directory: Optional[Path | str] = None) -> None:
        """Write a directory dump. Defaults to settings.data_dir."""
        if directory is None:
            directory = self.settings.data_dir
        self.export_to(DirectoryDumpStorage(directory))

    def import_(self, directory: Optional[Path | str] = None) -> None:
        """Append the contents of a directory dump. Defaults to settings.data_dir."""
        if directory is None:
            directory = self.settings.data_dir
        self.import_from(DirectoryDumpStorage(directory))

    def export_to_file(self, path: Path | str) -> None:
        """Write all accounts to a single-file dump."""
        self.export_to(SingleFileDumpStorage(path))

    def import_from_file(self, path: Path | str) -> None:
        """Append accounts from a single-file dump."""
        self.import_from(SingleFileDumpStorage(path))

    def history_to_files(
        self,
        payments: list[Payment],
        directory: Path | str,
        records: Optional[int] = None,
    ) -> list[Path]:
        """
        Write payments across numbered dump files.

        Args:
            payments: Payments to write, usually from export_account_history
            directory: Existing output directory
            records: Payments per file. Defaults to settings.records_per_file.

        Returns:
            Paths written: payments.dump, payments2.dump, ...
        """
        if records is None:
            records = self.settings.records_per_file
        return DirectoryDumpStorage(directory).write_payment_chunks(payments, records)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @staticmethod
    def _new_record_id(taken: dict) -> str:
        record_id = new_record_id()
        while record_id in taken:
            record_id = new_record_id()
        return record_id

    @staticmethod
    def _check_amount(amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(amount)

    def _append_account(self, account: Account) -> None:
        self._accounts.append(account)
        self._accounts_by_id[account.id] = account
        self._account_ids_by_phone[account.phone] = account.id
        self._next_account_id = max(self._next_account_id, account.id)

    def _append_payment(self, payment: Payment) -> None:
        self._payments.append(payment)
        self._payments_by_id[payment.id] = payment

    def _append_favorite(self, favorite: Favorite) -> None:
        self._favorites.append(favorite)
        self._favorites_by_id[favorite.id] = favorite

    def _validate_batch(self, snapshot: LedgerSnapshot) -> None:
        account_ids = set(self._accounts_by_id)
        phones = set(self._account_ids_by_phone)
        for account in snapshot.accounts:
            if account.id in account_ids:
                raise DuplicateAccountError(account.id)
            if account.phone in phones:
                raise DuplicatePhoneError(account.phone)
            account_ids.add(account.id)
            phones.add(account.phone)

        payment_ids = set(self._payments_by_id)
        for payment in snapshot.payments:
            if payment.id in payment_ids:
                raise DuplicateRecordError("payment", payment.id)
            if payment.account_id not in account_ids:
                raise AccountNotFoundError(payment.account_id)
            payment_ids.add(payment.id)

        favorite_ids = set(self._favorites_by_id)
        for favorite in snapshot.favorites:
            if favorite.id in favorite_ids:
                raise DuplicateRecordError("favorite", favorite.id)
            if favorite.account_id not in account_ids:
                raise AccountNotFoundError(favorite.account_id)
            favorite_ids.add(favorite.id)


def create_wallet_service(
    settings: Optional[WalletSettings] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
) -> WalletService:
    """
    Factory function to create a configured WalletService.

    Attaches an AuditLogger unless auditing is disabled in settings.
    """
    settings = settings or get_settings()
    audit_logger = AuditLogger(audit_storage) if settings.audit_enabled else None
    return WalletService(audit_logger=audit_logger, settings=settings)
