"""
Ledger Errors

Every ledger operation reports failure by raising one of these.
A raised LedgerError always means the ledger was left unchanged.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class DuplicatePhoneError(LedgerError):
    """Phone is already registered to another account."""

    def __init__(self, phone: str):
        self.phone = phone
        super().__init__(f"Phone already registered: {phone}")


class DuplicateAccountError(LedgerError):
    """Account ID already exists (only possible on import)."""

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account ID already exists: {account_id}")


class DuplicateRecordError(LedgerError):
    """Payment or favorite ID already exists (only possible on import)."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} ID already exists: {record_id}")


class InvalidAmountError(LedgerError):
    """Amount must be greater than zero."""

    def __init__(self, amount: Any):
        self.amount = amount
        super().__init__(f"Amount must be greater than zero, got {amount}")


class AccountNotFoundError(LedgerError):
    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class InsufficientBalanceError(LedgerError):
    """Account balance is lower than the requested amount."""

    def __init__(self, account_id: int, balance: int, amount: int):
        self.account_id = account_id
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Not enough balance on account {account_id}: "
            f"balance {balance}, requested {amount}"
        )


class PaymentNotFoundError(LedgerError):
    def __init__(self, payment_id: str):
        self.payment_id = payment_id
        super().__init__(f"Payment not found: {payment_id}")


class FavoriteNotFoundError(LedgerError):
    def __init__(self, favorite_id: str):
        self.favorite_id = favorite_id
        super().__init__(f"Favorite not found: {favorite_id}")


class AlreadyRejectedError(LedgerError):
    """Payment has already been rejected and refunded."""

    def __init__(self, payment_id: str):
        self.payment_id = payment_id
        super().__init__(f"Payment already rejected: {payment_id}")
