"""
Delimited Record Codec

Converts ledger models to and from lists of string fields. Both dump
formats share this codec; they differ only in how rows are separated.

KNOWN LIMITATION: fields are joined with plain ';'. A phone, category or
name containing ';', '|' or a newline will not survive a round trip.
Values are written as-is, never escaped.
"""

from pathlib import Path
from typing import Callable, Optional, TypeVar

from pydantic import ValidationError

from wallet.models.ledger import Account, Favorite, Payment, PaymentStatus
from wallet.services.storage.interface import MalformedRecordError


FIELD_SEPARATOR = ";"

# Column order for each record type
ACCOUNT_COLUMNS = ["id", "phone", "balance"]
PAYMENT_COLUMNS = ["id", "account_id", "amount", "category", "status"]
FAVORITE_COLUMNS = ["id", "account_id", "amount", "name", "category"]

T = TypeVar("T")


def account_to_row(account: Account) -> list[str]:
    """Convert an Account to its dump fields."""
    return [
        str(account.id),
        account.phone,
        str(account.balance),
    ]


def payment_to_row(payment: Payment) -> list[str]:
    """Convert a Payment to its dump fields."""
    return [
        payment.id,
        str(payment.account_id),
        str(payment.amount),
        payment.category,
        payment.status.value,
    ]


def favorite_to_row(favorite: Favorite) -> list[str]:
    """Convert a Favorite to its dump fields."""
    return [
        favorite.id,
        str(favorite.account_id),
        str(favorite.amount),
        favorite.name,
        favorite.category,
    ]


def join_row(row: list[str]) -> str:
    return FIELD_SEPARATOR.join(row)


def split_row(
    text: str,
    columns: list[str],
    path: Path,
    line: Optional[int],
) -> list[str]:
    """Split one record into fields, checking the column count."""
    fields = text.split(FIELD_SEPARATOR)
    if len(fields) != len(columns):
        raise MalformedRecordError(
            path,
            line,
            f"expected {len(columns)} fields ({FIELD_SEPARATOR.join(columns)}), got {len(fields)}",
        )
    return fields


def _parse_int(value: str, column: str, path: Path, line: Optional[int]) -> int:
    try:
        return int(value)
    except ValueError:
        raise MalformedRecordError(path, line, f"{column} is not an integer: {value!r}")


def _build(factory: Callable[[], T], path: Path, line: Optional[int]) -> T:
    try:
        return factory()
    except ValidationError as e:
        raise MalformedRecordError(path, line, str(e)) from e


def row_to_account(fields: list[str], path: Path, line: Optional[int]) -> Account:
    """Convert dump fields to an Account."""
    account_id = _parse_int(fields[0], "id", path, line)
    balance = _parse_int(fields[2], "balance", path, line)
    return _build(
        lambda: Account(id=account_id, phone=fields[1], balance=balance),
        path,
        line,
    )


def row_to_payment(fields: list[str], path: Path, line: Optional[int]) -> Payment:
    """Convert dump fields to a Payment."""
    account_id = _parse_int(fields[1], "account_id", path, line)
    amount = _parse_int(fields[2], "amount", path, line)
    try:
        status = PaymentStatus(fields[4])
    except ValueError:
        raise MalformedRecordError(path, line, f"unknown payment status: {fields[4]!r}")
    return _build(
        lambda: Payment(
            id=fields[0],
            account_id=account_id,
            amount=amount,
            category=fields[3],
            status=status,
        ),
        path,
        line,
    )


def row_to_favorite(fields: list[str], path: Path, line: Optional[int]) -> Favorite:
    """Convert dump fields to a Favorite."""
    account_id = _parse_int(fields[1], "account_id", path, line)
    amount = _parse_int(fields[2], "amount", path, line)
    return _build(
        lambda: Favorite(
            id=fields[0],
            account_id=account_id,
            amount=amount,
            name=fields[3],
            category=fields[4],
        ),
        path,
        line,
    )
