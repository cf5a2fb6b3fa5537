"""
Core Data Models for Wallet

These models define the strict schemas for everything the ledger owns.
They are designed to:
1. Enforce the balance and amount invariants at runtime
2. Provide clear validation error messages
3. Be copyable into snapshots for storage

DESIGN DECISION: Money is an integer count of minor units (e.g. dirams).
Floats and Decimals never enter the ledger, so sums are exact.
"""

from enum import Enum
from typing import Annotated
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


Money = Annotated[int, Field(strict=True)]
"""Integer count of minor currency units."""


def new_record_id() -> str:
    """Generate a fresh payment/favorite identifier."""
    return str(uuid4())


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PaymentStatus(str, Enum):
    """
    Payment lifecycle status.

    Payments start IN_PROGRESS. Only a reject moves them to FAIL.
    """
    IN_PROGRESS = "in_progress"
    DONE = "done"
    FAIL = "fail"


# =============================================================================
# LEDGER MODELS
# =============================================================================

class Account(BaseModel):
    """
    A phone-identified balance holder.

    Assignment is validated, so a balance can never drop below zero
    even if a caller bypasses the service.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(
        ...,
        gt=0,
        description="Sequential account identifier"
    )
    phone: str = Field(
        ...,
        min_length=1,
        description="Phone number, unique across accounts"
    )
    balance: Money = Field(
        default=0,
        ge=0,
        description="Current balance in minor units"
    )


class Payment(BaseModel):
    """
    A debit against an account.

    Amount, category and account are fixed at creation.
    Status is the only field the ledger ever changes.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        default_factory=new_record_id,
        min_length=1,
        description="Globally unique payment ID"
    )
    account_id: int = Field(
        ...,
        gt=0,
        description="Account the payment was debited from"
    )
    amount: Money = Field(
        ...,
        gt=0,
        description="Debited amount in minor units"
    )
    category: str = Field(
        ...,
        description="Free-form payment category (e.g. 'auto', 'food')"
    )
    status: PaymentStatus = Field(
        default=PaymentStatus.IN_PROGRESS,
        description="Payment status"
    )


class Favorite(BaseModel):
    """
    A named template for re-issuing a payment.

    Favorites are read-only once created.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=new_record_id,
        min_length=1,
        description="Globally unique favorite ID"
    )
    account_id: int = Field(..., gt=0)
    amount: Money = Field(..., gt=0)
    name: str = Field(
        ...,
        description="User-facing name of the template"
    )
    category: str


class LedgerSnapshot(BaseModel):
    """
    Full ledger state handed to and from storage backends.

    The store always builds snapshots from deep copies, so a backend
    can never mutate live ledger records.
    """

    accounts: list[Account] = Field(default_factory=list)
    payments: list[Payment] = Field(default_factory=list)
    favorites: list[Favorite] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if the snapshot holds no records at all."""
        return not (self.accounts or self.payments or self.favorites)
