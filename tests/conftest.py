"""Shared fixtures for wallet tests."""

import pytest

from wallet.audit import AuditLogger
from wallet.config import WalletSettings
from wallet.service import WalletService
from wallet.services.storage import InMemoryAuditStorage


@pytest.fixture
def settings(tmp_path):
    return WalletSettings(
        data_dir=tmp_path,
        records_per_file=2,
        sum_parallelism=1,
        audit_enabled=True,
    )


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def service(settings, audit_storage):
    return WalletService(audit_logger=AuditLogger(audit_storage), settings=settings)


@pytest.fixture
def funded_account(service):
    """Account 1 with a balance of 100_000."""
    account = service.register_account("+992000000001")
    service.deposit(account.id, 100_000)
    return account
