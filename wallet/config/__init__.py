"""Configuration package."""

from wallet.config.settings import (
    WalletSettings,
    get_settings,
)

__all__ = [
    "WalletSettings",
    "get_settings",
]
