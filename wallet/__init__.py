"""
Wallet - Source Package

An in-memory personal-finance ledger: phone-identified accounts,
payments debited from balances, favorite payment templates, and
flat delimited dump files for persistence.

DESIGN PRINCIPLES:
1. Money is integer minor units, never fractional
2. Fail early, fail visibly
3. A failed operation leaves the ledger untouched
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Wallet Team"
