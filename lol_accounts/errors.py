# lol_accounts/errors.py
from __future__ import annotations


class AccountManagerError(Exception):
    """Base de toutes les erreurs métier du service."""


class UnknownRegion(AccountManagerError, ValueError):
    def __init__(self, region: str):
        super().__init__(f"Unknown region: {region}")
        self.region = region


class StatsLookupFailed(AccountManagerError):
    pass


class PersistenceFailed(AccountManagerError):
    pass


class DecryptionFailed(AccountManagerError):
    pass
