# lol_accounts/service.py
from __future__ import annotations
from typing import Optional
import asyncio
import logging

from .crypto import CredentialCipher
from .db import AccountStore
from .models import Account, RankSummary, split_riot_id
from .ranks import summarize
from .riot import RiotClient, platform_for

logger = logging.getLogger(__name__)


async def lookup_summary(riot: RiotClient, riot_id: str, region: str) -> RankSummary:
    """Riot ID + région -> rang résumé (deux appels identité puis un appel league)."""
    name, tag = split_riot_id(riot_id)
    identity = await riot.resolve_identity(name, tag, region)
    entries = await riot.fetch_ranked_entries(identity.internal_id, region)
    return summarize(entries)


async def _refresh_one(store: AccountStore, riot: RiotClient, account: Account) -> Account:
    try:
        summary = await lookup_summary(riot, account.riotId, account.region)
        updated = await store.update_derived_fields(
            account.id, summary.rank, summary.lp, summary.winRate, summary.imageSrc
        )
    except Exception as e:
        # on garde la ligne d'origine, intacte
        logger.warning("Failed to refresh account %s (%s): %s", account.id, account.riotId, e)
        return account
    if not updated:
        # ligne supprimée entre list_all et la mise à jour
        logger.warning("Account %s disappeared during refresh, keeping previous snapshot", account.id)
        return account
    return account.with_summary(summary)


async def refresh_all(store: AccountStore, riot: RiotClient) -> list[Account]:
    accounts = await store.list_all()
    # gather conserve l'ordre de chargement
    refreshed = await asyncio.gather(*(_refresh_one(store, riot, a) for a in accounts))
    failed = sum(1 for old, new in zip(accounts, refreshed) if old is new)
    logger.info("Refreshed %d/%d accounts", len(accounts) - failed, len(accounts))
    return list(refreshed)


async def create_account(
    store: AccountStore,
    riot: RiotClient,
    cipher: CredentialCipher,
    login: str,
    riot_id: str,
    region: str,
    password: str,
) -> Account:
    """Crée un compte après lookup complet ; rien n'est écrit si une étape échoue.

    Lève ValueError (Riot ID invalide), UnknownRegion, StatsLookupFailed ou PersistenceFailed.
    """
    region = region.strip().upper()
    split_riot_id(riot_id)
    platform_for(region)

    summary = await lookup_summary(riot, riot_id, region)
    encrypted = cipher.encrypt(password)
    fields = {
        "login": login,
        "riotId": riot_id,
        "region": region,
        "password": encrypted,
        "rank": summary.rank,
        "lp": summary.lp,
        "winRate": summary.winRate,
        "imageSrc": summary.imageSrc,
    }
    new_id = await store.insert(fields)
    logger.info("Account %s created for %s (%s)", new_id, riot_id, region)
    return Account(id=new_id, **fields)


async def reveal_credentials(
    store: AccountStore, cipher: CredentialCipher, account_id: int
) -> Optional[dict[str, str]]:
    account = await store.get(account_id)
    if account is None:
        return None
    return {"login": account.login, "password": cipher.decrypt(account.password)}
