# lol_accounts/riot.py
from __future__ import annotations
from typing import Any, Optional
from urllib.parse import quote
import asyncio
import logging
import aiohttp

from .errors import StatsLookupFailed, UnknownRegion
from .models import RankedQueueEntry, SummonerIdentity

logger = logging.getLogger(__name__)

PLATFORM_MAP = {
    "NA":"na1","EUW":"euw1","EUNE":"eun1","KR":"kr","OCE":"oc1",
    "LAN":"la1","LAS":"la2","BR":"br1","TR":"tr1","RU":"ru","JP":"jp1",
}
SUPPORTED_REGIONS = tuple(PLATFORM_MAP)


def platform_for(region: str) -> str:
    code = PLATFORM_MAP.get((region or "").strip().upper())
    if not code:
        raise UnknownRegion(region)
    return code


class RiotClient:
    """Client minimal account-v1 / summoner-v4 / league-v4.

    Une tentative par appel, pas de retry. Toute erreur réseau ou statut non-200
    devient ``StatsLookupFailed``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        account_routing: str = "americas",
        timeout: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.headers = {"X-Riot-Token": api_key}
        self.account_routing = account_routing
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def _get_json(self, url: str) -> Any:
        session = await self.session()
        try:
            async with session.get(url, headers=self.headers, timeout=self.timeout) as r:
                if r.status != 200:
                    body = await r.text()
                    raise StatsLookupFailed(f"Riot API {r.status} for {url} -> {body[:200]}")
                return await r.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise StatsLookupFailed(f"Riot API request failed for {url}: {e!r}") from e

    async def resolve_identity(self, name: str, tag: str, region: str) -> SummonerIdentity:
        platform = platform_for(region)

        account_url = (
            f"https://{self.account_routing}.api.riotgames.com"
            f"/riot/account/v1/accounts/by-riot-id/{quote(name, safe='')}/{quote(tag, safe='')}"
        )
        account = await self._get_json(account_url)
        puuid = account.get("puuid") if isinstance(account, dict) else None
        if not puuid:
            raise StatsLookupFailed(f"No puuid for {name}#{tag}")

        summoner = await self._get_json(
            f"https://{platform}.api.riotgames.com/lol/summoner/v4/summoners/by-puuid/{puuid}"
        )
        summ_id = summoner.get("id") if isinstance(summoner, dict) else None
        if not summ_id:
            raise StatsLookupFailed(f"No summoner on {platform} for {name}#{tag}")
        return SummonerIdentity(internal_id=summ_id, puuid=puuid)

    async def fetch_ranked_entries(self, internal_id: str, region: str) -> list[RankedQueueEntry]:
        platform = platform_for(region)
        data = await self._get_json(
            f"https://{platform}.api.riotgames.com/lol/league/v4/entries/by-summoner/{quote(internal_id, safe='')}"
        )
        if not isinstance(data, list):
            raise StatsLookupFailed(f"Unexpected league-v4 payload: {type(data).__name__}")
        try:
            return [RankedQueueEntry.from_json(e) for e in data]
        except (TypeError, ValueError, AttributeError) as e:
            raise StatsLookupFailed("Malformed ranked entry") from e
