import json
from pathlib import Path

import pytest

from lol_accounts.config import Settings
from lol_accounts.crypto import CredentialCipher
from lol_accounts.db import AccountStore
from lol_accounts.errors import StatsLookupFailed
from lol_accounts.models import RankedQueueEntry, SummonerIdentity
from lol_accounts.riot import platform_for


def solo(tier="GOLD", division="II", lp=50, wins=10, losses=10):
    return RankedQueueEntry("RANKED_SOLO_5x5", tier, division, lp, wins, losses)


def flex(tier="SILVER", division="I", lp=20, wins=5, losses=5):
    return RankedQueueEntry("RANKED_FLEX_SR", tier, division, lp, wins, losses)


class FakeRiot:
    """Remplace RiotClient : entrées par nom de joueur, noms en échec configurables."""

    def __init__(self, entries_by_name=None, failing=()):
        self.entries_by_name = entries_by_name or {}
        self.failing = set(failing)
        self.calls = []
        self.closed = False

    async def resolve_identity(self, name, tag, region):
        platform_for(region)
        self.calls.append(("identity", name, tag, region))
        if name in self.failing:
            raise StatsLookupFailed(f"simulated failure for {name}")
        return SummonerIdentity(internal_id=f"sid-{name}", puuid=f"puuid-{name}")

    async def fetch_ranked_entries(self, internal_id, region):
        platform_for(region)
        self.calls.append(("entries", internal_id, region))
        return list(self.entries_by_name.get(internal_id[len("sid-"):], []))

    async def close(self):
        self.closed = True


class FakeResponse:
    def __init__(self, status=200, payload=None):
        self.status = status
        self.payload = payload

    async def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    async def text(self):
        return json.dumps(self.payload) if not isinstance(self.payload, Exception) else ""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    closed = False

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []
        self.timeouts = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers))
        self.timeouts.append(timeout)
        r = self.responses.pop(0)
        if isinstance(r, Exception):
            raise r
        return r


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "accounts.db"


@pytest.fixture
async def store(db_path):
    s = AccountStore(db_path)
    await s.init()
    return s


@pytest.fixture(scope="session")
def cipher():
    return CredentialCipher("test-secret-key")


@pytest.fixture
def settings(db_path):
    return Settings(
        SECRET_KEY="test-secret-key",
        RIOT_API_KEY="RGAPI-test",
        PORT=4000,
        HOST="127.0.0.1",
        DB_PATH=db_path,
        ACCOUNT_ROUTING="americas",
        RIOT_TIMEOUT=5.0,
        CORS_ORIGIN="*",
        LOG_LEVEL="INFO",
    )


async def add_row(store, cipher, login, riot_id, region="EUW", **derived):
    fields = {
        "login": login,
        "riotId": riot_id,
        "region": region,
        "password": cipher.encrypt(f"pw-{login}"),
        "rank": derived.get("rank", "Unranked"),
        "lp": derived.get("lp", "0 LP"),
        "winRate": derived.get("winRate", "0%"),
        "imageSrc": derived.get("imageSrc", "Unranked.webp"),
    }
    return await store.insert(fields)
