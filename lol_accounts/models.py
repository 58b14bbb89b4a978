# lol_accounts/models.py
from __future__ import annotations
from dataclasses import dataclass, asdict, replace
from typing import Any, Optional, Tuple

SOLO_QUEUE = "RANKED_SOLO_5x5"

DEFAULT_RANK = "Unranked"
DEFAULT_LP = "0 LP"
DEFAULT_WIN_RATE = "0%"
DEFAULT_IMAGE_SRC = "Unranked.webp"  # défaut de colonne SQL (avant tout calcul)

MIN_TAG_LEN = 3


@dataclass(frozen=True)
class RankSummary:
    rank: str
    lp: str
    winRate: str
    imageSrc: str


@dataclass(frozen=True)
class RankedQueueEntry:
    queueType: str
    tier: str
    rank: str
    leaguePoints: int
    wins: int
    losses: int

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "RankedQueueEntry":
        return cls(
            queueType=str(data.get("queueType") or ""),
            tier=str(data.get("tier") or ""),
            rank=str(data.get("rank") or ""),
            leaguePoints=int(data.get("leaguePoints") or 0),
            wins=int(data.get("wins") or 0),
            losses=int(data.get("losses") or 0),
        )


@dataclass(frozen=True)
class SummonerIdentity:
    internal_id: str
    puuid: str


@dataclass(frozen=True)
class Account:
    id: int
    login: str
    riotId: str
    region: str
    password: str  # toujours chiffré
    rank: str = DEFAULT_RANK
    lp: str = DEFAULT_LP
    winRate: str = DEFAULT_WIN_RATE
    imageSrc: str = DEFAULT_IMAGE_SRC

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Account":
        return cls(
            id=int(row["id"]),
            login=row["login"],
            riotId=row["riotId"],
            region=row["region"],
            password=row["password"],
            rank=row.get("rank") or DEFAULT_RANK,
            lp=row.get("lp") or DEFAULT_LP,
            winRate=row.get("winRate") or DEFAULT_WIN_RATE,
            imageSrc=row.get("imageSrc") or DEFAULT_IMAGE_SRC,
        )

    def with_summary(self, s: RankSummary) -> "Account":
        return replace(self, rank=s.rank, lp=s.lp, winRate=s.winRate, imageSrc=s.imageSrc)

    def to_json(self) -> dict[str, Any]:
        return asdict(self)


def split_riot_id(riot_id: str) -> Tuple[str, str]:
    """``"name#tag"`` -> ``("name", "tag")``. Lève ValueError si le format est invalide."""
    name, sep, tag = (riot_id or "").partition("#")
    if not sep or not name or "#" in tag:
        raise ValueError(f"Invalid Riot ID: {riot_id!r}")
    if len(tag) < MIN_TAG_LEN:
        raise ValueError(f"Riot ID tag must be at least {MIN_TAG_LEN} characters: {riot_id!r}")
    return name, tag


def parse_new_account(payload: Any) -> Optional[dict[str, str]]:
    """Extrait les 4 champs requis d'un corps JSON ; None si l'un manque ou est vide."""
    if not isinstance(payload, dict):
        return None
    out: dict[str, str] = {}
    for key in ("login", "riotId", "region", "password"):
        val = payload.get(key)
        if not isinstance(val, str):
            return None
        # le mot de passe est gardé tel quel (espaces compris)
        val = val if key == "password" else val.strip()
        if not val:
            return None
        out[key] = val
    return out
