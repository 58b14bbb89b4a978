# lol_accounts/ranks.py
from __future__ import annotations
from typing import Iterable, Optional
import math

from .models import RankedQueueEntry, RankSummary, SOLO_QUEUE

RANK_ASSETS = "/assets/ranks"

UNRANKED = RankSummary(
    rank="Unranked",
    lp="0 LP",
    winRate="0%",
    imageSrc=f"{RANK_ASSETS}/Unranked.webp",
)


def solo_queue_entry(entries: Iterable[RankedQueueEntry]) -> Optional[RankedQueueEntry]:
    return next((e for e in entries if e.queueType == SOLO_QUEUE), None)


def win_rate(wins: int, losses: int) -> str:
    games = wins + losses
    if games <= 0:
        return "0%"
    # arrondi "half up" (66.5 -> 67), pas l'arrondi bancaire de round()
    return f"{math.floor(100 * wins / games + 0.5)}%"


def tier_badge(tier: str) -> str:
    name = (tier or "").capitalize() or "Unranked"
    return f"{RANK_ASSETS}/{name}.webp"


def summarize(entries: Iterable[RankedQueueEntry]) -> RankSummary:
    solo = solo_queue_entry(entries)
    if solo is None:
        return UNRANKED
    return RankSummary(
        rank=f"{solo.tier} {solo.rank}",
        lp=f"{solo.leaguePoints} LP",
        winRate=win_rate(solo.wins, solo.losses),
        imageSrc=tier_badge(solo.tier),
    )
