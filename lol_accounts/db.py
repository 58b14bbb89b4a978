# lol_accounts/db.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import aiosqlite

from .errors import PersistenceFailed
from .models import Account


_SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    login TEXT NOT NULL,
    riotId TEXT NOT NULL,
    region TEXT NOT NULL,
    password TEXT NOT NULL,
    rank TEXT DEFAULT 'Unranked',
    lp TEXT DEFAULT '0 LP',
    winRate TEXT DEFAULT '0%',
    imageSrc TEXT DEFAULT 'Unranked.webp'
)"""

_COLUMNS = "id, login, riotId, region, password, rank, lp, winRate, imageSrc"


class AccountStore:
    """Accès SQLite à la table ``accounts``.

    Une connexion par opération : les rafraîchissements concurrents écrivent
    chacun leur propre ligne.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path

    async def init(self):
        try:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(_SCHEMA)
                await db.commit()
        except aiosqlite.Error as e:
            raise PersistenceFailed(f"init_db: {e}") from e

    async def list_all(self) -> list[Account]:
        try:
            async with aiosqlite.connect(self.db_path) as db:
                async with db.execute(f"SELECT {_COLUMNS} FROM accounts ORDER BY id ASC") as cur:
                    cols = [c[0] for c in cur.description]
                    return [Account.from_row(dict(zip(cols, row))) async for row in cur]
        except aiosqlite.Error as e:
            raise PersistenceFailed(f"list_all: {e}") from e

    async def get(self, account_id: int) -> Optional[Account]:
        try:
            async with aiosqlite.connect(self.db_path) as db:
                async with db.execute(
                    f"SELECT {_COLUMNS} FROM accounts WHERE id=?", (int(account_id),)
                ) as cur:
                    row = await cur.fetchone()
                    if not row:
                        return None
                    cols = [c[0] for c in cur.description]
                    return Account.from_row(dict(zip(cols, row)))
        except (aiosqlite.Error, OverflowError) as e:
            raise PersistenceFailed(f"get({account_id}): {e}") from e

    async def insert(self, fields: dict) -> int:
        """fields: login, riotId, region, password (déjà chiffré), rank, lp, winRate, imageSrc"""
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cur = await db.execute("""
                    INSERT INTO accounts (login, riotId, region, password, rank, lp, winRate, imageSrc)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    fields["login"], fields["riotId"], fields["region"], fields["password"],
                    fields["rank"], fields["lp"], fields["winRate"], fields["imageSrc"],
                ))
                await db.commit()
                return int(cur.lastrowid)
        except aiosqlite.Error as e:
            raise PersistenceFailed(f"insert: {e}") from e

    async def update_derived_fields(
        self,
        account_id: int,
        rank: str,
        lp: str,
        win_rate: str,
        image_src: str,
    ) -> bool:
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cur = await db.execute(
                    "UPDATE accounts SET rank=?, lp=?, winRate=?, imageSrc=? WHERE id=?",
                    (rank, lp, win_rate, image_src, int(account_id)),
                )
                await db.commit()
                return cur.rowcount > 0
        except (aiosqlite.Error, OverflowError) as e:
            raise PersistenceFailed(f"update_derived_fields({account_id}): {e}") from e

    async def delete_by_id(self, account_id: int) -> bool:
        try:
            async with aiosqlite.connect(self.db_path) as db:
                cur = await db.execute("DELETE FROM accounts WHERE id=?", (int(account_id),))
                await db.commit()
                return cur.rowcount > 0
        except (aiosqlite.Error, OverflowError) as e:
            raise PersistenceFailed(f"delete_by_id({account_id}): {e}") from e
