import aiosqlite
import pytest

from lol_accounts.db import AccountStore
from lol_accounts.errors import PersistenceFailed

from conftest import add_row


async def test_insert_and_list(store, cipher):
    a = await add_row(store, cipher, "main", "Faker#KR1", "KR")
    b = await add_row(store, cipher, "smurf", "Faker#KR1", "KR")
    accounts = await store.list_all()
    assert [x.id for x in accounts] == [a, b]
    # riotId non unique
    assert {x.riotId for x in accounts} == {"Faker#KR1"}
    assert accounts[0].login == "main"
    assert cipher.decrypt(accounts[0].password) == "pw-main"


async def test_column_defaults(store, db_path):
    async with aiosqlite.connect(db_path) as db:
        await db.execute(
            "INSERT INTO accounts (login, riotId, region, password) VALUES (?, ?, ?, ?)",
            ("l", "A#BCD", "EUW", "x"),
        )
        await db.commit()
    (acc,) = await store.list_all()
    assert (acc.rank, acc.lp, acc.winRate, acc.imageSrc) == ("Unranked", "0 LP", "0%", "Unranked.webp")


async def test_update_derived_fields(store, cipher):
    acc_id = await add_row(store, cipher, "main", "Faker#KR1", "KR")
    assert await store.update_derived_fields(acc_id, "GOLD I", "10 LP", "55%", "/assets/ranks/Gold.webp")
    acc = await store.get(acc_id)
    assert (acc.rank, acc.lp, acc.winRate, acc.imageSrc) == ("GOLD I", "10 LP", "55%", "/assets/ranks/Gold.webp")
    assert acc.login == "main"


async def test_update_missing_row(store):
    assert await store.update_derived_fields(999, "GOLD I", "10 LP", "55%", "x") is False


async def test_delete(store, cipher):
    acc_id = await add_row(store, cipher, "main", "Faker#KR1", "KR")
    assert await store.delete_by_id(acc_id) is True
    assert await store.get(acc_id) is None
    assert await store.delete_by_id(acc_id) is False
    assert await store.list_all() == []


async def test_init_is_idempotent(store, cipher):
    await add_row(store, cipher, "main", "Faker#KR1", "KR")
    await store.init()
    assert len(await store.list_all()) == 1


async def test_unusable_path_raises_persistence_failed(tmp_path):
    bad = AccountStore(tmp_path / "missing-dir" / "accounts.db")
    with pytest.raises(PersistenceFailed):
        await bad.init()


async def test_oversized_id_raises_persistence_failed(store):
    huge = 2**70
    with pytest.raises(PersistenceFailed):
        await store.get(huge)
    with pytest.raises(PersistenceFailed):
        await store.delete_by_id(huge)
    with pytest.raises(PersistenceFailed):
        await store.update_derived_fields(huge, "GOLD I", "10 LP", "55%", "x")
