"""
Database operations for player state.

Loads a player's keys into a SnapshotStore for the synchronous game core,
and writes back only the keys the core changed.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cardvault.db.kv_store import SnapshotStore
from cardvault.models.db import PlayerStateDB


async def get_player_rows(session: AsyncSession, player_id: str) -> list[PlayerStateDB]:
    """Get all persisted keys for a player."""
    result = await session.execute(
        select(PlayerStateDB).where(PlayerStateDB.player_id == player_id)
    )
    return list(result.scalars().all())


async def load_player_store(session: AsyncSession, player_id: str) -> SnapshotStore:
    """
    Load a player's state into a clean snapshot.

    Returns an empty snapshot if the player has never been seen.
    """
    rows = await get_player_rows(session, player_id)
    return SnapshotStore({row.key: row.value for row in rows})


async def save_player_store(session: AsyncSession, player_id: str, store: SnapshotStore) -> int:
    """
    Flush a snapshot's changes for a player.

    Upserts dirty keys and deletes removed ones. Marks the snapshot clean.

    Returns:
        Number of keys written or deleted.
    """
    if not store.has_changes():
        return 0

    existing = {row.key: row for row in await get_player_rows(session, player_id)}

    for key in store.dirty:
        value = store.get(key)
        row = existing.get(key)
        if row is None:
            session.add(PlayerStateDB(player_id=player_id, key=key, value=value))
        else:
            row.value = value

    if store.removed:
        await session.execute(
            delete(PlayerStateDB).where(
                PlayerStateDB.player_id == player_id,
                PlayerStateDB.key.in_(store.removed),
            )
        )

    changed = len(store.dirty) + len(store.removed)
    await session.flush()
    store.mark_clean()
    return changed


async def delete_player(session: AsyncSession, player_id: str) -> bool:
    """
    Delete every persisted key for a player.

    Returns True if anything was deleted, False if the player was unknown.
    """
    rows = await get_player_rows(session, player_id)
    if not rows:
        return False

    await session.execute(delete(PlayerStateDB).where(PlayerStateDB.player_id == player_id))
    return True
