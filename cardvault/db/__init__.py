from cardvault.db.database import get_session, init_db
from cardvault.db.kv_store import InMemoryStore, KeyValueStore, SnapshotStore
from cardvault.db.operations import (
    delete_player,
    get_player_rows,
    load_player_store,
    save_player_store,
)

__all__ = [
    "InMemoryStore",
    "KeyValueStore",
    "SnapshotStore",
    "delete_player",
    "get_player_rows",
    "get_session",
    "init_db",
    "load_player_store",
    "save_player_store",
]
