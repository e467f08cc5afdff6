from nepstay.db.init_db import drop_db, init_db, reset_db
from nepstay.db.session import close_client, get_database, get_db, is_connected

__all__ = [
    "drop_db",
    "init_db",
    "reset_db",
    "close_client",
    "get_database",
    "get_db",
    "is_connected",
]
