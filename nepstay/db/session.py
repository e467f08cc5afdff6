"""Document store client management."""
import threading
from typing import Generator, Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from nepstay.config.settings import settings
from nepstay.core.exceptions import DatabaseConnectionError
from nepstay.core.logging import get_logger

logger = get_logger(__name__)

# One client per process; reused across requests and warm serverless invocations
_client: Optional[MongoClient] = None
_connected: bool = False
_client_lock = threading.Lock()


def get_client() -> MongoClient:
    """Return the cached client, creating it on first use."""
    global _client, _connected

    if _client is not None and _connected:
        return _client

    with _client_lock:
        if _client is not None and _connected:
            return _client

        logger.info("Creating new database connection")
        client = MongoClient(
            settings.MONGODB_URI,
            maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
            serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            socketTimeoutMS=settings.MONGODB_SOCKET_TIMEOUT_MS,
        )
        try:
            client.admin.command("ping")
        except PyMongoError as e:
            client.close()
            _client = None
            _connected = False
            logger.error(f"MongoDB connection error: {e}")
            raise DatabaseConnectionError()

        _client = client
        _connected = True

    logger.info("MongoDB connected successfully", extra={"db_host": _host_of(client)})
    return client

    logger.info("Creating new database connection")
    try:
        _client = MongoClient(
            settings.MONGODB_URI,
            maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
            serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            socketTimeoutMS=settings.MONGODB_SOCKET_TIMEOUT_MS,
        )
        _client.admin.command("ping")
    except PyMongoError as e:
        _connected = False
        logger.error(f"MongoDB connection error: {e}")
        raise DatabaseConnectionError()

    _connected = True
    logger.info("MongoDB connected successfully", extra={"db_host": _host_of(_client)})
    return _client


def get_database() -> Database:
    return get_client()[settings.MONGODB_DB_NAME]


def get_db() -> Generator[Database, None, None]:
    """
    Dependency that yields the application database.

    Usage in FastAPI endpoints:
        @router.get("/items")
        def read_items(db: Database = Depends(get_db)):
            ...
    """
    yield get_database()


def is_connected() -> bool:
    return _connected


def close_client() -> None:
    """Close the cached client (shutdown hook)."""
    global _client, _connected
    with _client_lock:
        if _client is not None:
            _client.close()
            logger.info("MongoDB connection closed")
        _client = None
        _connected = False


def _host_of(client: MongoClient) -> Optional[str]:
    try:
        address = client.address
    except PyMongoError:
        return None
    return f"{address[0]}:{address[1]}" if address else None


def describe_connection(db: Database) -> dict:
    """Connection status for the system-info endpoint."""
    try:
        db.command("ping")
        status = "connected"
    except PyMongoError as e:
        logger.warning(f"Database ping failed: {e}")
        status = "disconnected"

    return {
        "status": status,
        "host": _host_of(db.client) if isinstance(db.client, MongoClient) else None,
        "name": db.name,
    }
