"""
Base service class providing common functionality for all services.
"""

from typing import Generic, TypeVar

from pymongo.database import Database

from nepstay.core.logging import get_logger
from nepstay.repositories.base.base_repository import BaseRepository

TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(Generic[TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and database handle
    - Primary repository for the service's aggregate

    Services raise application exceptions from ``nepstay.core.exceptions``;
    the HTTP layer turns them into error envelopes.
    """

    def __init__(self, repository: TRepo, db: Database):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db: Database handle
        """
        self.repository: TRepo = repository
        self.db: Database = db
        self._logger = get_logger(self.__class__.__name__)
