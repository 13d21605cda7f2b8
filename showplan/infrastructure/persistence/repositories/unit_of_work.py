"""SQLAlchemy unit of work: SAVEPOINT-scoped atomic blocks on the request session."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.domain.exceptions import PersistenceException

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """atomic() opens a nested transaction; any exception rolls back to the savepoint.

    Nesting is allowed (savepoint inside savepoint). The outer transaction is owned
    by get_db_transactional.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        try:
            async with self.db.begin_nested():
                yield
        except SQLAlchemyError as e:
            logger.exception("Transaction aborted: %s", type(e).__name__)
            raise PersistenceException("transaction", type(e).__name__) from e
