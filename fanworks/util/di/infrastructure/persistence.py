"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fanworks.config import Settings
from fanworks.domain.repository import (
    CommentRepository,
    ContentRegistry,
    EditHistoryRepository,
    FlagRepository,
    LikeRepository,
    UserRepository,
)
from fanworks.persistence.database import (
    create_engine,
    create_session_factory,
    transaction,
)
from fanworks.persistence.repository import (
    PostgresCommentRepository,
    PostgresContentRegistry,
    PostgresEditHistoryRepository,
    PostgresFlagRepository,
    PostgresLikeRepository,
    PostgresUserRepository,
)
from fanworks.util.di.base import ProviderBase
from fanworks.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        try:
            async with transaction(session_factory) as session:
                yield session
            logfire.info("Session committed")
        except Exception as e:
            logfire.warn("Session rollback", error=str(e))
            raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_content_registry(self, session: AsyncSession) -> ContentRegistry:
        """Provide content registry."""
        return PostgresContentRegistry(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_like_repository(self, session: AsyncSession) -> LikeRepository:
        """Provide Like repository."""
        return PostgresLikeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_flag_repository(self, session: AsyncSession) -> FlagRepository:
        """Provide Flag repository."""
        return PostgresFlagRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_edit_history_repository(
        self, session: AsyncSession
    ) -> EditHistoryRepository:
        """Provide EditHistory repository."""
        return PostgresEditHistoryRepository(session)
