import logging
from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import StoreError
from models import Vote, VoteChoice
from schemas.vote_schema import RecordResult, VoteAggregate

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class VoteCrud:

    def _insert_ignoring_duplicates(self, session: AsyncSession, ip: str, choice: VoteChoice):
        dialect = session.get_bind().dialect.name
        try:
            insert = _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise StoreError(f"Unsupported database dialect: {dialect}") from None
        return (
            insert(Vote)
            .values(ip=ip, choice=choice)
            .on_conflict_do_nothing(index_elements=[Vote.ip])
            .returning(Vote.id)
        )

    async def record_vote(self, session: AsyncSession, ip: str, choice: VoteChoice) -> RecordResult:
        """Store the first vote seen from ``ip``; later votes from it are no-ops.

        The insert and the uniqueness check are one statement, so concurrent
        submissions from the same address leave exactly one row behind.
        """
        stmt = self._insert_ignoring_duplicates(session, ip, choice)
        try:
            result = await session.execute(stmt)
            inserted_id: Optional[int] = result.scalar_one_or_none()
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StoreError(f"Failed to record vote: {e}") from e

        if inserted_id is None:
            return RecordResult.IGNORED
        return RecordResult.INSERTED

    async def get_aggregate(self, session: AsyncSession) -> VoteAggregate:
        stmt = select(
            func.count().label("total"),
            func.count().filter(Vote.choice == VoteChoice.AGREE).label("agree"),
            func.count().filter(Vote.choice == VoteChoice.OPPOSE).label("oppose"),
        ).select_from(Vote)
        try:
            result = await session.execute(stmt)
            row = result.one()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to aggregate votes: {e}") from e
        return VoteAggregate(total=row.total, agree=row.agree, oppose=row.oppose)

    async def _newest_first(self, session: AsyncSession, limit: Optional[int] = None) -> Sequence[Vote]:
        stmt = select(Vote).order_by(Vote.created_at.desc(), Vote.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            result = await session.execute(stmt)
            return result.scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list votes: {e}") from e

    async def list_recent(self, session: AsyncSession, limit: int) -> Sequence[Vote]:
        return await self._newest_first(session, limit)

    async def export_all(self, session: AsyncSession) -> Sequence[Vote]:
        return await self._newest_first(session)


vote_crud = VoteCrud()
