from __future__ import annotations
from pathlib import Path
from typing import List

from sqlalchemy import BigInteger, String, Text, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from task_tracker.domain.errors import ConnectivityError, ReadError, WriteError
from task_tracker.domain.task_models import Task, TaskCreate, TaskStatus, newest_first


class Base(DeclarativeBase):
    pass


class TaskRow(Base):
    __tablename__ = "tasks"

    task_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(16), nullable=False)

    def to_domain(self) -> Task:
        return Task(
            task_id=self.task_id,
            created_at=self.created_at,
            title=self.title,
            description=self.description,
            status=TaskStatus(self.status),
        )


def make_sqlite_url(db_path: str) -> str:
    # db_path like "./data/tasks.db"
    p = Path(db_path).resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{p.as_posix()}"


class SQLiteTaskStore:
    """Local development store (TASK_STORE=sqlite). One table, no indexes beyond the key."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.engine = create_async_engine(make_sqlite_url(db_path), future=True)
        self.sessionmaker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine, expire_on_commit=False
        )

    async def open(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()

    async def probe_connectivity(self) -> None:
        try:
            async with self.sessionmaker() as session:
                await session.execute(select(TaskRow.task_id).limit(1))
        except SQLAlchemyError as e:
            raise ConnectivityError(f"SQLite connection failed: {e}") from e

    async def insert_task(self, title: str, description: str) -> Task:
        task = Task.new(TaskCreate(title=title, description=description))
        row = TaskRow(
            task_id=task.task_id,
            created_at=task.created_at,
            title=task.title,
            description=task.description,
            status=task.status.value,
        )
        try:
            async with self.sessionmaker() as session:
                session.add(row)
                await session.commit()
        except SQLAlchemyError as e:
            raise WriteError(f"Failed to create task: {e}") from e
        return task

    async def list_tasks(self) -> List[Task]:
        # plain scan; ordering is applied below, same as the DynamoDB store
        try:
            async with self.sessionmaker() as session:
                res = await session.execute(select(TaskRow))
                rows = res.scalars().all()
        except SQLAlchemyError as e:
            raise ReadError(f"Failed to retrieve tasks: {e}") from e
        try:
            tasks = [r.to_domain() for r in rows]
        except ValueError as e:  # unknown status, or a row pydantic rejects
            raise ReadError(f"Failed to retrieve tasks: {e}") from e
        return newest_first(tasks)
