"""Dashboard service — one payload built from many scoped read queries.

Every sub-query is an independent read over the caller's rows, bounded by
the same optional date range (``created_at`` for clients, projects and
reminders; ``date`` for interaction logs). They run concurrently, each on
its own session from the factory, inside one task group, and the payload is
assembled only after all of them have finished. One failure cancels the
remaining reads and fails the whole request.

"Now" is read once per call, so overdue/upcoming buckets are consistent
within a response.
"""

import asyncio
import uuid
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional

import structlog
from sqlalchemy import Select, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from clientdesk.config import settings
from clientdesk.db.models import (
    PROJECT_CLOSED_STATUSES,
    Client,
    InteractionLog,
    Project,
    Reminder,
)
from clientdesk.schedule import classify_reminder, utcnow
from clientdesk.schemas.client import ClientDetail
from clientdesk.schemas.common import DateRange
from clientdesk.schemas.dashboard import DashboardRead, StatusCount, TopClient, TypeCount
from clientdesk.schemas.interaction_log import InteractionLogDetail
from clientdesk.schemas.project import ProjectDetail, ProjectWithClient
from clientdesk.schemas.reminder import ReminderDetail, ReminderRead
from clientdesk.services.listing import apply_date_range

logger = structlog.get_logger()

Query = Callable[[AsyncSession], Awaitable[Any]]


class DashboardService:
    """Fan-out/fan-in aggregation over one user's data."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        top_n: int | None = None,
        recent_n: int | None = None,
    ):
        self.session_factory = session_factory
        self.top_n = top_n or settings.dashboard_top_n
        self.recent_n = recent_n or settings.dashboard_recent_n

    async def _read(self, query: Query) -> Any:
        async with self.session_factory() as session:
            return await query(session)

    async def build(
        self,
        user_id: uuid.UUID,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> DashboardRead:
        now = now or utcnow()

        def created(q: Select, model) -> Select:
            return apply_date_range(q.where(model.user_id == user_id), model.created_at, start, end)

        def logged(q: Select) -> Select:
            return apply_date_range(
                q.where(InteractionLog.user_id == user_id), InteractionLog.date, start, end
            )

        async def scalar(session: AsyncSession, q: Select) -> Any:
            return (await session.execute(q)).scalar_one()

        async def rows(session: AsyncSession, q: Select) -> list:
            return list((await session.execute(q)).all())

        async def objects(session: AsyncSession, q: Select) -> list:
            return list((await session.execute(q)).scalars().all())

        def top_clients(order_by) -> Query:
            q = (
                select(
                    Client.id,
                    Client.name,
                    Client.email,
                    Client.company,
                    func.count(Project.id).label("project_count"),
                    func.coalesce(func.sum(Project.budget), 0).label("total_budget"),
                )
                .select_from(Project)
                .join(Client, Project.client_id == Client.id)
                .where(Client.user_id == user_id)
                .group_by(Client.id, Client.name, Client.email, Client.company)
                .order_by(order_by, Client.name)
                .limit(self.top_n)
            )
            return lambda s: rows(s, created(q, Project))

        queries: dict[str, Query] = {
            "total_clients": lambda s: scalar(s, created(select(func.count(Client.id)), Client)),
            "total_projects": lambda s: scalar(s, created(select(func.count(Project.id)), Project)),
            "total_logs": lambda s: scalar(s, logged(select(func.count(InteractionLog.id)))),
            "total_reminders": lambda s: scalar(
                s, created(select(func.count(Reminder.id)), Reminder)
            ),
            "total_budget": lambda s: scalar(
                s, created(select(func.coalesce(func.sum(Project.budget), 0)), Project)
            ),
            "projects_by_status": lambda s: rows(
                s,
                created(
                    select(Project.status, func.count(Project.id)).group_by(Project.status),
                    Project,
                ).order_by(Project.status),
            ),
            "logs_by_type": lambda s: rows(
                s,
                logged(
                    select(InteractionLog.type, func.count(InteractionLog.id)).group_by(
                        InteractionLog.type
                    )
                ).order_by(InteractionLog.type),
            ),
            "top_budget_clients": top_clients(desc("total_budget")),
            "top_count_projects_clients": top_clients(desc("project_count")),
            "recent_clients": lambda s: objects(
                s,
                created(select(Client), Client)
                .options(
                    selectinload(Client.projects),
                    selectinload(Client.reminders),
                    selectinload(Client.logs),
                )
                .order_by(Client.created_at.desc(), Client.id)
                .limit(self.recent_n),
            ),
            "recent_projects": lambda s: objects(
                s,
                created(select(Project), Project)
                .options(
                    selectinload(Project.client),
                    selectinload(Project.logs),
                    selectinload(Project.reminders),
                )
                .order_by(Project.created_at.desc(), Project.id)
                .limit(self.recent_n),
            ),
            "overdue_projects": lambda s: objects(
                s,
                created(select(Project), Project)
                .where(
                    Project.deadline < now,
                    Project.status.not_in(PROJECT_CLOSED_STATUSES),
                )
                .options(selectinload(Project.client))
                .order_by(Project.deadline.asc(), Project.id),
            ),
            "recent_logs": lambda s: objects(
                s,
                logged(select(InteractionLog))
                .options(
                    selectinload(InteractionLog.client),
                    selectinload(InteractionLog.project),
                )
                .order_by(InteractionLog.date.desc(), InteractionLog.id)
                .limit(self.recent_n),
            ),
            "pending_reminders": lambda s: objects(
                s,
                created(select(Reminder), Reminder)
                .where(Reminder.status == "Pending")
                .options(selectinload(Reminder.client), selectinload(Reminder.project))
                .order_by(Reminder.due_date.asc(), Reminder.id),
            ),
            "all_reminders": lambda s: objects(
                s,
                created(select(Reminder), Reminder).order_by(Reminder.due_date.asc(), Reminder.id),
            ),
        }

        # Sibling reads are cancelled when one fails; the first failure is
        # re-raised bare so the storage error handler sees it.
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = {
                    name: tg.create_task(self._read(query)) for name, query in queries.items()
                }
        except ExceptionGroup as eg:
            raise eg.exceptions[0] from None
        r = {name: task.result() for name, task in tasks.items()}

        logger.debug("dashboard.built", user_id=str(user_id), queries=len(tasks))
        return self._compose(r, start, end, now)

    def _compose(
        self,
        r: dict[str, Any],
        start: Optional[datetime],
        end: Optional[datetime],
        now: datetime,
    ) -> DashboardRead:
        pending = [ReminderDetail.model_validate(rem) for rem in r["pending_reminders"]]
        buckets: dict[str, list[ReminderDetail]] = {"upcoming": [], "overdue": []}
        for rem in pending:
            bucket = classify_reminder(rem.due_date, rem.status, now, until=end)
            if bucket is not None:
                buckets[bucket].append(rem)

        recent_projects = [ProjectDetail.model_validate(p) for p in r["recent_projects"]]
        latest = r["recent_projects"][0] if r["recent_projects"] else None

        return DashboardRead(
            total_clients=r["total_clients"],
            total_projects=r["total_projects"],
            total_logs=r["total_logs"],
            total_reminders=r["total_reminders"],
            total_budget=float(r["total_budget"] or 0),
            projects_by_status=[
                StatusCount(status=status, count=count)
                for status, count in r["projects_by_status"]
            ],
            logs_by_type=[TypeCount(type=t, count=count) for t, count in r["logs_by_type"]],
            top_budget_clients=[_top_client(row) for row in r["top_budget_clients"]],
            top_count_projects_clients=[
                _top_client(row) for row in r["top_count_projects_clients"]
            ],
            recent_clients=[ClientDetail.model_validate(c) for c in r["recent_clients"]],
            recent_projects=recent_projects,
            latest_project=ProjectWithClient.model_validate(latest) if latest else None,
            overdue_projects=[
                ProjectWithClient.model_validate(p) for p in r["overdue_projects"]
            ],
            recent_logs=[InteractionLogDetail.model_validate(log) for log in r["recent_logs"]],
            upcoming_reminders=buckets["upcoming"],
            pending_reminders=pending,
            overdue_reminders=buckets["overdue"],
            all_reminders=[ReminderRead.model_validate(rem) for rem in r["all_reminders"]],
            date_range=DateRange(start_date=start, end_date=end),
        )


def _top_client(row) -> TopClient:
    return TopClient(
        id=row.id,
        name=row.name,
        email=row.email,
        company=row.company,
        project_count=row.project_count,
        total_budget=float(row.total_budget or 0),
    )
