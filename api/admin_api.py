import csv
import io
import json
import logging
from datetime import datetime, timezone
from typing import Iterable, Iterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, StreamingResponse

from core.depends import AppSettings, AsyncDBSession, require_admin
from core.templating import templates
from crud.vote_crud import vote_crud as VoteCrud
from models import Vote
from schemas.vote_schema import VoteRow

logger = logging.getLogger(__name__)

CSV_HEADER = ("ip", "choice", "created_at")


router = APIRouter(
    prefix="/admin",
    dependencies=[Depends(require_admin)],
)


def isoformat_utc(value: datetime) -> str:
    """Render a timestamp as UTC ISO-8601 with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    if value.tzinfo is None:
        # SQLite hands back naive CURRENT_TIMESTAMP values, which are UTC
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def iter_csv(votes: Iterable[Vote]) -> Iterator[str]:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    def flush() -> str:
        chunk = buffer.getvalue()
        buffer.seek(0)
        buffer.truncate(0)
        return chunk

    writer.writerow(CSV_HEADER)
    yield flush()
    for vote in votes:
        writer.writerow((vote.ip, vote.choice.value, isoformat_utc(vote.created_at)))
        yield flush()


@router.get("", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    session: AsyncDBSession,
    settings: AppSettings,
):
    async with session.begin():
        stats = await VoteCrud.get_aggregate(session)
        recent = await VoteCrud.list_recent(session, settings.ADMIN_RECENT_LIMIT)

    rows = [VoteRow.model_validate(vote) for vote in recent]
    stats_json = json.dumps(stats.model_dump(), separators=(",", ":"))
    return templates.TemplateResponse(
        request,
        "admin.html",
        {
            "stats": stats,
            "stats_json": stats_json,
            "rows": rows,
            "format_time": isoformat_utc,
        },
    )


@router.get("/export")
async def export(
    session: AsyncDBSession,
):
    async with session.begin():
        votes = await VoteCrud.export_all(session)
    logger.info(f"Exporting {len(votes)} votes as CSV")

    return StreamingResponse(
        iter_csv(votes),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="votes.csv"'},
    )
