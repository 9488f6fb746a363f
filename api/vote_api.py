import logging
from typing import Annotated

from fastapi import APIRouter, Form
from fastapi.responses import RedirectResponse
from starlette import status

from core.depends import AsyncDBSession, ClientIP
from core.errors import InvalidChoiceError, StoreError
from crud.vote_crud import vote_crud as VoteCrud
from models import VoteChoice
from schemas.vote_schema import RecordResult

logger = logging.getLogger(__name__)


router = APIRouter()


def parse_choice(value: str) -> VoteChoice:
    try:
        return VoteChoice(value)
    except ValueError:
        raise InvalidChoiceError(value) from None


@router.post("/vote")
async def vote(
    session: AsyncDBSession,
    ip: ClientIP,
    choice: Annotated[str, Form()] = "",
):
    vote_choice = parse_choice(choice)

    target = "/thanks"
    try:
        result = await VoteCrud.record_vote(session, ip, vote_choice)
        if result is RecordResult.IGNORED:
            target = "/thanks?already=1"
    except StoreError as e:
        logger.exception(f"Vote from {ip} was not recorded: {e.message}")

    return RedirectResponse(target, status_code=status.HTTP_302_FOUND)
