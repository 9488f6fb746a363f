"""Application errors and their HTTP translation."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette import status

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The vote store could not complete an operation."""

    def __init__(self, message: str = "Vote store failure"):
        self.message = message
        super().__init__(self.message)


class InvalidChoiceError(Exception):
    """Submitted choice is neither agree nor oppose."""

    def __init__(self, value: str):
        self.value = value
        self.message = f"Invalid choice: {value!r}"
        super().__init__(self.message)


class UnauthorizedError(Exception):
    """Admin key missing or wrong."""


async def store_error_handler(request: Request, exc: StoreError) -> PlainTextResponse:
    logger.error(f"Store error on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def invalid_choice_handler(request: Request, exc: InvalidChoiceError) -> PlainTextResponse:
    return PlainTextResponse("Invalid choice", status_code=status.HTTP_400_BAD_REQUEST)


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> PlainTextResponse:
    logger.debug(f"Rejected admin request to {request.url.path}")
    return PlainTextResponse("Unauthorized", status_code=status.HTTP_401_UNAUTHORIZED)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(InvalidChoiceError, invalid_choice_handler)
    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
