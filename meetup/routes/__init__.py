from flask import current_app

from meetup.errors import (
    InvalidStateError,
    MeetUpError,
    NoWinnerFoundError,
    NotFoundError,
    QuotaExceededError,
    UnknownError,
)
from meetup.routes.admin import register_admin_routes
from meetup.routes.public import register_public_routes

ERROR_STATUS_CODES = (
    (NotFoundError, 404),
    (InvalidStateError, 409),
    (NoWinnerFoundError, 409),
    (QuotaExceededError, 422),
    (UnknownError, 500),
)


def register_routes(app):
    register_public_routes(app)
    register_admin_routes(app)
    register_error_handlers(app)


def register_error_handlers(app):
    @app.errorhandler(MeetUpError)
    def handle_meet_up_error(error):
        status = next(
            (
                code
                for error_type, code in ERROR_STATUS_CODES
                if isinstance(error, error_type)
            ),
            500,
        )
        if status >= 500:
            current_app.logger.error("Unhandled meet up error: %s", error)
        return {"ok": False, "error": str(error)}, status
