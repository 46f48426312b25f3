class MeetUpError(Exception):
    """Base class for the expected outcomes of meet-up use cases."""


class NotFoundError(MeetUpError):
    def __init__(self, kind, identifier=None):
        self.kind = kind
        self.identifier = identifier
        if identifier is None:
            super().__init__(f"{kind} not found")
        else:
            super().__init__(f"{kind} with id `{identifier}` not found")


class InvalidStateError(MeetUpError):
    """Raised when a transition precondition does not hold.

    This includes losing a compare-and-set race against another caller.
    Callers should re-fetch the meet-up instead of retrying blindly.
    """

    def __init__(self, state=None, message=None):
        self.state = state
        if message is None:
            message = (
                f"Invalid meet up state: {state.label}"
                if state is not None
                else "Meet up is not in the expected state"
            )
        super().__init__(message)


class QuotaExceededError(MeetUpError):
    def __init__(self, limit):
        self.limit = limit
        super().__init__(
            f"More than {limit} papers per user per meet up are not allowed"
        )


class NoWinnerFoundError(MeetUpError):
    def __init__(self):
        super().__init__("No valid paper found")


class UnknownError(MeetUpError):
    """Opaque storage or infrastructure failure. Never retried by the core."""
