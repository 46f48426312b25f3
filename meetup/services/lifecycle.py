"""Meet-up lifecycle: CallForPapers -> Voting -> Scheduled -> Done.

Every transition reads the persisted meet-up and checks its state locally
before delegating to ``MeetUpGateway.transition``. The local check only
short-circuits obvious mistakes; the guarded write decides. Nothing here
retries: a lost race surfaces as ``InvalidStateError`` and the caller should
re-fetch the meet-up before trying again.
"""
from urllib.parse import urlparse

from meetup.domain import MeetUpState
from meetup.errors import InvalidStateError, NoWinnerFoundError, NotFoundError
from meetup.services.voting import decide_winner


def create_meet_up(meet_up_gateway, location, date):
    return meet_up_gateway.new_meet_up(location, date)


def get_future_meet_up(meet_up_gateway):
    return meet_up_gateway.get_future_meet_up()


def require_future_meet_up(meet_up_gateway):
    meet_up = meet_up_gateway.get_future_meet_up()
    if meet_up is None:
        raise NotFoundError("Future meet up")
    return meet_up


def get_meet_up(meet_up_gateway, meet_up_id):
    return meet_up_gateway.get_meet_up(meet_up_id)


def list_past_meet_ups(meet_up_gateway):
    return meet_up_gateway.list_past_meet_ups()


def get_past_meet_up_summary(meet_up_gateway, meet_up_id):
    return meet_up_gateway.get_past_meet_up_summary(meet_up_id)


def move_meet_up_to_voting(meet_up_gateway, meet_up_id):
    meet_up = meet_up_gateway.get_meet_up(meet_up_id)
    _require_state(meet_up, MeetUpState.CALL_FOR_PAPERS)
    return meet_up_gateway.transition(
        meet_up.id, MeetUpState.CALL_FOR_PAPERS, MeetUpState.VOTING
    )


def move_meet_up_to_scheduled(meet_up_gateway, vote_gateway, meet_up_id):
    meet_up = meet_up_gateway.get_meet_up(meet_up_id)
    _require_state(meet_up, MeetUpState.VOTING)

    winner = decide_winner(vote_gateway.get_votes_for_meet_up(meet_up.id))
    if winner is None:
        raise NoWinnerFoundError()

    return meet_up_gateway.transition(
        meet_up.id,
        MeetUpState.VOTING,
        MeetUpState.SCHEDULED,
        paper_id=winner,
    )


def move_meet_up_to_done(meet_up_gateway, meet_up_id, link):
    link = validate_recording_link(link)
    meet_up = meet_up_gateway.get_meet_up(meet_up_id)
    _require_state(meet_up, MeetUpState.SCHEDULED)
    meet_up_gateway.transition(
        meet_up.id, MeetUpState.SCHEDULED, MeetUpState.DONE, link=link
    )


def validate_recording_link(link):
    link = (link or "").strip()
    parsed = urlparse(link)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid recording link: `{link}`")
    return link


def _require_state(meet_up, expected_state):
    if meet_up.state != expected_state:
        raise InvalidStateError(meet_up.state)
