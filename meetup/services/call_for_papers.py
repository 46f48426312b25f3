from meetup.domain import MeetUpState
from meetup.errors import InvalidStateError
from meetup.services.lifecycle import require_future_meet_up


def show_call_for_papers(meet_up_gateway, paper_gateway, user_id, limit):
    meet_up = require_future_meet_up(meet_up_gateway)
    papers = paper_gateway.get_papers_from_user_and_meet_up(user_id, meet_up.id)
    return meet_up, papers, len(papers) >= limit


def submit_paper(meet_up_gateway, paper_gateway, paper, meet_up_id, limit):
    """Store ``paper`` for the meet-up unless its owner already sent ``limit``.

    The quota is checked by the store after inserting, inside the same
    transaction. Two fully concurrent submissions by the same user are only
    kept apart as far as the database isolation level allows.
    """
    meet_up = meet_up_gateway.get_meet_up(meet_up_id)
    if meet_up.state != MeetUpState.CALL_FOR_PAPERS:
        raise InvalidStateError(meet_up.state)
    return paper_gateway.store_paper_with_meet_up(paper, meet_up.id, limit)


def get_paper(paper_gateway, paper_id):
    return paper_gateway.get_paper(paper_id)
