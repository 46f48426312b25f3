import logging

from meetup.domain import MeetUpState
from meetup.errors import InvalidStateError, NotFoundError
from meetup.services.voting import build_ballot

logger = logging.getLogger(__name__)


def show_ballot(meet_up_gateway, paper_gateway, vote_gateway, meet_up_id, user_id):
    """The voter's ranked papers, seeding a default ballot on first visit.

    A voter without votes gets every paper ranked in submission order. Papers
    submitted after the voter ranked theirs are listed last, unranked.
    """
    meet_up = _voting_meet_up(meet_up_gateway, meet_up_id)
    papers = paper_gateway.get_papers_from_meet_up(meet_up.id)
    votes = vote_gateway.get_votes_for_user(meet_up.id, user_id)

    if not votes:
        if papers:
            vote_gateway.record_votes(
                build_ballot(user_id, meet_up.id, [paper.id for paper in papers])
            )
            logger.info(
                "Seeded default ballot of %s papers for user %s", len(papers), user_id
            )
        return papers

    papers_by_id = {paper.id: paper for paper in papers}
    ranked = [
        papers_by_id.pop(vote.paper_id)
        for vote in votes
        if vote.paper_id in papers_by_id
    ]
    return ranked + list(papers_by_id.values())


def store_ballot(
    meet_up_gateway, paper_gateway, vote_gateway, meet_up_id, user_id, paper_ids
):
    meet_up = _voting_meet_up(meet_up_gateway, meet_up_id)
    if len(set(paper_ids)) != len(paper_ids):
        raise ValueError("A paper can only be ranked once")

    known_ids = {paper.id for paper in paper_gateway.get_papers_from_meet_up(meet_up.id)}
    for paper_id in paper_ids:
        if paper_id not in known_ids:
            raise NotFoundError("Paper", paper_id)

    vote_gateway.record_votes(build_ballot(user_id, meet_up.id, paper_ids))


def _voting_meet_up(meet_up_gateway, meet_up_id):
    meet_up = meet_up_gateway.get_meet_up(meet_up_id)
    if meet_up.state != MeetUpState.VOTING:
        raise InvalidStateError(meet_up.state)
    return meet_up
