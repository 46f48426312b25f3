import logging
import math

from meetup.domain import Vote

logger = logging.getLogger(__name__)


def ballot_weight(position):
    return 1 / (position + 1)


def build_ballot(user_id, meet_up_id, paper_ids):
    """Votes for papers ranked from most to least preferred."""
    return [
        Vote(
            user_id=user_id,
            paper_id=paper_id,
            meet_up_id=meet_up_id,
            vote=ballot_weight(position),
        )
        for position, paper_id in enumerate(paper_ids)
    ]


def tally_harmonic_votes(votes):
    weights = {}
    voters = set()
    for vote in votes:
        weights.setdefault(vote.paper_id, []).append(vote.vote)
        voters.add(vote.user_id)

    # fsum is exactly rounded, so totals do not depend on vote order.
    totals = {paper_id: math.fsum(values) for paper_id, values in weights.items()}

    results = [
        {"paper_id": paper_id, "total": total, "votes": len(weights[paper_id])}
        for paper_id, total in totals.items()
    ]
    results.sort(key=lambda row: (-row["total"], row["paper_id"]))

    winners = []
    if results:
        max_total = results[0]["total"]
        winners = [row["paper_id"] for row in results if row["total"] == max_total]

    return {
        "total_votes": sum(row["votes"] for row in results),
        "ballot_count": len(voters),
        "results": results,
        "winner": winners[0] if winners else None,
        "winners": winners,
        "is_tie": len(winners) > 1,
    }


def decide_winner(votes):
    result = tally_harmonic_votes(votes)
    if result["is_tie"]:
        logger.info(
            "Papers %s tied, picking %s", result["winners"], result["winner"]
        )
    return result["winner"]
