from meetup.services.voting.harmonic import (
    ballot_weight,
    build_ballot,
    decide_winner,
    tally_harmonic_votes,
)

__all__ = [
    "ballot_weight",
    "build_ballot",
    "decide_winner",
    "tally_harmonic_votes",
]
