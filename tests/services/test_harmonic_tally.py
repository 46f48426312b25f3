import logging
import random

import pytest

from meetup.services.voting import (
    ballot_weight,
    build_ballot,
    decide_winner,
    tally_harmonic_votes,
)

A, B, C = 11, 12, 13


def _ballots(*rankings):
    votes = []
    for user_id, ranking in enumerate(rankings, start=1):
        votes.extend(build_ballot(user_id, 1, ranking))
    return votes


def test_ballot_weights_follow_rank_position():
    ballot = build_ballot(7, 1, [A, B, C])
    assert [vote.paper_id for vote in ballot] == [A, B, C]
    assert [vote.vote for vote in ballot] == [1.0, 0.5, pytest.approx(1 / 3)]
    assert {vote.user_id for vote in ballot} == {7}
    assert ballot_weight(0) == 1.0


def test_three_voters_pick_the_paper_everyone_ranks_high():
    votes = _ballots([A, B, C], [B, A, C], [C, B, A])

    result = tally_harmonic_votes(votes)
    totals = {row["paper_id"]: row["total"] for row in result["results"]}

    assert totals[A] == pytest.approx(11 / 6)
    assert totals[B] == pytest.approx(2.0)
    assert totals[C] == pytest.approx(5 / 3)
    assert result["winner"] == B
    assert result["is_tie"] is False
    assert result["ballot_count"] == 3
    assert result["total_votes"] == 9
    assert [row["paper_id"] for row in result["results"]] == [B, A, C]


def test_winner_does_not_depend_on_vote_order():
    votes = _ballots([A, B, C], [B, A, C], [C, B, A])
    shuffler = random.Random(2026)

    for _ in range(50):
        shuffled = list(votes)
        shuffler.shuffle(shuffled)
        assert decide_winner(shuffled) == B
    assert decide_winner(reversed(votes)) == B


def test_opposite_rankings_tie_and_lowest_paper_id_wins():
    votes = _ballots([B, A], [A, B])

    result = tally_harmonic_votes(votes)

    assert result["is_tie"] is True
    assert sorted(result["winners"]) == [A, B]
    assert result["winner"] == A
    assert decide_winner(list(reversed(votes))) == A


def test_empty_vote_set_has_no_winner():
    result = tally_harmonic_votes([])

    assert result["winner"] is None
    assert result["winners"] == []
    assert result["results"] == []
    assert result["ballot_count"] == 0
    assert decide_winner([]) is None


def test_partial_ballots_only_count_ranked_papers():
    votes = _ballots([C], [A, C], [C, A, B])

    result = tally_harmonic_votes(votes)
    counts = {row["paper_id"]: row["votes"] for row in result["results"]}

    assert result["winner"] == C
    assert counts == {A: 2, B: 1, C: 3}


def test_tied_winner_is_logged(caplog):
    votes = _ballots([B, A], [A, B])

    with caplog.at_level(logging.INFO, logger="meetup.services.voting.harmonic"):
        assert decide_winner(votes) == A

    assert f"Papers [{A}, {B}] tied, picking {A}" in caplog.text
