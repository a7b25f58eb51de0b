import pytest

from portal.extensions import db
from portal.models import Candidate
from portal.services.voting import cast_vote, register_candidate, set_candidate_approval
from portal.services.voting.errors import (
    AlreadyRegistered,
    CandidateHasVotes,
    ElectionNotFound,
    InvalidPost,
)


def test_candidate_registration_starts_unapproved(election, make_user):
    user = make_user("cand1", role="candidate")

    candidate = register_candidate(
        election,
        user,
        "general_secretary",
        manifesto="Transparent minutes.",
        campaign_slogan="Every voice recorded",
    )

    assert candidate.is_approved is False
    assert candidate.votes_count == 0
    assert candidate.manifesto == "Transparent minutes."
    assert candidate.campaign_slogan == "Every voice recorded"
    assert candidate.qualifications is None


def test_duplicate_candidate_registration_is_rejected(election, make_user):
    user = make_user("cand1", role="candidate")
    register_candidate(election, user, "provost", manifesto="First")

    with pytest.raises(AlreadyRegistered):
        register_candidate(election, user, "provost", manifesto="Second")

    assert Candidate.query.filter_by(user_id=user.id).count() == 1


def test_same_user_may_contest_another_post(election, make_user):
    user = make_user("cand1", role="candidate")
    register_candidate(election, user, "provost", manifesto="First")
    register_candidate(election, user, "clo", manifesto="Second")

    assert Candidate.query.filter_by(user_id=user.id).count() == 2


def test_unknown_post_is_rejected(election, make_user):
    user = make_user("cand1", role="candidate")

    with pytest.raises(InvalidPost):
        register_candidate(election, user, "treasurer", manifesto="x")


def test_missing_election_is_rejected(make_user):
    user = make_user("cand1", role="candidate")

    with pytest.raises(ElectionNotFound):
        register_candidate(None, user, "provost")


def test_set_candidate_approval(election, make_candidate):
    candidate = make_candidate(election, "alice", "provost", is_approved=False)

    set_candidate_approval(candidate, True)
    assert Candidate.query.get(candidate.id).is_approved is True

    set_candidate_approval(candidate, False)
    assert Candidate.query.get(candidate.id).is_approved is False


def test_candidate_with_votes_stays_approved_while_voting_is_open(
    election, approved_voter, make_candidate
):
    candidate = make_candidate(election, "alice", "provost")
    cast_vote(election, approved_voter, candidate.id, "provost")

    with pytest.raises(CandidateHasVotes):
        set_candidate_approval(candidate, False)
    assert Candidate.query.get(candidate.id).is_approved is True

    election.status = "completed"
    db.session.commit()
    set_candidate_approval(candidate, False)
    assert Candidate.query.get(candidate.id).is_approved is False
