from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from portal.extensions import db
from portal.models import Candidate, Vote, VoteAuditLog
from portal.services.voting.eligibility import is_eligible
from portal.services.voting.errors import (
    AlreadyVoted,
    CandidateNotFound,
    ElectionNotFound,
    ElectionNotOpen,
    NotEligible,
    StoreUnavailable,
)


def find_existing_vote(voter_id, election_id, post):
    return Vote.query.filter_by(
        voter_id=voter_id, election_id=election_id, post=post
    ).first()


def cast_vote(election, voter, candidate_id, post, ip_address=None, user_agent=None):
    """Record ``voter``'s ballot for ``candidate_id`` in ``post``.

    The vote row, the candidate counter and the audit entry are committed
    together. The unique constraint on (voter_id, election_id, post) turns a
    concurrent duplicate into ``AlreadyVoted`` instead of a second row.
    """
    if election is None:
        raise ElectionNotFound()
    if election.status != "active" or not election.is_active:
        raise ElectionNotOpen()

    if not is_eligible(voter.voter_registration):
        current_app.logger.warning(
            "Rejected vote from unverified voter %s in election %s",
            voter.id,
            election.id,
        )
        raise NotEligible()

    if find_existing_vote(voter.id, election.id, post) is not None:
        raise AlreadyVoted()

    candidate = Candidate.query.filter_by(
        id=candidate_id, election_id=election.id, post=post, is_approved=True
    ).first()
    if candidate is None:
        raise CandidateNotFound()

    vote = Vote(
        election_id=election.id,
        voter_id=voter.id,
        candidate_id=candidate.id,
        post=post,
    )

    try:
        db.session.add(vote)
        db.session.flush()

        Candidate.query.filter_by(id=candidate.id).update(
            {Candidate.votes_count: Candidate.votes_count + 1},
            synchronize_session=False,
        )
        db.session.add(
            VoteAuditLog(
                vote_id=vote.id,
                action="cast",
                performed_by=voter.id,
                ip_address=ip_address,
                user_agent=(user_agent or "")[:255] or None,
                details={"candidate_id": candidate.id, "post": post},
            )
        )
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        if find_existing_vote(voter.id, election.id, post) is not None:
            current_app.logger.warning(
                "Duplicate vote blocked for voter %s, election %s, post %s",
                voter.id,
                election.id,
                post,
            )
            raise AlreadyVoted()
        current_app.logger.exception("Could not record vote")
        raise StoreUnavailable()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not record vote")
        raise StoreUnavailable()

    current_app.logger.info(
        "Vote %s cast in election %s for post %s", vote.id, election.id, post
    )
    return vote
