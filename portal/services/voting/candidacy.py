from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from portal.extensions import db
from portal.models import Candidate
from portal.models.candidate import POST_LABELS
from portal.services.voting.errors import (
    AlreadyRegistered,
    CandidateHasVotes,
    ElectionNotFound,
    InvalidPost,
    StoreUnavailable,
)

PROFILE_FIELDS = ("manifesto", "campaign_slogan", "qualifications", "experience")


def register_candidate(election, user, post, **profile_fields):
    if election is None:
        raise ElectionNotFound()
    if post not in POST_LABELS:
        raise InvalidPost()

    existing = Candidate.query.filter_by(
        election_id=election.id, user_id=user.id, post=post
    ).first()
    if existing is not None:
        raise AlreadyRegistered("You have already registered for this position.")

    candidate = Candidate(
        election_id=election.id,
        user_id=user.id,
        post=post,
        is_approved=False,
        votes_count=0,
        **{field: profile_fields.get(field) for field in PROFILE_FIELDS},
    )

    try:
        db.session.add(candidate)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AlreadyRegistered("You have already registered for this position.")
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not register candidate")
        raise StoreUnavailable()

    current_app.logger.info(
        "User %s registered as candidate for %s in election %s",
        user.id,
        post,
        election.id,
    )
    return candidate


def set_candidate_approval(candidate, approved):
    # Votes already cast must stay countable for as long as the ballot is open.
    if not approved and candidate.votes_count > 0 and candidate.election.status == "active":
        raise CandidateHasVotes()

    candidate.is_approved = bool(approved)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not update candidate %s", candidate.id)
        raise StoreUnavailable()

    current_app.logger.info(
        "Candidate %s %s", candidate.id, "approved" if approved else "unapproved"
    )
    return candidate
