from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from portal.extensions import db
from portal.models import Election
from portal.models.election import ELECTION_STATUSES
from portal.services.voting.errors import InvalidElection, InvalidStatus, StoreUnavailable


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not %s", action)
        raise StoreUnavailable()


def create_election(title, start_date, end_date, description=None):
    title = (title or "").strip()
    if not title:
        raise InvalidElection("Election title is required.")
    if start_date is None or end_date is None:
        raise InvalidElection("Start and end dates are required.")
    if end_date < start_date:
        raise InvalidElection("Election cannot end before it starts.")

    election = Election(
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
        status="upcoming",
        is_active=True,
    )
    db.session.add(election)
    _commit("create election")

    current_app.logger.info("Election %s created", election.id)
    return election


def update_election_status(election, status):
    status = (status or "").strip().lower()
    if status not in ELECTION_STATUSES:
        raise InvalidStatus()

    election.status = status
    _commit("update election status")

    current_app.logger.info("Election %s status set to %s", election.id, status)
    return election


def set_election_visibility(election, is_active):
    election.is_active = bool(is_active)
    _commit("update election visibility")

    current_app.logger.info(
        "Election %s %s", election.id, "shown" if election.is_active else "hidden"
    )
    return election
