from datetime import datetime

import pytest

from portal.services.voting import (
    create_election,
    set_election_visibility,
    update_election_status,
)
from portal.services.voting.errors import InvalidElection, InvalidStatus


def test_create_election_starts_upcoming(db_session):
    election = create_election(
        "  2026 Executive Election ",
        datetime(2026, 11, 1, 8, 0),
        datetime(2026, 11, 1, 18, 0),
    )

    assert election.id is not None
    assert election.title == "2026 Executive Election"
    assert election.status == "upcoming"
    assert election.is_active is True


def test_create_election_validates_window(db_session):
    with pytest.raises(InvalidElection):
        create_election("Late", datetime(2026, 11, 2), datetime(2026, 11, 1))
    with pytest.raises(InvalidElection):
        create_election("", datetime(2026, 11, 1), datetime(2026, 11, 2))


def test_update_election_status(election):
    update_election_status(election, "Completed")
    assert election.status == "completed"

    with pytest.raises(InvalidStatus):
        update_election_status(election, "archived")
    assert election.status == "completed"


def test_set_election_visibility(election):
    set_election_visibility(election, False)
    assert election.is_active is False

    set_election_visibility(election, True)
    assert election.is_active is True
