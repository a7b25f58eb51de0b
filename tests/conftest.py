from datetime import datetime, timedelta
from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Keep Config off the MySQL default while test modules import it.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from portal import create_app
from portal.extensions import db
from portal.models import Candidate, Election, User, VoterRegistration


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def make_user(db_session):
    def _make_user(username, role="voter", registration_status=None, full_name=None):
        user = User(
            username=username,
            email=f"{username}@example.com",
            full_name=full_name,
            password_hash="hashed-password",
            role=role,
        )
        db_session.add(user)
        db_session.flush()

        if registration_status is not None:
            db_session.add(
                VoterRegistration(
                    user_id=user.id,
                    identity_document_type="national_id",
                    verification_status=registration_status,
                )
            )
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def election(db_session):
    now = datetime.utcnow()
    election = Election(
        title="CDS Executive Election",
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=1),
        status="active",
    )
    db_session.add(election)
    db_session.commit()
    return election


@pytest.fixture()
def make_candidate(db_session, make_user):
    def _make_candidate(election, username, post, votes_count=0, is_approved=True):
        user = make_user(username, role="candidate", full_name=username.title())
        candidate = Candidate(
            election_id=election.id,
            user_id=user.id,
            post=post,
            manifesto=f"{username} for {post}",
            is_approved=is_approved,
            votes_count=votes_count,
        )
        db_session.add(candidate)
        db_session.commit()
        return candidate

    return _make_candidate


@pytest.fixture()
def approved_voter(make_user):
    return make_user("v1", registration_status="approved")


@pytest.fixture()
def committee_user(make_user):
    return make_user("committee", role="electoral_committee")


@pytest.fixture()
def login(client):
    def _login(user):
        with client.session_transaction() as session:
            session["_user_id"] = str(user.id)
            session["_fresh"] = True
        return client

    return _login
