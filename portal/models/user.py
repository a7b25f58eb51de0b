from datetime import datetime

from flask_login import UserMixin

from portal.extensions import db

USER_ROLES = (
    "voter",
    "candidate",
    "executive",
    "electoral_committee",
    "admin",
    "super_admin",
)
ELECTION_MANAGER_ROLES = {"electoral_committee", "admin", "super_admin"}


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(200), unique=True, nullable=False)
    full_name = db.Column(db.String(200), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(30), nullable=False, default="voter")
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    voter_registration = db.relationship(
        "VoterRegistration",
        backref="user",
        uselist=False,
        lazy=True,
        foreign_keys="VoterRegistration.user_id",
    )
    candidacies = db.relationship("Candidate", backref="user", lazy=True)
    votes = db.relationship("Vote", backref="voter", lazy=True)

    @property
    def can_manage_elections(self):
        return self.role in ELECTION_MANAGER_ROLES

    @property
    def display_name(self):
        return self.full_name or self.username
