from datetime import datetime

from portal.extensions import db

ELECTION_STATUSES = ("upcoming", "active", "completed")


class Election(db.Model):
    __tablename__ = "elections"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="upcoming")
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    candidates = db.relationship(
        "Candidate", backref="election", lazy=True, order_by="Candidate.id"
    )
    votes = db.relationship("Vote", backref="election", lazy=True)
    results = db.relationship("ElectionResult", backref="election", lazy=True)
