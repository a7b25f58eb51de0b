from datetime import datetime

from portal.extensions import db


class Vote(db.Model):
    __tablename__ = "votes"
    # One ballot per voter, election and post.
    __table_args__ = (
        db.UniqueConstraint(
            "voter_id", "election_id", "post", name="uq_votes_voter_election_post"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    election_id = db.Column(db.Integer, db.ForeignKey("elections.id"), nullable=False)
    voter_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False)
    post = db.Column(db.String(50), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    audit_entries = db.relationship("VoteAuditLog", backref="vote", lazy=True)
