from datetime import datetime

from portal.extensions import db


class ElectionResult(db.Model):
    __tablename__ = "election_results"
    __table_args__ = (
        db.UniqueConstraint("election_id", "post", name="uq_election_results_post"),
    )

    id = db.Column(db.Integer, primary_key=True)
    election_id = db.Column(db.Integer, db.ForeignKey("elections.id"), nullable=False)
    post = db.Column(db.String(50), nullable=False)
    total_votes = db.Column(db.Integer, nullable=False, default=0)
    total_registered_voters = db.Column(db.Integer, nullable=False, default=0)
    turnout_percentage = db.Column(db.Float, nullable=False, default=0.0)
    winner_candidate_id = db.Column(
        db.Integer, db.ForeignKey("candidates.id"), nullable=True
    )
    results_data = db.Column(db.JSON, nullable=False, default=dict)
    compiled_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    compiled_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    is_final = db.Column(db.Boolean, nullable=False, default=False)

    winner = db.relationship("Candidate", lazy=True)
