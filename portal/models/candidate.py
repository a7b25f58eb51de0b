from datetime import datetime

from portal.extensions import db

# Electable positions, in ballot order.
CANDIDATE_POSTS = (
    ("clo", "CLO (Corps Liaison Officer)"),
    ("cds_president", "CDS President"),
    ("financial_secretary", "Financial Secretary"),
    ("general_secretary", "General Secretary"),
    ("marshall_male", "Marshall (Male)"),
    ("marshall_female", "Marshall (Female)"),
    ("provost", "Provost"),
)
POST_LABELS = dict(CANDIDATE_POSTS)


class Candidate(db.Model):
    __tablename__ = "candidates"
    __table_args__ = (
        db.UniqueConstraint(
            "election_id", "user_id", "post", name="uq_candidates_election_user_post"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    election_id = db.Column(db.Integer, db.ForeignKey("elections.id"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    post = db.Column(db.String(50), nullable=False)
    manifesto = db.Column(db.Text, nullable=True)
    campaign_slogan = db.Column(db.String(200), nullable=True)
    qualifications = db.Column(db.Text, nullable=True)
    experience = db.Column(db.Text, nullable=True)
    is_approved = db.Column(db.Boolean, nullable=False, default=False)
    votes_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    votes = db.relationship("Vote", backref="candidate", lazy=True)
