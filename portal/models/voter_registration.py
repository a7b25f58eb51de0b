from datetime import datetime

from portal.extensions import db

IDENTITY_DOCUMENT_TYPES = ("national_id", "passport", "drivers_license")
VERIFICATION_STATUSES = ("pending", "approved", "rejected")


class VoterRegistration(db.Model):
    __tablename__ = "voter_registrations"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False
    )
    identity_document_type = db.Column(db.String(30), nullable=True)
    identity_document_url = db.Column(db.String(500), nullable=True)
    address = db.Column(db.Text, nullable=True)
    verification_status = db.Column(db.String(20), nullable=False, default="pending")
    verified_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    verified_at = db.Column(db.DateTime, nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
