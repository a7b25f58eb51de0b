from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from portal.extensions import db
from portal.models import VoterRegistration
from portal.models.voter_registration import IDENTITY_DOCUMENT_TYPES
from portal.services.voting.errors import (
    AlreadyRegistered,
    InvalidDocumentType,
    StoreUnavailable,
)


def register_voter(user, identity_document_type, address=None, identity_document_url=None):
    if identity_document_type not in IDENTITY_DOCUMENT_TYPES:
        raise InvalidDocumentType()

    if VoterRegistration.query.filter_by(user_id=user.id).first() is not None:
        raise AlreadyRegistered("You have already submitted a voter registration.")

    registration = VoterRegistration(
        user_id=user.id,
        identity_document_type=identity_document_type,
        identity_document_url=identity_document_url,
        address=address,
        verification_status="pending",
    )

    try:
        db.session.add(registration)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AlreadyRegistered("You have already submitted a voter registration.")
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not save voter registration")
        raise StoreUnavailable()

    current_app.logger.info("Voter registration %s submitted by user %s", registration.id, user.id)
    return registration


def verify_voter_registration(registration, verifier, approve, rejection_reason=None):
    if approve:
        registration.verification_status = "approved"
        registration.rejection_reason = None
    else:
        registration.verification_status = "rejected"
        registration.rejection_reason = rejection_reason

    registration.verified_by = verifier.id
    registration.verified_at = datetime.utcnow()

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not verify registration %s", registration.id)
        raise StoreUnavailable()

    current_app.logger.info(
        "Voter registration %s marked %s by user %s",
        registration.id,
        registration.verification_status,
        verifier.id,
    )
    return registration
