from datetime import datetime

from flask import abort, request
from flask_login import current_user, login_required
from sqlalchemy import func

from portal.extensions import db
from portal.models import Candidate, Vote, VoterRegistration
from portal.models.candidate import CANDIDATE_POSTS
from portal.routes.public import (
    get_election,
    serialize_candidate,
    serialize_election,
    serialize_registration,
)
from portal.services.voting import (
    compile_election_results,
    create_election,
    find_counter_drift,
    set_candidate_approval,
    set_election_visibility,
    update_election_status,
    verify_voter_registration,
)
from portal.services.voting.errors import InvalidElection


def _require_manager():
    if not current_user.can_manage_elections:
        abort(403)


def _parse_datetime(raw):
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise InvalidElection("Dates must be in ISO format.")


def _is_truthy(raw):
    return (raw or "").strip().lower() in ("1", "true", "yes", "approve", "approved")


def register_admin_routes(app):
    @app.route("/admin/elections", methods=["POST"])
    @login_required
    def admin_create_election():
        _require_manager()

        election = create_election(
            request.form.get("title"),
            _parse_datetime(request.form.get("start_date")),
            _parse_datetime(request.form.get("end_date")),
            description=(request.form.get("description") or "").strip() or None,
        )
        return {"ok": True, "election": serialize_election(election)}, 201

    @app.route("/admin/elections/<int:election_id>/status", methods=["POST"])
    @login_required
    def admin_update_election_status(election_id):
        _require_manager()
        election = get_election(election_id, include_hidden=True)

        update_election_status(election, request.form.get("status"))
        return {"ok": True, "election": serialize_election(election)}

    @app.route("/admin/candidates/<int:candidate_id>/approval", methods=["POST"])
    @login_required
    def admin_candidate_approval(candidate_id):
        _require_manager()
        candidate = Candidate.query.get_or_404(candidate_id)

        set_candidate_approval(candidate, _is_truthy(request.form.get("approved")))
        return {"ok": True, "candidate": serialize_candidate(candidate)}

    @app.route("/admin/voter-registrations/<int:registration_id>/verify", methods=["POST"])
    @login_required
    def admin_verify_registration(registration_id):
        _require_manager()
        registration = VoterRegistration.query.get_or_404(registration_id)

        approve = _is_truthy(request.form.get("decision"))
        reason = (request.form.get("rejection_reason") or "").strip() or None
        if not approve and not reason:
            return {"ok": False, "error": "A rejection reason is required."}, 400

        verify_voter_registration(registration, current_user, approve, rejection_reason=reason)
        return {"ok": True, "voter_registration": serialize_registration(registration)}

    @app.route("/admin/elections/<int:election_id>/compile", methods=["POST"])
    @login_required
    def admin_compile_results(election_id):
        _require_manager()
        election = get_election(election_id, include_hidden=True)

        results = compile_election_results(election, compiled_by=current_user)
        return {
            "ok": True,
            "results": [
                {
                    "post": result.post,
                    "total_votes": result.total_votes,
                    "total_registered_voters": result.total_registered_voters,
                    "turnout_percentage": result.turnout_percentage,
                    "winner_candidate_id": result.winner_candidate_id,
                    "is_final": result.is_final,
                }
                for result in results
            ],
        }

    @app.route("/admin/elections/<int:election_id>/visibility", methods=["POST"])
    @login_required
    def admin_election_visibility(election_id):
        _require_manager()
        election = get_election(election_id, include_hidden=True)

        set_election_visibility(election, _is_truthy(request.form.get("is_active")))
        return {"ok": True, "election": serialize_election(election)}

    @app.route("/admin/elections/<int:election_id>/counter-drift")
    @login_required
    def admin_counter_drift(election_id):
        _require_manager()
        election = get_election(election_id, include_hidden=True)

        drift = find_counter_drift(election)
        return {
            "ok": True,
            "drift": [
                {
                    "candidate_id": entry["candidate"].id,
                    "stored": entry["stored"],
                    "counted": entry["counted"],
                }
                for entry in drift
            ],
        }

    @app.route("/admin/elections/<int:election_id>/votes")
    @login_required
    def admin_election_votes(election_id):
        _require_manager()
        election = get_election(election_id, include_hidden=True)

        voters_by_post = dict(
            db.session.query(Vote.post, func.count(func.distinct(Vote.voter_id)))
            .filter(Vote.election_id == election.id)
            .group_by(Vote.post)
            .all()
        )
        registered = VoterRegistration.query.filter_by(
            verification_status="approved"
        ).count()

        return {
            "ok": True,
            "election": serialize_election(election),
            "num_possible_voters": registered,
            "posts": [
                {
                    "post": post,
                    "label": label,
                    "num_voters_voted": voters_by_post.get(post, 0),
                }
                for post, label in CANDIDATE_POSTS
            ],
        }
