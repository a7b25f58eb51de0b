from flask import request
from flask_login import current_user, login_required

from portal.models import Election, Vote
from portal.models.candidate import CANDIDATE_POSTS
from portal.services.voting import (
    cast_vote,
    is_eligible,
    register_candidate,
    register_voter,
    tally_election,
)
from portal.services.voting.errors import ElectionNotFound


def get_election(election_id, include_hidden=False):
    election = Election.query.get(election_id)
    if election is None or not (election.is_active or include_hidden):
        raise ElectionNotFound()
    return election


def serialize_election(election):
    return {
        "id": election.id,
        "title": election.title,
        "description": election.description,
        "start_date": election.start_date.isoformat(),
        "end_date": election.end_date.isoformat(),
        "status": election.status,
        "is_active": election.is_active,
    }


def serialize_candidate(candidate):
    return {
        "id": candidate.id,
        "name": candidate.user.display_name,
        "post": candidate.post,
        "campaign_slogan": candidate.campaign_slogan,
        "manifesto": candidate.manifesto,
        "votes_count": candidate.votes_count,
        "is_approved": candidate.is_approved,
    }


def serialize_registration(registration):
    if registration is None:
        return None
    return {
        "id": registration.id,
        "identity_document_type": registration.identity_document_type,
        "verification_status": registration.verification_status,
        "rejection_reason": registration.rejection_reason,
    }


def serialize_tally(summary):
    return {
        "total_votes": summary["total_votes"],
        "candidate_count": summary["candidate_count"],
        "contested_posts": summary["contested_posts"],
        "posts": [
            {
                "post": entry["post"],
                "label": entry["label"],
                "total_votes": entry["total_votes"],
                "is_tie": entry["is_tie"],
                "results": [
                    {
                        "candidate": serialize_candidate(row["candidate"]),
                        "count": row["count"],
                        "percent": row["percent"],
                        "is_leading": row["is_leading"],
                    }
                    for row in entry["rows"]
                ],
            }
            for entry in summary["posts"]
        ],
    }


def register_public_routes(app):
    @app.route("/elections")
    @login_required
    def list_elections():
        elections = (
            Election.query.filter_by(is_active=True)
            .order_by(Election.created_at.desc(), Election.id.desc())
            .all()
        )
        selected = next(
            (election for election in elections if election.status == "active"),
            elections[0] if elections else None,
        )
        return {
            "ok": True,
            "elections": [serialize_election(election) for election in elections],
            "selected_id": selected.id if selected else None,
        }

    @app.route("/elections/<int:election_id>")
    @login_required
    def election_ballot(election_id):
        election = get_election(election_id)
        registration = current_user.voter_registration
        user_votes = Vote.query.filter_by(
            voter_id=current_user.id, election_id=election.id
        ).all()
        approved = [c for c in election.candidates if c.is_approved]

        return {
            "ok": True,
            "election": serialize_election(election),
            "can_vote": (
                election.status == "active"
                and election.is_active
                and is_eligible(registration)
            ),
            "voter_registration": serialize_registration(registration),
            "voted": {vote.post: vote.candidate_id for vote in user_votes},
            "posts": [
                {
                    "post": post,
                    "label": label,
                    "candidates": [
                        serialize_candidate(c) for c in approved if c.post == post
                    ],
                }
                for post, label in CANDIDATE_POSTS
            ],
        }

    @app.route("/elections/<int:election_id>/vote", methods=["POST"])
    @login_required
    def cast_ballot(election_id):
        election = Election.query.get(election_id)
        post = (request.form.get("post") or "").strip()
        candidate_id = request.form.get("candidate_id", type=int)

        vote = cast_vote(
            election,
            current_user,
            candidate_id,
            post,
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
        )
        return {
            "ok": True,
            "message": "Vote cast successfully!",
            "vote": {
                "id": vote.id,
                "candidate_id": vote.candidate_id,
                "post": vote.post,
            },
        }, 201

    @app.route("/elections/<int:election_id>/results")
    @login_required
    def election_results(election_id):
        election = get_election(election_id)
        return {
            "ok": True,
            "election": serialize_election(election),
            **serialize_tally(tally_election(election)),
        }

    @app.route("/elections/<int:election_id>/candidates", methods=["POST"])
    @login_required
    def register_as_candidate(election_id):
        election = get_election(election_id)

        if current_user.role != "candidate":
            return {
                "ok": False,
                "error": "You must have candidate privileges to register for a position.",
            }, 403

        post = (request.form.get("post") or "").strip()
        manifesto = (request.form.get("manifesto") or "").strip()
        if not post or not manifesto:
            return {
                "ok": False,
                "error": "Please select a post and provide all required information.",
            }, 400

        candidate = register_candidate(
            election,
            current_user,
            post,
            manifesto=manifesto,
            campaign_slogan=(request.form.get("campaign_slogan") or "").strip() or None,
            qualifications=(request.form.get("qualifications") or "").strip() or None,
            experience=(request.form.get("experience") or "").strip() or None,
        )
        return {
            "ok": True,
            "message": "Candidate registration submitted for approval!",
            "candidate": serialize_candidate(candidate),
        }, 201

    @app.route("/voter-registration", methods=["GET", "POST"])
    @login_required
    def voter_registration():
        if request.method == "GET":
            registration = current_user.voter_registration
            return {
                "ok": True,
                "voter_registration": serialize_registration(registration),
                "is_eligible": is_eligible(registration),
            }

        registration = register_voter(
            current_user,
            (request.form.get("identity_document_type") or "").strip(),
            address=(request.form.get("address") or "").strip() or None,
            identity_document_url=(request.form.get("identity_document_url") or "").strip()
            or None,
        )
        return {
            "ok": True,
            "message": "Voter registration submitted successfully!",
            "voter_registration": serialize_registration(registration),
        }, 201
