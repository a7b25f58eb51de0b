from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from portal.extensions import db
from portal.models import ElectionResult, VoterRegistration
from portal.services.voting.errors import StoreUnavailable
from portal.services.voting.tally import tally_election


def _serialize_rows(rows):
    return [
        {
            "candidate_id": row["candidate"].id,
            "name": row["candidate"].user.display_name,
            "count": row["count"],
            "percent": round(row["percent"], 2),
            "is_leading": row["is_leading"],
        }
        for row in rows
    ]


def compile_election_results(election, compiled_by=None):
    """Snapshot the current tally of every contested post.

    Snapshots are replaced on each run; the vote log stays the source of
    truth. A winner is only recorded for a single leader with at least one vote.
    """
    summary = tally_election(election)
    registered_voters = VoterRegistration.query.filter_by(
        verification_status="approved"
    ).count()
    now = datetime.utcnow()

    compiled = []
    for entry in summary["posts"]:
        if not entry["rows"]:
            continue

        total_votes = entry["total_votes"]
        turnout = (total_votes / registered_voters * 100) if registered_voters > 0 else 0

        winner_id = None
        if total_votes > 0 and not entry["is_tie"]:
            winner_id = entry["rows"][0]["candidate"].id

        result = ElectionResult.query.filter_by(
            election_id=election.id, post=entry["post"]
        ).first()
        if result is None:
            result = ElectionResult(election_id=election.id, post=entry["post"])
            db.session.add(result)

        result.total_votes = total_votes
        result.total_registered_voters = registered_voters
        result.turnout_percentage = turnout
        result.winner_candidate_id = winner_id
        result.results_data = {"is_tie": entry["is_tie"], "rows": _serialize_rows(entry["rows"])}
        result.compiled_by = compiled_by.id if compiled_by is not None else None
        result.compiled_at = now
        result.is_final = election.status == "completed"
        compiled.append(result)

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not compile results for election %s", election.id)
        raise StoreUnavailable()

    current_app.logger.info(
        "Compiled %s result(s) for election %s", len(compiled), election.id
    )
    return compiled

