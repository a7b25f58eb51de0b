from flask import current_app
from sqlalchemy import func, select

from portal.extensions import db
from portal.models import Candidate, Vote
from portal.models.candidate import CANDIDATE_POSTS


def tally(post, candidates):
    post_candidates = [candidate for candidate in candidates if candidate.post == post]
    total_votes = sum(candidate.votes_count or 0 for candidate in post_candidates)

    rows = []
    for candidate in post_candidates:
        count = candidate.votes_count or 0
        percent = (count / total_votes * 100) if total_votes > 0 else 0
        rows.append(
            {"candidate": candidate, "count": count, "percent": percent, "is_leading": False}
        )

    # Equal counts keep registration order.
    rows.sort(key=lambda row: (-row["count"], row["candidate"].id))

    if rows and total_votes > 0:
        rows[0]["is_leading"] = True

    return rows


def tally_election(election):
    approved = [candidate for candidate in election.candidates if candidate.is_approved]

    posts = []
    for post, label in CANDIDATE_POSTS:
        rows = tally(post, approved)
        total_votes = sum(row["count"] for row in rows)
        leaders = [row for row in rows if total_votes > 0 and row["count"] == rows[0]["count"]]
        posts.append(
            {
                "post": post,
                "label": label,
                "total_votes": total_votes,
                "rows": rows,
                "is_tie": len(leaders) > 1,
            }
        )

    return {
        "election": election,
        "posts": posts,
        "total_votes": sum(entry["total_votes"] for entry in posts),
        "candidate_count": len(approved),
        "contested_posts": sum(1 for entry in posts if entry["rows"]),
    }


def count_votes_from_log(election, post=None):
    query = db.session.query(Vote.candidate_id, func.count(Vote.id)).filter(
        Vote.election_id == election.id
    )
    if post is not None:
        query = query.filter(Vote.post == post)

    return dict(query.group_by(Vote.candidate_id).all())


def find_counter_drift(election):
    """Compare each candidate's counter with its vote log rows.

    Read-only: counters are written by ``cast_vote`` alone. Both sides come
    from one SELECT so a vote committed mid-check cannot show up as drift.
    """
    logged = (
        select(func.count(Vote.id))
        .where(Vote.candidate_id == Candidate.id)
        .correlate(Candidate)
        .scalar_subquery()
    )
    rows = (
        db.session.query(Candidate, Candidate.votes_count, logged)
        .filter(Candidate.election_id == election.id)
        .order_by(Candidate.id)
        .all()
    )

    drift = []
    for candidate, stored, counted in rows:
        if stored != counted:
            current_app.logger.warning(
                "Candidate %s counter drifted: stored %s, vote log %s",
                candidate.id,
                stored,
                counted,
            )
            drift.append({"candidate": candidate, "stored": stored, "counted": counted})

    return drift
