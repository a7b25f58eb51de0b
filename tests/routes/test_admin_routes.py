from portal.models import Candidate, Election, ElectionResult, VoterRegistration
from portal.services.voting import cast_vote


def test_admin_routes_require_manager_role(login, approved_voter, election):
    client = login(approved_voter)

    response = client.post(
        f"/admin/elections/{election.id}/status", data={"status": "completed"}
    )

    assert response.status_code == 403
    assert Election.query.get(election.id).status == "active"


def test_create_election_and_change_status(login, committee_user):
    client = login(committee_user)

    created = client.post(
        "/admin/elections",
        data={
            "title": "By-election",
            "start_date": "2026-11-01T08:00:00",
            "end_date": "2026-11-01T17:00:00",
        },
    )
    assert created.status_code == 201
    election_id = created.get_json()["election"]["id"]

    bad_dates = client.post(
        "/admin/elections",
        data={"title": "Broken", "start_date": "tomorrow", "end_date": ""},
    )
    assert bad_dates.status_code == 400

    updated = client.post(
        f"/admin/elections/{election_id}/status", data={"status": "active"}
    )
    assert updated.get_json()["election"]["status"] == "active"

    invalid = client.post(
        f"/admin/elections/{election_id}/status", data={"status": "paused"}
    )
    assert invalid.status_code == 400
    assert invalid.get_json()["code"] == "invalid_status"


def test_candidate_approval(login, committee_user, election, make_candidate):
    candidate = make_candidate(election, "alice", "provost", is_approved=False)

    response = login(committee_user).post(
        f"/admin/candidates/{candidate.id}/approval", data={"approved": "true"}
    )

    assert response.get_json()["candidate"]["is_approved"] is True
    assert Candidate.query.get(candidate.id).is_approved is True


def test_verify_voter_registration(login, committee_user, make_user):
    make_user("v5", registration_status="pending")
    registration = VoterRegistration.query.filter_by(verification_status="pending").one()
    client = login(committee_user)

    no_reason = client.post(
        f"/admin/voter-registrations/{registration.id}/verify", data={"decision": "reject"}
    )
    assert no_reason.status_code == 400

    approved = client.post(
        f"/admin/voter-registrations/{registration.id}/verify", data={"decision": "approve"}
    )
    assert approved.get_json()["voter_registration"]["verification_status"] == "approved"


def test_counter_drift_route_only_reports(
    login, committee_user, approved_voter, election, make_candidate
):
    alice = make_candidate(election, "alice", "provost")
    bola = make_candidate(election, "bola", "provost", votes_count=2)
    cast_vote(election, approved_voter, alice.id, "provost")
    client = login(committee_user)

    body = client.get(f"/admin/elections/{election.id}/counter-drift").get_json()

    assert body["drift"] == [{"candidate_id": bola.id, "stored": 2, "counted": 0}]
    assert Candidate.query.get(bola.id).votes_count == 2


def test_compile_and_participation(
    login, committee_user, approved_voter, election, make_candidate
):
    alice = make_candidate(election, "alice", "provost")
    make_candidate(election, "bola", "provost")
    cast_vote(election, approved_voter, alice.id, "provost")
    client = login(committee_user)

    compiled = client.post(f"/admin/elections/{election.id}/compile").get_json()
    assert compiled["results"][0]["post"] == "provost"
    assert compiled["results"][0]["winner_candidate_id"] == alice.id
    assert ElectionResult.query.count() == 1

    participation = client.get(f"/admin/elections/{election.id}/votes").get_json()
    posts = {entry["post"]: entry["num_voters_voted"] for entry in participation["posts"]}
    assert participation["num_possible_voters"] == 1
    assert posts["provost"] == 1
    assert posts["clo"] == 0


def test_hiding_an_election(login, committee_user, election):
    client = login(committee_user)

    response = client.post(
        f"/admin/elections/{election.id}/visibility", data={"is_active": "false"}
    )

    assert response.get_json()["election"]["is_active"] is False
    assert Election.query.get(election.id).is_active is False
    assert client.get("/elections").get_json()["elections"] == []

    shown = client.post(
        f"/admin/elections/{election.id}/visibility", data={"is_active": "true"}
    )
    assert shown.get_json()["election"]["is_active"] is True
