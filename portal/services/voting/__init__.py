from portal.services.voting.administration import (
    create_election,
    set_election_visibility,
    update_election_status,
)
from portal.services.voting.ballot import cast_vote, find_existing_vote
from portal.services.voting.candidacy import register_candidate, set_candidate_approval
from portal.services.voting.eligibility import is_eligible
from portal.services.voting.registration import register_voter, verify_voter_registration
from portal.services.voting.results import compile_election_results
from portal.services.voting.tally import (
    count_votes_from_log,
    find_counter_drift,
    tally,
    tally_election,
)

__all__ = [
    "cast_vote",
    "compile_election_results",
    "count_votes_from_log",
    "create_election",
    "find_counter_drift",
    "find_existing_vote",
    "is_eligible",
    "register_candidate",
    "register_voter",
    "set_candidate_approval",
    "set_election_visibility",
    "tally",
    "tally_election",
    "update_election_status",
    "verify_voter_registration",
]
