from portal.models.candidate import Candidate
from portal.models.election import Election
from portal.models.election_result import ElectionResult
from portal.models.user import User
from portal.models.vote import Vote
from portal.models.vote_audit_log import VoteAuditLog
from portal.models.voter_registration import VoterRegistration

__all__ = [
    "User",
    "Election",
    "Candidate",
    "VoterRegistration",
    "Vote",
    "VoteAuditLog",
    "ElectionResult",
]
