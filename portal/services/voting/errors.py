class ElectionError(Exception):
    """Base class for failures surfaced to the voter as a notification."""

    code = "election_error"
    status = 400
    default_message = "The request could not be completed."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class ElectionNotFound(ElectionError):
    code = "election_not_found"
    status = 404
    default_message = "Election not found."


class ElectionNotOpen(ElectionError):
    code = "election_not_open"
    default_message = "Voting is not open for this election."


class NotEligible(ElectionError):
    code = "not_eligible"
    status = 403
    default_message = "You must be a verified voter to cast votes."


class AlreadyVoted(ElectionError):
    code = "already_voted"
    status = 409
    default_message = "You have already voted for this position."


class CandidateNotFound(ElectionError):
    code = "candidate_not_found"
    status = 404
    default_message = "Candidate not found for this position."


class AlreadyRegistered(ElectionError):
    code = "already_registered"
    status = 409
    default_message = "You have already registered."


class InvalidPost(ElectionError):
    code = "invalid_post"
    default_message = "Unknown position."


class InvalidDocumentType(ElectionError):
    code = "invalid_document_type"
    default_message = "Unknown identity document type."


class InvalidStatus(ElectionError):
    code = "invalid_status"
    default_message = "Invalid status value."


class InvalidElection(ElectionError):
    code = "invalid_election"
    default_message = "Election details are invalid."


class StoreUnavailable(ElectionError):
    code = "store_unavailable"
    status = 503
    default_message = "Something went wrong. Please try again."


class CandidateHasVotes(ElectionError):
    code = "candidate_has_votes"
    status = 409
    default_message = "A candidate who has received votes cannot be withdrawn while voting is open."
