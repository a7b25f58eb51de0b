def is_eligible(registration):
    return registration is not None and registration.verification_status == "approved"
