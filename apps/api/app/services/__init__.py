"""Service layer modules."""

from app.services.auth_service import (
    authenticate,
    get_user_by_email,
    register_user,
    revoke_all_tokens,
)

# Import service modules (not individual functions) for cleaner access
from app.services import (
    answer_validation_service,
    auth_service,
    form_service,
    response_report_service,
    response_service,
    submission_eligibility_service,
)

__all__ = [
    # Auth
    "authenticate",
    "get_user_by_email",
    "register_user",
    "revoke_all_tokens",
    # Modules
    "answer_validation_service",
    "auth_service",
    "form_service",
    "response_report_service",
    "response_service",
    "submission_eligibility_service",
]
