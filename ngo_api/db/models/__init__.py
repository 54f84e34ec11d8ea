"""SQLAlchemy ORM models."""

from ngo_api.db.models.auth import Role, User, UserSectionPermission
from ngo_api.db.models.beneficiaries import Beneficiary
from ngo_api.db.models.communities import Community
from ngo_api.db.models.extras import BoardExtras, VolunteerExtras
from ngo_api.db.models.forms import (
    FormSection,
    FormTemplate,
    Question,
    QuestionOption,
    QuestionType,
)
from ngo_api.db.models.submissions import FormSubmission, SubmissionAnswer
from ngo_api.db.models.volunteers import Volunteer

__all__ = [
    "Beneficiary",
    "BoardExtras",
    "Community",
    "FormSection",
    "FormSubmission",
    "FormTemplate",
    "Question",
    "QuestionOption",
    "QuestionType",
    "Role",
    "SubmissionAnswer",
    "User",
    "UserSectionPermission",
    "Volunteer",
    "VolunteerExtras",
]
