"""Enum definitions for application constants."""

from ngo_api.db.enums.auth import DEFAULT_ROLE, Role
from ngo_api.db.enums.beneficiaries import Gender
from ngo_api.db.enums.communities import CommunityClassification, CommunityStatus
from ngo_api.db.enums.extras import (
    ConcludedResult,
    ExtrasKind,
    FollowUpStatus,
    TrafficLight,
)
from ngo_api.db.enums.forms import (
    DISPLAY_ONLY_TYPES,
    MULTI_CHOICE_TYPES,
    SINGLE_CHOICE_TYPES,
    FormSection,
    FormSubmissionStatus,
    QuestionTypeCode,
)
from ngo_api.db.enums.volunteers import VolunteerShift, VolunteerType

__all__ = [
    "CommunityClassification",
    "CommunityStatus",
    "ConcludedResult",
    "DEFAULT_ROLE",
    "DISPLAY_ONLY_TYPES",
    "ExtrasKind",
    "FollowUpStatus",
    "FormSection",
    "FormSubmissionStatus",
    "Gender",
    "MULTI_CHOICE_TYPES",
    "QuestionTypeCode",
    "Role",
    "SINGLE_CHOICE_TYPES",
    "TrafficLight",
    "VolunteerShift",
    "VolunteerType",
]
