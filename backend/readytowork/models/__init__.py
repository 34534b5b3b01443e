from readytowork.models.user import User
from readytowork.models.candidate import Candidate
from readytowork.models.employer import Employer
from readytowork.models.notification import Notification, NOTIFICATION_TYPES
from readytowork.models.media import Media
from readytowork.models.billing import Plan, Purchase
from readytowork.models.interview import INTERACTION_TYPES, INTERVIEW_STATUSES, CandidateInteraction, Interview

__all__ = [
    "User",
    "Candidate",
    "Employer",
    "Notification",
    "NOTIFICATION_TYPES",
    "Media",
    "Plan",
    "Purchase",
    "Interview",
    "INTERVIEW_STATUSES",
    "CandidateInteraction",
    "INTERACTION_TYPES",
]
