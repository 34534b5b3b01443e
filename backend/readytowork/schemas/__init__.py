from readytowork.schemas.base import CamelModel
from readytowork.schemas.candidate import CandidateOut, CandidateUpdate, RegisterCandidateData
from readytowork.schemas.employer import EmployerOut, EmployerUpdate, RegisterEmployerData, Wallet
from readytowork.schemas.common import MediaOut, NotificationOut, PlanOut, UserOut
from readytowork.schemas.interview import (
    CandidateContact,
    InterviewApproval,
    InterviewDecision,
    InterviewOut,
    InterviewRequestData,
)

__all__ = [
    "CamelModel",
    "CandidateOut",
    "CandidateUpdate",
    "RegisterCandidateData",
    "EmployerOut",
    "EmployerUpdate",
    "RegisterEmployerData",
    "Wallet",
    "MediaOut",
    "NotificationOut",
    "PlanOut",
    "UserOut",
    "CandidateContact",
    "InterviewApproval",
    "InterviewDecision",
    "InterviewOut",
    "InterviewRequestData",
]
