"""
===============================================================================
CRC CARD - schemas/__init__.py
===============================================================================

Responsibilities:
    - Re-export the HTTP DTOs used by the routers.
===============================================================================
"""

from .aspirants import (
    AspirantRes,
    CompleteScreeningReq,
    DisqualifyAspirantReq,
    PromoteAspirantReq,
    PromotionSummaryRes,
    ReviewAspirantReq,
    ScheduleScreeningReq,
    SubmitApplicationReq,
    VerifyPaymentReq,
)
from .audit import AuditLogAcceptedRes, AuditLogReq, AuditRecordRes, AuditRecordsRes
from .candidates import CandidateRes, CandidatesRes
from .eligibility import EligibilityCheckReq, EligibilityCheckRes

__all__ = [
    "AspirantRes",
    "AuditLogAcceptedRes",
    "AuditLogReq",
    "AuditRecordRes",
    "AuditRecordsRes",
    "CandidateRes",
    "CandidatesRes",
    "CompleteScreeningReq",
    "DisqualifyAspirantReq",
    "EligibilityCheckReq",
    "EligibilityCheckRes",
    "PromoteAspirantReq",
    "PromotionSummaryRes",
    "ReviewAspirantReq",
    "ScheduleScreeningReq",
    "SubmitApplicationReq",
    "VerifyPaymentReq",
]
