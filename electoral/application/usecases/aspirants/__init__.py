"""Aspirant lifecycle use cases."""

from .complete_screening import CompleteScreeningUseCase
from .disqualify_aspirant import DisqualifyAspirantUseCase
from .promote_candidate import PromoteCandidateUseCase
from .review_aspirant import ReviewAspirantUseCase
from .schedule_screening import ScheduleScreeningUseCase
from .submit_application import SubmitApplicationUseCase
from .verify_payment import VerifyPaymentUseCase

__all__ = [
    "CompleteScreeningUseCase",
    "DisqualifyAspirantUseCase",
    "PromoteCandidateUseCase",
    "ReviewAspirantUseCase",
    "ScheduleScreeningUseCase",
    "SubmitApplicationUseCase",
    "VerifyPaymentUseCase",
]
