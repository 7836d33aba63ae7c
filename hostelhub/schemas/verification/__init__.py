from hostelhub.schemas.verification.verification import (
    CustomBankAccount,
    VerificationResponse,
    VerificationReview,
    VerificationSubmit,
)

__all__ = ["CustomBankAccount", "VerificationSubmit", "VerificationReview", "VerificationResponse"]
