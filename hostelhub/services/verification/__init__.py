from hostelhub.services.verification.verification_service import VerificationService

__all__ = ["VerificationService"]
