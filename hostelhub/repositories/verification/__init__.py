from hostelhub.repositories.verification.verification_repository import VerificationRepository

__all__ = ["VerificationRepository"]
