from hostelhub.models.verification.manager_verification import ManagerVerification

__all__ = ["ManagerVerification"]
