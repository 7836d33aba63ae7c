from hostelhub.repositories.fee.fee_repository import MonthlyFeeRepository

__all__ = ["MonthlyFeeRepository"]
