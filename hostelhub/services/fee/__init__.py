from hostelhub.services.fee.fee_service import FeeService

__all__ = ["FeeService"]
