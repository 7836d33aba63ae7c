from hostelhub.models.fee.monthly_admin_fee import MonthlyAdminFee

__all__ = ["MonthlyAdminFee"]
