from hostelhub.services.report.report_service import ReportService

__all__ = ["ReportService"]
