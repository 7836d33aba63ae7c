from hostelhub.repositories.report.report_repository import ReportRepository

__all__ = ["ReportRepository"]
