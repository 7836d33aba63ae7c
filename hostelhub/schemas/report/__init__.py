from hostelhub.schemas.report.report import ReportCreate, ReportResolve, ReportResponse

__all__ = ["ReportCreate", "ReportResolve", "ReportResponse"]
