from hostelhub.models.report.report import Report

__all__ = ["Report"]
