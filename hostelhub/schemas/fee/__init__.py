from hostelhub.schemas.fee.fee import (
    FeeHostelBrief,
    FeeResponse,
    FeeReview,
    FeeSubmit,
    PendingFeeSummary,
)

__all__ = ["FeeSubmit", "FeeReview", "FeeHostelBrief", "FeeResponse", "PendingFeeSummary"]
