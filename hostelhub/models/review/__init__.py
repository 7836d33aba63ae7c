from hostelhub.models.review.review import Review

__all__ = ["Review"]
