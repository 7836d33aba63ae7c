"""Review repository with rating aggregates for hostels."""

import random
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from hostelhub.models.review.review import Review
from hostelhub.models.user.user import StudentProfile
from hostelhub.repositories.base.base_repository import BaseRepository


class ReviewRepository(BaseRepository[Review]):

    def __init__(self, db: Session):
        super().__init__(Review, db)

    def _with_reviewer(self):
        return self.db.query(Review).options(
            joinedload(Review.student).joinedload(StudentProfile.user),
        )

    def find_by_booking(self, booking_id: str) -> Optional[Review]:
        return self.db.query(Review).filter(Review.booking_id == booking_id).first()

    def find_latest_for_hostel(self, hostel_id: str, limit: int) -> List[Review]:
        return (
            self._with_reviewer()
            .filter(Review.hostel_id == hostel_id)
            .order_by(Review.created_at.desc())
            .limit(limit)
            .all()
        )

    def rating_stats(self, hostel_id: str) -> Tuple[float, int]:
        """Average rating and review count of a hostel."""
        average, count = (
            self.db.query(func.coalesce(func.avg(Review.rating), 0), func.count(Review.id))
            .filter(Review.hostel_id == hostel_id)
            .one()
        )
        return float(average), int(count)

    def find_random(self, limit: int) -> List[Review]:
        """
        Up to ``limit`` reviews from a random window of the newest-first
        ordering, shuffled.
        """
        total = self.db.query(func.count(Review.id)).scalar() or 0
        if total == 0:
            return []

        offset = random.randint(0, max(0, total - limit))
        reviews = (
            self._with_reviewer()
            .options(joinedload(Review.hostel))
            .order_by(Review.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        random.shuffle(reviews)
        return reviews
