"""
SQLAlchemy ORM Models for the Retention Store

Defines RetentionRecord and ReviewEvent tables.
Timestamps are stored as ISO-8601 strings so their timezone survives
SQLite round-trips.
"""

from sqlalchemy import Boolean, Column, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class RetentionRecord(Base):
    """
    Persistent retention state for a single item (learner + module + item).

    One row per studied item; deleting the row returns the item to "new".
    """
    __tablename__ = 'retention_state'

    # Primary key: composite of learner, module and item
    learner_id = Column(String(255), primary_key=True, nullable=False)
    module_id = Column(String(255), primary_key=True, nullable=False)
    item_id = Column(String(255), primary_key=True, nullable=False)

    # Scheduling parameters
    interval = Column(Integer, nullable=False)
    ease_factor = Column(Float, nullable=False)
    repetitions = Column(Integer, nullable=False)

    last_reviewed_at = Column(String(64), nullable=True)
    next_due_at = Column(String(64), nullable=False)

    # Counters
    total_reviews = Column(Integer, nullable=False, default=0)
    correct_count = Column(Integer, nullable=False, default=0)
    incorrect_count = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)

    mastered = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<RetentionRecord({self.learner_id}, {self.module_id}, {self.item_id})>"


class ReviewEvent(Base):
    """
    Log entry for a single review of an item.

    Captures the verdict and the state before/after the review.
    """
    __tablename__ = 'review_events'

    id = Column(Integer, primary_key=True, autoincrement=True)

    learner_id = Column(String(255), nullable=False)
    module_id = Column(String(255), nullable=False)
    item_id = Column(String(255), nullable=False)

    timestamp = Column(String(64), nullable=False)
    quality = Column(Integer, nullable=False)  # 0=AGAIN, 2=HARD, 3=GOOD, 5=EASY

    # Verdict (null for self-graded reviews)
    tier = Column(String(20), nullable=True)
    confidence = Column(Float, nullable=True)
    user_answer = Column(String(1024), nullable=True)

    # State before review (null for new items)
    interval_before = Column(Integer, nullable=True)
    ease_factor_before = Column(Float, nullable=True)

    # State after review
    interval_after = Column(Integer, nullable=False)
    ease_factor_after = Column(Float, nullable=False)

    session_id = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<ReviewEvent(id={self.id}, {self.module_id}/{self.item_id}, quality={self.quality})>"
