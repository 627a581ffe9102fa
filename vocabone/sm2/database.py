"""
Database - Retention Store I/O Operations

Handles all database operations for retention state and review events.
Uses SQLAlchemy ORM; SQLite by default, Postgres via DATABASE_URL.

This module handles ONLY database I/O.
Algorithm logic is handled by the scheduler module.
"""

from __future__ import annotations
import os
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional, Protocol

from dotenv import load_dotenv
from loguru import logger
from sqlalchemy import create_engine, func, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from vocabone.sm2.memory_state import RetentionState
from vocabone.sm2.models import Base, RetentionRecord, ReviewEvent as ReviewEventModel

# Load environment
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///vocabone.db"


class RetentionStoreError(Exception):
    """Raised when a retention store operation fails."""

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.operation = operation


class StateStore(Protocol):
    """Storage collaborator the review workflow depends on."""

    def get(self, item_id: str) -> Optional[RetentionState]: ...

    def put(self, item_id: str, state: RetentionState) -> None: ...

    def get_all(self, module_id: str) -> dict[str, RetentionState]: ...

    def delete(self, item_id: str) -> None: ...


# ---- Configuration ----

def is_test_mode() -> bool:
    """Check if running in test mode."""
    return os.getenv("TEST_MODE", "false").lower() == "true"


def get_database_url() -> str:
    """
    Get the database URL from environment variables.

    Uses TEST_MODE env var to determine which database to connect to:
    'vocabone' in the URL is replaced with 'test_vocabone'.

    Returns:
        SQLAlchemy database URL
    """
    base_url = os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL

    if is_test_mode():
        return base_url.replace("vocabone", "test_vocabone")

    return base_url


def get_default_learner_id() -> str:
    """Get default learner id for scoping retention data."""
    return os.getenv("DEFAULT_LEARNER_ID", "default")


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Get SQLAlchemy engine for the retention store.

    In-memory SQLite shares a single connection so every session sees the
    same data; other backends use a connection pool.
    """
    db_url = database_url or get_database_url()

    if db_url.startswith("sqlite"):
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                db_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=False
            )
        return create_engine(db_url, connect_args={"check_same_thread": False}, echo=False)

    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


# ---- Row <-> snapshot conversion ----

def _to_iso(timestamp: Optional[datetime]) -> Optional[str]:
    return timestamp.isoformat() if timestamp else None


def _from_iso(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _record_to_state(record: RetentionRecord) -> RetentionState:
    return RetentionState(
        interval=record.interval,
        ease_factor=record.ease_factor,
        repetitions=record.repetitions,
        last_reviewed_at=_from_iso(record.last_reviewed_at),
        next_due_at=_from_iso(record.next_due_at),
        total_reviews=record.total_reviews,
        correct_count=record.correct_count,
        incorrect_count=record.incorrect_count,
        streak=record.streak,
        mastered=record.mastered,
    )


def _apply_state(record: RetentionRecord, state: RetentionState) -> None:
    record.interval = state.interval
    record.ease_factor = state.ease_factor
    record.repetitions = state.repetitions
    record.last_reviewed_at = _to_iso(state.last_reviewed_at)
    record.next_due_at = _to_iso(state.next_due_at)
    record.total_reviews = state.total_reviews
    record.correct_count = state.correct_count
    record.incorrect_count = state.incorrect_count
    record.streak = state.streak
    record.mastered = state.mastered


class SqlStateStore:
    """
    Retention store for one module and learner, backed by SQLAlchemy.

    Implements the StateStore protocol plus bulk, reset and event-log
    helpers. Writes to the same item must be serialized by the caller.
    """

    def __init__(
        self,
        module_id: str,
        learner_id: Optional[str] = None,
        database_url: Optional[str] = None,
        engine: Optional[Engine] = None
    ):
        self.module_id = module_id
        self.learner_id = learner_id or get_default_learner_id()
        self.engine = engine or get_engine(database_url)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            raise RetentionStoreError(
                f"Failed to {operation} for module {self.module_id}: {e}",
                operation
            ) from e
        finally:
            session.close()

    # ---- Schema ----

    def init_db(self) -> None:
        """
        Initialize database schema if tables don't exist.

        Safe to call multiple times - only creates missing tables.
        """
        inspector = inspect(self.engine)
        existing_tables = inspector.get_table_names()

        if 'retention_state' not in existing_tables or 'review_events' not in existing_tables:
            Base.metadata.create_all(self.engine)
            logger.info("Retention store initialized at {}", self.engine.url)
            return

        # If tables exist, ensure schema includes learner_id
        state_columns = {col["name"] for col in inspector.get_columns("retention_state")}
        event_columns = {col["name"] for col in inspector.get_columns("review_events")}
        if "learner_id" not in state_columns or "learner_id" not in event_columns:
            raise RuntimeError(
                "Retention schema missing learner_id column. "
                "Please reset or migrate the database to the per-learner schema."
            )

    def reset_db(self) -> None:
        """
        DANGEROUS: Delete all data and recreate tables.

        All learners' retention state and review history will be lost!
        """
        Base.metadata.drop_all(self.engine)
        logger.warning("All retention tables dropped")
        self.init_db()

    # ---- Point operations ----

    def _query(self, session: Session, module_id: Optional[str] = None):
        return session.query(RetentionRecord).filter(
            RetentionRecord.learner_id == self.learner_id,
            RetentionRecord.module_id == (module_id or self.module_id)
        )

    def get(self, item_id: str) -> Optional[RetentionState]:
        """
        Load retention state for an item.

        Returns:
            RetentionState if found, None if the item is new
        """
        with self._session("get state") as session:
            record = self._query(session).filter(RetentionRecord.item_id == item_id).first()
            if record is None:
                return None
            return _record_to_state(record)

    def put(self, item_id: str, state: RetentionState) -> None:
        """Save retention state for an item (insert or update)."""
        self.batch_put({item_id: state})

    def batch_put(self, states: dict[str, RetentionState]) -> None:
        """
        Save multiple states in a single transaction (much faster).

        Args:
            states: Mapping of item_id -> RetentionState
        """
        if not states:
            return

        with self._session("save states") as session:
            for item_id, state in states.items():
                record = self._query(session).filter(RetentionRecord.item_id == item_id).first()
                if record is None:
                    record = RetentionRecord(
                        learner_id=self.learner_id,
                        module_id=self.module_id,
                        item_id=item_id
                    )
                    session.add(record)
                _apply_state(record, state)
            session.commit()

    def delete(self, item_id: str, module_id: Optional[str] = None) -> None:
        """Delete an item's state, returning it to "new"."""
        with self._session("delete state") as session:
            self._query(session, module_id).filter(RetentionRecord.item_id == item_id).delete()
            session.commit()

    # ---- Range operations ----

    def get_all(self, module_id: Optional[str] = None) -> dict[str, RetentionState]:
        """
        Get every stored state of a module for this learner.

        Returns:
            Mapping of item_id -> RetentionState
        """
        with self._session("get module states") as session:
            records = self._query(session, module_id).all()
            return {record.item_id: _record_to_state(record) for record in records}

    def count(self) -> int:
        """Number of studied items in this module."""
        with self._session("count states") as session:
            return self._query(session).with_entities(func.count(RetentionRecord.item_id)).scalar()

    def reset_module(self, module_id: Optional[str] = None) -> int:
        """
        Delete all retention state for a module (default: this store's module).

        Returns:
            Number of states deleted
        """
        with self._session("reset progress") as session:
            deleted = self._query(session, module_id).delete()
            session.commit()
        logger.info("Reset {} retention states in module {}", deleted, module_id or self.module_id)
        return deleted

    # ---- Review log ----

    def log_review_event(self, event: dict) -> None:
        """
        Append a review event.

        Args:
            event: Dict with keys item_id, timestamp, quality, interval_after,
                ease_factor_after and optionally tier, confidence, user_answer,
                interval_before, ease_factor_before, session_id
        """
        with self._session("log review event") as session:
            timestamp = event['timestamp']
            session.add(ReviewEventModel(
                learner_id=self.learner_id,
                module_id=self.module_id,
                item_id=event['item_id'],
                timestamp=timestamp.isoformat() if isinstance(timestamp, datetime) else timestamp,
                quality=int(event['quality']),
                tier=event.get('tier'),
                confidence=event.get('confidence'),
                user_answer=event.get('user_answer'),
                interval_before=event.get('interval_before'),
                ease_factor_before=event.get('ease_factor_before'),
                interval_after=event['interval_after'],
                ease_factor_after=event['ease_factor_after'],
                session_id=event.get('session_id')
            ))
            session.commit()

    def get_recent_events(self, limit: int = 10) -> list[dict]:
        """
        Get recent review events for this module (newest first).
        """
        with self._session("get recent events") as session:
            events = session.query(ReviewEventModel).filter(
                ReviewEventModel.learner_id == self.learner_id,
                ReviewEventModel.module_id == self.module_id
            ).order_by(
                ReviewEventModel.timestamp.desc(),
                ReviewEventModel.id.desc()
            ).limit(limit).all()

            return [
                {
                    "id": event.id,
                    "item_id": event.item_id,
                    "timestamp": event.timestamp,
                    "quality": event.quality,
                    "tier": event.tier,
                    "confidence": event.confidence,
                    "user_answer": event.user_answer,
                    "interval_before": event.interval_before,
                    "ease_factor_before": event.ease_factor_before,
                    "interval_after": event.interval_after,
                    "ease_factor_after": event.ease_factor_after,
                    "session_id": event.session_id,
                }
                for event in events
            ]
