"""
Review workflow - validate, grade, reschedule, persist.

Ties the answer validator and the SM-2 transition to a retention store:
1. Load the item's current state (None if new)
2. Validate the typed answer
3. Derive a recall quality from the verdict
4. Advance the state and save it
5. Append a review event when the store keeps a log
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from loguru import logger

from vocabone.schemas import LearningItem
from vocabone.sm2 import RecallQuality, RetentionState, advance, utc_now
from vocabone.sm2.database import StateStore
from vocabone.validation import AnswerValidator, MatchTier, ValidationOptions, ValidationVerdict


def quality_from_verdict(verdict: ValidationVerdict) -> RecallQuality:
    """
    Recall quality implied by a validation verdict.

    Exact and alternate matches count as effortless recall; typos and
    partial matches as correct with some hesitation.
    """
    if not verdict.is_correct:
        return RecallQuality.AGAIN
    if verdict.tier in (MatchTier.EXACT, MatchTier.ALTERNATE):
        return RecallQuality.EASY
    return RecallQuality.GOOD


@dataclass(frozen=True)
class ReviewOutcome:
    """Everything the caller needs to show feedback after one review."""
    item_id: str
    verdict: Optional[ValidationVerdict]  # None for self-graded reviews
    quality: int  # 0-5 SM-2 scale
    previous_state: Optional[RetentionState]
    state: RetentionState

    @property
    def is_correct(self) -> bool:
        return self.quality >= RecallQuality.GOOD


class ReviewService:
    """
    Applies reviews of one module's items to a retention store.

    Writes to the same item are not synchronized; callers serialize them.
    """

    def __init__(self, store: StateStore, validator: Optional[AnswerValidator] = None):
        self.store = store
        self.validator = validator or AnswerValidator()

    def options_for(self, item: LearningItem, options: Optional[ValidationOptions] = None) -> ValidationOptions:
        """
        Validation options for an item.

        The item's alternate answers are added to any given alternates, and
        its language code is used unless the options already set one.
        """
        base = options or ValidationOptions()
        alternates = list(base.alternate_answers)
        for alternate in item.alternate_answers:
            if alternate not in alternates:
                alternates.append(alternate)

        return base.model_copy(update={
            "alternate_answers": alternates,
            "language_code": base.language_code or item.language_code,
        })

    def submit_answer(
        self,
        item: LearningItem,
        user_input: str,
        options: Optional[ValidationOptions] = None,
        now: Optional[datetime] = None,
        session_id: Optional[str] = None
    ) -> ReviewOutcome:
        """
        Grade a typed answer and reschedule the item.

        Args:
            item: The item being reviewed
            user_input: The learner's answer
            options: Validation options (item alternates/language are merged in)
            now: Review timestamp (defaults to now, UTC)
            session_id: Optional study session identifier for the review log

        Returns:
            ReviewOutcome with the verdict and the saved state
        """
        verdict = self.validator.validate(user_input, item.answer, self.options_for(item, options))
        quality = quality_from_verdict(verdict)
        return self._apply(item.item_id, quality, verdict, user_input, now, session_id)

    def grade(
        self,
        item_id: str,
        quality: int,
        now: Optional[datetime] = None,
        session_id: Optional[str] = None
    ) -> ReviewOutcome:
        """
        Reschedule an item from a self-assessed recall quality.

        Any level of the 0-5 scale is accepted, not only the named ones.
        """
        if not 0 <= quality <= 5:
            raise ValueError(f"Recall quality must be between 0 and 5, got {quality}")
        return self._apply(item_id, int(quality), None, None, now, session_id)

    def reset_item(self, item_id: str) -> None:
        """Forget an item's progress; it becomes new again."""
        self.store.delete(item_id)
        logger.info("Reset progress for item {}", item_id)

    def reset_progress(self, module_id: str) -> int:
        """
        Forget the progress of every studied item in a module.

        Uses the store's bulk reset when it has one. A plain store bound to
        a different module is refused, since its deletes cannot reach the
        requested module. Returns the number of states removed.
        """
        reset_module = getattr(self.store, "reset_module", None)
        if reset_module is not None:
            return reset_module(module_id)

        bound_module = getattr(self.store, "module_id", None)
        if bound_module is not None and bound_module != module_id:
            raise ValueError(f"Store is bound to module {bound_module}, cannot reset {module_id}")

        states = self.store.get_all(module_id)
        for item_id in states:
            self.store.delete(item_id)
        logger.info("Reset {} retention states in module {}", len(states), module_id)
        return len(states)

    def _apply(
        self,
        item_id: str,
        quality: int,
        verdict: Optional[ValidationVerdict],
        user_input: Optional[str],
        now: Optional[datetime],
        session_id: Optional[str]
    ) -> ReviewOutcome:
        if now is None:
            now = utc_now()

        previous = self.store.get(item_id)
        state = advance(previous, quality, now)
        self.store.put(item_id, state)

        log_review_event = getattr(self.store, "log_review_event", None)
        if log_review_event is not None:
            log_review_event({
                "item_id": item_id,
                "timestamp": now,
                "quality": int(quality),
                "tier": verdict.tier.value if verdict else None,
                "confidence": verdict.confidence if verdict else None,
                "user_answer": user_input,
                "interval_before": previous.interval if previous else None,
                "ease_factor_before": previous.ease_factor if previous else None,
                "interval_after": state.interval,
                "ease_factor_after": state.ease_factor,
                "session_id": session_id,
            })

        logger.debug(
            "Reviewed {} with quality {}: interval {} -> {}",
            item_id,
            int(quality),
            previous.interval if previous else None,
            state.interval,
        )

        return ReviewOutcome(
            item_id=item_id,
            verdict=verdict,
            quality=quality,
            previous_state=previous,
            state=state,
        )
