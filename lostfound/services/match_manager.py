"""Match lifecycle: candidate scanning, idempotent match upserts and match decisions"""
from sqlalchemy.orm import Session
from typing import List, NamedTuple, Optional
from lostfound.exceptions import Forbidden, InvalidInput
from lostfound.models import Match
from lostfound.services.aggregator import MatchScore, ScoreAggregator
from lostfound.services.notifications import NotificationSink, build_match_notices
from lostfound.services.stores import ItemStore, MatchStore
import logging

logger = logging.getLogger(__name__)

COUNTER_STATUS = {"lost": "found", "found": "lost"}


class MatchLifecycleManager:
    """
    Owns match creation and the pending -> confirmed/rejected state machine.

    Stores and the notification sink are injected so the same manager runs
    inside a request, a background task or a test.
    """

    def __init__(self, item_store: ItemStore, match_store: MatchStore, notification_sink: NotificationSink):
        self.item_store = item_store
        self.match_store = match_store
        self.notification_sink = notification_sink

    @classmethod
    def from_session(cls, db: Session, notification_sink: NotificationSink) -> "MatchLifecycleManager":
        return cls(ItemStore(db), MatchStore(db), notification_sink)

    def evaluate_new_item(self, item_id: int, expected_status: Optional[str] = None) -> List[Match]:
        """
        Score a freshly reported item against every active item of the opposite status.
        Pairs at or above the acceptance threshold are upserted as matches.
        Returns: matches created or re-scored by this pass
        """
        item_id = _require_id(item_id, "item_id")
        item = self.item_store.get_item(item_id)

        if item.item_status != "active":
            logger.info(f"Item {item_id} is {item.item_status}, skipping match evaluation")
            return []

        if item.status not in COUNTER_STATUS or (expected_status and item.status != expected_status):
            logger.info(f"Item {item_id} has status '{item.status}', expected '{expected_status}', skipping")
            return []

        candidates = self.item_store.list_active_items(COUNTER_STATUS[item.status])

        # Score every pair before writing anything; each commit below expires the rows
        accepted = []
        for candidate in candidates:
            lost_item, found_item = (item, candidate) if item.status == "lost" else (candidate, item)
            try:
                result = ScoreAggregator.aggregate(lost_item, found_item)
                pair = ScoredPair(
                    lost_id=lost_item.id,
                    found_id=found_item.id,
                    lost_user_id=lost_item.user_id,
                    found_user_id=found_item.user_id,
                    lost_title=lost_item.title,
                    found_title=found_item.title,
                    result=result,
                )
            except Exception:
                logger.exception(f"Scoring failed for lost item {lost_item.id} vs found item {found_item.id}")
                continue

            logger.debug(
                f"Lost item {pair.lost_id} '{pair.lost_title}' vs found item {pair.found_id} "
                f"'{pair.found_title}': score={result.score} breakdown={result.breakdown}"
            )

            if ScoreAggregator.is_match(result.score):
                accepted.append(pair)

        matches = []
        for pair in accepted:
            score = pair.result.score
            try:
                match, created = self.match_store.upsert_match(pair.lost_id, pair.found_id, score, pair.result.breakdown)
                match_id, match_status = match.id, match.status
            except Exception:
                logger.exception(f"Could not persist match for lost item {pair.lost_id} / found item {pair.found_id}")
                self.match_store.rollback()
                continue

            matches.append(match)
            if created:
                logger.info(f"Created match {match_id} (lost {pair.lost_id}, found {pair.found_id}, score {score})")
                self._dispatch_notifications(match_id, pair)
            else:
                logger.info(f"Re-scored match {match_id} to {score}, status stays '{match_status}'")

        logger.info(f"Item {item_id}: {len(candidates)} candidates, {len(matches)} matches")
        return matches

    def evaluate_lost_item(self, item_id: int) -> List[Match]:
        return self.evaluate_new_item(item_id, expected_status="lost")

    def evaluate_found_item(self, item_id: int) -> List[Match]:
        return self.evaluate_new_item(item_id, expected_status="found")

    def confirm(self, match_id: int, caller_user_id: int, notes: Optional[str] = None) -> Match:
        """Mark a match confirmed. Re-confirming is allowed and simply re-applies the status."""
        return self._decide(match_id, caller_user_id, "confirmed", notes)

    def reject(self, match_id: int, caller_user_id: int, notes: Optional[str] = None) -> Match:
        return self._decide(match_id, caller_user_id, "rejected", notes)

    def list_for_user(self, user_id: int) -> List[Match]:
        """Matches involving any item the user reported, best score first"""
        user_id = _require_id(user_id, "user_id")
        return self.match_store.list_matches_for_user(user_id)

    def _decide(self, match_id: int, caller_user_id: int, status: str, notes: Optional[str]) -> Match:
        match_id = _require_id(match_id, "match_id")
        caller_user_id = _require_id(caller_user_id, "caller_user_id")

        match = self.match_store.get_match(match_id)
        if not match.is_participant(caller_user_id):
            raise Forbidden(f"User {caller_user_id} is not a participant in match {match_id}")

        if match.status != "pending":
            logger.warning(f"Match {match_id} is already {match.status}, setting {status}")

        match = self.match_store.update_match_status(match_id, status, notes)
        logger.info(f"Match {match_id} {status} by user {caller_user_id}")
        return match

    def _dispatch_notifications(self, match_id: int, pair: "ScoredPair"):
        """Best effort: a failed notice is logged and never undoes the match"""
        try:
            notices = build_match_notices(
                match_id, pair.lost_user_id, pair.lost_title, pair.found_user_id, pair.found_title
            )
        except Exception:
            logger.exception(f"Could not build notifications for match {match_id}")
            return

        for notice in notices:
            try:
                self.notification_sink.notify(notice.user_id, notice.title, notice.message, notice.link)
            except Exception:
                logger.exception(f"Notification to user {notice.user_id} for match {notice.link} failed")


class ScoredPair(NamedTuple):
    """Plain values of an accepted pair, read before any commit expires the rows"""
    lost_id: int
    found_id: int
    lost_user_id: int
    found_user_id: int
    lost_title: str
    found_title: str
    result: MatchScore


def _require_id(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInput(f"{name} must be a positive integer, got {value!r}")
    return value
