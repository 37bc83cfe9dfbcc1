"""Completion committer.

Turns (matched square, resolved team) pairs into completion records,
at most once per (item, team) for the lifetime of a board.

Idempotence comes from three layers:
1. An in-pass dedupe set, so two activities in one batch never race
2. A store lookup for completions from earlier passes or admin entry
3. The store's unique key, reported back as None and treated as a no-op
"""

import logging
from dataclasses import dataclass, field

from clanbingo.consumers.matching.result import ItemMatch, TeamMatch
from clanbingo.core.interfaces import BoardStore
from clanbingo.core.types import Activity

logger = logging.getLogger(__name__)


@dataclass
class NewCompletion:
    """A completion created during a processing pass."""

    completion_id: int
    board_id: int
    item_id: int
    item_name: str
    team_id: int
    team_name: str
    completed_by: str
    is_guest: bool
    activity_text: str


@dataclass
class CommitError:
    """A single (item, team) pair that failed to commit."""

    activity_text: str
    error: str
    item_name: str | None = None
    team_name: str | None = None

    def to_dict(self) -> dict:
        return {
            "activity": self.activity_text,
            "item": self.item_name,
            "team": self.team_name,
            "error": self.error,
        }


@dataclass
class CommitOutcome:
    """Result of committing one activity's matches."""

    created: list[NewCompletion] = field(default_factory=list)
    errors: list[CommitError] = field(default_factory=list)
    already_completed: int = 0


class CompletionCommitter:
    """Writes completions for a single processing pass.

    Create one committer per pass: the dedupe set only lives as long as
    the instance.

    Usage:
        committer = CompletionCommitter(store)
        for activity in activities:
            outcome = committer.commit(activity, item_matches, team_matches)
    """

    def __init__(self, store: BoardStore):
        self._store = store
        self._seen: set[tuple[int, int]] = set()

    @property
    def seen_pairs(self) -> frozenset[tuple[int, int]]:
        return frozenset(self._seen)

    def commit(
        self,
        activity: Activity,
        item_matches: list[ItemMatch],
        team_matches: list[TeamMatch],
    ) -> CommitOutcome:
        """Record completions for every same-board (item, team) pair.

        Args:
            activity: Activity providing the evidence
            item_matches: Squares the activity satisfies
            team_matches: Teams the actor is rostered on

        Returns:
            CommitOutcome with new completions and per-pair errors
        """
        outcome = CommitOutcome()

        for item_match in item_matches:
            item = item_match.item
            for team_match in team_matches:
                team = team_match.team
                if team.board_id != item.board_id:
                    continue

                key = (item.id, team.id)
                if key in self._seen:
                    continue
                self._seen.add(key)

                try:
                    created = self._commit_pair(activity, item_match, team_match)
                except Exception as e:
                    logger.warning(
                        "[COMMIT] Failed '%s' for team '%s': %s",
                        item.item_name,
                        team.team_name,
                        e,
                    )
                    outcome.errors.append(
                        CommitError(
                            activity_text=activity.text,
                            error=str(e),
                            item_name=item.item_name,
                            team_name=team.team_name,
                        )
                    )
                    continue

                if created is None:
                    outcome.already_completed += 1
                else:
                    outcome.created.append(created)

        return outcome

    def _commit_pair(
        self,
        activity: Activity,
        item_match: ItemMatch,
        team_match: TeamMatch,
    ) -> NewCompletion | None:
        item = item_match.item
        team = team_match.team

        if self._store.get_completion(item.id, team.id) is not None:
            return None

        completion_id = self._store.create_completion(
            item_id=item.id,
            team_id=team.id,
            member_id=team_match.member_id,
            guest_id=team_match.guest_id,
            activity_id=activity.activity_id,
            evidence_text=activity.text,
            completed_by_name=activity.actor_name,
        )
        if completion_id is None:
            logger.debug(
                "[COMMIT] '%s' already completed by team '%s' (concurrent insert)",
                item.item_name,
                team.team_name,
            )
            return None

        logger.info(
            "[COMMIT] '%s' completed for team '%s' by %s%s (%s)",
            item.item_name,
            team.team_name,
            activity.actor_name,
            " (guest)" if team_match.is_guest else "",
            item_match.display,
        )
        return NewCompletion(
            completion_id=completion_id,
            board_id=item.board_id,
            item_id=item.id,
            item_name=item.item_name,
            team_id=team.id,
            team_name=team.team_name,
            completed_by=activity.actor_name,
            is_guest=team_match.is_guest,
            activity_text=activity.text,
        )
