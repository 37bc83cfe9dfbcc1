"""Tests for the completion committer.

Uses an in-memory store so each idempotence layer can be exercised on
its own: in-pass dedupe, existing completions and unique-key conflicts.
"""

from unittest.mock import patch

import pytest

from clanbingo.consumers.completion import CompletionCommitter
from clanbingo.consumers.matching.result import ItemMatch, MatchMethod, TeamMatch
from clanbingo.core.types import Activity, Completion, GuestCredit, Item, MemberCredit, Team


class InMemoryStore:
    """Just enough of BoardStore for committing."""

    def __init__(self):
        self.completions: dict[tuple[int, int], Completion] = {}
        self.create_calls: list[dict] = []
        self.failing_pairs: set[tuple[int, int]] = set()

    def get_completion(self, item_id: int, team_id: int) -> Completion | None:
        return self.completions.get((item_id, team_id))

    def create_completion(
        self,
        item_id,
        team_id,
        member_id,
        guest_id,
        activity_id,
        evidence_text,
        completed_by_name=None,
    ):
        self.create_calls.append({"item_id": item_id, "team_id": team_id})
        if (item_id, team_id) in self.failing_pairs:
            raise RuntimeError("disk I/O error")
        if (item_id, team_id) in self.completions:
            return None

        completion = Completion(
            id=len(self.completions) + 1,
            item_id=item_id,
            team_id=team_id,
            member_id=member_id,
            guest_id=guest_id,
            activity_id=activity_id,
            evidence_text=evidence_text,
            completed_by_name=completed_by_name,
        )
        self.completions[(item_id, team_id)] = completion
        return completion.id


ACTIVITY = Activity(
    actor_name="PlayerOne",
    timestamp_ms=1736942400000,
    text="I found a pair of Dragon claws",
    activity_id=42,
)


def _item_match(item_id: int, board_id: int = 1, name: str = "Dragon Claws") -> ItemMatch:
    item = Item(id=item_id, board_id=board_id, item_name=name)
    return ItemMatch(item=item, method=MatchMethod.DIRECT, term=name.lower())


def _team_match(team_id: int, board_id: int = 1, credit=None) -> TeamMatch:
    team = Team(id=team_id, board_id=board_id, team_name=f"Team {team_id}")
    return TeamMatch(team=team, credit=credit or MemberCredit(7))


@pytest.fixture
def store():
    return InMemoryStore()


# =============================================================================
# CREATION
# =============================================================================


class TestCommit:
    def test_creates_member_completion(self, store):
        outcome = CompletionCommitter(store).commit(ACTIVITY, [_item_match(10)], [_team_match(100)])

        assert len(outcome.created) == 1
        created = outcome.created[0]
        assert created.item_id == 10
        assert created.team_id == 100
        assert created.completed_by == "PlayerOne"
        assert not created.is_guest

        stored = store.completions[(10, 100)]
        assert stored.member_id == 7
        assert stored.guest_id is None
        assert stored.activity_id == 42
        assert stored.evidence_text == "I found a pair of Dragon claws"
        assert stored.completed_by_name == "PlayerOne"

    def test_creates_guest_completion(self, store):
        team = _team_match(100, credit=GuestCredit(3))
        outcome = CompletionCommitter(store).commit(ACTIVITY, [_item_match(10)], [team])

        assert outcome.created[0].is_guest
        stored = store.completions[(10, 100)]
        assert stored.guest_id == 3
        assert stored.member_id is None
        assert stored.credit == GuestCredit(3)

    def test_skips_pairs_on_different_boards(self, store):
        outcome = CompletionCommitter(store).commit(
            ACTIVITY,
            [_item_match(10, board_id=1), _item_match(20, board_id=2)],
            [_team_match(100, board_id=1)],
        )

        assert [c.item_id for c in outcome.created] == [10]
        assert store.create_calls == [{"item_id": 10, "team_id": 100}]

    def test_every_matching_pair_committed(self, store):
        outcome = CompletionCommitter(store).commit(
            ACTIVITY,
            [_item_match(10), _item_match(11, name="Any Dragon item")],
            [_team_match(100)],
        )
        assert {(c.item_id, c.team_id) for c in outcome.created} == {(10, 100), (11, 100)}


# =============================================================================
# IDEMPOTENCE
# =============================================================================


class TestIdempotence:
    def test_in_pass_dedupe(self, store):
        committer = CompletionCommitter(store)
        committer.commit(ACTIVITY, [_item_match(10)], [_team_match(100)])
        second = committer.commit(ACTIVITY, [_item_match(10)], [_team_match(100)])

        assert second.created == []
        assert second.already_completed == 0
        assert len(store.create_calls) == 1
        assert (10, 100) in committer.seen_pairs

    def test_existing_completion_skipped(self, store):
        store.completions[(10, 100)] = Completion(id=99, item_id=10, team_id=100)

        outcome = CompletionCommitter(store).commit(ACTIVITY, [_item_match(10)], [_team_match(100)])

        assert outcome.created == []
        assert outcome.already_completed == 1
        assert store.create_calls == []

    def test_unique_conflict_is_a_no_op(self, store):
        store.completions[(10, 100)] = Completion(id=99, item_id=10, team_id=100)

        # Another writer got there between the lookup and the insert
        with patch.object(store, "get_completion", return_value=None):
            outcome = CompletionCommitter(store).commit(ACTIVITY, [_item_match(10)], [_team_match(100)])

        assert outcome.created == []
        assert outcome.errors == []
        assert outcome.already_completed == 1
        assert store.completions[(10, 100)].id == 99

    def test_new_committer_forgets_seen_pairs(self, store):
        CompletionCommitter(store).commit(ACTIVITY, [_item_match(10)], [_team_match(100)])
        outcome = CompletionCommitter(store).commit(ACTIVITY, [_item_match(10)], [_team_match(100)])

        # Second pass is stopped by the store, not the dedupe set
        assert outcome.already_completed == 1


# =============================================================================
# ERRORS
# =============================================================================


class TestCommitErrors:
    def test_error_recorded_and_remaining_pairs_committed(self, store):
        store.failing_pairs.add((10, 100))

        outcome = CompletionCommitter(store).commit(
            ACTIVITY,
            [_item_match(10), _item_match(11, name="Any Dragon item")],
            [_team_match(100)],
        )

        assert [c.item_id for c in outcome.created] == [11]
        assert len(outcome.errors) == 1
        error = outcome.errors[0]
        assert error.item_name == "Dragon Claws"
        assert error.team_name == "Team 100"
        assert error.error == "disk I/O error"
        assert error.to_dict()["activity"] == "I found a pair of Dragon claws"

    def test_failed_pair_not_retried_in_same_pass(self, store):
        store.failing_pairs.add((10, 100))
        committer = CompletionCommitter(store)

        committer.commit(ACTIVITY, [_item_match(10)], [_team_match(100)])
        committer.commit(ACTIVITY, [_item_match(10)], [_team_match(100)])

        assert len(store.create_calls) == 1
