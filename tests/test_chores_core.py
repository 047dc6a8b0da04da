"""Tests for the chore domain service."""

import pytest

from core.chores_core import ChoreService, coerce_id
from core.errors import (
    ConflictError,
    ConstraintViolation,
    FeatureNotImplementedError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from core.store import Store


@pytest.fixture
def store():
    s = Store(":memory:")
    s.initialize()
    yield s
    s.close()


@pytest.fixture
def service(store):
    return ChoreService(store)


@pytest.fixture
def member_id(service):
    return service.list_members()[0]["id"]


def test_coerce_id_accepts_ints_and_digit_strings():
    assert coerce_id(3, "id") == 3
    assert coerce_id(" 12 ", "id") == 12


@pytest.mark.parametrize("value", [True, "abc", 1.5, None, [1]])
def test_coerce_id_rejects_other_values(value):
    with pytest.raises(ValidationError):
        coerce_id(value, "id")


class TestMembers:
    def test_add_member_defaults(self, service):
        member_id = service.add_member("Grandpa")
        member = next(m for m in service.list_members() if m["id"] == member_id)
        assert member["color"] == "#2196F3"
        assert member["role"] == "member"

    @pytest.mark.parametrize("name", [None, "", "  ", 42])
    def test_name_required(self, service, name):
        with pytest.raises(ValidationError):
            service.add_member(name)

    def test_role_must_be_known(self, service):
        with pytest.raises(ValidationError):
            service.add_member("Grandpa", role="owner")

    def test_duplicate_name(self, service):
        with pytest.raises(ConstraintViolation):
            service.add_member("Dad")


class TestAddChore:
    def test_add_chore_strips_title_and_coerces_ids(self, service, member_id):
        chore_id = service.add_chore(
            {"title": "  Trash  ", "assigned_to": str(member_id), "points": "3"}
        )
        chore = service.get_chore(chore_id)
        assert chore["title"] == "Trash"
        assert chore["assigned_to"] == member_id
        assert chore["points"] == 3

    def test_unknown_fields_are_ignored_on_create(self, service):
        chore_id = service.add_chore({"title": "Trash", "color": "red"})
        assert service.get_chore(chore_id)["title"] == "Trash"

    def test_missing_title(self, service):
        with pytest.raises(ValidationError, match="Title is required"):
            service.add_chore({"points": 2})

    def test_unknown_assignee_rejected_before_store(self, service, store):
        with pytest.raises(InvalidReferenceError):
            service.add_chore({"title": "Trash", "assigned_to": 9999})
        assert store.list_chores() == []

    @pytest.mark.parametrize(
        "fields",
        [
            {"title": "Trash", "points": -1},
            {"title": "Trash", "points": "many"},
            {"title": "Trash", "assigned_to": "Dad"},
            {"title": "Trash", "priority": ""},
        ],
    )
    def test_invalid_values(self, service, fields):
        with pytest.raises(ValidationError):
            service.add_chore(fields)

    def test_body_must_be_object(self, service):
        with pytest.raises(ValidationError):
            service.add_chore(["Trash"])

    def test_new_chores_start_pending(self, service, store, member_id):
        chore_id = service.add_chore({"title": "Trash", "points": 4, "status": "completed"})

        assert service.get_chore(chore_id)["status"] == "pending"
        chore = service.complete_chore(chore_id, member_id)
        assert chore["completed_at"] is not None
        assert store.count_completions(chore_id) == 1


class TestListChores:
    def test_rejects_unknown_status_filter(self, service):
        with pytest.raises(ValidationError):
            service.list_chores(status="archived")

    def test_assignee_filter_from_query_string(self, service, member_id):
        service.add_chore({"title": "Mine", "assigned_to": member_id})
        service.add_chore({"title": "Unassigned"})

        chores = service.list_chores(assigned_to=str(member_id))

        assert [c["title"] for c in chores] == ["Mine"]

    def test_empty_filters_are_ignored(self, service):
        service.add_chore({"title": "Trash"})
        assert len(service.list_chores(status="", assigned_to="")) == 1


class TestUpdateChore:
    def test_any_status_transition_allowed(self, service):
        chore_id = service.add_chore({"title": "Trash"})
        for status in ("completed", "pending", "in-progress", "pending"):
            service.update_chore(chore_id, {"status": status})
            assert service.get_chore(chore_id)["status"] == status

    def test_direct_completion_writes_no_history(self, service, store):
        chore_id = service.add_chore({"title": "Trash"})
        service.update_chore(chore_id, {"status": "completed"})

        assert store.count_completions(chore_id) == 0
        assert service.get_chore(chore_id)["completed_at"] is None

    def test_not_found_is_distinct_from_validation(self, service):
        with pytest.raises(NotFoundError):
            service.update_chore(9999, {"status": "pending"})

    @pytest.mark.parametrize(
        "fields",
        [{}, {"owner": "x"}, {"assigned_to": 9999}, {"status": "archived"}, {"title": ""}],
    )
    def test_missing_chore_wins_over_bad_fields(self, service, fields):
        with pytest.raises(NotFoundError):
            service.update_chore(9999, fields)

    def test_unknown_keys_rejected(self, service):
        chore_id = service.add_chore({"title": "Trash"})
        with pytest.raises(ValidationError, match="completed_at"):
            service.update_chore(chore_id, {"completed_at": "2024-01-01"})

    def test_empty_update_rejected(self, service):
        chore_id = service.add_chore({"title": "Trash"})
        with pytest.raises(ValidationError):
            service.update_chore(chore_id, {})

    def test_reassign_to_unknown_member(self, service):
        chore_id = service.add_chore({"title": "Trash"})
        with pytest.raises(InvalidReferenceError):
            service.update_chore(chore_id, {"assigned_to": 9999})

    def test_unassign(self, service, member_id):
        chore_id = service.add_chore({"title": "Trash", "assigned_to": member_id})
        service.update_chore(chore_id, {"assigned_to": None})
        assert service.get_chore(chore_id)["assigned_to"] is None


class TestCompleteChore:
    def test_complete(self, service, member_id):
        chore_id = service.add_chore({"title": "Trash", "assigned_to": member_id, "points": 3})

        chore = service.complete_chore(chore_id, member_id)

        assert chore["status"] == "completed"
        assert chore["completed_at"]
        completions = service.list_completions(chore_id=chore_id)
        assert len(completions) == 1
        assert completions[0]["points_earned"] == 3
        assert completions[0]["chore_title"] == "Trash"

    def test_complete_from_in_progress(self, service, member_id):
        chore_id = service.add_chore({"title": "Trash"})
        service.update_chore(chore_id, {"status": "in-progress"})

        assert service.complete_chore(chore_id, member_id)["status"] == "completed"

    def test_member_required(self, service):
        chore_id = service.add_chore({"title": "Trash"})
        with pytest.raises(ValidationError):
            service.complete_chore(chore_id, None)

    def test_unknown_chore(self, service, member_id):
        with pytest.raises(NotFoundError):
            service.complete_chore(9999, member_id)

    def test_unknown_member(self, service):
        chore_id = service.add_chore({"title": "Trash"})
        with pytest.raises(InvalidReferenceError):
            service.complete_chore(chore_id, 9999)

    def test_recompletion_rejected_by_default(self, service, member_id):
        chore_id = service.add_chore({"title": "Trash"})
        service.complete_chore(chore_id, member_id)

        with pytest.raises(ConflictError):
            service.complete_chore(chore_id, member_id)
        assert len(service.list_completions(chore_id=chore_id)) == 1

    def test_recompletion_allowed_by_policy(self, store, member_id):
        service = ChoreService(store, allow_recomplete=True)
        chore_id = service.add_chore({"title": "Trash"})
        service.complete_chore(chore_id, member_id)
        service.complete_chore(chore_id, member_id)

        assert len(service.list_completions(chore_id=chore_id)) == 2

    def test_leaderboard(self, service, member_id):
        chore_id = service.add_chore({"title": "Trash", "points": 4})
        service.complete_chore(chore_id, member_id)

        board = service.leaderboard()
        assert board[0]["member_id"] == member_id
        assert board[0]["total_points"] == 4


def test_delete_is_not_implemented(service):
    chore_id = service.add_chore({"title": "Trash"})
    with pytest.raises(FeatureNotImplementedError):
        service.delete_chore(chore_id)
    assert service.get_chore(chore_id)["title"] == "Trash"
