"""Unit tests for issue, label and comment operations in StateStore."""

import pytest

from hubsim.store import Comment, Issue, IssueNotFoundError, StateStore


@pytest.mark.unit
class TestSetIssues:
    """Tests for set_issues."""

    def test_set_issues_replaces_all(self, store: StateStore) -> None:
        store.set_issues([Issue(number=1, title="Old")])
        store.set_issues([Issue(number=2, title="New")])

        assert [i.number for i in store.list_issues()] == [2]

    def test_next_number_after_highest_seeded(self, store: StateStore) -> None:
        store.set_issues([Issue(number=3), Issue(number=7)])

        created = store.create_issue("Next")

        assert created.number == 8

    def test_reseeding_never_lowers_next_number(self, store: StateStore) -> None:
        """Numbers handed out before a reseed are not reused."""
        store.set_issues([Issue(number=10)])
        store.set_issues([Issue(number=1)])

        assert store.create_issue("After reseed").number == 11

    def test_labels_deduplicated(self, store: StateStore) -> None:
        store.set_issues([Issue(number=1, labels=["bug", "bug", "ui"])])

        assert store.get_issue(1).labels == ["bug", "ui"]

    def test_duplicate_number_rejected(self, store: StateStore) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            store.set_issues([Issue(number=1), Issue(number=1)])

    def test_non_positive_number_rejected(self, store: StateStore) -> None:
        with pytest.raises(ValueError, match="positive"):
            store.set_issues([Issue(number=0)])

    def test_seeded_issue_is_copied(self, store: StateStore) -> None:
        """Mutating the caller's object after seeding does not reach the store."""
        issue = Issue(number=1, title="Original")
        store.set_issues([issue])
        issue.title = "Changed"

        assert store.get_issue(1).title == "Original"


@pytest.mark.unit
class TestCreateIssue:
    """Tests for create_issue."""

    def test_first_issue_is_number_one(self, store: StateStore) -> None:
        issue = store.create_issue("First", body="text", labels=["bug"])

        assert issue.number == 1
        assert issue.state == "open"
        assert issue.body == "text"
        assert issue.labels == ["bug"]

    def test_numbers_increase(self, store: StateStore) -> None:
        numbers = [store.create_issue(f"Issue {n}").number for n in range(3)]

        assert numbers == [1, 2, 3]

    def test_empty_assignee_stored_as_none(self, store: StateStore) -> None:
        assert store.create_issue("X", assignee="").assignee is None


@pytest.mark.unit
class TestGetAndListIssues:
    """Tests for get_issue and list_issues."""

    def test_get_missing_issue_raises(self, store: StateStore) -> None:
        with pytest.raises(IssueNotFoundError, match="#5"):
            store.get_issue(5)

    def test_list_is_ascending_regardless_of_seed_order(self, store: StateStore) -> None:
        store.set_issues([Issue(number=4), Issue(number=2), Issue(number=3), Issue(number=1)])

        assert [i.number for i in store.list_issues()] == [1, 2, 3, 4]

    def test_returned_issue_is_a_copy(self, store: StateStore) -> None:
        store.set_issues([Issue(number=1, labels=["bug"])])

        store.get_issue(1).labels.append("hacked")

        assert store.get_issue(1).labels == ["bug"]


@pytest.mark.unit
class TestUpdateIssue:
    """Tests for update_issue."""

    @pytest.fixture(autouse=True)
    def _seed(self, store: StateStore) -> None:
        store.set_issues(
            [Issue(number=1, title="T", body="B", labels=["bug"], assignee="alice")]
        )

    def test_state_only_leaves_other_fields(self, store: StateStore) -> None:
        updated = store.update_issue(1, state="closed")

        assert updated.state == "closed"
        assert updated.title == "T"
        assert updated.body == "B"
        assert updated.labels == ["bug"]
        assert updated.assignee == "alice"

    def test_labels_replace_wholesale(self, store: StateStore) -> None:
        updated = store.update_issue(1, labels=["ui", "ui", "docs"])

        assert updated.labels == ["ui", "docs"]

    def test_empty_assignee_clears(self, store: StateStore) -> None:
        assert store.update_issue(1, assignee="").assignee is None

    def test_invalid_state_rejected(self, store: StateStore) -> None:
        with pytest.raises(ValueError):
            store.update_issue(1, state="merged")

    def test_missing_issue_raises(self, store: StateStore) -> None:
        with pytest.raises(IssueNotFoundError):
            store.update_issue(9, title="x")


@pytest.mark.unit
class TestLabels:
    """Tests for label operations."""

    @pytest.fixture(autouse=True)
    def _seed(self, store: StateStore) -> None:
        store.set_issues([Issue(number=1, labels=["bug"])])

    def test_add_is_idempotent(self, store: StateStore) -> None:
        store.add_labels(1, ["ui"])
        result = store.add_labels(1, ["ui", "bug"])

        assert result == ["bug", "ui"]

    def test_set_overwrites(self, store: StateStore) -> None:
        assert store.set_labels(1, ["docs"]) == ["docs"]
        assert store.get_labels(1) == ["docs"]

    def test_remove_returns_remaining(self, store: StateStore) -> None:
        store.add_labels(1, ["ui"])

        assert store.remove_label(1, "bug") == ["ui"]

    def test_remove_absent_label_is_noop(self, store: StateStore) -> None:
        assert store.remove_label(1, "nope") == ["bug"]

    def test_labels_are_case_sensitive(self, store: StateStore) -> None:
        assert store.add_labels(1, ["Bug"]) == ["bug", "Bug"]

    def test_missing_issue_raises(self, store: StateStore) -> None:
        with pytest.raises(IssueNotFoundError):
            store.add_labels(2, ["x"])


@pytest.mark.unit
class TestComments:
    """Tests for comment operations."""

    @pytest.fixture(autouse=True)
    def _seed(self, store: StateStore) -> None:
        store.set_issues([Issue(number=1), Issue(number=2)])

    def test_add_comment_uses_authenticated_user(self, store: StateStore) -> None:
        store.authenticated_user = "octocat"

        comment = store.add_comment(1, "Hello")

        assert comment.author == "octocat"
        assert comment.body == "Hello"

    def test_comment_ids_global_across_issues(self, store: StateStore) -> None:
        first = store.add_comment(1, "a")
        second = store.add_comment(2, "b")

        assert second.id == first.id + 1

    def test_seeded_comments_bump_counter(self, store: StateStore) -> None:
        store.set_comments(1, [Comment(id=41, author="bob", body="seeded")])

        assert store.add_comment(2, "new").id == 42

    def test_seeded_id_of_other_issue_rejected(self, store: StateStore) -> None:
        store.set_comments(1, [Comment(id=5, author="bob", body="one")])

        with pytest.raises(ValueError, match="already belongs to issue #1"):
            store.set_comments(2, [Comment(id=5, author="amy", body="two")])

        assert store.list_comments(2) == []

    def test_reseeding_same_issue_may_reuse_ids(self, store: StateStore) -> None:
        store.set_comments(1, [Comment(id=5, author="bob", body="old")])
        store.set_comments(1, [Comment(id=5, author="bob", body="new")])

        assert [c.body for c in store.list_comments(1)] == ["new"]

    def test_duplicate_seeded_ids_rejected(self, store: StateStore) -> None:
        with pytest.raises(ValueError, match="Duplicate comment id"):
            store.set_comments(
                1, [Comment(id=3, author="a", body="x"), Comment(id=3, author="b", body="y")]
            )

    def test_non_positive_seeded_id_rejected(self, store: StateStore) -> None:
        with pytest.raises(ValueError, match="positive"):
            store.set_comments(1, [Comment(id=0, author="a", body="x")])

    def test_list_in_creation_order(self, store: StateStore) -> None:
        store.add_comment(1, "first")
        store.add_comment(1, "second")

        assert [c.body for c in store.list_comments(1)] == ["first", "second"]

    def test_list_for_issue_without_comments(self, store: StateStore) -> None:
        assert store.list_comments(2) == []

    def test_list_for_missing_issue_raises(self, store: StateStore) -> None:
        with pytest.raises(IssueNotFoundError):
            store.list_comments(3)

    def test_comment_counts(self, store: StateStore) -> None:
        store.add_comment(1, "a")
        store.add_comment(1, "b")

        assert store.comment_counts() == {1: 2}


@pytest.mark.unit
class TestReset:
    """Tests for reset."""

    def test_reset_clears_everything(self, store: StateStore) -> None:
        store.create_issue("x")
        store.authenticated_user = "someone"
        store.set_project(1, "Board", [])
        store.mark_project_invalid(2)

        store.reset()

        assert store.list_issues() == []
        assert store.list_projects() == []
        assert not store.is_project_invalid(2)
        assert store.authenticated_user == "test-user"
        assert store.create_issue("y").number == 1
