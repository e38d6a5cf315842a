"""
Tests for the individual lifecycle stages and the stage error taxonomy.
"""

import asyncio

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from autopromote.exceptions import (
    AmbiguousStateError,
    ApprovalError,
    ConflictError,
    CreationError,
    ErrorKind,
    LabelError,
    MergeError,
    NotFoundError,
    PollError,
    StageError,
    UnmergeableError,
)
from autopromote.lifecycle import (
    PROMOTION_LABELS,
    approve_pull_request,
    attach_labels,
    create_pull_request,
    merge_if_clean,
)
from autopromote.testing import MockGitHubClient
from autopromote.types.pulls import MergeState

branch_strategy = st.text(
    min_size=1,
    max_size=40,
    alphabet=st.characters(whitelist_categories=("L", "N"), whitelist_characters="-_/."),
)


class TestCreator:
    @given(head=branch_strategy)
    @settings(max_examples=50, deadline=None)
    def test_empty_base_defaults_to_master(self, head: str) -> None:
        """
        Property: an empty base is replaced by master
        """
        client = MockGitHubClient(identity="artifact")

        pr = asyncio.run(create_pull_request(client, head=head, base="", title="t", body="b"))

        assert pr.base == "master"
        assert client.get_calls("pulls.create")[0].args == (head, "master", "t")

    def test_explicit_base_is_kept(self) -> None:
        client = MockGitHubClient(identity="artifact")

        pr = asyncio.run(create_pull_request(client, head="gen", base="release", title="", body=""))

        assert pr.base == "release"

    def test_title_and_body_pass_through(self) -> None:
        client = MockGitHubClient(identity="artifact")

        asyncio.run(create_pull_request(client, head="gen", base="main", title="", body=""))

        call = client.get_calls("pulls.create")[0]
        assert call.args[2] == ""
        assert call.kwargs["body"] == ""
        assert call.kwargs["maintainer_can_modify"] is True

    def test_api_error_becomes_creation_error(self) -> None:
        client = MockGitHubClient(identity="artifact")
        client.pulls.configure_create(error=NotFoundError("HTTP_404", "Not Found"))

        with pytest.raises(CreationError) as exc_info:
            asyncio.run(create_pull_request(client, head="gen", base="main", title="", body=""))

        assert exc_info.value.pr_number is None
        assert isinstance(exc_info.value.__cause__, NotFoundError)


class TestLabeler:
    def test_applies_promotion_labels(self) -> None:
        client = MockGitHubClient(identity="artifact")

        labels = asyncio.run(attach_labels(client, 42))

        assert [label.name for label in labels] == PROMOTION_LABELS
        assert client.get_calls("issues.add_labels")[0].args == (42, ["manifest_generation", "skip_tests"])

    def test_api_error_becomes_label_error(self) -> None:
        client = MockGitHubClient(identity="artifact")
        client.issues.configure_add_labels(error=NotFoundError("HTTP_404", "Not Found"))

        with pytest.raises(LabelError) as exc_info:
            asyncio.run(attach_labels(client, 42))

        assert exc_info.value.pr_number == 42
        assert not exc_info.value.fatal


class TestApprover:
    def test_submits_single_approve_review(self) -> None:
        client = MockGitHubClient(identity="action", login="action-bot")

        review = asyncio.run(approve_pull_request(client, 42))

        assert review.state == "APPROVED"
        assert review.reviewer == "action-bot"
        assert client.call_count("reviews.create") == 1

    def test_failure_is_not_retried(self) -> None:
        client = MockGitHubClient(identity="action")
        client.reviews.configure_create(error=ConflictError("HTTP_409", "conflict"))

        with pytest.raises(ApprovalError):
            asyncio.run(approve_pull_request(client, 42))

        assert client.call_count("reviews.create") == 1


class TestMerger:
    @given(state=st.sampled_from([s.value for s in MergeState if s is not MergeState.CLEAN]))
    @settings(max_examples=20, deadline=None)
    def test_only_clean_is_merged(self, state: str) -> None:
        """
        Property: any state other than clean is refused without a merge call
        """
        client = MockGitHubClient(identity="action")

        with pytest.raises(UnmergeableError) as exc_info:
            asyncio.run(merge_if_clean(client, 9, state))

        assert exc_info.value.state == state
        assert not client.was_called("pulls.merge")

    def test_clean_is_merged(self) -> None:
        client = MockGitHubClient(identity="action")

        result = asyncio.run(merge_if_clean(client, 42, MergeState.CLEAN))

        assert result.merged
        assert client.get_calls("pulls.merge")[0].args == (42,)

    def test_api_error_becomes_merge_error(self) -> None:
        client = MockGitHubClient(identity="action")
        client.pulls.configure_merge(error=ConflictError("HTTP_409", "Head branch was modified"))

        with pytest.raises(MergeError) as exc_info:
            asyncio.run(merge_if_clean(client, 42, "clean"))

        assert exc_info.value.state == "clean"
        assert "Head branch was modified" in exc_info.value.message


class TestErrorTaxonomy:
    def test_only_label_errors_are_non_fatal(self) -> None:
        assert [kind for kind in ErrorKind if not kind.fatal] == [ErrorKind.LABEL]

    @pytest.mark.parametrize(
        "error_cls, kind, stage",
        [
            (CreationError, ErrorKind.CREATION, "create"),
            (LabelError, ErrorKind.LABEL, "label"),
            (ApprovalError, ErrorKind.APPROVAL, "approve"),
            (PollError, ErrorKind.POLL, "watch"),
            (AmbiguousStateError, ErrorKind.AMBIGUOUS_STATE, "watch"),
            (UnmergeableError, ErrorKind.UNMERGEABLE, "gate"),
            (MergeError, ErrorKind.MERGE, "merge"),
        ],
    )
    def test_kind_and_stage(self, error_cls: type[StageError], kind: ErrorKind, stage: str) -> None:
        error = error_cls("boom", pr_number=3, state="blocked")

        assert error.kind is kind
        assert error.kind.stage == stage
        assert str(error) == f"[{kind.value}] boom"
        assert error.pr_number == 3
        assert error.state == "blocked"
