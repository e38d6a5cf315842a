"""Async pull requests resource client."""

from typing import TYPE_CHECKING, Any

from autopromote.async_transport import invalid_response
from autopromote.types.pulls import MergeResult, MergeState, PullRequest

if TYPE_CHECKING:
    from autopromote.async_transport import AsyncHTTPTransport


class AsyncPullsClient:
    """Async client for pull request operations on one repository."""

    def __init__(self, transport: "AsyncHTTPTransport", owner: str, repo: str) -> None:
        """
        Initialize the async pulls client.

        Args:
            transport: Async HTTP transport for making requests
            owner: Repository owner (user or organization)
            repo: Repository name
        """
        self.transport = transport
        self.owner = owner
        self.repo = repo

    @property
    def _base_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/pulls"

    async def create(
        self,
        head: str,
        base: str,
        title: str,
        body: str | None = None,
        maintainer_can_modify: bool = True,
    ) -> PullRequest:
        """
        Create a pull request.

        Args:
            head: Branch containing changes
            base: Branch to merge into
            title: Pull request title
            body: Optional pull request description
            maintainer_can_modify: Whether maintainers may push to the head branch

        Returns:
            The created PullRequest, including its number

        Raises:
            ValidationError: If a PR already exists or a ref is invalid
            NotFoundError: If the repository is not found
        """
        request_body: dict[str, Any] = {
            "head": head,
            "base": base,
            "title": title,
            "maintainer_can_modify": maintainer_can_modify,
        }
        if body is not None:
            request_body["body"] = body

        data = await self.transport.request("POST", self._base_path, body=request_body)
        return self._parse_pull_request(data, f"POST {self._base_path}")

    async def get(self, number: int) -> PullRequest:
        """
        Get pull request information.

        GitHub computes ``mergeable_state`` in the background, so a freshly
        created PR usually reports ``unknown`` for a while.

        Args:
            number: The pull request number

        Returns:
            PullRequest with its current mergeable_state
        """
        path = f"{self._base_path}/{number}"
        data = await self.transport.request("GET", path)
        return self._parse_pull_request(data, f"GET {path}")

    async def merge(self, number: int) -> MergeResult:
        """
        Merge a pull request using the repository's default merge method.

        Args:
            number: The pull request number

        Returns:
            MergeResult with the merge commit sha

        Raises:
            ServerError: If GitHub answers with an unusable body
        """
        path = f"{self._base_path}/{number}/merge"
        data = await self.transport.request("PUT", path) or {}
        try:
            return MergeResult(
                pr_number=number,
                merged=data.get("merged", False),
                sha=data.get("sha", ""),
                message=data.get("message", ""),
            )
        except AttributeError as e:
            raise invalid_response(f"PUT {path}", e) from e

    def _parse_pull_request(self, data: dict[str, Any], what: str) -> PullRequest:
        """Parse pull request data from API response."""
        try:
            return PullRequest(
                number=data["number"],
                head=(data.get("head") or {}).get("ref", ""),
                base=(data.get("base") or {}).get("ref", ""),
                title=data.get("title", ""),
                body=data.get("body"),
                state=data.get("state", "open"),
                mergeable_state=data.get("mergeable_state") or MergeState.UNKNOWN.value,
                html_url=data.get("html_url", ""),
                draft=data.get("draft", False),
                merged=data.get("merged", False),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise invalid_response(what, e) from e
