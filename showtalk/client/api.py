"""Async HTTP client for the comments API."""

from datetime import datetime
from typing import Any

import httpx
import logfire
from pydantic import BaseModel, ValidationError

from showtalk.domain.value import SortMode, VoteValue

from .error import CommentsAPIError


class ReactionTypePayload(BaseModel):
    """Reaction type as sent by the API."""

    id: str
    name: str
    description: str = ""
    emoji: str | None = None
    category: str | None = None


class ReactionSummaryPayload(BaseModel):
    """Reaction count on a comment."""

    reaction_type: ReactionTypePayload
    count: int = 0
    reacted: bool = False


class CommentPayload(BaseModel):
    """Comment node as sent by the API.

    Counters and collections are optional so partial payloads still parse.
    """

    id: str
    discussion_id: str
    author_id: str
    author_handle: str
    content: str
    parent_id: str | None = None
    depth: int = 0
    spoiler: bool = False
    is_deleted: bool = False
    created_at: datetime
    score: int = 0
    upvotes: int = 0
    downvotes: int = 0
    user_vote: VoteValue | None = None
    reactions: list[ReactionSummaryPayload] = []
    reply_count: int = 0
    has_more_replies: bool = False
    replies: list["CommentPayload"] = []


class PaginationPayload(BaseModel):
    limit: int = 0
    offset: int = 0
    has_more: bool = False


class CommentsPagePayload(BaseModel):
    """A page of comment threads."""

    comments: list[CommentPayload] = []
    pagination: PaginationPayload = PaginationPayload()


class VotePayload(BaseModel):
    """Result of casting a vote: the comment's fresh tally."""

    value: VoteValue
    score: int
    upvotes: int
    downvotes: int


class ReactionPayload(BaseModel):
    """A stored reaction."""

    id: str
    comment_id: str
    reaction_type: ReactionTypePayload


class CommentsAPIClient:
    """Client for the discussion comments endpoints.

    Every failure (no response, non-2xx status, unexpected body) surfaces as
    CommentsAPIError so callers have a single error to handle.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API origin, e.g. http://localhost:8000
            token: JWT sent as a bearer token on every request
            http_client: Shared httpx client (a private one is created if omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = http_client or httpx.AsyncClient()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._client.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logfire.error("Comments API transport error", path=path, error=str(e))
            raise CommentsAPIError(f"HTTP error calling {path}: {e}")

        if not response.is_success:
            logfire.warn(
                "Comments API request failed",
                method=method,
                path=path,
                status_code=response.status_code,
                error=response.text,
            )
            raise CommentsAPIError(
                f"{method} {path} failed: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise CommentsAPIError(
                f"Invalid JSON from {path}", status_code=response.status_code
            ) from e

    @staticmethod
    def _parse(model: type[BaseModel], data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise CommentsAPIError(f"Unexpected {model.__name__}: {e}") from e

    async def fetch_comments(
        self,
        discussion_id: str,
        sort: SortMode = SortMode.NEW,
        limit: int | None = None,
        offset: int = 0,
        max_depth: int | None = None,
    ) -> CommentsPagePayload:
        """Fetch a page of a discussion's threads."""
        data = await self._request(
            "GET",
            f"/discussions/{discussion_id}/comments",
            params={
                "sort": SortMode(sort).value,
                "limit": limit,
                "offset": offset,
                "max_depth": max_depth,
            },
        )
        return self._parse(CommentsPagePayload, data)

    async def fetch_subthread(
        self,
        discussion_id: str,
        parent_id: str,
        limit: int | None = None,
        offset: int = 0,
        max_depth: int | None = None,
    ) -> CommentsPagePayload:
        """Fetch the replies below a comment cut off by the depth cap.

        The returned page holds the parent as its only comment.
        """
        data = await self._request(
            "GET",
            f"/discussions/{discussion_id}/comments",
            params={
                "parent_id": parent_id,
                "limit": limit,
                "offset": offset,
                "max_depth": max_depth,
            },
        )
        return self._parse(CommentsPagePayload, data)

    async def add_comment(
        self,
        discussion_id: str,
        content: str,
        parent_id: str | None = None,
        spoiler: bool = False,
    ) -> CommentPayload:
        """Post a comment or reply; returns the stored comment."""
        data = await self._request(
            "POST",
            "/discussions/comments",
            json={
                "discussion_id": discussion_id,
                "content": content,
                "parent_id": parent_id,
                "spoiler": spoiler,
            },
        )
        return self._parse(CommentPayload, (data or {}).get("comment"))

    async def vote(self, comment_id: str, value: VoteValue) -> VotePayload:
        data = await self._request(
            "POST",
            "/discussions/comments/vote",
            json={"comment_id": comment_id, "value": VoteValue(value).value},
        )
        vote = (data or {}).get("vote") or {}
        return self._parse(VotePayload, {**(data or {}), "value": vote.get("value")})

    async def remove_vote(self, comment_id: str) -> None:
        await self._request(
            "DELETE", "/discussions/comments/vote", params={"comment_id": comment_id}
        )

    async def react(self, comment_id: str, reaction_type_id: str) -> ReactionPayload:
        data = await self._request(
            "POST",
            "/discussions/comments/reaction",
            json={"comment_id": comment_id, "reaction_type_id": reaction_type_id},
        )
        return self._parse(ReactionPayload, (data or {}).get("reaction"))

    async def remove_reaction(self, comment_id: str) -> None:
        await self._request(
            "DELETE",
            "/discussions/comments/reaction",
            params={"comment_id": comment_id},
        )

    async def delete_comment(self, comment_id: str) -> None:
        await self._request("DELETE", f"/discussions/comments/{comment_id}")
