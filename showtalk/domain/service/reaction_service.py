"""Reaction domain service."""

from collections import defaultdict
from datetime import datetime
from uuid import uuid4

import logfire

from showtalk.domain.error import NotFoundError
from showtalk.domain.model.reaction import (
    Reaction,
    ReactionSummary,
    ReactionType,
    summarize_reactions,
)
from showtalk.domain.repository import ReactionRepository
from showtalk.domain.value import CommentId, ReactionId, ReactionTypeId, UserId

from .base import Service
from .comment_service import CommentService


class ReactionService(Service):
    """Domain service for comment reactions."""

    def __init__(
        self,
        reaction_repository: ReactionRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize reaction service.

        Args:
            reaction_repository: Reaction repository
            comment_service: Comment domain service
        """
        self.reaction_repository = reaction_repository
        self.comment_service = comment_service

    async def list_reaction_types(self) -> list[ReactionType]:
        """List the reaction catalogue ordered by category, then name."""
        with logfire.span("reaction_service.list_reaction_types"):
            types = await self.reaction_repository.find_types()
            logfire.info("Reaction types retrieved", count=len(types))
            return types

    async def react(
        self,
        comment_id: CommentId,
        user_id: UserId,
        reaction_type_id: ReactionTypeId,
    ) -> Reaction:
        """Add or replace a user's reaction on a comment.

        Args:
            comment_id: Comment ID
            user_id: User ID
            reaction_type_id: Chosen reaction type

        Returns:
            The stored reaction

        Raises:
            NotFoundError: If the comment or the reaction type doesn't exist
            ContentDeletedException: If the comment has been deleted
        """
        with logfire.span(
            "reaction_service.react",
            comment_id=str(comment_id),
            user_id=str(user_id),
            reaction_type_id=str(reaction_type_id),
        ):
            await self.comment_service.get_active_comment(comment_id)

            reaction_type = await self.reaction_repository.find_type_by_id(
                reaction_type_id
            )
            if not reaction_type:
                logfire.warn(
                    "Unknown reaction type", reaction_type_id=str(reaction_type_id)
                )
                raise NotFoundError("ReactionType", str(reaction_type_id))

            reaction = Reaction(
                id=ReactionId(uuid4()),
                comment_id=comment_id,
                user_id=user_id,
                reaction_type=reaction_type,
                created_at=datetime.now(),
            )
            saved = await self.reaction_repository.upsert(reaction)
            logfire.info(
                "Reaction recorded",
                comment_id=str(comment_id),
                user_id=str(user_id),
                reaction=reaction_type.name,
            )
            return saved

    async def remove_reaction(self, comment_id: CommentId, user_id: UserId) -> bool:
        """Remove a user's reaction from a comment.

        Returns:
            True if a reaction was removed, False if none existed
        """
        with logfire.span(
            "reaction_service.remove_reaction",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            deleted = await self.reaction_repository.delete_by_user_and_comment(
                user_id=user_id, comment_id=comment_id
            )
            logfire.info(
                "Reaction removed" if deleted else "No reaction to remove",
                comment_id=str(comment_id),
                user_id=str(user_id),
            )
            return deleted

    async def get_reactions(
        self, comment_ids: list[CommentId], viewer_id: UserId | None = None
    ) -> dict[CommentId, tuple[ReactionSummary, ...]]:
        """Summarize reactions on several comments.

        Args:
            comment_ids: Comment IDs
            viewer_id: Current user, used to flag their own reaction

        Returns:
            Reaction summaries per comment that has any reactions
        """
        if not comment_ids:
            return {}

        reactions = await self.reaction_repository.find_by_comments(comment_ids)

        by_comment: dict[CommentId, list[Reaction]] = defaultdict(list)
        for reaction in reactions:
            by_comment[reaction.comment_id].append(reaction)

        return {
            cid: summarize_reactions(items, viewer_id)
            for cid, items in by_comment.items()
        }
