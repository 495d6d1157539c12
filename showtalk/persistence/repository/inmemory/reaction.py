"""In-memory reaction repository for testing."""

from typing import Optional, Sequence

from showtalk.domain.model.reaction import DEFAULT_CATEGORY, Reaction, ReactionType
from showtalk.domain.repository.reaction import ReactionRepository
from showtalk.domain.value import CommentId, ReactionTypeId, UserId


class InMemoryReactionRepository(ReactionRepository):
    """In-memory implementation of ReactionRepository for testing."""

    def __init__(self, reaction_types: Sequence[ReactionType] = ()) -> None:
        self._types: dict[ReactionTypeId, ReactionType] = {
            rt.id: rt for rt in reaction_types
        }
        self._reactions: list[Reaction] = []

    def add_type(self, reaction_type: ReactionType) -> ReactionType:
        """Register a reaction type (stands in for the seed migration)."""
        self._types[reaction_type.id] = reaction_type
        return reaction_type

    async def find_types(self) -> list[ReactionType]:
        """List all reaction types ordered by category, then name."""
        return sorted(
            self._types.values(),
            key=lambda rt: (rt.category or DEFAULT_CATEGORY, rt.name),
        )

    async def find_type_by_id(
        self, reaction_type_id: ReactionTypeId
    ) -> Optional[ReactionType]:
        """Find a reaction type by ID."""
        return self._types.get(reaction_type_id)

    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[Reaction]:
        """Find a user's reaction on a comment."""
        for reaction in self._reactions:
            if reaction.user_id == user_id and reaction.comment_id == comment_id:
                return reaction
        return None

    async def upsert(self, reaction: Reaction) -> Reaction:
        """Store the reaction, switching the type of an existing one."""
        for i, existing in enumerate(self._reactions):
            if (
                existing.user_id == reaction.user_id
                and existing.comment_id == reaction.comment_id
            ):
                updated = existing.model_copy(
                    update={"reaction_type": reaction.reaction_type}
                )
                self._reactions[i] = updated
                return updated

        self._reactions.append(reaction)
        return reaction

    async def delete_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> bool:
        """Delete a user's reaction on a comment."""
        for i, reaction in enumerate(self._reactions):
            if reaction.user_id == user_id and reaction.comment_id == comment_id:
                self._reactions.pop(i)
                return True
        return False

    async def find_by_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> list[Reaction]:
        """Find all reactions on several comments (batch query)."""
        if not comment_ids:
            return []

        wanted = set(comment_ids)
        return [r for r in self._reactions if r.comment_id in wanted]
