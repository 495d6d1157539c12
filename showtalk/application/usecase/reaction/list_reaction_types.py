"""List reaction types use case."""

from pydantic import BaseModel

from showtalk.domain.model.reaction import DEFAULT_CATEGORY, ReactionType
from showtalk.domain.service import ReactionService


class ReactionTypeItem(BaseModel):
    """Reaction type in responses."""

    id: str
    name: str
    description: str
    emoji: str | None
    category: str

    @classmethod
    def from_domain(cls, reaction_type: ReactionType) -> "ReactionTypeItem":
        return cls(
            id=str(reaction_type.id),
            name=reaction_type.name,
            description=reaction_type.description,
            emoji=reaction_type.emoji,
            category=reaction_type.category or DEFAULT_CATEGORY,
        )


class ListReactionTypesResponse(BaseModel):
    """List reaction types response."""

    reaction_types: dict[str, list[ReactionTypeItem]]


class ListReactionTypesUseCase:
    """Use case for listing the reaction catalogue grouped by category."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize list reaction types use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self) -> ListReactionTypesResponse:
        """Execute list reaction types flow.

        Types without a category are listed under "other". Categories keep
        the repository order (category, then name).

        Returns:
            Reaction types keyed by category
        """
        types = await self.reaction_service.list_reaction_types()

        grouped: dict[str, list[ReactionTypeItem]] = {}
        for reaction_type in types:
            item = ReactionTypeItem.from_domain(reaction_type)
            grouped.setdefault(item.category, []).append(item)

        return ListReactionTypesResponse(reaction_types=grouped)
