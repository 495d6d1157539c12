"""Discussion entity."""

from datetime import datetime

from pydantic import Field

from showtalk.domain.model.common import DomainModel
from showtalk.domain.value import DiscussionEntityType, DiscussionId, UserId


class Discussion(DomainModel):
    """Discussion entity.

    A user-started conversation attached to a show, season or episode.
    Comments hang off a discussion; the discussion itself is created through
    the catalogue pages and is only read here.
    """

    id: DiscussionId
    entity_type: DiscussionEntityType
    entity_id: int  # External catalogue id of the show/season/episode
    author_id: UserId
    title: str = Field(min_length=1, max_length=300)
    content: str = ""
    spoiler: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
