"""Entity identity shared by the Session aggregate and its refresh tokens.

Entities compose an EntityIdentity rather than inheriting from a base class.
IDs are UUIDv7 (time-ordered) and are assigned when the entity is created, so
rotation chains built in memory already carry stable previous_token_id links.
"""

from dataclasses import dataclass, field
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(slots=True, kw_only=True)
class EntityIdentity:
    """Identity plus persistence state of an entity.

    Attributes:
        id: Entity identifier (UUIDv7).
        is_new: True until a repository has stored the entity.
    """

    id: UUID = field(default_factory=uuid7)
    is_new: bool = True

    @classmethod
    def existing(cls, entity_id: UUID) -> "EntityIdentity":
        """Identity for an entity loaded from storage."""
        return cls(id=entity_id, is_new=False)

    def mark_persisted(self) -> None:
        """Record that storage now holds this entity."""
        self.is_new = False
