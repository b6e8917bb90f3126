"""
RelationshipResolver - cross-entity id → summary lookup

Linking UIs ("attach this goal to that feature") only need an id, a display
name and a type tag. Each linkable type is registered with the service that
owns it and the attribute used as its display name:

    resolver.register("FEATURE", features, "name")
    resolver.register("GOAL", goals, "title")

Adding a new linkable type is a `register` call; the resolver itself does
not change. Lookups never raise for unknown types or ids.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from services.entity_service import EntityService
from utils.id_generator import normalize_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntitySummary:
    """Read-only projection of a record, computed on demand"""
    id: str
    name: str
    type: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "type": self.type}


@dataclass
class LinkableType:
    service: EntityService
    name_field: str


class RelationshipResolver:
    """Registry of linkable entity types"""

    def __init__(self):
        self._types: Dict[str, LinkableType] = {}

    def register(self, entity_type: str, service: EntityService, name_field: str):
        """Make `entity_type` linkable, replacing any earlier registration"""
        self._types[entity_type.upper()] = LinkableType(service=service, name_field=name_field)

    @property
    def types(self) -> List[str]:
        return sorted(self._types)

    def _summarize(self, entity_type: str, linkable: LinkableType, record) -> EntitySummary:
        name = getattr(record, linkable.name_field, None)
        return EntitySummary(id=normalize_id(record.id), name=str(name or ""), type=entity_type)

    async def get_entity_summary(self, entity_type: str, entity_id: Any) -> Optional[EntitySummary]:
        """
        Summary of one record, or None if the type is not linkable, the id
        is malformed or no record has that id.
        """
        entity_type = entity_type.upper()
        linkable = self._types.get(entity_type)
        if linkable is None:
            logger.debug(f"No linkable type registered for {entity_type}")
            return None

        try:
            record = await linkable.service.get(entity_id)
        except ValueError:
            return None

        if record is None:
            return None
        return self._summarize(entity_type, linkable, record)

    async def get_available_entities(self, entity_type: str) -> List[EntitySummary]:
        """Every record of a type as summaries (empty for unknown types)"""
        entity_type = entity_type.upper()
        linkable = self._types.get(entity_type)
        if linkable is None:
            return []
        return [self._summarize(entity_type, linkable, r) for r in await linkable.service.list()]
