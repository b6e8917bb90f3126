"""
EntityService - typed CRUD façade over one KeyedStore collection

Each business entity type gets a subclass naming its collection key, its
record model and its seed data:

    class TicketService(EntityService[Ticket]):
        collection = "tickets"
        model = Ticket
        seed = SEED_TICKETS

Services take the store through the constructor; nothing reaches into a
global store.
"""
import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar, Union

from models.records import CamelModel
from services.keyed_store import KeyedStore
from utils.id_generator import generate_id, normalize_id

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CamelModel)


class EntityService(Generic[RecordT]):
    """
    Typed list/get/add/update/delete over one collection

    Class attributes:
        collection: Store key of the collection
        model: Record model class
        seed: Records persisted on first access (stored, camelCase shape)
        id_field: Field that identifies a record
        id_type: Prefix family for generated ids (see utils.id_generator)
    """

    collection: str = ""
    model: Type[RecordT]
    seed: List[Dict[str, Any]] = []
    id_field: str = "id"
    id_type: str = "record"

    def __init__(self, store: KeyedStore):
        self.store = store

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def _to_models(self, items: List[Dict[str, Any]]) -> List[RecordT]:
        return [self.model.model_validate(item) for item in items]

    def _to_storage(self, item: Union[RecordT, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(item, dict):
            item = dict(item)
            if self.id_field == "id" and item.get("id") in (None, ""):
                item["id"] = generate_id(self.id_type)
            item = self.model.model_validate(item)
        return item.to_storage()

    def _alias_patch(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Accept snake_case or camelCase patch keys, return stored keys"""
        fields = self.model.model_fields
        aliased = {}
        for key, value in patch.items():
            if key in fields and fields[key].alias:
                key = fields[key].alias
            aliased[key] = value
        return aliased

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def list(self) -> List[RecordT]:
        """All records, seeding the collection on first access"""
        items = await self.store.get(self.collection, self.seed)
        return self._to_models(items)

    async def get(self, record_id: Any) -> Optional[RecordT]:
        """Record with `record_id`, or None"""
        wanted = normalize_id(record_id)
        for record in await self.list():
            if normalize_id(getattr(record, self.id_field)) == wanted:
                return record
        return None

    async def add(self, item: Union[RecordT, Dict[str, Any]]) -> List[RecordT]:
        """
        Append a record. Dicts are validated against the model first and
        get a generated id when they have none.
        """
        record = self._to_storage(item)
        items = await self.store.add_item(self.collection, record, self.seed, id_field=self.id_field)
        logger.info(f"Added {self.collection} record {record.get(self.id_field)}")
        return self._to_models(items)

    async def update(self, record_id: Any, patch: Dict[str, Any]) -> List[RecordT]:
        """
        Merge `patch` into one record; an unknown id changes nothing.

        The merged record is validated before anything is written.
        """
        patch = self._alias_patch(patch)
        current = await self.get(record_id)
        if current is not None:
            self.model.model_validate({**current.to_storage(), **patch})
        items = await self.store.update_item(self.collection, record_id, patch, self.seed, id_field=self.id_field)
        return self._to_models(items)

    async def delete(self, record_id: Any) -> List[RecordT]:
        """Remove the record with `record_id`; returns the remaining records"""
        items = await self.store.delete_item(self.collection, record_id, self.seed, id_field=self.id_field)
        return self._to_models(items)

    async def modify(self, fn: Callable[[List[RecordT]], List[RecordT]]) -> List[RecordT]:
        """
        Rewrite the whole collection as `fn(records)` under the store's key
        lock (bulk helpers that must not lose a concurrent add)
        """
        def apply(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            return [self._to_storage(r) for r in fn(self._to_models(items))]

        items = await self.store.modify(self.collection, apply, self.seed)
        return self._to_models(items)


class DocumentService(Generic[RecordT]):
    """Single-document counterpart of EntityService (canvas, funding round)"""

    key: str = ""
    model: Type[RecordT]
    seed: Dict[str, Any] = {}

    def __init__(self, store: KeyedStore):
        self.store = store

    async def load(self) -> RecordT:
        return self.model.model_validate(await self.store.get(self.key, self.seed))

    async def save(self, document: Union[RecordT, Dict[str, Any]]) -> RecordT:
        if isinstance(document, dict):
            document = self.model.model_validate(document)
        await self.store.set(self.key, document.to_storage())
        return document
