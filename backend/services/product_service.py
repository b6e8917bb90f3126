"""
Product roadmap features
"""
from typing import Any, List

from models.records import ProductFeature
from services.entity_service import EntityService

SEED_FEATURES = [
    {"id": "1", "name": "Auth System", "status": "Done", "priority": "High"},
    {"id": "2", "name": "Billing Integration", "status": "In Progress", "priority": "High"},
    {"id": "3", "name": "Mobile App", "status": "Backlog", "priority": "Medium"},
    {"id": "4", "name": "Dark Mode", "status": "Backlog", "priority": "Low"},
    {"id": "5", "name": "API Rate Limiting", "status": "In Progress", "priority": "High"},
]


class ProductFeatureService(EntityService[ProductFeature]):
    collection = "product_features"
    model = ProductFeature
    seed = SEED_FEATURES
    id_type = "product_feature"

    async def update_status(self, feature_id: Any, status: str) -> List[ProductFeature]:
        return await self.update(feature_id, {"status": status})
