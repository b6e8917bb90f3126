"""
Legal document register
"""
from models.records import LegalDoc
from services.entity_service import EntityService

DEFAULT_DOCS = [
    {"id": "1", "title": "Mutual NDA", "type": "Contract", "status": "FINAL", "lastModified": "2 days ago"},
    {"id": "2", "title": "IP Assignment", "type": "Agreement", "status": "SIGNED", "lastModified": "1 week ago"},
    {"id": "3", "title": "Advisor Agreement", "type": "Contract", "status": "DRAFT", "lastModified": "Just now"},
]


class LegalDocService(EntityService[LegalDoc]):
    collection = "legal_docs"
    model = LegalDoc
    seed = DEFAULT_DOCS
