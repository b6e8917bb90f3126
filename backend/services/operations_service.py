"""
Operations: SOPs, hiring, support, data, lab, supply, security, community
"""
import logging
import random
from typing import List, Optional

from models.records import (
    SOP,
    Candidate,
    CommunityThread,
    ComplianceItem,
    DataSchema,
    Experiment,
    InventoryItem,
    JobRole,
    Ticket,
)
from services.entity_service import EntityService

logger = logging.getLogger(__name__)

SEED_SOPS = [
    {"id": "1", "title": "Employee Onboarding", "category": "HR", "lastUpdated": "2 days ago", "status": "PUBLISHED"},
    {"id": "2", "title": "Incident Response", "category": "Engineering", "lastUpdated": "1 week ago", "status": "PUBLISHED"},
    {"id": "3", "title": "Refund Policy", "category": "Support", "lastUpdated": "1 month ago", "status": "DRAFT"},
]

SEED_JOBS = [
    {"id": "1", "title": "Senior Frontend Engineer", "department": "Engineering", "status": "OPEN", "candidatesCount": 12},
    {"id": "2", "title": "Product Manager", "department": "Product", "status": "OPEN", "candidatesCount": 5},
    {"id": "3", "title": "Sales Rep", "department": "Sales", "status": "FILLED", "candidatesCount": 0},
]

SEED_CANDIDATES = [
    {"id": "1", "name": "Alice Smith", "roleId": "1", "stage": "INTERVIEW", "email": "alice@example.com"},
    {"id": "2", "name": "Bob Jones", "roleId": "1", "stage": "SCREENING", "email": "bob@example.com"},
]

SEED_TICKETS = [
    {"id": "101", "subject": "Login failing on mobile", "customer": "Acme Corp", "priority": "HIGH",
     "status": "OPEN", "created": "2 hours ago"},
    {"id": "102", "subject": "Feature request: Dark mode export", "customer": "John Doe", "priority": "LOW",
     "status": "IN_PROGRESS", "created": "1 day ago"},
    {"id": "103", "subject": "Billing question", "customer": "Stark Ind", "priority": "MEDIUM",
     "status": "RESOLVED", "created": "3 days ago"},
]

SEED_SCHEMAS = [
    {"table": "users", "description": "Core user identity data", "rowCount": 15420,
     "lastSync": "5 mins ago", "status": "HEALTHY"},
    {"table": "events", "description": "Raw clickstream events", "rowCount": 1250000,
     "lastSync": "1 min ago", "status": "SYNCING"},
]

SEED_EXPERIMENTS = [
    {"id": "1", "name": "New Pricing Tier", "hypothesis": "Adding a Pro tier increases ARPU by 10%",
     "status": "RUNNING", "startDate": "Oct 1"},
]

SEED_INVENTORY = [
    {"id": "1", "sku": "HW-DEV-001", "name": "Developer Laptop (MacBook Pro)", "stockLevel": 5,
     "reorderPoint": 3, "status": "OK"},
]

SEED_COMPLIANCE = [
    {"id": "1", "control": "Data Encryption at Rest", "framework": "SOC2", "status": "PASS", "lastAudit": "Oct 20"},
    {"id": "2", "control": "Access Control Policy", "framework": "SOC2", "status": "WARNING", "lastAudit": "Sep 15"},
    {"id": "3", "control": "Incident Response Plan", "framework": "ISO 27001", "status": "PASS", "lastAudit": "Oct 01"},
]

SEED_THREADS = [
    {"id": "1", "title": "Best practices for API rate limiting?", "author": "dev_guru", "replies": 14,
     "tags": ["api", "dev"], "lastActive": "10 mins ago"},
]


class SOPService(EntityService[SOP]):
    collection = "sops"
    model = SOP
    seed = SEED_SOPS


class JobRoleService(EntityService[JobRole]):
    collection = "jobs"
    model = JobRole
    seed = SEED_JOBS


class CandidateService(EntityService[Candidate]):
    collection = "candidates"
    model = Candidate
    seed = SEED_CANDIDATES


class TicketService(EntityService[Ticket]):
    collection = "tickets"
    model = Ticket
    seed = SEED_TICKETS


class DataSchemaService(EntityService[DataSchema]):
    collection = "schemas"
    model = DataSchema
    seed = SEED_SCHEMAS
    id_field = "table"

    def __init__(self, store, rng: Optional[random.Random] = None):
        super().__init__(store)
        self.rng = rng or random.Random()

    async def run_data_sync(self) -> List[DataSchema]:
        """Mark every schema as freshly synced and bump its row count"""
        def sync(schemas: List[DataSchema]) -> List[DataSchema]:
            return [
                s.model_copy(update={
                    "last_sync": "Just now",
                    "status": "HEALTHY",
                    "row_count": s.row_count + self.rng.randrange(100),
                })
                for s in schemas
            ]

        synced = await self.modify(sync)
        logger.info(f"Synced {len(synced)} data schemas")
        return synced


class ExperimentService(EntityService[Experiment]):
    collection = "experiments"
    model = Experiment
    seed = SEED_EXPERIMENTS


class InventoryService(EntityService[InventoryItem]):
    collection = "inventory"
    model = InventoryItem
    seed = SEED_INVENTORY

    async def below_reorder_point(self) -> List[InventoryItem]:
        """Items whose stock is at or under their reorder point"""
        return [i for i in await self.list() if i.stock_level <= i.reorder_point]


class ComplianceService(EntityService[ComplianceItem]):
    collection = "compliance"
    model = ComplianceItem
    seed = SEED_COMPLIANCE

    # Share of controls flagged WARNING by a simulated audit
    warning_rate = 0.2

    def __init__(self, store, rng: Optional[random.Random] = None):
        super().__init__(store)
        self.rng = rng or random.Random()

    async def run_security_audit(self) -> List[ComplianceItem]:
        """Re-audit every control (simulated: a random share get WARNING)"""
        def audit(items: List[ComplianceItem]) -> List[ComplianceItem]:
            return [
                i.model_copy(update={
                    "last_audit": "Just now",
                    "status": "WARNING" if self.rng.random() < self.warning_rate else "PASS",
                })
                for i in items
            ]

        audited = await self.modify(audit)
        warnings = sum(1 for i in audited if i.status == "WARNING")
        logger.info(f"Security audit finished: {len(audited)} controls, {warnings} warnings")
        return audited


class CommunityThreadService(EntityService[CommunityThread]):
    collection = "threads"
    model = CommunityThread
    seed = SEED_THREADS
