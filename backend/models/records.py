"""
Local store record models

Pydantic models for the records kept in the local keyed store. Records are
persisted with camelCase keys (the shape the web client reads) and exposed
in Python with snake_case attributes. Unknown keys are kept, since a record
is an open bag of attributes around a stable id.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from utils.id_generator import normalize_id


class CamelModel(BaseModel):
    """Base for models persisted with camelCase keys"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_storage(self) -> dict:
        """Dict in the persisted (camelCase) shape"""
        return self.model_dump(by_alias=True, exclude_none=True)


class Record(CamelModel):
    """A collection record with a stable string id"""
    id: str

    @field_validator('id', mode='before')
    @classmethod
    def normalize(cls, v):
        return normalize_id(v)


# =============================================================================
# FUNDRAISING
# =============================================================================

class Investor(Record):
    name: str
    firm: str = ""
    status: str = "PROSPECT"  # PROSPECT, MEETING, DUE_DILIGENCE, COMMITTED, PASSED
    check_size: str = ""
    last_contact: str = ""
    notes: str = ""


class FundingRound(Record):
    name: str
    target_amount: float = 0
    raised_amount: float = 0
    pre_money_valuation: float = 0
    status: str = "OPEN"


class PitchDeck(Record):
    title: str = "Untitled Deck"
    slides: List[dict] = []
    updated_at: Optional[str] = None


# =============================================================================
# PRODUCT & STRATEGY
# =============================================================================

class ProductFeature(Record):
    name: str
    status: str = "Backlog"  # Backlog, In Progress, Done
    priority: str = "Medium"  # Low, Medium, High


class BusinessCanvas(CamelModel):
    key_partners: List[str] = []
    key_activities: List[str] = []
    key_resources: List[str] = []
    value_propositions: List[str] = []
    customer_relationships: List[str] = []
    channels: List[str] = []
    customer_segments: List[str] = []
    cost_structure: List[str] = []
    revenue_streams: List[str] = []


class SwotItem(Record):
    type: str  # STRENGTH, WEAKNESS, OPPORTUNITY, THREAT
    content: str


class StrategicGoal(Record):
    title: str
    progress: int = 0
    status: str = "ON_TRACK"  # ON_TRACK, AT_RISK, BEHIND, DONE
    deadline: str = ""
    owner: str = ""


class SavedIdea(Record):
    title: str
    description: str = ""


# =============================================================================
# OPERATIONS
# =============================================================================

class SOP(Record):
    title: str
    category: str = ""
    last_updated: str = ""
    status: str = "DRAFT"


class JobRole(Record):
    title: str
    department: str = ""
    status: str = "OPEN"
    candidates_count: int = 0


class Candidate(Record):
    name: str
    role_id: str = ""
    stage: str = "SCREENING"
    email: str = ""


class Ticket(Record):
    subject: str
    customer: str = ""
    priority: str = "MEDIUM"
    status: str = "OPEN"
    created: str = ""


class DataSchema(CamelModel):
    """Keyed by `table`, not `id`"""
    table: str
    description: str = ""
    row_count: int = 0
    last_sync: str = ""
    status: str = "HEALTHY"


class Experiment(Record):
    name: str
    hypothesis: str = ""
    status: str = "DRAFT"
    start_date: str = ""


class InventoryItem(Record):
    sku: str
    name: str
    stock_level: int = 0
    reorder_point: int = 0
    status: str = "OK"


class ComplianceItem(Record):
    control: str
    framework: str = ""
    status: str = "PASS"  # PASS, WARNING, FAIL
    last_audit: str = ""


class CommunityThread(Record):
    title: str
    author: str = ""
    replies: int = 0
    tags: List[str] = []
    last_active: str = ""


# =============================================================================
# FINANCE, LEGAL, WORKSPACES
# =============================================================================

class FinancialMetric(CamelModel):
    month: str
    revenue: float
    expenses: float
    cash_balance: float


class RunwaySnapshot(CamelModel):
    burn_rate: float
    runway_months: float
    cash_on_hand: float


class Transaction(Record):
    description: str
    category: str = ""
    amount: float = 0
    date: str = ""
    type: str = "EXPENSE"  # INCOME, EXPENSE


class LegalDoc(Record):
    title: str
    type: str = ""
    status: str = "DRAFT"
    last_modified: str = ""


class Workspace(Record):
    name: str
    role: str = "Owner"
    created_at: str = ""
