"""
Strategy: business model canvas, SWOT, goals and saved ideas
"""
from models.records import BusinessCanvas, SavedIdea, StrategicGoal, SwotItem
from services.entity_service import DocumentService, EntityService

DEFAULT_CANVAS = {
    "keyPartners": ["Cloud Providers", "Payment Processor"],
    "keyActivities": ["Product Development", "Marketing"],
    "keyResources": ["Engineering Team", "IP"],
    "valuePropositions": ["Integrated OS for Founders", "AI-driven insights"],
    "customerRelationships": ["Self-service", "Community"],
    "channels": ["Direct Sales", "App Store"],
    "customerSegments": ["Early-stage Founders", "Solopreneurs"],
    "costStructure": ["Server Costs", "Salaries"],
    "revenueStreams": ["SaaS Subscription"],
}

DEFAULT_SWOT = [
    {"id": "1", "type": "STRENGTH", "content": "Integrated ecosystem"},
    {"id": "2", "type": "WEAKNESS", "content": "Limited brand awareness"},
    {"id": "3", "type": "OPPORTUNITY", "content": "Market consolidation"},
    {"id": "4", "type": "THREAT", "content": "Big tech copying features"},
]

DEFAULT_GOALS = [
    {"id": "1", "title": "Reach $1M ARR", "progress": 45, "status": "ON_TRACK",
     "deadline": "Q4 2025", "owner": "Founder"},
    {"id": "2", "title": "Launch Mobile App", "progress": 10, "status": "BEHIND",
     "deadline": "Q3 2025", "owner": "Product"},
]


class CanvasService(DocumentService[BusinessCanvas]):
    key = "strategy_canvas"
    model = BusinessCanvas
    seed = DEFAULT_CANVAS


class SwotService(EntityService[SwotItem]):
    collection = "strategy_swot"
    model = SwotItem
    seed = DEFAULT_SWOT


class GoalService(EntityService[StrategicGoal]):
    collection = "strategy_goals"
    model = StrategicGoal
    seed = DEFAULT_GOALS


class IdeaService(EntityService[SavedIdea]):
    collection = "saved_ideas"
    model = SavedIdea
    seed = []
