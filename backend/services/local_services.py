"""
Wiring for the local-store side: one KeyedStore, every entity service on
top of it, and the relationship resolver over the linkable ones.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from services.entity_service import EntityService
from services.finance_service import TransactionService
from services.investor_service import FundingRoundService, InvestorService, PitchDeckService
from services.keyed_store import KeyedStore
from services.legal_service import LegalDocService
from services.operations_service import (
    CandidateService,
    CommunityThreadService,
    ComplianceService,
    DataSchemaService,
    ExperimentService,
    InventoryService,
    JobRoleService,
    SOPService,
    TicketService,
)
from services.product_service import ProductFeatureService
from services.relationship_service import RelationshipResolver
from services.strategy_service import CanvasService, GoalService, IdeaService, SwotService
from services.workspace_service import WorkspaceService


@dataclass
class LocalServices:
    store: KeyedStore
    investors: InvestorService
    funding_round: FundingRoundService
    pitch_decks: PitchDeckService
    features: ProductFeatureService
    canvas: CanvasService
    swot: SwotService
    goals: GoalService
    ideas: IdeaService
    sops: SOPService
    jobs: JobRoleService
    candidates: CandidateService
    tickets: TicketService
    schemas: DataSchemaService
    experiments: ExperimentService
    inventory: InventoryService
    compliance: ComplianceService
    threads: CommunityThreadService
    transactions: TransactionService
    legal_docs: LegalDocService
    workspaces: WorkspaceService
    resolver: RelationshipResolver = field(default_factory=RelationshipResolver)

    @property
    def collections(self) -> Dict[str, EntityService]:
        """Entity services keyed by their collection name"""
        return {
            s.collection: s
            for s in vars(self).values()
            if isinstance(s, EntityService)
        }

    def collection(self, name: str) -> Optional[EntityService]:
        return self.collections.get(name)


def build_local_services(store: KeyedStore) -> LocalServices:
    services = LocalServices(
        store=store,
        investors=InvestorService(store),
        funding_round=FundingRoundService(store),
        pitch_decks=PitchDeckService(store),
        features=ProductFeatureService(store),
        canvas=CanvasService(store),
        swot=SwotService(store),
        goals=GoalService(store),
        ideas=IdeaService(store),
        sops=SOPService(store),
        jobs=JobRoleService(store),
        candidates=CandidateService(store),
        tickets=TicketService(store),
        schemas=DataSchemaService(store),
        experiments=ExperimentService(store),
        inventory=InventoryService(store),
        compliance=ComplianceService(store),
        threads=CommunityThreadService(store),
        transactions=TransactionService(store),
        legal_docs=LegalDocService(store),
        workspaces=WorkspaceService(store),
    )

    services.resolver.register("FEATURE", services.features, "name")
    services.resolver.register("IDEA", services.ideas, "title")
    services.resolver.register("GOAL", services.goals, "title")
    return services
