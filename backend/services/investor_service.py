"""
Investor pipeline, funding round and pitch decks
"""
import logging
from typing import Any, List, Union

from models.records import FundingRound, Investor, PitchDeck
from services.entity_service import DocumentService, EntityService

logger = logging.getLogger(__name__)

SEED_INVESTORS = [
    {"id": "1", "name": "Sarah Ventures", "firm": "Redwood Capital", "status": "DUE_DILIGENCE",
     "checkSize": "$500k", "lastContact": "2 days ago", "notes": "Asking for cohort analysis."},
    {"id": "2", "name": "Mike Angel", "firm": "Angel Syndicate", "status": "COMMITTED",
     "checkSize": "$50k", "lastContact": "1 week ago", "notes": "Signed SAFE."},
    {"id": "3", "name": "Global Tech Fund", "firm": "GTF", "status": "MEETING",
     "checkSize": "$1M", "lastContact": "Yesterday", "notes": "Intro via LinkedIn."},
    {"id": "4", "name": "Early Bird", "firm": "Avian VC", "status": "PROSPECT",
     "checkSize": "Unknown", "lastContact": "Never", "notes": "Top target for Series A."},
]

SEED_ROUND = {
    "id": "r1",
    "name": "Seed Round",
    "targetAmount": 2000000,
    "raisedAmount": 450000,
    "preMoneyValuation": 8000000,
    "status": "OPEN",
}


class InvestorService(EntityService[Investor]):
    collection = "investors"
    model = Investor
    seed = SEED_INVESTORS

    async def update_status(self, investor_id: Any, status: str) -> List[Investor]:
        """Move an investor to another pipeline stage"""
        return await self.update(investor_id, {"status": status})


class FundingRoundService(DocumentService[FundingRound]):
    key = "round"
    model = FundingRound
    seed = SEED_ROUND


class PitchDeckService(EntityService[PitchDeck]):
    collection = "pitch_decks"
    model = PitchDeck
    seed = []

    async def save(self, deck: Union[PitchDeck, dict]) -> List[PitchDeck]:
        """Replace the deck with the same id, or append it if it is new"""
        if isinstance(deck, dict):
            deck = PitchDeck.model_validate(deck)

        def upsert(decks: List[PitchDeck]) -> List[PitchDeck]:
            if any(d.id == deck.id for d in decks):
                return [deck if d.id == deck.id else d for d in decks]
            return decks + [deck]

        return await self.modify(upsert)
