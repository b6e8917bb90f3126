"""
Finance: monthly metrics, runway and the transaction ledger
"""
from typing import List

from models.records import FinancialMetric, RunwaySnapshot, Transaction
from services.entity_service import EntityService

MOCK_FINANCE_DATA = [
    {"month": "Jan", "revenue": 4000, "expenses": 8000, "cashBalance": 50000},
    {"month": "Feb", "revenue": 6500, "expenses": 8200, "cashBalance": 48300},
    {"month": "Mar", "revenue": 9000, "expenses": 8500, "cashBalance": 48800},
    {"month": "Apr", "revenue": 12000, "expenses": 9000, "cashBalance": 51800},
    {"month": "May", "revenue": 15500, "expenses": 9500, "cashBalance": 57800},
    {"month": "Jun", "revenue": 21000, "expenses": 10000, "cashBalance": 68800},
]

MOCK_RUNWAY = {"burnRate": 9500, "runwayMonths": 18, "cashOnHand": 175000}

SEED_TRANSACTIONS = [
    {"id": "1", "description": "AWS Infrastructure", "category": "Software", "amount": 1240,
     "date": "2024-05-24", "type": "EXPENSE"},
    {"id": "2", "description": "Stripe Payout", "category": "Revenue", "amount": 4500,
     "date": "2024-05-23", "type": "INCOME"},
    {"id": "3", "description": "WeWork Rent", "category": "Office", "amount": 2000,
     "date": "2024-05-01", "type": "EXPENSE"},
]


def get_financial_metrics() -> List[FinancialMetric]:
    """Read-only monthly metrics (fresh copies on every call)"""
    return [FinancialMetric.model_validate(m) for m in MOCK_FINANCE_DATA]


def get_runway() -> RunwaySnapshot:
    return RunwaySnapshot.model_validate(MOCK_RUNWAY)


class TransactionService(EntityService[Transaction]):
    collection = "finance_transactions"
    model = Transaction
    seed = SEED_TRANSACTIONS

    async def net_total(self) -> float:
        """Income minus expenses over the whole ledger"""
        total = 0.0
        for tx in await self.list():
            total += tx.amount if tx.type == "INCOME" else -tx.amount
        return total
