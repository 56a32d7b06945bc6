"""Service layer components."""

from ledger_service.services.account_store import AccountRecord, AccountStore
from ledger_service.services.balance_mutator import BalanceMutator
from ledger_service.services.database import Database
from ledger_service.services.ledger_query import LedgerQuery
from ledger_service.services.ledger_store import LedgerStore, TransactionRecord, TransactionType
from ledger_service.services.provisioning import AccountProvisioning
from ledger_service.services.transfer_coordinator import TransferCoordinator

__all__ = [
    "AccountProvisioning",
    "AccountRecord",
    "AccountStore",
    "BalanceMutator",
    "Database",
    "LedgerQuery",
    "LedgerStore",
    "TransactionRecord",
    "TransactionType",
    "TransferCoordinator",
]
