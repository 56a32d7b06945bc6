"""Shared test helpers for building the service layer and test config."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from ledger_service.services.account_store import AccountStore
from ledger_service.services.balance_mutator import BalanceMutator
from ledger_service.services.database import Database
from ledger_service.services.ledger_query import LedgerQuery
from ledger_service.services.ledger_store import LedgerStore
from ledger_service.services.money import to_minor_units
from ledger_service.services.provisioning import AccountProvisioning, generate_account_number
from ledger_service.services.transfer_coordinator import TransferCoordinator

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from ledger_service.services.account_store import AccountRecord

# Lowest cost bcrypt accepts; keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4
TEST_PASSWORD = "correct-horse-battery"


@dataclass
class Bank:
    """Every service-layer component wired to one database, as the lifespan does."""

    database: Database
    accounts: AccountStore
    ledger: LedgerStore
    provisioning: AccountProvisioning
    mutator: BalanceMutator
    coordinator: TransferCoordinator
    query: LedgerQuery

    def close(self) -> None:
        self.database.close()

    def account(self, account_id: str) -> AccountRecord:
        """Load an account that must exist."""
        with self.database.read() as db:
            account = self.accounts.get(db, account_id)
        assert account is not None
        return account

    def balance(self, account_id: str) -> Decimal:
        return self.account(account_id).balance

    def record_count(self, account_id: str) -> int:
        return len(self.query.list_transactions(account_id))

    def force_balance(self, account_id: str, balance: Decimal) -> None:
        """Overwrite a stored balance without writing a ledger record."""
        with self.database.transaction() as db:
            db.execute(
                "UPDATE accounts SET balance = ? WHERE account_id = ?",
                (to_minor_units(balance), account_id),
            )


def build_bank(
    db_path: str,
    *,
    busy_timeout_ms: int = 5000,
    account_number_attempts: int = 5,
    number_generator: Callable[[], int] = generate_account_number,
) -> Bank:
    """Wire the service layer to the SQLite file at db_path."""
    database = Database(db_path=db_path, busy_timeout_ms=busy_timeout_ms)
    accounts = AccountStore()
    ledger = LedgerStore()
    return Bank(
        database=database,
        accounts=accounts,
        ledger=ledger,
        provisioning=AccountProvisioning(
            database,
            accounts,
            bcrypt_rounds=TEST_BCRYPT_ROUNDS,
            account_number_attempts=account_number_attempts,
            min_password_length=8,
            number_generator=number_generator,
        ),
        mutator=BalanceMutator(database, accounts, ledger),
        coordinator=TransferCoordinator(database, accounts, ledger),
        query=LedgerQuery(database, accounts, ledger),
    )


def open_account(
    bank: Bank,
    name: str,
    email: str,
    balance: Decimal | int = 0,
) -> AccountRecord:
    """Register an account, give it a number, and fund it."""
    account = bank.provisioning.register(name, email, TEST_PASSWORD)
    bank.provisioning.assign_account_number(account.account_id)
    if balance:
        bank.mutator.apply_operation(account.account_id, "deposit", Decimal(balance))
    return bank.account(account.account_id)


def write_config(
    tmp_path: Path,
    db_path: str,
    *,
    max_body_size: int = 1048576,
    busy_timeout_ms: int = 5000,
) -> Path:
    """Write a complete config.yaml for the service and return its path."""
    config_content = f"""\
service:
  name: "ledger"
  version: "0.1.0"
server:
  host: "0.0.0.0"
  port: 5001
  log_level: "info"
logging:
  level: "WARNING"
  directory: "{tmp_path / "logs"}"
database:
  path: "{db_path}"
  busy_timeout_ms: {busy_timeout_ms}
accounts:
  bcrypt_rounds: {TEST_BCRYPT_ROUNDS}
  account_number_attempts: 5
  min_password_length: 8
cors:
  allow_origins:
    - "http://localhost:3000"
request:
  max_body_size: {max_body_size}
"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_content)
    return config_path
