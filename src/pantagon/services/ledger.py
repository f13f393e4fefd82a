"""Account balances: signed cash-flow aggregation, ranking and manual entry."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from ..config import DEFAULT_ACCOUNT_PRIORITY
from ..domain.repositories import AssetTransactionRepository
from ..errors import ValidationError
from ..forms.asset import AssetEntryForm
from ..models.asset_transaction import AssetTransaction, Direction

logger = logging.getLogger(__name__)

UNASSIGNED = "Unassigned"


@dataclass(frozen=True)
class AccountBalance:
    name: str
    balance: float
    transaction_count: int = 0


@dataclass(frozen=True)
class BalanceSummary:
    """Grand total plus the signed sum per account."""

    total: float
    accounts: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class AccountSummary:
    total: float
    total_in: float
    total_out: float


@dataclass(frozen=True)
class NetWorthView:
    total: float
    accounts: list[AccountBalance]


def _is_inflow(tx: AssetTransaction) -> bool:
    kind = tx.type.value if isinstance(tx.type, Direction) else str(tx.type or "")
    return kind.upper() == Direction.IN.value


def _magnitude(tx: AssetTransaction) -> float:
    return float(tx.amount or 0.0)


def account_key(name: str | None) -> str:
    """Grouping key for an account name; blank names share one bucket."""

    return name if name else UNASSIGNED


def signed_amount(tx: AssetTransaction) -> float:
    """Return ``+amount`` for inflows and ``-amount`` for everything else."""

    amount = _magnitude(tx)
    return amount if _is_inflow(tx) else -amount


def compute_balances(transactions: Iterable[AssetTransaction]) -> BalanceSummary:
    total = 0.0
    accounts: dict[str, float] = defaultdict(float)
    for tx in transactions:
        value = signed_amount(tx)
        total += value
        accounts[account_key(tx.account_name)] += value
    return BalanceSummary(total=total, accounts=dict(accounts))


def account_rank(name: str, priority: Sequence[str] = DEFAULT_ACCOUNT_PRIORITY) -> int:
    """1-based rank of the first known institution contained in ``name``.

    Names matching none of the substrings rank after every known institution.
    """

    lowered = name.lower()
    for index, needle in enumerate(priority, start=1):
        if needle.lower() in lowered:
            return index
    return len(priority) + 1


def rank_accounts(
    balances: BalanceSummary | Mapping[str, float],
    priority: Sequence[str] = DEFAULT_ACCOUNT_PRIORITY,
    counts: Mapping[str, int] | None = None,
) -> list[AccountBalance]:
    """Order accounts by institution rank, then by descending balance."""

    mapping = balances.accounts if isinstance(balances, BalanceSummary) else balances
    counts = counts or {}
    ranked = [
        AccountBalance(name=name, balance=balance, transaction_count=counts.get(name, 0))
        for name, balance in mapping.items()
    ]
    ranked.sort(key=lambda acc: (account_rank(acc.name, priority), -acc.balance))
    return ranked


def transaction_counts(transactions: Iterable[AssetTransaction]) -> dict[str, int]:
    return dict(Counter(account_key(tx.account_name) for tx in transactions))


def net_worth_view(
    transactions: Iterable[AssetTransaction],
    priority: Sequence[str] = DEFAULT_ACCOUNT_PRIORITY,
) -> NetWorthView:
    """Dashboard view: total net worth and ranked account balances."""

    records = list(transactions)
    summary = compute_balances(records)
    accounts = rank_accounts(summary, priority, counts=transaction_counts(records))
    return NetWorthView(total=summary.total, accounts=accounts)


def account_summary(transactions: Iterable[AssetTransaction]) -> AccountSummary:
    """Net total with gross inflow and outflow for one account's records."""

    total_in = 0.0
    total_out = 0.0
    for tx in transactions:
        if _is_inflow(tx):
            total_in += _magnitude(tx)
        else:
            total_out += _magnitude(tx)
    return AccountSummary(total=total_in - total_out, total_in=total_in, total_out=total_out)


def account_transactions(
    transactions: Iterable[AssetTransaction], account_name: str
) -> list[AssetTransaction]:
    """Records of a single account, newest date first then highest id."""

    matches = [tx for tx in transactions if account_key(tx.account_name) == account_name]
    matches.sort(key=lambda tx: (tx.date, tx.id or 0), reverse=True)
    return matches


def build_asset_transaction(form: AssetEntryForm) -> AssetTransaction:
    """Map a validated form onto a new record."""

    return AssetTransaction(
        account_name=form.account_name,
        type=form.direction,
        amount=form.amount,
        date=form.date,
        tag=form.tag,
        note=form.note,
    )


def create_asset_transaction(
    repo: AssetTransactionRepository, data: Mapping[str, Any]
) -> AssetTransaction:
    """Validate a manual entry and store it; invalid input stores nothing."""

    form = AssetEntryForm.from_mapping(data)
    if not form.validate():
        logger.info("Rejected asset entry", extra={"errors": form.errors})
        raise ValidationError.from_errors(form.errors)

    created = repo.create(build_asset_transaction(form))
    logger.info(
        "Asset transaction recorded",
        extra={"id": created.id, "account": created.account_name, "type": form.direction.value},
    )
    return created
