"""Cross-file duplicate detection.

Overlapping statement exports contain the same ledger entries more than once.
Two transactions are duplicates when they share booking date, amount, title
and reference number AND come from different source files. Repeats inside a
single file are treated as genuine repeated transactions.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from logger import get_logger
from models.report import DuplicateGroup
from models.transaction import Transaction

logger = get_logger()


@dataclass(frozen=True)
class DeduplicationResult:
    transactions: List[Transaction]
    duplicate_groups: List[DuplicateGroup]
    removed_count: int


def transaction_key(transaction: Transaction) -> Tuple:
    """Identity key used to recognise the same entry across files."""
    return (
        transaction.booking_date,
        transaction.amount,
        transaction.title,
        transaction.reference_number,
    )


def find_duplicate_groups(transactions: Iterable[Transaction]) -> List[DuplicateGroup]:
    """Find transactions that appear in more than one source file.

    Args:
        transactions: All ingested transactions.

    Returns:
        Duplicate groups sorted by date. Members keep their input order.
    """
    partitions: Dict[Tuple, List[Transaction]] = {}
    for transaction in transactions:
        partitions.setdefault(transaction_key(transaction), []).append(transaction)

    groups = []
    for members in partitions.values():
        if len(members) < 2:
            continue
        if len({t.source_file for t in members}) < 2:
            continue

        first = members[0]
        groups.append(
            DuplicateGroup(
                transactions=tuple(members),
                booking_date=first.booking_date,
                amount=first.amount,
                title=first.title,
                reference_number=first.reference_number,
            )
        )

    groups.sort(key=lambda g: g.booking_date)

    logger.info(f"Found {len(groups)} duplicate group(s)")
    return groups


def all_duplicate_transactions(groups: Iterable[DuplicateGroup]) -> List[Transaction]:
    """Flatten duplicate groups into a single list of their members."""
    return [t for group in groups for t in group.transactions]


def transactions_to_remove(groups: Iterable[DuplicateGroup]) -> List[Transaction]:
    """Pick every member except the first of each group for removal."""
    return [t for group in groups for t in group.transactions[1:]]


def apply_removal(
    transactions: Iterable[Transaction], to_remove: Iterable[Transaction]
) -> List[Transaction]:
    """Return the transactions whose id is not in to_remove."""
    remove_ids = {t.id for t in to_remove}
    return [t for t in transactions if t.id not in remove_ids]


def mark_duplicates(
    transactions: Iterable[Transaction], groups: Iterable[DuplicateGroup]
) -> List[Transaction]:
    """Flag every transaction that belongs to a duplicate group.

    Returns:
        New transactions with is_duplicate set to True or False.
    """
    duplicate_ids = {t.id for t in all_duplicate_transactions(groups)}
    return [t.annotate(is_duplicate=t.id in duplicate_ids) for t in transactions]


def deduplicate(transactions: List[Transaction]) -> DeduplicationResult:
    """Find duplicates and drop all but the first occurrence of each."""
    groups = find_duplicate_groups(transactions)
    to_remove = transactions_to_remove(groups)
    remaining = apply_removal(transactions, to_remove)

    logger.info(f"Removed {len(to_remove)} duplicate transaction(s)")
    return DeduplicationResult(
        transactions=remaining,
        duplicate_groups=groups,
        removed_count=len(to_remove),
    )
