"""Runs the whole import pipeline by driving the wizard state machine.

Each step calls a stateless processor and records its result as an event.
"""

from typing import Iterable, List, Optional

from export.mapping_document import MappingDocument
from ingestion import ParseError, StatementFile, ingest_many
from logger import get_logger
from models.category import CategoryMapping
from processors.categorization import apply_category_mappings
from processors.contributors import rank_contributors, tag_contributors
from processors.deduplication import (
    apply_removal,
    find_duplicate_groups,
    transactions_to_remove,
)
from reports.builder import build_report
from workflow.state import (
    AppState,
    CategoriesApplied,
    CategoryAdded,
    ContributorsSelected,
    DuplicatesFound,
    DuplicatesResolved,
    ErrorRaised,
    FilesLoaded,
    MappingsLoaded,
    ReportGenerated,
    TransactionsTagged,
    initial_state,
    transition,
)

logger = get_logger()


def load_statements(
    state: AppState,
    files: Iterable[StatementFile],
    document: Optional[MappingDocument] = None,
) -> AppState:
    """Ingest statements and look for duplicates.

    An ingestion failure is recorded as the state's error and the wizard stays
    on the landing step.
    """
    try:
        transactions = ingest_many(files)
    except ParseError as e:
        logger.error(f"Failed to load statements: {e}")
        return transition(state, ErrorRaised(str(e)))

    state = transition(state, FilesLoaded(transactions))
    if document is not None:
        state = transition(
            state, MappingsLoaded(document.contributors, document.mappings())
        )
    return transition(state, DuplicatesFound(find_duplicate_groups(transactions)))


def resolve_duplicates(state: AppState, keep_duplicates: bool = False) -> AppState:
    """Drop all but the first member of every duplicate group."""
    to_remove = [] if keep_duplicates else transactions_to_remove(state.duplicate_groups)
    remaining = apply_removal(state.transactions, to_remove)
    return transition(state, DuplicatesResolved(remaining, len(to_remove)))


def select_contributors(
    state: AppState, names: Optional[List[str]] = None, count: int = 2
) -> AppState:
    """Select contributors and tag income with them.

    Without explicit names, previously loaded selections are kept; failing
    that, the top `count` contributors by amount are chosen.
    """
    if names is None:
        names = list(state.selected_contributors)
    if not names:
        names = [c.name for c in rank_contributors(state.transactions, count)]

    state = transition(state, ContributorsSelected(names))
    tagged = tag_contributors(state.transactions, state.selected_contributors)
    return transition(state, TransactionsTagged(tagged))


def categorize(
    state: AppState, extra_mappings: Iterable[CategoryMapping] = ()
) -> AppState:
    """Add any extra category rules, then apply all rules to the transactions."""
    for mapping in extra_mappings:
        state = transition(state, CategoryAdded(mapping))
    categorized = apply_category_mappings(state.transactions, state.category_mappings)
    return transition(state, CategoriesApplied(categorized))


def generate_report(state: AppState) -> AppState:
    report = build_report(
        list(state.transactions),
        list(state.selected_contributors),
        state.duplicates_removed,
    )
    return transition(state, ReportGenerated(report))


def run_pipeline(
    files: Iterable[StatementFile],
    document: Optional[MappingDocument] = None,
    contributors: Optional[List[str]] = None,
    contributor_count: int = 2,
    keep_duplicates: bool = False,
) -> AppState:
    """Run every wizard step non-interactively.

    Returns:
        The final state, on the report step, or on the landing step with
        error set if ingestion failed.
    """
    state = load_statements(initial_state(), files, document)
    if state.error:
        return state

    state = resolve_duplicates(state, keep_duplicates)
    state = select_contributors(state, contributors, contributor_count)
    state = categorize(state)
    return generate_report(state)
