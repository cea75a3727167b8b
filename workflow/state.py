"""Import wizard state machine.

The wizard moves through landing -> dedup -> contributors -> categorize ->
report. `transition` is a pure function from (state, event) to a new state;
it never calls the pipeline itself. Callers run the processors and feed the
results in as events.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from models.category import CategoryMapping
from models.report import DuplicateGroup, ReportData
from models.transaction import Transaction

STEP_LANDING = "landing"
STEP_DEDUP = "dedup"
STEP_CONTRIBUTORS = "contributors"
STEP_CATEGORIZE = "categorize"
STEP_REPORT = "report"

STEPS = (STEP_LANDING, STEP_DEDUP, STEP_CONTRIBUTORS, STEP_CATEGORIZE, STEP_REPORT)


@dataclass(frozen=True)
class AppState:
    step: str = STEP_LANDING
    raw_transactions: Tuple[Transaction, ...] = ()
    duplicate_groups: Tuple[DuplicateGroup, ...] = ()
    duplicates_removed: int = 0
    transactions: Tuple[Transaction, ...] = ()
    selected_contributors: Tuple[str, ...] = ()
    category_mappings: Tuple[CategoryMapping, ...] = ()
    report: Optional[ReportData] = None
    error: Optional[str] = None


# Events


@dataclass(frozen=True)
class FilesLoaded:
    transactions: List[Transaction]


@dataclass(frozen=True)
class MappingsLoaded:
    contributors: List[str]
    mappings: List[CategoryMapping]


@dataclass(frozen=True)
class DuplicatesFound:
    groups: List[DuplicateGroup]


@dataclass(frozen=True)
class DuplicatesResolved:
    transactions: List[Transaction]
    removed_count: int


@dataclass(frozen=True)
class ContributorsSelected:
    names: List[str]


@dataclass(frozen=True)
class TransactionsTagged:
    transactions: List[Transaction]


@dataclass(frozen=True)
class CategoryAdded:
    mapping: CategoryMapping


@dataclass(frozen=True)
class CategoriesApplied:
    transactions: List[Transaction]


@dataclass(frozen=True)
class ReportGenerated:
    report: ReportData


@dataclass(frozen=True)
class GoToStep:
    step: str


@dataclass(frozen=True)
class ErrorRaised:
    message: str


@dataclass(frozen=True)
class Reset:
    pass


def initial_state() -> AppState:
    return AppState()


def transition(state: AppState, event) -> AppState:
    """Apply an event to the wizard state.

    Args:
        state: Current state (left untouched).
        event: One of the event dataclasses in this module.

    Returns:
        The new state.

    Raises:
        ValueError: For an unknown event type or step name.
    """
    if isinstance(event, FilesLoaded):
        loaded = tuple(event.transactions)
        return replace(state, raw_transactions=loaded, transactions=loaded, error=None)

    if isinstance(event, MappingsLoaded):
        return replace(
            state,
            selected_contributors=tuple(event.contributors),
            category_mappings=tuple(event.mappings),
        )

    if isinstance(event, DuplicatesFound):
        next_step = STEP_DEDUP if event.groups else STEP_CONTRIBUTORS
        return replace(state, duplicate_groups=tuple(event.groups), step=next_step)

    if isinstance(event, DuplicatesResolved):
        return replace(
            state,
            transactions=tuple(event.transactions),
            duplicates_removed=event.removed_count,
            step=STEP_CONTRIBUTORS,
        )

    if isinstance(event, ContributorsSelected):
        return replace(state, selected_contributors=tuple(event.names))

    if isinstance(event, TransactionsTagged):
        return replace(
            state, transactions=tuple(event.transactions), step=STEP_CATEGORIZE
        )

    if isinstance(event, CategoryAdded):
        return replace(
            state, category_mappings=state.category_mappings + (event.mapping,)
        )

    if isinstance(event, CategoriesApplied):
        return replace(state, transactions=tuple(event.transactions))

    if isinstance(event, ReportGenerated):
        return replace(state, report=event.report, step=STEP_REPORT)

    if isinstance(event, GoToStep):
        if event.step not in STEPS:
            raise ValueError(f"Unknown step: {event.step}")
        return replace(state, step=event.step)

    if isinstance(event, ErrorRaised):
        return replace(state, error=event.message)

    if isinstance(event, Reset):
        return initial_state()

    raise ValueError(f"Unknown event: {type(event).__name__}")
