"""The portable mapping document (groupings.json).

Holds the user's category rules and contributor selection between sessions.
A document that fails validation is ignored with a warning so that a corrupt
file never blocks working with fresh statements.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from logger import get_logger
from models.category import CategoryMapping

logger = get_logger()

DOCUMENT_VERSION = 1


class MappingRule(BaseModel):
    """Serialized form of a CategoryMapping."""

    model_config = ConfigDict(populate_by_name=True)

    pattern: str = Field(min_length=1)
    category: str = Field(min_length=1)
    match_type: Literal["exact", "contains"] = Field(alias="matchType")


class MappingDocument(BaseModel):
    """Version 1 of the mapping document."""

    model_config = ConfigDict(populate_by_name=True)

    version: Literal[1] = DOCUMENT_VERSION
    contributors: List[str] = Field(default_factory=list)
    categories: List[MappingRule] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")
    last_used: datetime = Field(alias="lastUsed")

    def mappings(self) -> List[CategoryMapping]:
        """Convert the stored rules back into CategoryMapping objects."""
        return [
            CategoryMapping(
                pattern=rule.pattern, category=rule.category, match_type=rule.match_type
            )
            for rule in self.categories
        ]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _rules(mappings: List[CategoryMapping]) -> List[MappingRule]:
    return [
        MappingRule(pattern=m.pattern, category=m.category, match_type=m.match_type)
        for m in mappings
    ]


def new_mapping_document(
    contributors: List[str],
    mappings: List[CategoryMapping],
    now: Optional[datetime] = None,
) -> MappingDocument:
    """Create a document with fresh createdAt and lastUsed timestamps."""
    now = now or _now()
    return MappingDocument(
        contributors=list(contributors),
        categories=_rules(mappings),
        created_at=now,
        last_used=now,
    )


def update_mapping_document(
    document: MappingDocument,
    contributors: List[str],
    mappings: List[CategoryMapping],
    now: Optional[datetime] = None,
) -> MappingDocument:
    """Replace the contents of an existing document, keeping its createdAt."""
    return document.model_copy(
        update={
            "contributors": list(contributors),
            "categories": _rules(mappings),
            "last_used": now or _now(),
        }
    )


def touch_mapping_document(
    document: MappingDocument, now: Optional[datetime] = None
) -> MappingDocument:
    """Refresh lastUsed only."""
    return document.model_copy(update={"last_used": now or _now()})


def dump_mapping_document(document: MappingDocument) -> str:
    """Serialize a document to pretty-printed JSON."""
    return document.model_dump_json(by_alias=True, indent=2)


def load_mapping_document(text: str) -> Optional[MappingDocument]:
    """Parse and validate a mapping document.

    Returns:
        The document, or None if the text is not a valid document.
    """
    try:
        document = MappingDocument.model_validate_json(text)
    except ValidationError as e:
        logger.warning(f"Invalid mapping document, ignoring: {e.error_count()} error(s)")
        logger.debug(str(e))
        return None

    logger.info(
        f"Loaded mapping document with {len(document.categories)} rule(s) and "
        f"{len(document.contributors)} contributor(s)"
    )
    return document


def read_mapping_file(path: Path) -> Optional[MappingDocument]:
    """Load a mapping document from disk, None if missing, unreadable or invalid."""
    if not path.exists():
        logger.info(f"No mapping document at {path}")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (UnicodeDecodeError, OSError) as e:
        logger.warning(f"Cannot read mapping document at {path}, ignoring: {e}")
        return None

    return load_mapping_document(text)


def write_mapping_file(path: Path, document: MappingDocument) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_mapping_document(document))
    logger.info(f"Wrote mapping document to {path}")
