from dataclasses import dataclass, fields, replace
from datetime import date
from decimal import Decimal
from typing import Optional

# Fields that later pipeline stages may set; everything else is fixed at ingestion.
ANNOTATION_FIELDS = ("category", "contributor", "is_duplicate")


@dataclass(frozen=True)
class Transaction:
    id: str  # "{source_file}-{row_index}"
    booking_date: date
    amount: Decimal  # positive = income, negative = expense
    title: str
    name: str
    reference_number: str  # kept as text, may have leading zeros
    message: str
    source_file: str
    category: Optional[str] = None
    contributor: Optional[str] = None
    is_duplicate: Optional[bool] = None

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    def annotate(self, **annotations) -> "Transaction":
        """Return a copy with annotation fields set.

        Raises:
            ValueError: If a core (ingested) field is passed.
        """
        invalid = set(annotations) - set(ANNOTATION_FIELDS)
        if invalid:
            raise ValueError(f"Cannot annotate core fields: {sorted(invalid)}")
        return replace(self, **annotations)

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-friendly dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["booking_date"] = self.booking_date.isoformat()
        data["amount"] = str(self.amount)
        return data
