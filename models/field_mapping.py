"""FieldMapping class binding logical fields to dataset column headers."""

from typing import Dict, List, Optional

UNIT = "unit"
PART_REQUIRED = "partRequired"
PART_RECEIVED = "partReceived"
PARTS_INSTALLED = "partsInstalled"
COMMENTS = "comments"

FIELDS = [UNIT, PART_REQUIRED, PART_RECEIVED, PARTS_INSTALLED, COMMENTS]

# Column labels of the maintenance log export
FIELD_LABELS = {
    UNIT: "UNITÉ",
    PART_REQUIRED: "PIÈCE REQUISE",
    PART_RECEIVED: "PIÈCE REÇUE",
    PARTS_INSTALLED: "PIÈCES INSTALLÉES",
    COMMENTS: "COMMENTAIRES",
}

# Lowercase fragments used to guess a header for each field
FIELD_HINTS = {
    UNIT: ["unité", "unite"],
    PART_REQUIRED: ["pièce requise", "piece requise"],
    PART_RECEIVED: ["pièce reçue", "piece recue", "réception", "reception"],
    PARTS_INSTALLED: ["pièces installées", "pieces installees", "install"],
    COMMENTS: ["comment"],
}


class IncompleteMappingError(ValueError):
    """Raised when a mapping is not fully bound to the dataset headers."""


class FieldMapping:
    """Binding from logical field name to a column header ("" when unbound)."""

    def __init__(
        self,
        unit: str = "",
        part_required: str = "",
        part_received: str = "",
        parts_installed: str = "",
        comments: str = "",
    ):
        self.unit = unit or ""
        self.part_required = part_required or ""
        self.part_received = part_received or ""
        self.parts_installed = parts_installed or ""
        self.comments = comments or ""

    def header_for(self, field: str) -> str:
        """Header bound to a logical field, or "" if unbound/unknown."""
        return self.to_dict().get(field, "")

    def missing_fields(self) -> List[str]:
        return [field for field in FIELDS if not self.header_for(field)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def to_dict(self) -> Dict[str, str]:
        return {
            UNIT: self.unit,
            PART_REQUIRED: self.part_required,
            PART_RECEIVED: self.part_received,
            PARTS_INSTALLED: self.parts_installed,
            COMMENTS: self.comments,
        }

    @classmethod
    def from_dict(cls, dct: Dict[str, str]) -> "FieldMapping":
        return cls(
            dct.get(UNIT, ""),
            dct.get(PART_REQUIRED, ""),
            dct.get(PART_RECEIVED, ""),
            dct.get(PARTS_INSTALLED, ""),
            dct.get(COMMENTS, ""),
        )

    def with_updates(self, **headers: Optional[str]) -> "FieldMapping":
        """Copy of this mapping with the given logical fields rebound."""
        values = self.to_dict()
        for field, header in headers.items():
            if field not in values:
                raise KeyError(f"Unknown field '{field}'")
            if header is not None:
                values[field] = header
        return FieldMapping.from_dict(values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FieldMapping):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"FieldMapping({self.to_dict()!r})"


def resolve_header(mapping: FieldMapping, field: str) -> str:
    """Header bound to `field`, "" when unbound."""
    return mapping.header_for(field)


def field_value(record: Dict[str, str], mapping: FieldMapping, field: str) -> str:
    """
    Value of a logical field in a record.

    Unbound fields and headers missing from the record both resolve to "".
    """
    header = resolve_header(mapping, field)
    if not header:
        return ""
    return record.get(header) or ""


def detect_mapping(
    headers: List[str], previous: Optional[FieldMapping] = None
) -> FieldMapping:
    """
    Propose a mapping for a freshly imported header list.

    - With a previous mapping: keep each header that still exists
    - Without: first header containing one of the field's hints
    """
    if previous is not None:
        return FieldMapping.from_dict(
            {
                field: header if header in headers else ""
                for field, header in previous.to_dict().items()
            }
        )

    def find(hints: List[str]) -> str:
        for header in headers:
            if any(hint in header.lower() for hint in hints):
                return header
        return ""

    return FieldMapping.from_dict({field: find(FIELD_HINTS[field]) for field in FIELDS})


def require_complete(mapping: FieldMapping, headers: List[str]) -> None:
    """Raise IncompleteMappingError unless every field is bound to a known header."""
    missing = mapping.missing_fields()
    if missing:
        labels = ", ".join(FIELD_LABELS[f] for f in missing)
        raise IncompleteMappingError(f"Unmapped columns: {labels}")
    unknown = [h for h in mapping.to_dict().values() if h not in headers]
    if unknown:
        raise IncompleteMappingError(
            f"Mapped columns not in dataset: {', '.join(unknown)}"
        )
