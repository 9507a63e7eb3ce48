"""
Parser for the CSV card catalog.

Expected header:
    id,name,kind,type,effect,tags

Example row:
    exA-1,Opening Act,Artist,赤/青,Draw a card.,starter/draw
"""

import csv
import logging
import re
from io import StringIO
from pathlib import Path

from deckcode.models.card import CatalogCard
from deckcode.models.failure import FailureKind, KnownError
from deckcode.services.card_id import is_card_identifier

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "name")

# Tags may be separated by "/", ",", "|" or the Japanese comma
TAG_SEPARATOR_PATTERN = re.compile(r"[/,|、]")


class CatalogLoadError(KnownError):
    """Raised when the card catalog cannot be read at all."""

    def __init__(self, reason: str, message: str) -> None:
        self.reason = reason
        super().__init__(
            kind=FailureKind.CATALOG_UNAVAILABLE,
            message=message,
            detail=f"Catalog error: {reason}",
            suggestion="Check the card catalog file.",
            status_code=503,
        )


def split_types(value: str | None) -> tuple[str, ...]:
    """Split a type cell on "/"; a cell without "/" is one token."""
    value = (value or "").strip()
    if not value:
        return ()
    if "/" not in value:
        return (value,)
    return tuple(part.strip() for part in value.split("/") if part.strip())


def split_tags(value: str | None) -> tuple[str, ...]:
    """Split a tags cell, dropping blanks and repeats."""
    tags: list[str] = []
    for part in TAG_SEPARATOR_PATTERN.split(value or ""):
        tag = part.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def load_catalog_csv(text: str) -> list[CatalogCard]:
    """
    Parse catalog CSV text into CatalogCard objects.

    Rows with an ID that does not match the card grammar, or without a
    name, are skipped.

    Raises:
        CatalogLoadError: if the text is blank or lacks id/name columns
    """
    if not text or not text.strip():
        raise CatalogLoadError("empty", "Card catalog is empty")

    reader = csv.DictReader(StringIO(text.strip()))

    fieldnames = [name.strip().lower() for name in reader.fieldnames or []]
    missing = [column for column in REQUIRED_COLUMNS if column not in fieldnames]
    if missing:
        raise CatalogLoadError(
            "missing_column",
            f"Card catalog is missing columns: {', '.join(missing)}",
        )

    try:
        raw_rows = list(reader)
    except csv.Error as e:
        raise CatalogLoadError("parse", f"Card catalog could not be parsed: {e}") from e

    cards: list[CatalogCard] = []

    for raw_row in raw_rows:
        row = {
            (key or "").strip().lower(): (value or "").strip()
            for key, value in raw_row.items()
            if isinstance(value, str)
        }

        card_id = row.get("id", "")
        if not is_card_identifier(card_id):
            logger.debug("Skipping catalog row with invalid ID: %r", card_id)
            continue

        name = row.get("name", "")
        if not name:
            logger.debug("Skipping catalog row without a name: %s", card_id)
            continue

        cards.append(
            CatalogCard(
                id=card_id,
                name=name,
                kind=row.get("kind", ""),
                types=split_types(row.get("type")),
                effect=row.get("effect") or None,
                tags=split_tags(row.get("tags")),
            )
        )

    return cards


def load_catalog_file(path: str | Path) -> list[CatalogCard]:
    """
    Read and parse a catalog CSV file.

    Raises:
        CatalogLoadError: if the file cannot be read or parsed
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError("unreadable", f"Card catalog could not be read: {path}") from e

    return load_catalog_csv(text)
