from deckcode.parsers.card_catalog import (
    CatalogLoadError,
    load_catalog_csv,
    load_catalog_file,
    split_tags,
    split_types,
)

__all__ = [
    "CatalogLoadError",
    "load_catalog_csv",
    "load_catalog_file",
    "split_tags",
    "split_types",
]
