from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CatalogCard:
    """
    A card record from the card catalog.

    Attributes:
        id: Card identifier, e.g. "exA-1", "JS-12", "prmD-9"
        name: Display name
        kind: Card kind as listed in the catalog (Artist, Song, Magic, Direction)
        types: Colour / play-type tokens
        effect: Effect text, if any
        tags: Free-form search tags
    """

    id: str
    name: str
    kind: str = ""
    types: tuple[str, ...] = ()
    effect: str | None = None
    tags: tuple[str, ...] = ()
