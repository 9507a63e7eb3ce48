"""Tests for deck code generation and import."""

import logging

import pytest

from deckcode.models.card import CatalogCard
from deckcode.models.deck import CountedEntry
from deckcode.models.failure import DeckCodeError, DeckCodeErrorKind
from deckcode.services.deck_import import (
    DeckCodeFormat,
    detect_deck_code_format,
    generate_codes_for_ids,
    generate_deck_codes,
    import_deck_code,
)


class TestDetectDeckCodeFormat:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("KCG-rDLXC", DeckCodeFormat.KCG),
            ("  KCG-rDLXC  ", DeckCodeFormat.KCG),
            ("exA-1/JS-12", DeckCodeFormat.SLASH),
            ("exA-1", DeckCodeFormat.UNKNOWN),
            ("", DeckCodeFormat.UNKNOWN),
        ],
    )
    def test_detection(self, code: str, expected: DeckCodeFormat) -> None:
        assert detect_deck_code_format(code) == expected


class TestGenerateDeckCodes:
    def test_generates_both_codes(self, catalog: list[CatalogCard]) -> None:
        entries = [CountedEntry(card=catalog[1], count=1)]

        codes = generate_deck_codes(entries)

        assert codes.slash == "AA-1"
        assert codes.kcg == "KCG-rDLXC"
        assert codes.kcg_error is None

    def test_empty_deck(self) -> None:
        codes = generate_deck_codes([])

        assert codes.slash == ""
        assert codes.kcg == ""

    def test_kcg_failure_keeps_slash_code(
        self,
        catalog: list[CatalogCard],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        entries = [CountedEntry(card=catalog[1], count=5)]

        with caplog.at_level(logging.ERROR):
            codes = generate_deck_codes(entries)

        assert codes.slash == "/".join(["AA-1"] * 5)
        assert codes.kcg is None
        assert codes.kcg_error is not None
        assert "1..4" in codes.kcg_error
        assert "KCG" in caplog.text

    def test_from_ids_counts_repeats(self) -> None:
        codes = generate_codes_for_ids(["exA-1", "exA-1", "prmD-9", "JS-12"])

        assert codes.slash == "exA-1/exA-1/prmD-9/JS-12"
        assert codes.kcg == "KCG-jzN8IbPIrE"


class TestImportDeckCode:
    def test_import_kcg(self, catalog: list[CatalogCard]) -> None:
        result = import_deck_code("KCG-jzN8IbPIrE", catalog)

        assert result.format == DeckCodeFormat.KCG
        assert [(e.card.id, e.count) for e in result.resolved] == [
            ("exA-1", 2),
            ("prmD-9", 1),
            ("JS-12", 1),
        ]
        assert result.warning is None

    def test_import_slash(self, catalog: list[CatalogCard]) -> None:
        result = import_deck_code(" exA-1/JS-12/exA-1 ", catalog)

        assert result.format == DeckCodeFormat.SLASH
        assert [(e.card.id, e.count) for e in result.resolved] == [
            ("exA-1", 2),
            ("JS-12", 1),
        ]

    def test_partial_import_warns(self, catalog: list[CatalogCard]) -> None:
        result = import_deck_code("exA-1/BS-2/BS-2", catalog)

        assert result.unresolved_ids == ["BS-2"]
        assert result.warning is not None
        assert "1 distinct cards" in result.warning
        assert "BS-2" in result.warning

    def test_empty_code(self, catalog: list[CatalogCard]) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            import_deck_code("   ", catalog)

        assert exc_info.value.error_kind == DeckCodeErrorKind.VALIDATION

    def test_unknown_format(self, catalog: list[CatalogCard]) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            import_deck_code("exA-1", catalog)

        assert exc_info.value.error_kind == DeckCodeErrorKind.VALIDATION
        assert "Unsupported" in exc_info.value.message

    def test_kcg_errors_become_decode_errors(self, catalog: list[CatalogCard]) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            import_deck_code("KCG-rD@XC", catalog)

        assert exc_info.value.error_kind == DeckCodeErrorKind.DECODE
        assert "@" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, DeckCodeError)

    def test_slash_errors_become_decode_errors(self, catalog: list[CatalogCard]) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            import_deck_code("exA-1//JS-12", catalog)

        assert exc_info.value.error_kind == DeckCodeErrorKind.DECODE
        assert "//" in exc_info.value.message

    def test_kcg_without_cards(self, catalog: list[CatalogCard]) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            import_deck_code("KCG-/", catalog)

        assert exc_info.value.error_kind == DeckCodeErrorKind.DECODE
        assert "Could not read" in exc_info.value.message

    def test_nothing_resolves(self, catalog: list[CatalogCard]) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            import_deck_code("CA-3/DS-4/CA-3", catalog)

        assert exc_info.value.error_kind == DeckCodeErrorKind.DECODE
        assert exc_info.value.missing_ids == ("CA-3", "DS-4")
        assert "CA-3, DS-4" in exc_info.value.message
