"""Tests for slash-delimited deck codes."""

import pytest

from deckcode.config import settings
from deckcode.models.card import CatalogCard
from deckcode.models.failure import DeckCodeError, DeckCodeErrorKind, FailureKind
from deckcode.services.slash_codec import (
    decode_delimited,
    encode_delimited,
    validate_delimited,
)


class TestEncodeDelimited:
    def test_joins_in_given_order_with_repeats(self) -> None:
        code = encode_delimited(["JS-12", "exA-1", "exA-1", "prmD-9"])

        assert code == "JS-12/exA-1/exA-1/prmD-9"

    def test_single_card(self) -> None:
        assert encode_delimited(["exA-1"]) == "exA-1"

    def test_empty_list(self) -> None:
        assert encode_delimited([]) == ""

    def test_rejects_malformed_id(self) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            encode_delimited(["exA-1", "A/B-1"])

        assert exc_info.value.error_kind == DeckCodeErrorKind.GENERATION
        assert exc_info.value.invalid_id == "A/B-1"


class TestValidateDelimited:
    @pytest.mark.parametrize(
        ("code", "fragment"),
        [
            ("", "empty"),
            ("   ", "empty"),
            ("/AA-1", "start or end"),
            ("AA-1/", "start or end"),
            ("AA-1//BS-2", "//"),
        ],
    )
    def test_structural_errors(self, code: str, fragment: str) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            validate_delimited(code)

        assert exc_info.value.error_kind == DeckCodeErrorKind.VALIDATION
        assert exc_info.value.kind == FailureKind.INVALID_INPUT
        assert fragment in exc_info.value.message

    def test_too_long(self) -> None:
        code = "/".join(["exA-1"] * 10)

        with pytest.raises(DeckCodeError) as exc_info:
            validate_delimited(code, max_length=20)

        assert "too long" in exc_info.value.message

    def test_default_limit_comes_from_settings(self) -> None:
        code = "A" * (settings.max_deck_code_length + 1)

        with pytest.raises(DeckCodeError, match="too long"):
            validate_delimited(code)

    def test_returns_trimmed_code(self) -> None:
        assert validate_delimited("  AA-1/BS-2 \n") == "AA-1/BS-2"

    def test_length_checked_after_trimming(self) -> None:
        assert validate_delimited("   AA-1   ", max_length=4) == "AA-1"


class TestDecodeDelimited:
    def test_counts_copies(self, catalog: list[CatalogCard]) -> None:
        result = decode_delimited("exA-1/JS-12/exA-1", catalog)

        assert [(e.card.id, e.count) for e in result.resolved] == [
            ("exA-1", 2),
            ("JS-12", 1),
        ]
        assert result.unresolved_ids == []

    def test_malformed_token_is_dropped(self, catalog: list[CatalogCard]) -> None:
        """A grammatically invalid token is dropped, not reported as missing."""
        result = decode_delimited("AA-1/ZZZ-9/AA-1", catalog)

        assert [(e.card.id, e.count) for e in result.resolved] == [("AA-1", 2)]
        assert result.unresolved_ids == []

    def test_missing_cards_are_deduplicated(self, catalog: list[CatalogCard]) -> None:
        result = decode_delimited("exA-1/BS-2/BS-2", catalog)

        assert [(e.card.id, e.count) for e in result.resolved] == [("exA-1", 1)]
        assert result.unresolved_ids == ["BS-2"]

    def test_nothing_importable_is_not_an_error(self, catalog: list[CatalogCard]) -> None:
        result = decode_delimited("CA-3/DS-4", catalog)

        assert result.resolved == []
        assert result.unresolved_ids == ["CA-3", "DS-4"]

    def test_tokens_are_trimmed(self, catalog: list[CatalogCard]) -> None:
        result = decode_delimited("exA-1 / JS-12", catalog)

        assert [e.card.id for e in result.resolved] == ["exA-1", "JS-12"]

    @pytest.mark.parametrize("code", ["/AA-1", "AA-1//BS-2", "AA-1/"])
    def test_delimiter_violations(self, code: str, catalog: list[CatalogCard]) -> None:
        with pytest.raises(DeckCodeError) as exc_info:
            decode_delimited(code, catalog)

        assert exc_info.value.error_kind == DeckCodeErrorKind.VALIDATION

    def test_round_trip(self, catalog: list[CatalogCard]) -> None:
        counts = {"exA-1": 4, "JS-12": 3, "prmD-9": 1, "RD-50": 2}
        card_ids = [card_id for card_id, n in counts.items() for _ in range(n)]

        result = decode_delimited(encode_delimited(card_ids), catalog)

        assert {e.card.id: e.count for e in result.resolved} == counts
