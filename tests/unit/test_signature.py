"""
Unit tests for canonical signatures.

Run: pytest tests/unit/test_signature.py -v
"""

from models.variant import Variant, VariantOption
from utils.signature import (
    option_token,
    signature_from_pairs,
    option_pairs,
    selection_pairs,
    variant_signature,
    selection_signature,
)


class TestOptionToken:
    """Tests for option_token()"""

    def test_builds_type_option_token(self):
        assert option_token("t-color", "o-red") == "t-color:o-red"

    def test_missing_side_returns_none(self):
        assert option_token(None, "o-red") is None
        assert option_token("t-color", None) is None
        assert option_token("  ", "o-red") is None

    def test_ids_are_stringified_and_trimmed(self):
        assert option_token(7, " 12 ") == "7:12"


class TestSignatureFromPairs:
    """Tests for signature_from_pairs()"""

    def test_order_independent(self):
        a = signature_from_pairs([("size", "m"), ("color", "red")])
        b = signature_from_pairs([("color", "red"), ("size", "m")])

        assert a == b == "color:red|size:m"

    def test_empty_input_gives_empty_signature(self):
        assert signature_from_pairs([]) == ""

    def test_malformed_pairs_are_dropped(self):
        signature = signature_from_pairs([("color", "red"), (None, "m"), ("size", "")])

        assert signature == "color:red"

    def test_stable_across_calls(self):
        pairs = [("b", "2"), ("a", "1"), ("c", "3")]

        assert signature_from_pairs(pairs) == signature_from_pairs(list(pairs))


class TestVariantSignature:
    """Tests for variant_signature() and option_pairs()"""

    def test_uses_ids_not_labels(self):
        """Relabeling an option must not change the combination."""
        before = Variant(options=[VariantOption(type_id="t", option_id="o", display_value="Red")])
        after = Variant(options=[VariantOption(type_id="t", option_id="o", display_value="Crimson")])

        assert variant_signature(before) == variant_signature(after) == "t:o"

    def test_variant_without_options(self):
        assert variant_signature(Variant()) == ""

    def test_accepts_plain_dicts(self):
        variant = {"options": [{"type_id": "size", "option_id": "m"}, {"type_id": "color", "option_id": "red"}]}

        assert variant_signature(variant) == "color:red|size:m"

    def test_option_pairs_skip_incomplete_options(self):
        options = [
            VariantOption(type_id="color", option_id="red"),
            VariantOption(type_id="size"),
        ]

        assert option_pairs(options) == frozenset({("color", "red")})


class TestSelectionSignature:
    """Tests for selection_signature() and selection_pairs()"""

    def test_selection_matches_variant_signature(self):
        variant = Variant(options=[
            VariantOption(type_id="color", option_id="red"),
            VariantOption(type_id="size", option_id="m"),
        ])

        assert selection_signature({"size": "m", "color": "red"}) == variant_signature(variant)

    def test_none_and_empty_selection(self):
        assert selection_signature(None) == ""
        assert selection_pairs({}) == frozenset()

    def test_blank_entries_ignored(self):
        assert selection_pairs({"color": "red", "size": ""}) == frozenset({("color", "red")})
