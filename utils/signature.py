"""
Canonical signatures for attribute combinations.

A signature is the sorted, "|"-joined list of "type_id:option_id" tokens.
Two attribute sets are the same combination iff their signatures are
equal, regardless of order. Pairs with a missing side are dropped so
malformed rows never break comparison:

    [("size", "m"), ("color", "red")]  → "color:red|size:m"
    [("color", None)]                  → ""
"""

from typing import Iterable, Mapping, Optional, Any

SIGNATURE_SEPARATOR = "|"
TOKEN_SEPARATOR = ":"

Pair = tuple[str, str]


def _clean_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def option_token(type_id: Any, option_id: Any) -> Optional[str]:
    """
    Build the "type_id:option_id" token for one pair.

    Returns:
        Token string, or None if either id is missing or blank
    """
    type_key = _clean_id(type_id)
    option_key = _clean_id(option_id)
    if not type_key or not option_key:
        return None
    return f"{type_key}{TOKEN_SEPARATOR}{option_key}"


def signature_from_pairs(pairs: Iterable[tuple[Any, Any]]) -> str:
    """Signature for any collection of (type_id, option_id) pairs."""
    tokens = [option_token(type_id, option_id) for type_id, option_id in pairs]
    return SIGNATURE_SEPARATOR.join(sorted(token for token in tokens if token))


def option_pairs(options: Iterable[Any]) -> frozenset[Pair]:
    """
    Well-formed (type_id, option_id) pairs of embedded variant options.

    Accepts VariantOption models or plain dicts with type_id/option_id.
    """
    pairs = set()
    for option in options or ():
        if isinstance(option, Mapping):
            type_key = _clean_id(option.get("type_id"))
            option_key = _clean_id(option.get("option_id"))
        else:
            type_key = _clean_id(getattr(option, "type_id", None))
            option_key = _clean_id(getattr(option, "option_id", None))
        if type_key and option_key:
            pairs.add((type_key, option_key))
    return frozenset(pairs)


def selection_pairs(selection: Optional[Mapping[Any, Any]]) -> frozenset[Pair]:
    """Well-formed pairs of a type_id -> option_id selection."""
    pairs = set()
    for type_id, option_id in (selection or {}).items():
        type_key = _clean_id(type_id)
        option_key = _clean_id(option_id)
        if type_key and option_key:
            pairs.add((type_key, option_key))
    return frozenset(pairs)


def variant_signature(variant: Any) -> str:
    """Signature of a variant's embedded options."""
    options = variant.get("options") if isinstance(variant, Mapping) else getattr(variant, "options", None)
    return signature_from_pairs(option_pairs(options))


def selection_signature(selection: Optional[Mapping[Any, Any]]) -> str:
    """Signature of a type_id -> option_id selection."""
    return signature_from_pairs(selection_pairs(selection))
