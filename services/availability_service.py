"""
Availability evaluator: which selector options are still choosable.

An option is available when picking it on top of the current selection
still leads to at least one variant. Picking an option of a type that is
already selected replaces that type's entry instead of adding a second
one, so alternate values of a selected type are judged on their own.

Evaluation is read-only: the selection passed in is copied and the
variant list is snapshotted when the evaluator is built.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence
import structlog

from models.variant import Variant
from models.variant_selection import (
    OptionState,
    OptionAvailability,
    AttributeAvailability,
)
from utils.signature import (
    option_pairs,
    selection_pairs,
    signature_from_pairs,
    Pair,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SelectorOption:
    """Option shown in a selector."""
    id: str
    value: str = ""
    display_value: str = ""
    hex_color: Optional[str] = None


@dataclass(frozen=True)
class SelectorAttribute:
    """
    Attribute type shown as a selector.

    AttributeTypeWithOptions from the catalog has the same shape and can
    be passed wherever these are accepted.
    """
    id: str
    name: str = ""
    display_name: str = ""
    options: tuple[SelectorOption, ...] = ()


def selector_attributes(variants: Sequence[Variant]) -> list[SelectorAttribute]:
    """
    Attribute types and options present in the variants.

    Built from the variants' option snapshots in first-appearance order.
    """
    types: dict[str, Any] = {}
    options: dict[str, dict[str, SelectorOption]] = {}
    for variant in variants:
        for option in variant.options:
            if not option.type_id or not option.option_id:
                continue
            types.setdefault(option.type_id, option)
            options.setdefault(option.type_id, {}).setdefault(
                option.option_id,
                SelectorOption(
                    id=option.option_id,
                    value=option.value,
                    display_value=option.display_value,
                    hex_color=option.hex_color,
                ),
            )

    return [
        SelectorAttribute(
            id=type_id,
            name=snapshot.type_name,
            display_name=snapshot.type_display_name,
            options=tuple(options[type_id].values()),
        )
        for type_id, snapshot in types.items()
    ]


class AvailabilityEvaluator:
    """
    Availability checks over one product's variant list.

    Results are memoized per combined test selection, keyed by its
    canonical signature. Build a new evaluator when the variants change.
    """

    def __init__(self, variants: Sequence[Variant]):
        self._variants = tuple(variants)
        self._variant_pairs = tuple(option_pairs(v.options) for v in self._variants)
        self._cache: dict[str, bool] = {}

    def _reachable(self, wanted: frozenset[Pair]) -> bool:
        key = signature_from_pairs(wanted)
        if key not in self._cache:
            self._cache[key] = any(wanted <= pairs for pairs in self._variant_pairs)
        return self._cache[key]

    def is_available(
        self,
        selection: Optional[Mapping[str, str]],
        type_id: str,
        option_id: str,
    ) -> bool:
        """
        Check whether choosing option_id for type_id keeps a variant reachable.

        Args:
            selection: Current selection, type_id -> option_id
            type_id: Attribute type of the candidate
            option_id: Candidate option

        Returns:
            True if some variant covers the selection with type_id set to
            option_id; False when either id is blank
        """
        candidate = selection_pairs({type_id: option_id})
        if not candidate:
            return False

        test = dict(selection_pairs(selection))
        test.update(candidate)
        return self._reachable(selection_pairs(test))

    def evaluate(
        self,
        selection: Optional[Mapping[str, str]],
        attributes: Optional[Sequence[Any]] = None,
    ) -> list[AttributeAvailability]:
        """
        Availability of every option of every attribute type.

        Args:
            selection: Current selection, type_id -> option_id
            attributes: Types and options to report on (SelectorAttribute
                or AttributeTypeWithOptions); defaults to those present in
                the variants

        Returns:
            One AttributeAvailability per type, options marked selected,
            available or unavailable
        """
        current = dict(selection_pairs(selection))
        if attributes is None:
            attributes = selector_attributes(self._variants)

        result = []
        for attribute in attributes:
            states = []
            for option in attribute.options:
                if current.get(attribute.id) == option.id:
                    state = OptionState.SELECTED
                elif self.is_available(current, attribute.id, option.id):
                    state = OptionState.AVAILABLE
                else:
                    state = OptionState.UNAVAILABLE
                states.append(OptionAvailability(
                    option_id=option.id,
                    value=option.value,
                    display_value=option.display_value,
                    hex_color=option.hex_color,
                    state=state,
                ))
            result.append(AttributeAvailability(
                type_id=attribute.id,
                name=attribute.name,
                display_name=attribute.display_name,
                options=states,
            ))

        logger.debug(
            "availability_evaluated",
            selection=current,
            attribute_count=len(result),
            cached=len(self._cache),
        )
        return result


def is_option_available(
    variants: Sequence[Variant],
    selection: Optional[Mapping[str, str]],
    type_id: str,
    option_id: str,
) -> bool:
    """One-off availability check; see AvailabilityEvaluator.is_available."""
    return AvailabilityEvaluator(variants).is_available(selection, type_id, option_id)


def evaluate_availability(
    variants: Sequence[Variant],
    selection: Optional[Mapping[str, str]],
    attributes: Optional[Sequence[Any]] = None,
) -> list[AttributeAvailability]:
    """One-off evaluation; see AvailabilityEvaluator.evaluate."""
    return AvailabilityEvaluator(variants).evaluate(selection, attributes)
