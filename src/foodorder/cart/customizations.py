"""Customization value object and the line identity comparison built on it.

A customization is one option/choice pair (``size=L``, ``extras=cheese``).
Lines store them as an ordered list of plain dicts; two lines are the same
line only when their pair lists are equal position by position.
"""

from collections.abc import Iterable, Mapping

from protean.exceptions import ValidationError
from protean.fields import String

from foodorder.domain import foodorder


@foodorder.value_object
class Customization:
    """A selected option on a menu item, e.g. size=Large."""

    option_id = String(required=True, max_length=100)
    choice_id = String(required=True, max_length=100)

    def as_pair(self) -> tuple[str, str]:
        return (self.option_id, self.choice_id)


def _checked(option_id, choice_id) -> tuple[str, str]:
    return Customization(option_id=str(option_id), choice_id=str(choice_id)).as_pair()


def _pair(entry) -> tuple[str, str]:
    if isinstance(entry, Customization):
        return entry.as_pair()
    if isinstance(entry, Mapping):
        if "option_id" not in entry or "choice_id" not in entry:
            raise ValidationError({"customizations": [f"Customization is missing option_id/choice_id: {entry!r}"]})
        return _checked(entry["option_id"], entry["choice_id"])
    if isinstance(entry, (tuple, list)) and len(entry) == 2:
        return _checked(entry[0], entry[1])
    raise ValidationError({"customizations": [f"Unsupported customization: {entry!r}"]})


def normalize_customizations(customizations) -> list[dict]:
    """Return the canonical ordered ``[{option_id, choice_id}, ...]`` form.

    Accepts ``None``, an ``{option: choice}`` mapping (insertion order kept,
    list-valued choices expand into one pair per choice), or an iterable of
    ``Customization`` objects, pair dicts or ``(option, choice)`` tuples.
    """
    if customizations is None:
        return []

    pairs: list[tuple[str, str]] = []
    if isinstance(customizations, Mapping):
        for option_id, choice in customizations.items():
            if isinstance(choice, (list, tuple)):
                pairs.extend(_checked(option_id, c) for c in choice)
            else:
                pairs.append(_checked(option_id, choice))
    elif isinstance(customizations, Iterable) and not isinstance(customizations, (str, bytes)):
        pairs = [_pair(entry) for entry in customizations]
    else:
        raise ValidationError({"customizations": [f"Unsupported customizations value: {customizations!r}"]})

    return [{"option_id": option_id, "choice_id": choice_id} for option_id, choice_id in pairs]


def customizations_match(left, right) -> bool:
    """Order-sensitive structural equality of two customization lists."""
    left_pairs = [_pair(entry) for entry in (left or [])]
    right_pairs = [_pair(entry) for entry in (right or [])]
    if len(left_pairs) != len(right_pairs):
        return False
    return all(a == b for a, b in zip(left_pairs, right_pairs))
