"""Total accessors for schema-less JSON values returned by Odoo.

Odoo uses ``false``, ``null`` and a missing key interchangeably to mean
"no value", and encodes many2one fields as ``[id, label]`` or ``false``.
Every function here accepts any decoded JSON value and never raises.
"""

import math
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PresentRelation:
    """A many2one reference that points at a remote record."""

    id: int
    label: str


@dataclass(frozen=True)
class AbsentRelation:
    """A many2one reference that is unset on the remote record."""


ABSENT = AbsentRelation()

Relation = PresentRelation | AbsentRelation


def string_of(value: object) -> str:
    """Return a display string, mapping ``false``/``null`` to ``""``."""
    if isinstance(value, str):
        return value
    if value is None or value is False:
        return ""
    return str(value)


def decimal_of(value: object) -> Decimal | None:
    """Return a decimal for numeric values, otherwise ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # str() keeps the shortest repr, so 0.1 stays 0.1 and not 0.1000000000000000055...
        return Decimal(str(value))
    return None


def integer_of(value: object) -> int | None:
    """Return an integer for integral numeric values, otherwise ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def flag_of(value: object) -> bool:
    """Return true only for an explicit JSON ``true``."""
    return value is True


def relation_of(value: object) -> Relation:
    """Decode an ``[id, label]`` pair; any other shape is absent."""
    if not isinstance(value, (list, tuple)) or len(value) < 2:
        return ABSENT
    relation_id = integer_of(value[0])
    if relation_id is None:
        return ABSENT
    return PresentRelation(id=relation_id, label=string_of(value[1]))


def relation_label(value: object) -> str:
    """Return the label of a relation value, or ``""`` when unset."""
    relation = relation_of(value)
    if isinstance(relation, PresentRelation):
        return relation.label
    return ""
