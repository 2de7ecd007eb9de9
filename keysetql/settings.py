from __future__ import annotations

import dataclasses
from collections import abc
from enum import Enum
from typing import Optional, Union


# An ordering: a mapping { key => 'ASC'|'DESC' }, or a list of (key, direction) pairs
OrderingPairs = Union[abc.Mapping[str, Optional[str]], abc.Sequence[tuple[str, Optional[str]]]]


@dataclasses.dataclass
class PaginationSettings:
    """ Settings for a paginated query

    This object lists every option that affects cursor pagination.
    All of them are optional: a missing or invalid value falls back to a sane default.
    """
    # Compare the cursor by id (or date) with: '>' or '<'. Anything else is taken as '>'
    compare: Optional[str] = None

    # Ordering: a single key, or an ordered mapping/list of (key, direction)
    order_by: Union[None, str, OrderingPairs] = None

    # Direction for a single `order_by` key: 'ASC' or 'DESC'. Default: 'DESC'
    order: Optional[str] = None

    # Declared type of the attribute value, e.g. 'NUMERIC' or 'DECIMAL(10,2)'
    attribute_type: Optional[str] = None

    # Named attribute clauses: { ordering key => { 'key': attribute name, ... } }
    attribute_query: Optional[dict[str, dict]] = None

    # Attribute name to order by when `order_by` uses the generic "attribute_value" key
    attribute_key: Optional[str] = None

    @classmethod
    def from_dict(cls, vars: abc.Mapping) -> PaginationSettings:
        """ Pick recognized settings from a dict of query variables. Unknown keys are ignored """
        return cls(**{
            name: vars[name]
            for name in SETTINGS_FIELD_NAMES
            if name in vars
        })

    def get_compare(self) -> ComparisonDirection:
        return ComparisonDirection.from_setting(self.compare)

    def get_ordering(self) -> Optional[list[tuple[str, SortingDirection]]]:
        """ Get the ordering as a list of (key, direction) pairs

        Returns:
            None if no ordering is configured
        """
        order_by = self.order_by

        # Single key: direction comes from `order`
        if isinstance(order_by, str):
            if not order_by:
                return None
            return [(order_by, SortingDirection.from_setting(self.order))]

        # Empty, or not a collection at all
        if not order_by or isinstance(order_by, (bytes, bytearray)) or not isinstance(order_by, abc.Iterable):
            return None

        # Mapping or a list of pairs. Order matters.
        if isinstance(order_by, abc.Mapping):
            pairs = list(order_by.items())
        else:
            pairs = [_ordering_pair(i, item) for i, item in enumerate(order_by)]

        return [
            (key, SortingDirection.from_setting(direction))
            for key, direction in pairs
        ] or None

    def get_attribute_clause_key(self, key: str) -> Optional[str]:
        """ Get the attribute name from a named attribute clause, if there is one """
        if not self.attribute_query:
            return None

        clause = self.attribute_query.get(key)
        if not isinstance(clause, abc.Mapping):
            return None

        return clause.get('key') or None


class ComparisonDirection(Enum):
    """ How to compare with the cursor by id or date """
    GREATER = '>'
    LESS = '<'

    @classmethod
    def from_setting(cls, value: Optional[str]) -> ComparisonDirection:
        """ Get a direction from a setting. Anything unrecognized is GREATER """
        return cls.LESS if value == cls.LESS.value else cls.GREATER


class SortingDirection(Enum):
    """ Direction of a single ordering key """
    ASC = 'ASC'
    DESC = 'DESC'

    @classmethod
    def from_setting(cls, value: Optional[str]) -> SortingDirection:
        """ Get a direction from a setting. Anything but 'ASC' is DESC """
        if isinstance(value, str) and value.upper() == cls.ASC.value:
            return cls.ASC
        else:
            return cls.DESC


def _ordering_pair(index: int, item) -> tuple:
    """ Get a (key, direction) pair from a list item

    A list item that is not a pair is taken as a direction for its position key, e.g. ['title'] -> ('0', 'title').
    Position keys resolve to nothing, so they are compared by date.
    """
    if isinstance(item, (tuple, list)) and len(item) == 2 and isinstance(item[0], str):
        return item[0], item[1]
    else:
        return str(index), item if isinstance(item, str) else None


SETTINGS_FIELD_NAMES = tuple(field.name for field in dataclasses.fields(PaginationSettings))
