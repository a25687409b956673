"""
Events that point at other aggregates.

An event listing related aggregate ids can be selected from the store
together with the events of those aggregates:

    @dataclass
    class TaskWasCreated:
        task_id: str
        related: List[str]

    criteria = Criteria(Comparison('uuid', Comparison.EQ, order_id))
    criteria.or_where(Comparison('_related', Comparison.MEMBER_OF, order_id))
"""

from typing import Any, List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class RelatedProcessEvent(Protocol):
    """An event exposing the identifiers of the aggregates it relates to."""

    related: Sequence[Any]


def related_ids(payload: Any) -> List[str]:
    """
    Return the related identifiers of a payload as strings.

    Identifier value objects are stored by their value. Payloads that do
    not relate to anything give an empty list.
    """
    if not isinstance(payload, RelatedProcessEvent):
        return []

    ids = []
    for identifier in payload.related or ():
        get_value = getattr(identifier, 'get_value', None)
        ids.append(str(get_value() if callable(get_value) else identifier))

    return ids
