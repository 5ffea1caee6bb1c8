from __future__ import annotations

from typing_extensions import Any, Optional


def link(
    source: Any,
    forward: str,
    target: Optional[Any],
    reverse: str,
    single_valued: bool,
):
    """
    Connect two entities through a property and keep the inverse collection of the target in sync.

    :param source: The entity the property belongs to.
    :param forward: The attribute of `source` holding the property value, a set for multi valued
     properties.
    :param target: The referenced entity. None clears a single valued property.
    :param reverse: The attribute of the target holding the inverse collection.
    :param single_valued: Whether `forward` holds a single entity. The previous target then loses
     `source` from its inverse collection.
    """
    if single_valued:
        previous = getattr(source, forward, None)
        if previous is not None and previous is not target:
            getattr(previous, reverse).discard(source)
        setattr(source, forward, target)
    elif target is not None:
        getattr(source, forward).add(target)
    if target is not None:
        getattr(target, reverse).add(source)
