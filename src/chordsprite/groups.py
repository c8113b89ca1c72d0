"""Split parsed clips into difficulty-tier sprite groups."""

from collections.abc import Iterable

from chordsprite.types import ClipItem, SpriteGroup


def partition(
    items: list[ClipItem],
    groups: Iterable[SpriteGroup],
) -> dict[str, list[ClipItem]]:
    """Assign items to every group that accepts their chord quality.

    Membership is non-exclusive and each group keeps the items in their
    discovery order. Groups with no members map to an empty list.
    """
    return {
        group.name: [item for item in items if group.accepts(item)]
        for group in groups
    }
