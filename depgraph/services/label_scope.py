"""
Label scope filtering for dependency specs.

A Labels node governs every following sibling until the next Labels node.
Scopes carrying an unauthorized label (test, suggestion, ...) are removed
together with everything they govern.
"""

from typing import Iterable, List

from ..domain import DependencySpecTree, Labels


UNAUTHORIZED_LABELS = frozenset({
    'test',
    'suggestion',
    'test-expensive',
    'built-against',
})


def labels_authorized(labels: Iterable[str]) -> bool:
    """True if none of the labels is unauthorized."""
    return UNAUTHORIZED_LABELS.isdisjoint(labels)


def filter_label_scopes(siblings: Iterable[DependencySpecTree]) -> List[DependencySpecTree]:
    """
    Drop siblings that fall under an unauthorized label scope.

    Examples:
        [Labels{test}, A, Labels{run}, B] -> [Labels{run}, B]
        [A, B]                            -> [A, B]

    Args:
        siblings: Children of one AllOf, in order

    Returns:
        New list with the surviving nodes in their original order
    """
    kept: List[DependencySpecTree] = []
    suppressed = False

    for node in siblings:
        if isinstance(node, Labels):
            suppressed = not labels_authorized(node.labels)
            if not suppressed:
                kept.append(node)
        elif not suppressed:
            kept.append(node)

    return kept
