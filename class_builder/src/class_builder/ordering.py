from __future__ import annotations

import rustworkx as rx
from typing_extensions import Dict, Iterable, List, Optional

from . import logger
from .class_info import ClassInfo


class ClassOrderer:
    """
    Orders classes so that every class comes after all of its superclasses that are generated
    as well. Classes that are not related keep the order of their depth in the hierarchy and then
    of their names.
    """

    def order(self, classes: Iterable[ClassInfo]) -> List[ClassInfo]:
        classes = sorted(classes, key=lambda c: (c.name, str(c.iri)))
        if not classes:
            return []
        graph = rx.PyDiGraph()
        indices: Dict[str, int] = {str(c.iri): graph.add_node(c) for c in classes}
        for info in classes:
            if info.superclass is not None and str(info.superclass) in indices:
                graph.add_edge(indices[str(info.superclass)], indices[str(info.iri)], None)

        if not rx.is_directed_acyclic_graph(graph):
            logger.warning("The class hierarchy contains a cycle, classes are ordered by name")
            return classes

        by_iri = {str(c.iri): c for c in classes}
        depths = {str(c.iri): self.depth(c, by_iri) for c in classes}
        return rx.lexicographical_topological_sort(
            graph, key=lambda c: f"{depths[str(c.iri)]:06d}{c.name}"
        )

    @staticmethod
    def depth(info: ClassInfo, by_iri: Dict[str, ClassInfo]) -> int:
        """
        The length of the superclass chain of a class. The chain ends at a root class or at the
        first superclass that is not among the classes in `by_iri`, which still counts.
        """
        depth = 0
        current: Optional[ClassInfo] = info
        visited = set()
        while current is not None and current.superclass is not None:
            if str(current.iri) in visited:
                break
            visited.add(str(current.iri))
            depth += 1
            current = by_iri.get(str(current.superclass))
        return depth
