"""Dependency ordering for declared resources.

Resources are ordered by a depth-first post-order traversal: each node is
emitted once, right after all of its dependencies. Roots are visited in the
order they were added, so the same declarations always give the same order.
"""

from typing import Callable, Generic, Hashable, Iterable, Iterator, TypeVar

from basicbundles.errors import CircularDependencyError

__all__ = ["DependencyGraph"]

T = TypeVar("T", bound=Hashable)


class DependencyGraph(Generic[T]):
    """
    Directed graph of dependees and their dependencies.

    Nodes that only ever appear as dependencies are still traversed; they
    simply have no outgoing edges.
    """

    def __init__(self, name_of: Callable[[T], str] = str):
        self._dependencies: dict[T, list[T]] = {}
        self._name_of = name_of

    def add_dependencies(self, dependee: T, dependencies: Iterable[T]):
        """
        Add a node together with the nodes it depends on.

        Args:
            dependee: The node whose dependencies are being registered.
            dependencies: The nodes it depends on, in declaration order.
        """
        self._dependencies.setdefault(dependee, []).extend(dependencies)

    def traverse(self) -> Iterator[T]:
        """
        Yield every node strictly after all of its transitive dependencies.

        Raises:
            CircularDependencyError: If a node is reached again while it is still
                on the current traversal path. The error names the whole cycle.
        """
        emitted: set[T] = set()
        ordered: list[T] = []
        path: list[T] = []
        on_path: set[T] = set()

        def visit(node: T):
            if node in on_path:
                cycle = path[path.index(node):] + [node]
                raise CircularDependencyError([self._name_of(n) for n in cycle])
            if node in emitted:
                return

            path.append(node)
            on_path.add(node)
            for dependency in self._dependencies.get(node, ()):
                visit(dependency)
            path.pop()
            on_path.discard(node)

            emitted.add(node)
            ordered.append(node)

        for root in self._dependencies:
            visit(root)

        yield from ordered
