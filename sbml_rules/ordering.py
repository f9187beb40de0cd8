"""Dependency-based ordering for assignment rules using graphlib.TopologicalSorter.

An assignment rule ``A := f(B)`` must be evaluated after the rule assigning
``B`` when both belong to the same batch. This module builds that dependency
graph and derives a deterministic evaluation order:

- Only edges between rules of the batch exist; variables set elsewhere
  (constant parameters, species without rules) never become graph nodes.
- A rule reading its own variable does not create an edge.
- Rules with no dependency between them keep their input order.
- Rules that depend on each other through a cycle are kept together, in
  their input order, where the cycle as a whole becomes ready. Every edge
  outside a cycle is honoured and the sort always terminates.

Ordering is a pure function of its input: no state survives a call.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Iterable, Sequence
from graphlib import TopologicalSorter

from .models import AssignmentRule
from .symbols import extract_read_variables

logger = logging.getLogger(__name__)


class OrderingError(RuntimeError):
    """Raised when ordering would not return a permutation of its input."""


def build_graph(rules: Iterable[AssignmentRule]) -> dict[str, set[str]]:
    """Map each rule variable to the batch variables its math reads."""
    batch = list(rules)
    targets = {r.variable for r in batch}
    graph: dict[str, set[str]] = {r.variable: set() for r in batch}
    for rule in batch:
        reads = extract_read_variables(rule.math) & targets
        reads.discard(rule.variable)
        graph[rule.variable] |= reads
    return graph


def find_cycles(
    rules: Iterable[AssignmentRule], graph: dict[str, set[str]] | None = None
) -> list[list[str]]:
    """Return the variables of every dependency cycle, in input order."""
    batch = list(rules)
    _, members = _components(batch, graph)
    return [
        [batch[i].variable for i in group] for group in members.values() if len(group) > 1
    ]


def order_rules(
    rules: Iterable[AssignmentRule], graph: dict[str, set[str]] | None = None
) -> list[AssignmentRule]:
    """Return the rules with every dependency placed before its dependents.

    The result holds the very same rule objects; nothing is copied.
    """
    batch = list(rules)
    if len(batch) < 2:
        return batch

    deps, members = _components(batch, graph)
    component = {i: c for c, group in members.items() for i in group}

    sorter: TopologicalSorter[int] = TopologicalSorter()
    for c, group in members.items():
        upstream = {component[j] for i in group for j in deps[i]}
        upstream.discard(c)
        sorter.add(c, *sorted(upstream))
        if len(group) > 1:
            logger.warning(
                "Assignment rules for %s form a dependency cycle; keeping their input order",
                ", ".join(batch[i].variable for i in group),
            )
    sorter.prepare()

    # Among ready groups always take the one whose first rule came first.
    ready: list[tuple[int, int]] = []
    order: list[int] = []
    while sorter.is_active():
        for c in sorter.get_ready():
            heapq.heappush(ready, (members[c][0], c))
        _, c = heapq.heappop(ready)
        order.extend(members[c])
        sorter.done(c)

    result = [batch[i] for i in order]
    _check_permutation(batch, result)
    logger.debug("Rule order: %s", [r.variable for r in result])
    return result


def ordered_variables(rules: Iterable[AssignmentRule]) -> list[str]:
    """Variables of ``rules`` in evaluation order (wrapper over order_rules)."""
    return [r.variable for r in order_rules(rules)]


def _components(
    batch: Sequence[AssignmentRule], graph: dict[str, set[str]] | None
) -> tuple[list[list[int]], dict[int, list[int]]]:
    """Index-level dependencies and strongly connected groups.

    Groups map a component id to its member indices in ascending order and
    are keyed in order of their first member.
    """
    if graph is None:
        graph = build_graph(batch)
    positions: dict[str, list[int]] = {}
    for i, rule in enumerate(batch):
        positions.setdefault(rule.variable, []).append(i)
    deps = [
        sorted(
            {
                j
                for w in graph.get(rule.variable, ())
                for j in positions.get(w, ())
                if j != i
            }
        )
        for i, rule in enumerate(batch)
    ]
    component = _strongly_connected(deps)
    members: dict[int, list[int]] = {}
    for i, c in enumerate(component):
        members.setdefault(c, []).append(i)
    return deps, members


def _strongly_connected(deps: list[list[int]]) -> list[int]:
    """Iterative Tarjan: component id for every node."""
    n = len(deps)
    index = [-1] * n
    low = [0] * n
    on_stack = [False] * n
    stack: list[int] = []
    component = [-1] * n
    counter = 0
    found = 0

    for root in range(n):
        if index[root] != -1:
            continue
        index[root] = low[root] = counter
        counter += 1
        stack.append(root)
        on_stack[root] = True
        work = [(root, 0)]
        while work:
            node, pos = work[-1]
            if pos < len(deps[node]):
                work[-1] = (node, pos + 1)
                succ = deps[node][pos]
                if index[succ] == -1:
                    index[succ] = low[succ] = counter
                    counter += 1
                    stack.append(succ)
                    on_stack[succ] = True
                    work.append((succ, 0))
                elif on_stack[succ]:
                    low[node] = min(low[node], index[succ])
                continue
            work.pop()
            if work:
                parent = work[-1][0]
                low[parent] = min(low[parent], low[node])
            if low[node] == index[node]:
                while True:
                    member = stack.pop()
                    on_stack[member] = False
                    component[member] = found
                    if member == node:
                        break
                found += 1
    return component


def _check_permutation(
    batch: Sequence[AssignmentRule], result: Sequence[AssignmentRule]
) -> None:
    if len(result) != len(batch) or {id(r) for r in result} != {id(r) for r in batch}:
        raise OrderingError(
            f"Ordering produced {len(result)} rules from {len(batch)}; not a permutation"
        )


__all__ = [
    "OrderingError",
    "build_graph",
    "find_cycles",
    "order_rules",
    "ordered_variables",
]
