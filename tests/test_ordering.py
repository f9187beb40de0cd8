import logging
import random

import pytest

from conftest import assign, variables
from sbml_rules.ordering import (
    OrderingError,
    _check_permutation,
    build_graph,
    find_cycles,
    order_rules,
    ordered_variables,
)


def _assert_permutation(before, after):
    assert len(after) == len(before)
    assert sorted(map(id, after)) == sorted(map(id, before))


def test_dependencies_precede_dependents(scenario_rules):
    result = order_rules(scenario_rules)
    assert variables(result) == ["B", "A", "C"]
    _assert_permutation(scenario_rules, result)
    # same objects, nothing copied
    assert result[0] is scenario_rules[1]


def test_build_graph_records_only_batch_edges(scenario_rules):
    graph = build_graph(scenario_rules)
    assert graph == {"A": {"B"}, "B": set(), "C": {"A", "B"}}


def test_external_variables_are_not_graph_nodes():
    graph = build_graph([assign("A", "k1 * S + B"), assign("B", "k2")])
    assert graph == {"A": {"B"}, "B": set()}


def test_independent_rules_keep_input_order():
    rules = [assign("X", "k1"), assign("Y", "2"), assign("Z", "k1 * 3")]
    result = order_rules(rules)
    assert all(a is b for a, b in zip(result, rules, strict=True))


def test_empty_and_single_batches():
    assert order_rules([]) == []
    rule = assign("A", "k1")
    assert order_rules([rule])[0] is rule


def test_rules_without_math_have_no_dependencies():
    rules = [assign("A"), assign("B", "A + 1")]
    assert variables(order_rules(rules)) == ["A", "B"]


def test_reversed_chain_is_fully_reversed():
    rules = [assign("D", "C"), assign("C", "B"), assign("B", "A"), assign("A", "1")]
    assert ordered_variables(rules) == ["A", "B", "C", "D"]


def test_self_reference_creates_no_edge():
    rules = [assign("A", "A + B"), assign("B", "1")]
    assert build_graph(rules)["A"] == {"B"}
    assert variables(order_rules(rules)) == ["B", "A"]
    assert find_cycles(rules) == []


def test_two_cycle_keeps_input_order_and_terminates():
    rules = [assign("X", "Y"), assign("Y", "X")]
    result = order_rules(rules)
    assert variables(result) == ["X", "Y"]
    _assert_permutation(rules, result)
    assert find_cycles(rules) == [["X", "Y"]]


def test_long_cycle_terminates():
    n = 50
    rules = [assign(f"v{i}", f"v{(i + 1) % n}") for i in range(n)]
    result = order_rules(rules)
    _assert_permutation(rules, result)
    assert variables(result) == [f"v{i}" for i in range(n)]


def test_edges_outside_a_cycle_are_honoured():
    rules = [
        assign("D", "X + 1"),
        assign("X", "Y"),
        assign("Y", "X"),
        assign("E", "2"),
        assign("F", "D * E"),
    ]
    result = variables(order_rules(rules))
    assert result == ["X", "Y", "D", "E", "F"]


def test_cycle_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="sbml_rules.ordering"):
        order_rules([assign("X", "Y"), assign("Y", "X")])
    assert "dependency cycle" in caplog.text


def test_duplicate_targets_are_tolerated():
    rules = [assign("A", "B"), assign("A", "1"), assign("B", "2")]
    result = order_rules(rules)
    _assert_permutation(rules, result)
    assert result[0] is rules[2]


def test_explicit_graph_is_used():
    rules = [assign("A", "1"), assign("B", "2")]
    # caller-supplied graph claims A depends on B
    assert variables(order_rules(rules, {"A": {"B"}, "B": set()})) == ["B", "A"]


def test_random_acyclic_batches_satisfy_every_edge():
    rng = random.Random(20240917)
    for _ in range(20):
        n = rng.randint(2, 40)
        names = [f"v{i}" for i in range(n)]
        rules = []
        for i, name in enumerate(names):
            later = names[i + 1 :]
            reads = rng.sample(later, k=min(len(later), rng.randint(0, 3)))
            rules.append(assign(name, " + ".join(reads) if reads else "k1"))
        rng.shuffle(rules)

        result = order_rules(rules)
        _assert_permutation(rules, result)
        position = {r.variable: i for i, r in enumerate(result)}
        for source, targets in build_graph(rules).items():
            for target in targets:
                assert position[target] < position[source]


def test_stability_among_unrelated_rules_with_dependencies():
    rules = [assign("P", "k1"), assign("A", "B"), assign("Q", "k2"), assign("B", "1")]
    # ready rules are taken in input order; A waits until B is placed
    assert ordered_variables(rules) == ["P", "Q", "B", "A"]


def test_permutation_check_rejects_lost_rules():
    rules = [assign("A", "1"), assign("B", "2")]
    with pytest.raises(OrderingError):
        _check_permutation(rules, rules[:1])
