import pytest

from seatplan.models import OptimizationOptions, SeatAssignment
from seatplan.solver.graph import build_relationship_graph
from seatplan.solver.greedy import Arrangement
from seatplan.solver.objectives import (
    arrangement_score,
    conflicts_seated_together,
    occupancy_std_dev,
    score_breakdown,
)


def arrange(**seating):
    """arrange(A="T1", B="T2") -> Arrangement with one seat per attendee."""
    return Arrangement(assignments=tuple(
        SeatAssignment(attendee_id=attendee, table_id=table, seat_id=f"{table}-{n}")
        for n, (attendee, table) in enumerate(seating.items(), start=1)
    ))


@pytest.fixture
def no_balance():
    return OptimizationOptions(balance_tables=False)


def test_couple_together_is_rewarded_and_apart_is_penalized(rel, no_balance):
    graph = build_relationship_graph([rel("A", "B", "couple", 4)])

    assert arrangement_score(arrange(A="T1", B="T1"), graph, no_balance) == 20.0
    assert arrangement_score(arrange(A="T1", B="T2"), graph, no_balance) == -20.0


def test_unplaced_partner_counts_as_apart(rel, no_balance):
    graph = build_relationship_graph([rel("A", "B", "couple", 4)])

    assert arrangement_score(arrange(A="T1"), graph, no_balance) == -20.0


def test_couple_term_needs_keep_together(rel):
    graph = build_relationship_graph([rel("A", "B", "couple", 4)])
    options = OptimizationOptions(balance_tables=False, keep_couples_and_families_together=False)

    assert arrangement_score(arrange(A="T1", B="T2"), graph, options) == 0.0


def test_conflict_penalty(rel, no_balance):
    graph = build_relationship_graph([rel("A", "B", "conflict", 3)])

    assert arrangement_score(arrange(A="T1", B="T1"), graph, no_balance) == -30.0
    assert arrangement_score(arrange(A="T1", B="T2"), graph, no_balance) == 0.0
    tolerant = no_balance.model_copy(update={"avoid_conflicts": False})
    assert arrangement_score(arrange(A="T1", B="T1"), graph, tolerant) == 0.0


def test_family_and_friend_bonuses_only_when_together(rel, no_balance):
    graph = build_relationship_graph([rel("A", "B", "family", 6), rel("C", "D", "friend", 3)])

    assert arrangement_score(arrange(A="T1", B="T1", C="T2", D="T2"), graph, no_balance) == 15.0
    assert arrangement_score(arrange(A="T1", B="T2", C="T1", D="T2"), graph, no_balance) == 0.0

    no_families = no_balance.model_copy(update={"prioritize_families": False})
    assert arrangement_score(arrange(A="T1", B="T1", C="T2", D="T2"), graph, no_families) == 3.0


def test_balance_penalty_uses_population_std_dev(rel):
    graph = build_relationship_graph([])
    lopsided = arrange(A="T1", B="T1", C="T1", D="T2")

    assert occupancy_std_dev(lopsided) == 1.0
    assert arrangement_score(lopsided, graph, OptimizationOptions()) == -5.0
    assert arrangement_score(arrange(A="T1", B="T2"), graph, OptimizationOptions()) == 0.0


def test_empty_arrangement_scores_zero():
    assert arrangement_score(Arrangement(assignments=()), build_relationship_graph([]), OptimizationOptions()) == 0.0


def test_breakdown_sums_to_score(rel):
    graph = build_relationship_graph([
        rel("A", "B", "couple", 10),
        rel("A", "C", "conflict", 2),
        rel("C", "D", "friend", 5),
    ])
    arrangement = arrange(A="T1", B="T1", C="T1", D="T2")

    terms = score_breakdown(arrangement, graph, OptimizationOptions())

    assert terms["couple"] == 50.0
    assert terms["conflict"] == -20.0
    assert terms["friend"] == 0.0
    assert terms["balance"] == -5.0
    assert arrangement_score(arrangement, graph, OptimizationOptions()) == sum(terms.values())
    assert conflicts_seated_together(arrangement, graph) == [("A", "C")]
