import math
from typing import Dict, List

from seatplan.models import OptimizationOptions
from seatplan.solver.graph import RelationshipGraph
from seatplan.solver.greedy import Arrangement

WEIGHT_CONFLICT = 10
WEIGHT_COUPLE = 5
WEIGHT_FAMILY = 2
WEIGHT_FRIEND = 1
BALANCE_PENALTY_WEIGHT = 5.0


def occupancy_std_dev(arrangement: Arrangement) -> float:
    """Population std dev of occupancy over tables holding at least one attendee."""
    loads = [float(n) for n in arrangement.occupancy().values()]
    if not loads:
        return 0.0
    avg_load = sum(loads) / len(loads)
    variance = sum((l - avg_load) ** 2 for l in loads) / len(loads)
    return math.sqrt(variance)


def score_breakdown(
    arrangement: Arrangement,
    graph: RelationshipGraph,
    options: OptimizationOptions,
) -> Dict[str, float]:
    terms: Dict[str, float] = {"conflict": 0.0, "couple": 0.0, "family": 0.0, "friend": 0.0, "balance": 0.0}

    for rel in graph:
        table1 = arrangement.table_of(rel.guest_id)
        table2 = arrangement.table_of(rel.related_guest_id)
        together = table1 is not None and table1 == table2

        if rel.relationship_type == "conflict":
            if options.avoid_conflicts and together:
                terms["conflict"] -= rel.strength * WEIGHT_CONFLICT
        elif rel.relationship_type == "couple":
            # an unplaced partner counts as apart
            if options.keep_couples_and_families_together:
                terms["couple"] += rel.strength * WEIGHT_COUPLE * (1 if together else -1)
        elif rel.relationship_type == "family":
            if options.prioritize_families and together:
                terms["family"] += rel.strength * WEIGHT_FAMILY
        elif rel.relationship_type == "friend":
            if together:
                terms["friend"] += rel.strength * WEIGHT_FRIEND

    if options.balance_tables:
        terms["balance"] = -BALANCE_PENALTY_WEIGHT * occupancy_std_dev(arrangement)

    return terms


def arrangement_score(
    arrangement: Arrangement,
    graph: RelationshipGraph,
    options: OptimizationOptions,
) -> float:
    """Global score of a finished arrangement. Reporting only, never used for placement."""
    return float(sum(score_breakdown(arrangement, graph, options).values()))


def conflicts_seated_together(arrangement: Arrangement, graph: RelationshipGraph) -> List[tuple]:
    pairs = []
    for rel in graph.of_type("conflict"):
        table = arrangement.table_of(rel.guest_id)
        if table is not None and table == arrangement.table_of(rel.related_guest_id):
            pairs.append((rel.guest_id, rel.related_guest_id))
    return pairs
