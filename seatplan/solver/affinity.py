from typing import Iterable, List

from seatplan.models import Attendee, OptimizationOptions
from seatplan.solver.capacity import CapacityTracker
from seatplan.solver.graph import RelationshipGraph

# Placement-time weights. The evaluator in objectives.py weighs relationship
# types differently; the two must stay separate.
CONFLICT_PENALTY = 10
BALANCE_BONUS = 3.0
DIETARY_DIVISOR = 2.0


def candidate_tables(tracker: CapacityTracker) -> List[str]:
    """Tables that can still take one attendee, in table-list order."""
    return tracker.tables_with_room(1)


def placement_score(
    attendee: Attendee,
    table_id: str,
    occupants: Iterable[str],
    tracker: CapacityTracker,
    graph: RelationshipGraph,
    options: OptimizationOptions,
) -> float:
    """Marginal score of seating ``attendee`` at ``table_id`` given who already sits there."""
    score = 0.0

    for other_id in occupants:
        rel = graph.relationship_between(attendee.id, other_id)
        if rel is None:
            continue
        if rel.relationship_type == "conflict":
            if options.avoid_conflicts:
                score -= rel.strength * CONFLICT_PENALTY
        else:
            # flat, whatever the subtype
            score += rel.strength

    capacity = tracker.capacity(table_id)
    taken = tracker.seats_taken(table_id)

    if options.respect_dietary_restrictions and attendee.has_dietary_restriction:
        score += (capacity - taken) / DIETARY_DIVISOR

    if options.balance_tables:
        score += BALANCE_BONUS * (1 - taken / capacity)

    return score
