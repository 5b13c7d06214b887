"""
Sample relationships for demo mode.

Only used when ``Settings.demo_mode`` is on. Scores computed from these
relationships describe invented data, so callers must log when they use them.
"""

import random
from typing import List

from seatplan.models import Attendee, Relationship


def generate_sample_relationships(attendees: List[Attendee], seed: int = 42) -> List[Relationship]:
    rng = random.Random(seed)
    # a repeated id keeps its first record
    unique = {}
    for a in attendees:
        unique.setdefault(a.id, a)
    attendees = list(unique.values())
    relationships: List[Relationship] = []

    family = [a for a in attendees if a.category == "family"]
    friends = [a for a in attendees if a.category == "friend"]

    # every pair of family members, strong bonds
    for i in range(len(family)):
        for j in range(i + 1, len(family)):
            relationships.append(Relationship(
                guest_id=family[i].id, related_guest_id=family[j].id,
                relationship_type="family", strength=rng.randint(6, 10),
            ))

    # not all friends know each other
    for i in range(len(friends)):
        for j in range(i + 1, len(friends)):
            if rng.random() > 0.3:
                relationships.append(Relationship(
                    guest_id=friends[i].id, related_guest_id=friends[j].id,
                    relationship_type="friend", strength=rng.randint(3, 7),
                ))

    potential_couples = family + friends
    for i in range(0, len(potential_couples) - 1, 2):
        if rng.random() > 0.7:
            relationships.append(Relationship(
                guest_id=potential_couples[i].id, related_guest_id=potential_couples[i + 1].id,
                relationship_type="couple", strength=10,
            ))

    # ~5% of all pairs
    for i in range(len(attendees)):
        for j in range(i + 1, len(attendees)):
            if rng.random() > 0.95:
                relationships.append(Relationship(
                    guest_id=attendees[i].id, related_guest_id=attendees[j].id,
                    relationship_type="conflict", strength=rng.randint(1, 5),
                ))

    return relationships
