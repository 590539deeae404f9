from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from atlas_sim.objects.body import Body, BodyRole


@dataclass
class Scenario:
    """
    Container for every body in the scene, keyed by stable body ID.
    Keep this pure: just data + lookup, no stepping logic.
    Insertion order is preserved and defines tracker indices.
    """
    name: str
    bodies: Dict[str, Body] = field(default_factory=dict)

    def add_body(self, body: Body) -> None:
        if body.body_id in self.bodies:
            raise ValueError(f"Duplicate body ID: {body.body_id}")
        if body.role is BodyRole.TARGET and self.target is not None:
            raise ValueError(f"Scenario already has a target: {self.target.body_id}")
        if body.role is BodyRole.TRACKER:
            for other in self.trackers():
                if (other.params.inclination == body.params.inclination
                        and other.params.raan == body.params.raan):
                    raise ValueError(
                        f"Tracker {body.body_id} shares its orbital plane with {other.body_id}."
                    )
        self.bodies[body.body_id] = body

    def body(self, body_id: str) -> Body:
        try:
            return self.bodies[body_id]
        except KeyError:
            raise KeyError(f"Unknown body ID: {body_id}") from None

    def body_list(self) -> List[Body]:
        return list(self.bodies.values())

    def trackers(self) -> List[Body]:
        return [b for b in self.bodies.values() if b.role is BodyRole.TRACKER]

    def background(self) -> List[Body]:
        return [b for b in self.bodies.values() if b.role is BodyRole.BACKGROUND]

    @property
    def target(self) -> Optional[Body]:
        for b in self.bodies.values():
            if b.role is BodyRole.TARGET:
                return b
        return None
