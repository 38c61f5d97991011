"""Ready-made road-growing L-systems."""

from __future__ import annotations

from urbangen.roadlsystem import RoadLSystem

_BRANCHING_RULE = "[[-_E]+_E]_E"


class RasterRoadPattern(RoadLSystem):
    """Grows a rectangular grid: every branch turns by exactly 90 degrees."""

    def __init__(self) -> None:
        super().__init__()
        self.set_axiom("E")
        self.add_rule("E", _BRANCHING_RULE)
        self.set_initial_position((0, 0))
        self.set_initial_direction((1, 0))
        self.set_turn_angle(90, 90)


class OrganicRoadPattern(RoadLSystem):
    """Grows an irregular network: branches turn between 60 and 90 degrees."""

    def __init__(self) -> None:
        super().__init__()
        self.set_axiom("[[[-_E]+_E]_E]++_E")
        self.add_rule("E", _BRANCHING_RULE)
        self.set_initial_position((0, 0))
        self.set_initial_direction((1, 0))
        self.set_turn_angle(60, 90)