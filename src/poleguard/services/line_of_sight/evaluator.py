"""Elevation-based line-of-sight evaluation.

The check compares the pole top against the agent's ground elevation only.
Terrain between the two points is not sampled, so a ridge between an agent
and a pole does not change the verdict.
"""

from __future__ import annotations

from ...models.domain import LineOfSightOutcome, LineOfSightResult


def evaluate(pole_ground_elevation: float, pole_height: float, agent_elevation: float) -> LineOfSightResult:
    """Classify visibility of the pole top from the agent position.

    ``extra_height_required`` is reported for PARTIAL only; BLOCKED results
    carry no height suggestion even though a deficit could be computed.
    """

    pole_top_elevation = pole_ground_elevation + pole_height
    elevation_difference = pole_top_elevation - agent_elevation

    if elevation_difference < 0:
        return LineOfSightResult(
            pole_top_elevation=pole_top_elevation,
            elevation_difference=elevation_difference,
            result=LineOfSightOutcome.BLOCKED,
        )
    if elevation_difference < pole_height:
        return LineOfSightResult(
            pole_top_elevation=pole_top_elevation,
            elevation_difference=elevation_difference,
            result=LineOfSightOutcome.PARTIAL,
            extra_height_required=pole_height - elevation_difference,
        )
    return LineOfSightResult(
        pole_top_elevation=pole_top_elevation,
        elevation_difference=elevation_difference,
        result=LineOfSightOutcome.CLEAR,
    )
