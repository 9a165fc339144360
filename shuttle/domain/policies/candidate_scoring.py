"""CandidateScoringPolicy — weighted desirability of an (employee, route) pair.

Every assignment entry point scores through this module. The score is the sum
of three independent terms, each scaled by its caller-supplied weight:

* proximity — how close the employee lives to the nearest route stop;
* capacity  — the route's free-seat ratio ``(capacity - occupancy) / capacity``;
* shift     — full credit when the employee's shift matches the route's
  departure orientation, partial credit otherwise.

Only the ordering within one employee's candidate set matters, so scores are
not normalized across routes.
"""

from __future__ import annotations

from dataclasses import dataclass

from shuttle.domain.entities.employee import Employee
from shuttle.domain.entities.route import Route
from shuttle.domain.value_objects.weights import AssignmentWeights

# Credit when the employee location is known but the route stops are not geocoded
PROXIMITY_PLACEHOLDER_CREDIT = 0.5
# Stops farther than this earn no proximity credit
DEFAULT_PROXIMITY_RADIUS_KM = 10.0
SHIFT_MATCH_CREDIT = 1.0
# Never zero: a mismatching route must stay selectable when nothing else has room
SHIFT_MISMATCH_CREDIT = 0.5

# Scores are rounded before comparison so float noise cannot break ties
_SCORE_PRECISION = 9


@dataclass(frozen=True)
class CandidateScore:
    """Score breakdown for one candidate route."""

    route: Route
    occupancy: int
    proximity: float
    capacity: float
    shift: float

    @property
    def total(self) -> float:
        return round(self.proximity + self.capacity + self.shift, _SCORE_PRECISION)

    @property
    def headroom(self) -> int:
        return self.route.capacity - self.occupancy

    def sort_key(self) -> tuple[float, int, int]:
        # Higher score, then more free seats, then lowest route id
        return (self.total, self.headroom, -(self.route.id or 0))


def proximity_credit(
    employee: Employee,
    route: Route,
    radius_km: float = DEFAULT_PROXIMITY_RADIUS_KM,
) -> float:
    """Unweighted proximity credit in [0, 1]."""
    if not employee.is_location_known():
        return 0.0
    nearest = employee.location.nearest_km(route.stop_locations)
    if nearest is None:
        return PROXIMITY_PLACEHOLDER_CREDIT
    if radius_km <= 0:
        return 0.0
    return max(0.0, 1.0 - nearest / radius_km)


def capacity_credit(route: Route, occupancy: int) -> float:
    """Unweighted free-seat ratio in [0, 1]."""
    if route.capacity <= 0:
        return 0.0
    return max(route.capacity - occupancy, 0) / route.capacity


def shift_credit(employee: Employee, route: Route) -> float:
    route_shift = route.shift
    if route_shift is not None and route_shift == employee.shift:
        return SHIFT_MATCH_CREDIT
    return SHIFT_MISMATCH_CREDIT


def score_candidate(
    employee: Employee,
    route: Route,
    weights: AssignmentWeights,
    occupancy: int | None = None,
    proximity_radius_km: float = DEFAULT_PROXIMITY_RADIUS_KM,
) -> CandidateScore:
    """Score one (employee, route) pair.

    Args:
        employee: the employee to place.
        route: candidate route.
        weights: validated scoring weights.
        occupancy: live occupancy to score against; defaults to ``route.occupancy``.
        proximity_radius_km: distance at which proximity credit drops to zero.

    Never raises: missing optional data lowers the matching term instead.
    """
    occ = route.occupancy if occupancy is None else occupancy
    return CandidateScore(
        route=route,
        occupancy=occ,
        proximity=proximity_credit(employee, route, proximity_radius_km) * weights.proximity_weight,
        capacity=capacity_credit(route, occ) * weights.capacity_weight,
        shift=shift_credit(employee, route) * weights.shift_weight,
    )


def select_best_route(
    employee: Employee,
    routes: list[Route],
    weights: AssignmentWeights,
    occupancy: dict[int, int] | None = None,
    proximity_radius_km: float = DEFAULT_PROXIMITY_RADIUS_KM,
) -> CandidateScore | None:
    """Pick the best feasible route for *employee*.

    Routes whose occupancy (taken from *occupancy* when given, else from the
    route itself) has reached capacity are excluded before scoring.

    Returns:
        The winning CandidateScore, or None when no route is feasible.
    """
    candidates: list[CandidateScore] = []
    for route in routes:
        occ = route.occupancy if occupancy is None else occupancy.get(route.id, route.occupancy)
        if occ >= route.capacity:
            continue
        candidates.append(
            score_candidate(employee, route, weights, occ, proximity_radius_km)
        )

    if not candidates:
        return None
    return max(candidates, key=CandidateScore.sort_key)
