"""
VEHICLE AND SMOOTHING SETTINGS MODULE

@Description: Configuration of course smoothing. Vehicle holds the physical
limits of the machine driving the course, SmoothingSettings the thresholds
of the filtering, corner detection and rounding passes. Defaults are tuned
for a mid-size tractor working a field with GPS guidance.
"""

from dataclasses import dataclass, field
import math


@dataclass
class Vehicle:
    """
    Represents the vehicle the course is generated for.

    Attributes:
        turning_radius_m: Minimum turning radius in meters (default: 6.0 m)
        min_headland_turn_angle_deg: Direction change above which a corner the
            vehicle can't follow is marked as a headland turn (default: 60 deg)
        turn_diameter_m: Turning diameter (calculated from the radius)
        corner_search_distance_m: How far ahead corners are searched for when
            rounding them (calculated if not given, three times the turning radius)
    """

    turning_radius_m: float = 6.0
    min_headland_turn_angle_deg: float = 60.0

    turn_diameter_m: float = field(default=None)
    corner_search_distance_m: float = field(default=None)

    def __post_init__(self):
        """Validate and calculate derived parameters."""
        if self.turning_radius_m <= 0:
            raise ValueError(f"turning_radius_m must be positive, got {self.turning_radius_m}")

        if self.turn_diameter_m is None:
            self.turn_diameter_m = 2 * self.turning_radius_m

        if self.corner_search_distance_m is not None and self.corner_search_distance_m <= 0:
            raise ValueError(f"corner_search_distance_m must be positive, "
                             f"got {self.corner_search_distance_m}")

        if self.corner_search_distance_m is None:
            self.corner_search_distance_m = 3 * self.turning_radius_m

    @property
    def min_headland_turn_angle(self) -> float:
        return math.radians(self.min_headland_turn_angle_deg)

    def __repr__(self) -> str:
        return (f"Vehicle(turning_radius={self.turning_radius_m}m, "
                f"corner_search={self.corner_search_distance_m}m)")


@dataclass
class SmoothingSettings:
    """
    Thresholds of the course smoothing passes.

    Attributes:
        filter_angle_threshold_deg: Low pass filter removes points turning more
            than this (default: 120 deg)
        filter_distance_threshold_m: Low pass filter merges points closer than
            this (default: 0.5 m)
        min_spacing_m: Minimum distance between points on straight sections
            (default: 2.0 m)
        spacing_angle_threshold_deg: Points turning more than this are curve
            points, never thinned out (default: 5 deg)
        corner_angle_threshold_deg: Direction change that makes a corner worth
            rounding (default: 45 deg)
        corner_search_factor: Corners are searched within this many turning
            radii (default: 3)
        stable_angle_deg: A turn span ends when the direction changes less
            than this over one step... (default: 10 deg)
        stable_distance_ratio: ...and that step is longer than this fraction
            of the search distance (default: 0.1)
        epsilon_m: Tolerance of length comparisons (default: 1 mm)
    """

    # --- FILTERING ---
    filter_angle_threshold_deg: float = 120.0
    filter_distance_threshold_m: float = 0.5
    min_spacing_m: float = 2.0
    spacing_angle_threshold_deg: float = 5.0

    # --- CORNERS ---
    corner_angle_threshold_deg: float = 45.0
    corner_search_factor: float = 3.0
    stable_angle_deg: float = 10.0
    stable_distance_ratio: float = 0.1

    epsilon_m: float = 0.001

    def __post_init__(self):
        for name in ('filter_angle_threshold_deg', 'filter_distance_threshold_m',
                     'min_spacing_m', 'spacing_angle_threshold_deg',
                     'corner_angle_threshold_deg', 'stable_angle_deg',
                     'stable_distance_ratio', 'epsilon_m'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} can't be negative, got {getattr(self, name)}")
        if self.corner_search_factor <= 0:
            raise ValueError(f"corner_search_factor must be positive, "
                             f"got {self.corner_search_factor}")

    @property
    def filter_angle_threshold(self) -> float:
        return math.radians(self.filter_angle_threshold_deg)

    @property
    def spacing_angle_threshold(self) -> float:
        return math.radians(self.spacing_angle_threshold_deg)

    @property
    def corner_angle_threshold(self) -> float:
        return math.radians(self.corner_angle_threshold_deg)

    @property
    def stable_angle(self) -> float:
        return math.radians(self.stable_angle_deg)


if __name__ == "__main__":
    tractor = Vehicle(turning_radius_m=7.5)
    print(tractor)
    print(f"Turn diameter: {tractor.turn_diameter_m} m")
    print(f"Corner search distance: {tractor.corner_search_distance_m} m")
    print(SmoothingSettings())
