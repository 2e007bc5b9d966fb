"""Tests for the hourglass sand model."""

import math

import numpy as np
import pytest

from workdesk.models import SandState
from workdesk.sand_physics import (
    MAX_CENTER_BULGE,
    SAND_SHAPE_EXPONENT,
    InvalidProgressError,
    compute_heights,
    container_width_at,
    get_sand_height_at_position,
    is_sand_falling,
    sand_surface_profile,
)


class TestComputeHeights:
    """Tests for compute_heights function."""

    def test_start_of_period(self):
        """Test that all sand is on top at progress 0."""
        state = compute_heights(0)
        assert state.upper_height == 1.0
        assert state.lower_height == 0.0

    def test_end_of_period(self):
        """Test that all sand is at the bottom at progress 1."""
        state = compute_heights(1)
        assert state.upper_height == 0.0
        assert state.lower_height == 1.0

    def test_midpoint_is_symmetric(self):
        """Test that both chambers match at the midpoint."""
        state = compute_heights(0.5)
        assert state.upper_height == 0.5**SAND_SHAPE_EXPONENT
        assert state.lower_height == 0.5**SAND_SHAPE_EXPONENT

    def test_volume_is_conserved(self):
        """Test that upper and lower volumes always sum to 1."""
        for progress in [0.0, 0.1, 0.25, 1 / 3, 0.5, 0.77, 0.999, 1.0]:
            state = compute_heights(progress)
            assert state.upper_volume + state.lower_volume == 1.0

    def test_heights_are_monotonic(self):
        """Test that the lower chamber fills while the upper one drains."""
        steps = [i / 100 for i in range(101)]
        states = [compute_heights(p) for p in steps]
        for earlier, later in zip(states, states[1:]):
            assert earlier.lower_height <= later.lower_height
            assert earlier.upper_height >= later.upper_height

    def test_out_of_range_progress_is_clamped(self):
        """Test that values outside [0, 1] are clamped, not rejected."""
        assert compute_heights(-0.2) == compute_heights(0)
        assert compute_heights(1.0000001) == compute_heights(1)
        assert compute_heights(42) == compute_heights(1)

    def test_heights_are_nonlinear(self):
        """Test that a quarter of the volume raises the level more than a quarter."""
        state = compute_heights(0.25)
        assert state.lower_height == pytest.approx(0.25**0.7)
        assert state.lower_height > 0.25

    def test_numpy_scalars_accepted(self):
        """Test that numpy floats work as progress."""
        assert compute_heights(np.float64(0.5)) == compute_heights(0.5)

    def test_invalid_progress(self):
        """Test that NaN, infinity and non-numbers raise InvalidProgressError."""
        with pytest.raises(InvalidProgressError, match="NaN"):
            compute_heights(math.nan)

        with pytest.raises(InvalidProgressError, match="infinite"):
            compute_heights(math.inf)

        with pytest.raises(InvalidProgressError):
            compute_heights("0.5")

        with pytest.raises(InvalidProgressError):
            compute_heights(None)

        with pytest.raises(InvalidProgressError):
            compute_heights(True)

    def test_invalid_progress_is_value_error(self):
        """Test that callers can catch the error as ValueError."""
        with pytest.raises(ValueError):
            compute_heights(float("nan"))


class TestIsSandFalling:
    """Tests for is_sand_falling function."""

    def test_falling_while_sand_remains(self):
        assert is_sand_falling(compute_heights(0.5)) is True
        assert is_sand_falling(compute_heights(0)) is True

    def test_not_falling_when_empty(self):
        assert is_sand_falling(compute_heights(1)) is False

    def test_custom_threshold(self):
        state = compute_heights(0.9)  # upper height ~0.2
        assert is_sand_falling(state, threshold=0.1) is True
        assert is_sand_falling(state, threshold=0.3) is False


class TestSandState:
    """Tests for SandState construction."""

    def test_volumes_are_required(self):
        """Test that heights alone can't build a state with made-up volumes."""
        with pytest.raises(TypeError):
            SandState(upper_height=0.2, lower_height=0.9)

    def test_volumes_must_sum_to_one(self):
        with pytest.raises(ValueError, match="sum to 1"):
            SandState(
                upper_height=0.2, lower_height=0.9, upper_volume=1.0, lower_volume=0.9
            )

    def test_computed_state_is_consistent(self):
        state = compute_heights(0.3)
        assert state.upper_height == state.upper_volume**SAND_SHAPE_EXPONENT
        assert state.lower_height == state.lower_volume**SAND_SHAPE_EXPONENT


class TestSandHeightAtPosition:
    """Tests for the positional pile height."""

    def test_center_is_highest(self):
        """Test that the pile peaks at the center."""
        center = get_sand_height_at_position(0.5, 0.0)
        edge = get_sand_height_at_position(0.5, 0.9)
        assert center > edge
        assert center == pytest.approx(0.5 + MAX_CENTER_BULGE * container_width_at(0.5))

    def test_pile_rises_linearly_toward_center(self):
        """Test that the pile rises MAX_CENTER_BULGE per unit of distance from the edge."""
        level = 0.5
        width = container_width_at(level)
        for x in [0.0, 0.2, 0.5, 0.8]:
            expected = level + MAX_CENTER_BULGE * (width - x)
            assert get_sand_height_at_position(level, x) == pytest.approx(expected)

    def test_bulge_never_exceeds_max(self):
        """Test that the bulge stays within MAX_CENTER_BULGE."""
        for level in [0.05, 0.3, 0.5, 0.8, 0.95]:
            for x in [-1.0, -0.5, 0.0, 0.25, 1.0]:
                height = get_sand_height_at_position(level, x)
                assert level <= height <= level + MAX_CENTER_BULGE + 1e-12

    def test_symmetric_around_center(self):
        assert get_sand_height_at_position(0.4, -0.3) == pytest.approx(
            get_sand_height_at_position(0.4, 0.3)
        )

    def test_empty_and_full_chambers_are_flat(self):
        """Test that no pile forms at 0 or 1."""
        assert get_sand_height_at_position(0.0, 0.0) == 0.0
        assert get_sand_height_at_position(1.0, 0.0) == 1.0

    def test_outside_container_is_flat(self):
        """Test that positions beyond the container width get the flat level."""
        level = 0.02  # near the neck, the chamber is narrow
        width = container_width_at(level)
        assert get_sand_height_at_position(level, width + 0.1) == level

    def test_inputs_are_clamped(self):
        assert get_sand_height_at_position(0.5, 5.0) == get_sand_height_at_position(
            0.5, 1.0
        )
        assert get_sand_height_at_position(-1.0, 0.0) == 0.0

    def test_invalid_input(self):
        with pytest.raises(InvalidProgressError):
            get_sand_height_at_position(math.nan, 0.0)


class TestSandSurfaceProfile:
    """Tests for sand_surface_profile function."""

    def test_profile_shape(self):
        """Test sampling across the chamber."""
        profile = sand_surface_profile(0.5, samples=21)
        assert profile.shape == (21,)
        assert profile.argmax() == 10
        assert np.allclose(profile, profile[::-1])

    def test_profile_matches_pointwise_heights(self):
        """Test that the sampled profile agrees with get_sand_height_at_position."""
        profile = sand_surface_profile(0.3, samples=11)
        positions = np.linspace(-1.0, 1.0, 11)
        expected = [get_sand_height_at_position(0.3, float(x)) for x in positions]
        assert np.allclose(profile, expected)

    def test_profile_is_flat_when_empty_or_full(self):
        assert np.array_equal(sand_surface_profile(0.0, samples=5), np.zeros(5))
        assert np.array_equal(sand_surface_profile(1.0, samples=5), np.ones(5))

    def test_too_few_samples(self):
        with pytest.raises(ValueError, match="samples"):
            sand_surface_profile(0.5, samples=1)
