"""Tests for the parameter set and its validation."""

import dataclasses

import pytest

from rodheat.errors import HeatModelError, InvalidConfiguration
from rodheat.utils.parameters import (
    CAPACITY, CONDUCTIVITY, DENSITY, EMISSIVITY, STEFAN_BOLTZMANN, ParameterSet
)


class TestParameterSet:
    def test_defaults_match_steel_rod(self):
        p = ParameterSet()
        assert p.length == 0.1
        assert p.n_points == 101
        assert p.diffusivity == pytest.approx(CONDUCTIVITY / (CAPACITY * DENSITY))
        assert p.radiation_coefficient == pytest.approx(EMISSIVITY * STEFAN_BOLTZMANN)
        assert p.dx == pytest.approx(0.001)

    def test_stability_limit(self):
        p = ParameterSet(n_points=21)
        assert p.stability_limit == pytest.approx(0.5 * p.dx ** 2 / p.diffusivity)
        assert 1.0 < p.stability_limit < 1.1

    @pytest.mark.parametrize("changes", [
        {"n_points": 2},
        {"n_points": 10.5},
        {"length": 0.0},
        {"length": -1.0},
        {"t_end": 0.0},
        {"dt": 0.0},
        {"dt": -0.01},
        {"conductivity": 0.0},
        {"density": -1.0},
        {"n_points": float("nan")},
        {"n_points": float("inf")},
        {"length": float("nan")},
        {"t_end": float("nan")},
        {"dt": float("nan")},
        {"capacity": float("nan")},
    ])
    def test_invalid_configuration(self, changes):
        with pytest.raises(InvalidConfiguration):
            ParameterSet(**changes)

    def test_error_hierarchy(self):
        with pytest.raises(HeatModelError):
            ParameterSet(n_points=1)
        with pytest.raises(ValueError):
            ParameterSet(n_points=1)

    def test_immutable(self):
        p = ParameterSet()
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.h = 20.0

    def test_replace_validates(self):
        p = ParameterSet()
        q = p.replace(Kp=10.0)
        assert q.Kp == 10.0 and p.Kp != 10.0
        with pytest.raises(InvalidConfiguration):
            p.replace(dt=0.0)

    def test_from_mapping(self):
        p = ParameterSet.from_mapping({"length": 0.5, "n_points": 51, "T_a": 280.0})
        assert p.length == 0.5 and p.n_points == 51 and p.T_a == 280.0

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(InvalidConfiguration, match="Tf"):
            ParameterSet.from_mapping({"Tf": 10.0})
