"""Shared fixtures: deterministic steam property tables."""

import math

import pytest


class StepSteam:
    """Step-wise table built from IAPWS-IF97 reference points.

    P_sat(40) = 0.073844 bar, P_sat(60) = 0.199209 bar, P_sat(100) = 1.01418 bar;
    h_g(40) = 2574.4, h_g(60) = 2609.7, h_g(100) = 2675.6 kJ/kg.
    """

    def saturation_pressure(self, temperature_c):
        if temperature_c <= 40:
            return 0.073844
        if temperature_c <= 60:
            return 0.199209
        return 1.01418

    def saturation_temperature(self, pressure_bar):
        if pressure_bar <= 0.073844:
            return 40.0
        if pressure_bar <= 0.199209:
            return 60.0
        return 100.0

    def enthalpy_vapor(self, temperature_c):
        if temperature_c <= 40:
            return 2574.4
        if temperature_c <= 60:
            return 2609.7
        return 2675.6

    def enthalpy_superheated(self, pressure_bar, temperature_c):
        t_sat = self.saturation_temperature(pressure_bar)
        return self.enthalpy_vapor(t_sat) + 1.9 * max(0.0, temperature_c - t_sat)

    def is_superheated(self, pressure_bar, temperature_c):
        return temperature_c > self.saturation_temperature(pressure_bar)


class LogSteam:
    """Internally consistent smooth steam approximation.

    T_sat(p) = 100 + 30·ln(p), h_g(T) = 2500 + T,
    h(p, T) = 2500 + T_sat + 2·(T − T_sat).
    """

    def saturation_temperature(self, pressure_bar):
        return 100.0 + 30.0 * math.log(pressure_bar)

    def saturation_pressure(self, temperature_c):
        return math.exp((temperature_c - 100.0) / 30.0)

    def enthalpy_vapor(self, temperature_c):
        return 2500.0 + temperature_c

    def enthalpy_superheated(self, pressure_bar, temperature_c):
        t_sat = self.saturation_temperature(pressure_bar)
        return 2500.0 + t_sat + 2.0 * (temperature_c - t_sat)

    def is_superheated(self, pressure_bar, temperature_c):
        return temperature_c > self.saturation_temperature(pressure_bar)


@pytest.fixture
def step_steam():
    return StepSteam()


@pytest.fixture
def log_steam():
    return LogSteam()
