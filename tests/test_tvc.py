"""Tests for the thermo-vapour compressor model."""

import math

import pytest

from vapour_thermal.core.tvc import (
    DEFAULT_DIFFUSER_EFFICIENCY,
    DEFAULT_MIXING_EFFICIENCY,
    DEFAULT_NOZZLE_EFFICIENCY,
    TVCInput,
    calculate_tvc,
    discharge_temperature,
    ejector_efficiency,
    tvc_input_from_dict,
)
from vapour_thermal.utils.validation import InputValidationError

ETA_COMPONENTS = DEFAULT_NOZZLE_EFFICIENCY * DEFAULT_MIXING_EFFICIENCY * DEFAULT_DIFFUSER_EFFICIENCY


class FallingVapourEnthalpySteam:
    """Log saturation curve with h_g falling as temperature rises.

    Real saturated steam behaves this way above roughly 30 bar.
    """

    def saturation_temperature(self, pressure_bar):
        return 100.0 + 30.0 * math.log(pressure_bar)

    def saturation_pressure(self, temperature_c):
        return math.exp((temperature_c - 100.0) / 30.0)

    def enthalpy_vapor(self, temperature_c):
        return 2800.0 - temperature_c

    def enthalpy_superheated(self, pressure_bar, temperature_c):
        t_sat = self.saturation_temperature(pressure_bar)
        return self.enthalpy_vapor(t_sat) + 2.0 * max(0.0, temperature_c - t_sat)

    def is_superheated(self, pressure_bar, temperature_c):
        return temperature_c > self.saturation_temperature(pressure_bar)


@pytest.fixture
def default_input():
    return TVCInput(
        motive_pressure=10.0,
        suction_pressure=0.5,
        discharge_pressure=1.0,
        entrained_flow=10.0,
    )


@pytest.fixture
def default_result(default_input, log_steam):
    return calculate_tvc(default_input, steam=log_steam)


class TestInputValidation:
    """Test rejection of impossible operating points."""

    def test_motive_not_above_discharge(self, log_steam):
        """Motive pressure must exceed discharge pressure."""
        with pytest.raises(InputValidationError, match="Motive pressure"):
            calculate_tvc(TVCInput(1.0, 0.5, 1.0, entrained_flow=10.0), steam=log_steam)

    def test_discharge_not_above_suction(self, log_steam):
        """Discharge pressure must exceed suction pressure."""
        with pytest.raises(InputValidationError, match="Discharge pressure"):
            calculate_tvc(TVCInput(10.0, 1.0, 0.8, entrained_flow=10.0), steam=log_steam)

    @pytest.mark.parametrize("pressures", [(0.0, 0.5, 1.0), (10.0, -0.5, 1.0), (10.0, 0.5, 0.0)])
    def test_non_positive_pressure(self, log_steam, pressures):
        """Any non-positive pressure is rejected."""
        with pytest.raises(InputValidationError, match="All pressures must be positive"):
            calculate_tvc(TVCInput(*pressures, entrained_flow=10.0), steam=log_steam)

    def test_no_flow(self, log_steam):
        """One of the two flows is required."""
        with pytest.raises(InputValidationError, match="Specify either entrained flow or motive flow"):
            calculate_tvc(TVCInput(10.0, 0.5, 1.0), steam=log_steam)

    def test_zero_flow(self, log_steam):
        """A zero flow does not count as supplied."""
        with pytest.raises(InputValidationError, match="positive value"):
            calculate_tvc(TVCInput(10.0, 0.5, 1.0, entrained_flow=0.0), steam=log_steam)

    def test_both_flows(self, log_steam):
        """Supplying both flows is ambiguous."""
        with pytest.raises(InputValidationError, match="not both"):
            calculate_tvc(
                TVCInput(10.0, 0.5, 1.0, entrained_flow=10.0, motive_flow=5.0), steam=log_steam
            )

    @pytest.mark.parametrize(
        "field,label",
        [
            ("nozzle_efficiency", "Nozzle"),
            ("mixing_efficiency", "Mixing"),
            ("diffuser_efficiency", "Diffuser"),
        ],
    )
    @pytest.mark.parametrize("value", [0.0, 1.5])
    def test_efficiency_range(self, log_steam, field, label, value):
        """Component efficiencies must lie in (0, 1]."""
        inp = TVCInput(10.0, 0.5, 1.0, entrained_flow=10.0, **{field: value})
        with pytest.raises(InputValidationError, match=f"{label} efficiency must be between 0 and 1"):
            calculate_tvc(inp, steam=log_steam)

    def test_compression_ratio_above_limit(self, log_steam):
        """CR > 2.5 exceeds a single stage."""
        with pytest.raises(InputValidationError, match="exceeds single-stage limit") as exc_info:
            calculate_tvc(TVCInput(10.0, 0.1, 0.3, entrained_flow=10.0), steam=log_steam)
        assert exc_info.value.parameter == "compression ratio"

    def test_compression_ratio_at_limit_accepted(self, log_steam):
        """CR = 2.5 is still accepted."""
        r = calculate_tvc(TVCInput(10.0, 0.5, 1.25, entrained_flow=10.0), steam=log_steam)
        assert r.compression_ratio == pytest.approx(2.5)

    def test_motive_enthalpy_not_above_discharge(self):
        """Motive steam with less enthalpy than saturated discharge vapour cannot entrain."""
        with pytest.raises(InputValidationError, match="Motive steam enthalpy") as exc_info:
            calculate_tvc(
                TVCInput(10.0, 0.5, 1.0, entrained_flow=10.0), steam=FallingVapourEnthalpySteam()
            )
        assert exc_info.value.parameter == "motive enthalpy"


class TestInputFromDict:
    """Test building TVC inputs from case-file mappings."""

    def test_builds_input(self):
        """Pressures and a flow give a TVCInput."""
        inp = tvc_input_from_dict(
            {"motive_pressure": 10, "suction_pressure": 0.5, "discharge_pressure": 1.0,
             "entrained_flow": 10.0}
        )
        assert inp == TVCInput(10.0, 0.5, 1.0, entrained_flow=10.0)

    def test_null_values_ignored(self):
        """Null optional values keep their defaults."""
        inp = tvc_input_from_dict(
            {"motive_pressure": 10, "suction_pressure": 0.5, "discharge_pressure": 1.0,
             "motive_flow": 4.0, "entrained_flow": None, "motive_temperature": None}
        )
        assert inp.entrained_flow is None
        assert inp.motive_temperature is None
        assert inp.motive_flow == 4.0

    def test_unknown_field(self):
        """Unknown keys are named in the error."""
        with pytest.raises(InputValidationError, match="throat_diameter") as exc_info:
            tvc_input_from_dict({"motive_pressure": 10.0, "throat_diameter": 0.1})
        assert exc_info.value.parameter == "throat_diameter"

    def test_missing_pressure(self):
        """All three pressures are required."""
        with pytest.raises(InputValidationError, match="discharge_pressure is required"):
            tvc_input_from_dict({"motive_pressure": 10.0, "suction_pressure": 0.5})

    def test_non_numeric_value(self):
        """String values are rejected."""
        with pytest.raises(InputValidationError, match="suction_pressure must be a number"):
            tvc_input_from_dict(
                {"motive_pressure": 10.0, "suction_pressure": "low", "discharge_pressure": 1.0}
            )


class TestRatios:
    """Test compression, expansion and entrainment ratios."""

    def test_compression_and_expansion_ratio(self, default_result):
        """CR = Pd/Ps and ER = Pm/Ps."""
        assert default_result.compression_ratio == pytest.approx(2.0)
        assert default_result.expansion_ratio == pytest.approx(20.0)

    def test_theoretical_entrainment_ratio(self, default_result):
        """Ra_theo from the energy balance."""
        # (h_m - h_d,sat) / (h_d,sat - h_s) = ln 10 / ln 2 with the log table
        assert default_result.theoretical_entrainment_ratio == pytest.approx(
            math.log(10) / math.log(2), rel=1e-9
        )

    def test_ejector_efficiency(self, default_result):
        """η = ηn·ηm·ηd·exp(−(CR − 1))."""
        assert default_result.ejector_efficiency == pytest.approx(ETA_COMPONENTS * math.exp(-1.0))
        assert default_result.ejector_efficiency == pytest.approx(0.2244, abs=1e-3)

    def test_actual_ratio_applies_efficiency(self, default_result):
        """Ra = Ra_theo · η."""
        r = default_result
        assert r.entrainment_ratio == pytest.approx(r.theoretical_entrainment_ratio * r.ejector_efficiency)
        assert r.entrainment_ratio == pytest.approx(0.745, abs=1e-3)

    def test_default_efficiencies_reported(self, default_result):
        """Defaults are echoed in the result."""
        assert default_result.nozzle_efficiency == DEFAULT_NOZZLE_EFFICIENCY
        assert default_result.mixing_efficiency == DEFAULT_MIXING_EFFICIENCY
        assert default_result.diffuser_efficiency == DEFAULT_DIFFUSER_EFFICIENCY

    def test_ejector_efficiency_function(self):
        """Efficiency falls with compression ratio."""
        assert ejector_efficiency(1.0) == pytest.approx(ETA_COMPONENTS)
        assert ejector_efficiency(1.0, 1.0, 1.0, 1.0) == pytest.approx(1.0)
        assert ejector_efficiency(2.2) < ejector_efficiency(1.5)

    def test_higher_compression_lowers_entrainment(self, log_steam):
        """Lower suction pressure entrains less vapour."""
        low = calculate_tvc(TVCInput(10.0, 0.8, 1.0, entrained_flow=10.0), steam=log_steam)
        high = calculate_tvc(TVCInput(10.0, 0.5, 1.0, entrained_flow=10.0), steam=log_steam)
        assert high.entrainment_ratio < low.entrainment_ratio


class TestFlows:
    """Test the flow solution."""

    def test_entrained_flow_given(self, default_result):
        """Motive flow = entrained / Ra."""
        r = default_result
        assert r.entrained_flow == pytest.approx(10.0)
        assert r.motive_flow == pytest.approx(10.0 / r.entrainment_ratio)

    def test_motive_flow_given(self, log_steam):
        """Entrained flow = motive · Ra."""
        r = calculate_tvc(TVCInput(10.0, 0.5, 1.0, motive_flow=5.0), steam=log_steam)
        assert r.motive_flow == pytest.approx(5.0)
        assert r.entrained_flow == pytest.approx(5.0 * r.entrainment_ratio)

    def test_mass_balance(self, default_result):
        """Discharge = motive + entrained."""
        r = default_result
        assert r.discharge_flow == pytest.approx(r.motive_flow + r.entrained_flow)

    def test_either_flow_gives_same_ratio(self, log_steam, default_result):
        """Specifying the other flow reproduces the same operating point."""
        r = calculate_tvc(
            TVCInput(10.0, 0.5, 1.0, motive_flow=default_result.motive_flow), steam=log_steam
        )
        assert r.entrainment_ratio == pytest.approx(default_result.entrainment_ratio)
        assert r.entrained_flow == pytest.approx(10.0)


class TestEnthalpies:
    """Test stream enthalpies."""

    def test_saturation_temperatures(self, default_result):
        """Saturation temperatures come from the provider."""
        assert default_result.motive_sat_temperature == pytest.approx(100 + 30 * math.log(10))
        assert default_result.suction_sat_temperature == pytest.approx(100 + 30 * math.log(0.5))
        assert default_result.discharge_sat_temperature == pytest.approx(100.0)

    def test_saturated_enthalpies(self, default_result):
        """Without superheat, motive and suction are saturated vapour."""
        assert default_result.motive_enthalpy == pytest.approx(2500 + 100 + 30 * math.log(10))
        assert default_result.suction_enthalpy == pytest.approx(2500 + 100 + 30 * math.log(0.5))

    def test_energy_balance(self, default_result):
        """Discharge enthalpy is the flow-weighted mean."""
        r = default_result
        assert r.discharge_flow * r.discharge_enthalpy == pytest.approx(
            r.motive_flow * r.motive_enthalpy + r.entrained_flow * r.suction_enthalpy
        )

    def test_superheated_motive(self, log_steam):
        """A superheated motive temperature uses the superheated enthalpy."""
        r = calculate_tvc(
            TVCInput(10.0, 0.5, 1.0, entrained_flow=10.0, motive_temperature=300.0), steam=log_steam
        )
        t_sat = 100 + 30 * math.log(10)
        assert r.motive_enthalpy == pytest.approx(2500 + t_sat + 2 * (300 - t_sat))

    def test_motive_temperature_below_saturation_uses_saturated(self, log_steam, default_result):
        """A motive temperature below saturation is ignored."""
        r = calculate_tvc(
            TVCInput(10.0, 0.5, 1.0, entrained_flow=10.0, motive_temperature=150.0), steam=log_steam
        )
        assert r.motive_enthalpy == pytest.approx(default_result.motive_enthalpy)


class TestDischarge:
    """Test the discharge temperature solution."""

    def test_superheat(self, default_result):
        """Discharge temperature inverts h(Pd, T)."""
        r = default_result
        # h(p_d, T) = 2600 + 2·(T − 100) at 1 bar
        assert r.discharge_temperature == pytest.approx(100 + (r.discharge_enthalpy - 2600) / 2, abs=1e-5)
        assert r.discharge_superheat == pytest.approx(r.discharge_temperature - 100.0)
        assert r.discharge_superheat == pytest.approx(15.35, abs=0.05)

    def test_discharge_temperature_superheated(self, log_steam):
        """2620 kJ/kg at 1 bar is 110 °C."""
        assert discharge_temperature(1.0, 2620.0, log_steam) == pytest.approx(110.0, abs=1e-5)

    def test_discharge_temperature_saturated(self, log_steam):
        """At or below h_g the discharge is saturated."""
        assert discharge_temperature(1.0, 2590.0, log_steam) == 100.0
        assert discharge_temperature(1.0, 2600.0, log_steam) == 100.0

    def test_discharge_temperature_out_of_range(self, log_steam):
        """An unreachable enthalpy is reported."""
        with pytest.raises(InputValidationError, match="beyond the vapour range"):
            discharge_temperature(1.0, 10000.0, log_steam)


class TestWarnings:
    """Test operating advisories."""

    def test_nominal_case_has_no_warnings(self, default_result):
        """The nominal point raises no advisory."""
        assert default_result.warnings == ()

    def test_low_entrainment_and_high_compression(self, log_steam):
        """Warnings are ordered: compression ratio first, then entrainment."""
        r = calculate_tvc(TVCInput(1.5, 0.5, 1.2, entrained_flow=10.0), steam=log_steam)
        assert r.entrainment_ratio < 0.1
        assert len(r.warnings) == 2
        assert "above typical limit" in r.warnings[0]
        assert "Low entrainment ratio" in r.warnings[1]

    def test_high_superheat(self, log_steam):
        """Superheat above 50 °C recommends desuperheating."""
        r = calculate_tvc(
            TVCInput(
                10.0, 0.5, 1.0, entrained_flow=10.0, motive_temperature=400.0, nozzle_efficiency=0.1
            ),
            steam=log_steam,
        )
        assert r.discharge_superheat > 50.0
        assert any("desuperheating recommended" in w for w in r.warnings)

    def test_low_superheat_and_high_entrainment(self, log_steam):
        """Near-saturated discharge and Ra > 2 are both flagged."""
        r = calculate_tvc(
            TVCInput(
                1.5,
                0.95,
                1.0,
                entrained_flow=10.0,
                nozzle_efficiency=1.0,
                mixing_efficiency=1.0,
                diffuser_efficiency=1.0,
            ),
            steam=log_steam,
        )
        assert r.discharge_superheat < 1.0
        assert any("High entrainment ratio" in w for w in r.warnings)
        assert any("very low" in w for w in r.warnings)

    def test_warnings_are_logged(self, log_steam, caplog):
        """Advisories are also logged."""
        with caplog.at_level("WARNING", logger="vapour_thermal.core.tvc"):
            calculate_tvc(TVCInput(1.5, 0.5, 1.2, entrained_flow=10.0), steam=log_steam)
        assert "Low entrainment ratio" in caplog.text

    def test_to_dict_lists_warnings(self, log_steam):
        """to_dict() serialises warnings as a list."""
        r = calculate_tvc(TVCInput(1.5, 0.5, 1.2, entrained_flow=10.0), steam=log_steam)
        data = r.to_dict()
        assert isinstance(data["warnings"], list)
        assert data["entrainment_ratio"] == r.entrainment_ratio
