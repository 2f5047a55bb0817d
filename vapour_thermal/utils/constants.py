"""Physical constants used throughout Vapour Thermal.

Units follow the calculator conventions: bar, °C, kJ/kg, g/mol.
"""

# Universal constants
R_UNIVERSAL = 8.314  # J/(mol·K)
MOLAR_VOLUME_STP = 22.414  # L/mol, ideal gas at 0 °C and 1 atm

# Molar masses [g/mol]
M_H2O = 18.015
M_AIR = 28.97  # dry air surrogate for NCG (N₂ 78.09 %, O₂ 20.95 %, Ar 0.93 %)
M_O2 = 32.0
M_N2 = 28.014

# Specific heats [kJ/(kg·K)], low pressure, 0–200 °C
CP_AIR = 1.005
CP_VAPOR = 1.872

# Thermodynamic
T_CELSIUS_OFFSET = 273.15  # K
T_TRIPLE_POINT_C = 0.01  # °C

# Conversion factors
BAR_TO_PA = 1.0e5
PA_TO_BAR = 1.0e-5
J_TO_KJ = 1.0e-3
