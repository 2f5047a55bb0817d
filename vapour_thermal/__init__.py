"""Vapour Thermal — desalination plant thermal calculations.

Dissolved gas in seawater, NCG / water-vapour mixture properties and
thermo-vapour compressor (steam ejector) performance.
"""

__app_name__ = "vapour"
__version__ = "0.4.0"
