"""
TEG brake energy recovery simulation.

Simulates recovery of brake waste heat with thermoelectric generators alongside
regenerative braking in an electric vehicle.
"""

__version__ = "0.1.0"
