"""
Regenerative braking controller for TEG brake energy recovery simulation.

This module provides a rule-based regenerative braking controller that decides
how much of a braking request the drive motor can absorb. The regenerative share
follows speed and intensity lookup curves and is then limited by battery state of
charge, motor temperature and hard braking. The energy recovery coordinator
accepts any controller exposing calculate_optimal_braking with the same inputs
and outputs.
"""

import numpy as np
from dataclasses import dataclass, asdict
from typing import Dict
import logging

from ..utils.constants import DEFAULT_MAX_MOTOR_TORQUE, DEFAULT_WHEEL_RADIUS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("Regenerative_Braking")


# Regenerative share lookup curves
SPEED_POINTS = [0.0, 10.0, 30.0, 60.0, 120.0, 200.0]  # km/h
SPEED_FACTORS = [0.0, 0.3, 0.7, 0.9, 0.8, 0.6]
INTENSITY_POINTS = [0.0, 0.3, 0.6, 0.8, 1.0]
INTENSITY_FACTORS = [0.9, 0.85, 0.7, 0.5, 0.4]

# Safety limits
HIGH_SOC_THRESHOLD = 0.95
HIGH_SOC_MAX_RATIO = 0.1
MOTOR_DERATE_TEMP = 120.0  # °C
MOTOR_DERATE_FACTOR = 0.5
HARD_BRAKING_INTENSITY = 0.8
HARD_BRAKING_MAX_RATIO = 0.6


@dataclass
class BrakingInputs:
    """
    Driver braking request and drivetrain state.

    Attributes:
        driving_speed: Vehicle speed in km/h
        braking_intensity: Brake pedal demand (0-1)
        battery_soc: Battery state of charge (0-1)
        motor_temperature: Drive motor temperature in °C
    """
    driving_speed: float
    braking_intensity: float
    battery_soc: float
    motor_temperature: float


@dataclass(frozen=True)
class BrakingOutputs:
    """Regenerative braking decision."""
    motor_torque: float               # N·m
    front_axle_braking_force: float   # N
    regenerative_braking_ratio: float # 0-1

    def to_dict(self) -> Dict:
        return asdict(self)


class RegenerativeBrakingController:
    """
    Rule-based regenerative braking controller.

    The controller never fails: inputs outside their physical range are clamped
    before the lookup curves are applied.
    """

    def __init__(self,
                 max_motor_torque: float = DEFAULT_MAX_MOTOR_TORQUE,  # N·m
                 wheel_radius: float = DEFAULT_WHEEL_RADIUS):         # m
        """
        Initialize the regenerative braking controller.

        Args:
            max_motor_torque: Maximum regenerative motor torque in N·m
            wheel_radius: Effective wheel radius in m
        """
        self.max_motor_torque = max_motor_torque
        self.wheel_radius = wheel_radius

        logger.info(f"Regenerative braking controller initialized: {max_motor_torque:.0f}N·m max torque")

    def calculate_optimal_braking(self, inputs: BrakingInputs) -> BrakingOutputs:
        """
        Split a braking request between motor and friction brakes.

        Args:
            inputs: Braking request and drivetrain state

        Returns:
            BrakingOutputs with motor torque, front axle force and regenerative share
        """
        speed = max(0.0, inputs.driving_speed)
        intensity = float(np.clip(inputs.braking_intensity, 0.0, 1.0))
        soc = float(np.clip(inputs.battery_soc, 0.0, 1.0))

        ratio = float(np.interp(speed, SPEED_POINTS, SPEED_FACTORS)
                      * np.interp(intensity, INTENSITY_POINTS, INTENSITY_FACTORS))
        torque = self.max_motor_torque * intensity * ratio

        # A nearly full battery cannot absorb regenerated energy
        if soc > HIGH_SOC_THRESHOLD:
            ratio = min(ratio, HIGH_SOC_MAX_RATIO)

        if inputs.motor_temperature > MOTOR_DERATE_TEMP:
            ratio *= MOTOR_DERATE_FACTOR
            torque *= MOTOR_DERATE_FACTOR

        # Hard stops lean on the friction brakes for stability
        if intensity > HARD_BRAKING_INTENSITY:
            ratio = min(ratio, HARD_BRAKING_MAX_RATIO)

        torque = min(torque, self.max_motor_torque)
        force = torque * ratio / self.wheel_radius

        return BrakingOutputs(
            motor_torque=torque,
            front_axle_braking_force=force,
            regenerative_braking_ratio=ratio
        )
