#!/usr/bin/env python3
"""
TEG Brake Energy Recovery Simulation Example

This script demonstrates brake waste heat recovery with thermoelectric generators
working alongside regenerative braking: TEG characterization across hot side
temperatures, a set of integrated braking scenarios, module geometry
optimization, and cooling system analysis, with results exported as CSV files
and plots.
"""

import os
import sys
import matplotlib.pyplot as plt
import pandas as pd
import yaml

# Add project root to Python path for imports
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

# Import required modules
from teg_brake_recovery.teg.conversion import TEGConversionEngine, ThermalConditions
from teg_brake_recovery.teg.optimizer import OptimizationConstraints
from teg_brake_recovery.teg.properties import (
    CandidateLocation, estimate_teg_cost, estimate_module_mass, optimize_teg_placement
)
from teg_brake_recovery.teg.configurations import MountingLocation, TEGConfigCatalog
from teg_brake_recovery.thermal.thermal_manager import ThermalManager, ThermalManagementConfig
from teg_brake_recovery.braking.strategy import EnergyRecoveryStrategy
from teg_brake_recovery.braking.coordinator import (
    EnergyRecoveryCoordinator, IntegratedBrakingInputs
)
from teg_brake_recovery.utils.validation import TEGSystemError, EmergencyShutdown
from teg_brake_recovery.utils.plotting import (
    set_plot_style, plot_teg_performance, plot_energy_recovery_history, plot_cooling_strategy_map
)


def load_configurations():
    """
    Load thermal management, strategy, and simulation configurations.

    Returns:
        dict: Dictionary containing configuration settings
    """
    config = {
        'thermal_config': os.path.join('configs', 'thermal', 'thermal_management.yaml'),
        'strategy_config': os.path.join('configs', 'strategy', 'energy_recovery.yaml'),
        'output_dir': os.path.join('data', 'output', 'teg_brake_recovery'),
        'simulation_settings': {
            'brake_surface_area': 5.0,   # m², brake surface feeding the TEG modules
            'ambient_temperature': 25.0, # °C
            'characterization_temps': [60.0, 80.0, 100.0, 120.0, 140.0, 160.0, 180.0, 200.0],
        },
        'optimization_settings': {
            'base_config': 'brake_disc_teg',
            'max_iterations': 300,
            'constraints': {
                'max_cost': 2000.0,      # $
                'min_power': 0.5,        # W
            }
        }
    }

    # Create output directory if it doesn't exist
    os.makedirs(config['output_dir'], exist_ok=True)

    # Load thermal management configuration
    thermal_config = ThermalManagementConfig()
    if os.path.exists(config['thermal_config']):
        thermal_config.load_from_file(config['thermal_config'])
    config['thermal_management'] = thermal_config

    # Load energy recovery strategy
    if os.path.exists(config['strategy_config']):
        config['strategy'] = EnergyRecoveryStrategy.load_from_file(config['strategy_config'])
    else:
        config['strategy'] = EnergyRecoveryStrategy()

    print(f"Configuration loaded. Output directory: {config['output_dir']}")
    return config


def create_recovery_system(config):
    """
    Create the energy recovery coordinator with its subsystems.

    Args:
        config: Configuration dictionary

    Returns:
        EnergyRecoveryCoordinator: Configured coordinator
    """
    engine = TEGConversionEngine()
    thermal_manager = ThermalManager(config['thermal_management'])

    coordinator = EnergyRecoveryCoordinator(
        teg_engine=engine,
        thermal_manager=thermal_manager,
        strategy=config['strategy'],
        brake_surface_area=config['simulation_settings']['brake_surface_area']
    )

    print(f"Energy recovery system created with {len(engine.configurations)} TEG designs")
    return coordinator


def run_teg_characterization(engine, config, output_dir):
    """
    Sweep the hot side temperature of every registered TEG design.

    Args:
        engine: TEG conversion engine
        config: Configuration dictionary
        output_dir: Directory to save results

    Returns:
        DataFrame: One row per design and temperature that could be evaluated
    """
    print("\n=== TEG Characterization ===")
    ambient = config['simulation_settings']['ambient_temperature']
    rows = []

    for config_id in engine.configurations.ids():
        for hot_side in config['simulation_settings']['characterization_temps']:
            conditions = ThermalConditions(
                hot_side_temperature=hot_side,
                cold_side_temperature=ambient + 20.0,
                heat_flux=5000.0,
                ambient_temperature=ambient
            )
            try:
                performance = engine.calculate_power(config_id, conditions)
            except TEGSystemError as e:
                print(f"  {config_id} @ {hot_side:.0f}°C skipped: {e}")
                continue

            rows.append({**performance.to_dict(), 'hot_side_temperature': hot_side})

    results = pd.DataFrame(rows)
    if not results.empty:
        results.to_csv(os.path.join(output_dir, 'teg_characterization.csv'), index=False)
        best = results.loc[results['electrical_power'].idxmax()]
        print(f"Best point: {best['config_id']} at {best['hot_side_temperature']:.0f}°C, "
              f"{best['electrical_power']:.3f} W ({best['efficiency']:.3f}%)")

        disc = results[results['config_id'] == 'brake_disc_teg']
        plot_teg_performance(disc, title='Brake Disc TEG Characterization',
                             save_path=os.path.join(output_dir, 'teg_characterization.png'))

    return results


def run_braking_scenarios(coordinator, output_dir):
    """
    Run a set of braking events through the integrated system.

    Args:
        coordinator: Energy recovery coordinator
        output_dir: Directory to save results

    Returns:
        list: Labels of the scenarios that completed
    """
    print("\n=== Integrated Braking Scenarios ===")

    scenarios = {
        'Urban stop': IntegratedBrakingInputs(
            driving_speed=50.0, braking_intensity=0.4, battery_soc=0.6, motor_temperature=60.0,
            brake_temperature=100.0, ambient_temperature=25.0, airflow=10.0),
        'Cold brakes': IntegratedBrakingInputs(
            driving_speed=50.0, braking_intensity=0.4, battery_soc=0.6, motor_temperature=60.0,
            brake_temperature=70.0, ambient_temperature=25.0, airflow=10.0),
        'Full battery': IntegratedBrakingInputs(
            driving_speed=60.0, braking_intensity=0.5, battery_soc=0.97, motor_temperature=60.0,
            brake_temperature=120.0, ambient_temperature=25.0, airflow=12.0),
        'Hot motor': IntegratedBrakingInputs(
            driving_speed=80.0, braking_intensity=0.5, battery_soc=0.5, motor_temperature=130.0,
            brake_temperature=140.0, ambient_temperature=30.0, airflow=15.0),
        'TEG disabled': IntegratedBrakingInputs(
            driving_speed=50.0, braking_intensity=0.4, battery_soc=0.6, motor_temperature=60.0,
            brake_temperature=100.0, ambient_temperature=25.0, airflow=10.0,
            teg_system_enabled=False),
        'Mountain descent': IntegratedBrakingInputs(
            driving_speed=70.0, braking_intensity=0.6, battery_soc=0.8, motor_temperature=90.0,
            brake_temperature=240.0, ambient_temperature=20.0, airflow=18.0,
            thermal_management_mode='active'),
        'Overheated brakes': IntegratedBrakingInputs(
            driving_speed=90.0, braking_intensity=0.9, battery_soc=0.5, motor_temperature=80.0,
            brake_temperature=320.0, ambient_temperature=25.0, airflow=20.0),
    }

    completed = []
    for label, inputs in scenarios.items():
        try:
            outputs = coordinator.calculate_integrated_braking(inputs)
        except EmergencyShutdown as e:
            print(f"{label}: {e}")
            continue

        status = coordinator.get_system_status()
        completed.append(label)

        print(f"{label}:")
        print(f"  Regenerative: {outputs.regenerative_power / 1000:.2f} kW, "
              f"TEG: {outputs.teg_power:.2f} W ({outputs.teg_status.value})")
        print(f"  System efficiency: {outputs.system_efficiency:.1f}%, "
              f"brake temperature: {outputs.brake_temperature:.1f}°C")
        if status['warnings']:
            print(f"  Warnings: {'; '.join(status['warnings'])}")
        if status['errors']:
            print(f"  Errors: {'; '.join(status['errors'])}")

    history = coordinator.get_performance_dataframe()
    if not history.empty:
        history.insert(0, 'scenario', completed)
        history.to_csv(os.path.join(output_dir, 'braking_scenarios.csv'), index=False)
        plot_energy_recovery_history(history, labels=completed, title='Integrated Braking Scenarios',
                                     save_path=os.path.join(output_dir, 'braking_scenarios.png'))

    thermal_history = coordinator.thermal_manager.get_thermal_dataframe()
    if not thermal_history.empty:
        thermal_history.to_csv(os.path.join(output_dir, 'thermal_history.csv'), index=False)

    return completed


def run_design_optimization(engine, config, output_dir):
    """
    Optimize the geometry of a TEG design and compare it with the base design.

    Args:
        engine: TEG conversion engine
        config: Configuration dictionary
        output_dir: Directory to save results

    Returns:
        OptimizationResult: Best design found
    """
    print("\n=== TEG Design Optimization ===")
    settings = config['optimization_settings']
    base_id = settings['base_config']

    target = ThermalConditions(
        hot_side_temperature=150.0,
        cold_side_temperature=45.0,
        heat_flux=4000.0,
        ambient_temperature=config['simulation_settings']['ambient_temperature']
    )
    constraints = OptimizationConstraints(**settings['constraints'])

    result = engine.optimize_configuration(base_id, target, constraints,
                                           max_iterations=settings['max_iterations'])

    base = engine.configurations.get(base_id)
    best = result.best_config
    print(f"Base design: {base.thermoelectric_pairs} pairs, "
          f"{base.leg_dimensions.length:.1f} mm legs, {base.leg_dimensions.cross_sectional_area:.1f} mm²")
    print(f"Best design: {best.thermoelectric_pairs} pairs, "
          f"{best.leg_dimensions.length:.1f} mm legs, {best.leg_dimensions.cross_sectional_area:.1f} mm²")
    print(f"Expected power: {result.expected_performance.electrical_power:.3f} W, "
          f"score {result.score:.3f} after {result.iterations} evaluations")
    print(f"Estimated mass: {estimate_module_mass(best) * 1000:.1f} g, "
          f"cost: ${estimate_teg_cost(best)['total_cost']:.0f}")

    with open(os.path.join(output_dir, 'optimized_design.yaml'), 'w') as f:
        yaml.dump(result.to_dict(), f, default_flow_style=False)

    return result


def analyze_placement(engine):
    """
    Choose the mounting site with the highest expected TEG power.

    Args:
        engine: TEG conversion engine

    Returns:
        dict: Placement recommendation
    """
    print("\n=== TEG Placement ===")
    locations = [
        CandidateLocation(MountingLocation.BRAKE_DISC.value, max_temperature=180.0, heat_flux=6000.0,
                          available_area=150.0, cooling_capability=400.0),
        CandidateLocation(MountingLocation.BRAKE_CALIPER.value, max_temperature=140.0, heat_flux=3000.0,
                          available_area=60.0, cooling_capability=250.0),
        CandidateLocation(MountingLocation.MOTOR_HOUSING.value, max_temperature=90.0, heat_flux=1500.0,
                          available_area=300.0, cooling_capability=600.0),
    ]

    recommendation = optimize_teg_placement(locations, engine.configurations.get('brake_disc_teg'))
    print(f"Recommended location: {recommendation['optimal_location']} "
          f"({recommendation['expected_power']:.2f} W expected)")
    print(f"  {recommendation['reasoning']}")

    return recommendation


def analyze_cooling(thermal_manager, output_dir):
    """
    Find the cheapest cooling setting for a target brake temperature.

    Args:
        thermal_manager: Thermal manager
        output_dir: Directory to save results

    Returns:
        dict: Cooling optimization result
    """
    print("\n=== Cooling System Analysis ===")
    result = thermal_manager.optimize_cooling_system(
        target_temperature=190.0, max_cooling_power=60.0, ambient_temperature=25.0, airflow=10.0
    )

    if result['feasible']:
        print(f"Fan {result['optimal_fan_speed'] * 100:.0f}%, pump {result['optimal_pump_speed'] * 100:.0f}% "
              f"reaches {result['achievable_temperature']:.1f}°C with {result['expected_cooling_power']:.1f} W")
    else:
        print("Target brake temperature not reachable within the cooling power budget")

    plot_cooling_strategy_map(thermal_manager, title='Brake Cooling Strategy',
                              save_path=os.path.join(output_dir, 'cooling_strategy.png'))

    return result


def main():
    """Main function to run the TEG brake energy recovery simulation."""
    print("=== TEG Brake Energy Recovery Simulation ===")

    # Set plot style
    set_plot_style('report')

    # Load configurations
    config = load_configurations()
    output_dir = config['output_dir']

    # Create the recovery system
    coordinator = create_recovery_system(config)
    engine = coordinator.teg_engine

    # Characterize TEG designs on a separate engine so the braking history stays clean
    characterization = run_teg_characterization(
        TEGConversionEngine(configurations=TEGConfigCatalog()), config, output_dir
    )

    # Run braking scenarios
    completed = run_braking_scenarios(coordinator, output_dir)

    # Optimize TEG geometry
    optimization = run_design_optimization(engine, config, output_dir)

    # Choose a mounting site
    placement = analyze_placement(engine)

    # Cooling analysis
    cooling = analyze_cooling(coordinator.thermal_manager, output_dir)

    plt.close('all')

    # Print overall conclusion
    print("\n=== Overall Conclusion ===")
    print(f"TEG operating points evaluated: {len(characterization)}")
    print(f"Braking scenarios completed: {len(completed)}")

    diagnostics = coordinator.get_system_diagnostics()
    print(f"Last event energy savings: {diagnostics.overall.energy_savings:.1f}% "
          f"(reliability {diagnostics.overall.reliability:.1f}%)")
    print(f"Optimized design power: {optimization.expected_performance.electrical_power:.3f} W")
    print(f"Recommended TEG location: {placement['optimal_location']}")
    if cooling['feasible']:
        print(f"Cooling setting: {cooling['expected_cooling_power']:.1f} W")

    print("\nSimulation completed successfully!")
    print(f"Results saved to: {output_dir}")


if __name__ == "__main__":
    main()
