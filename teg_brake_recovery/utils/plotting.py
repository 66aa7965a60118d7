"""
Plotting utilities for TEG brake energy recovery simulation.

This module provides plotting functions for visualizing TEG conversion results,
integrated braking energy recovery histories and the cooling strategy of the
thermal manager across brake temperatures.
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec
import pandas as pd
from typing import Dict, List, Optional, Union
import os
import re
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger("Plotting")


# Figure defaults
DEFAULT_FIG_SIZE = (12, 8)
DEFAULT_DPI = 300
DEFAULT_LINE_WIDTH = 2
DEFAULT_MARKER_SIZE = 6
DEFAULT_FONT_SIZE = 10
DEFAULT_TITLE_SIZE = 14
DEFAULT_LABEL_SIZE = 12
DEFAULT_LEGEND_SIZE = 10
DEFAULT_GRID_ALPHA = 0.3
DEFAULT_SAVE_FORMAT = 'png'
DEFAULT_PLOT_DIR = os.path.join('data', 'output', 'teg_brake_recovery', 'plots')

# Subsystem colors
COLORS = {
    'regenerative': '#377eb8',
    'teg': '#e41a1c',
    'total': '#4daf4a',
    'brake': '#ff7f00',
    'ambient': '#7f7f7f',
    'fan': '#1f77b4',
    'pump': '#2ca02c',
}

# Style sheet and line width per audience
PLOT_STYLES = {
    'report': ('seaborn-v0_8-whitegrid', 2.0),
    'dashboard': ('dark_background', 2.5),
    'print': ('seaborn-v0_8-paper', 1.5),
}


#------------------------------------------------------------------------------
# Utility functions
#------------------------------------------------------------------------------

def set_plot_style(style: str = 'report') -> None:
    """
    Apply a figure style for recovery plots.

    Regenerative, TEG, total recovered and brake traces take the subsystem
    colours in that order, so the same quantity keeps its colour across figures.

    Args:
        style: 'report' for analysis output, 'dashboard' for a dark in-vehicle
            display, or 'print' for compact paper figures
    """
    if style not in PLOT_STYLES:
        logger.warning(f"Unknown plot style '{style}', using report style")
        style = 'report'

    sheet, line_width = PLOT_STYLES[style]
    plt.style.use(sheet)
    plt.rcParams.update({
        'font.size': DEFAULT_FONT_SIZE,
        'axes.titlesize': DEFAULT_TITLE_SIZE,
        'axes.labelsize': DEFAULT_LABEL_SIZE,
        'legend.fontsize': DEFAULT_LEGEND_SIZE,
        'figure.figsize': DEFAULT_FIG_SIZE,
        'lines.linewidth': line_width,
        'grid.alpha': DEFAULT_GRID_ALPHA,
        'axes.prop_cycle': plt.cycler(color=[COLORS['regenerative'], COLORS['teg'],
                                             COLORS['total'], COLORS['brake']]),
    })


def save_plot(fig: plt.Figure, name: str, directory: Optional[str] = DEFAULT_PLOT_DIR,
              format: str = DEFAULT_SAVE_FORMAT, dpi: int = DEFAULT_DPI) -> str:
    """
    Save a figure under a file-system friendly name.

    Scenario names such as "Urban Stop / TEG" are stored as "urban_stop_teg".
    An extension in the name is replaced by the requested format.

    Args:
        fig: Figure to save
        name: Figure or scenario name, with or without extension
        directory: Output directory, created if missing; None for the working directory
        format: File format ('png', 'pdf', 'svg', ...)
        dpi: Resolution for raster formats

    Returns:
        Path of the saved file
    """
    base, ext = os.path.splitext(name)
    if ext and ext[1:].lower() != format.lower():
        logger.warning(f"Saving plot '{name}' as {format} instead of {ext[1:]}")

    stem = re.sub(r'[^a-z0-9]+', '_', base.lower()).strip('_') or 'figure'

    if directory:
        os.makedirs(directory, exist_ok=True)
        filepath = os.path.join(directory, f"{stem}.{format}")
    else:
        filepath = f"{stem}.{format}"

    fig.savefig(filepath, format=format, dpi=dpi, bbox_inches='tight')
    logger.info(f"Plot saved to {filepath}")

    return filepath


def _to_dataframe(history: Union[pd.DataFrame, List[Dict]]) -> pd.DataFrame:
    if isinstance(history, pd.DataFrame):
        return history
    return pd.json_normalize(list(history), sep='_')


def _finish(fig: plt.Figure, title: Optional[str], save_path: Optional[str]) -> plt.Figure:
    if title:
        fig.suptitle(title, fontsize=DEFAULT_TITLE_SIZE)
    fig.tight_layout()

    if save_path:
        directory, name = os.path.split(save_path)
        format = os.path.splitext(name)[1][1:] or DEFAULT_SAVE_FORMAT
        save_plot(fig, name, directory or None, format=format)

    return fig


#------------------------------------------------------------------------------
# TEG plots
#------------------------------------------------------------------------------

def plot_teg_performance(history: Union[pd.DataFrame, List[Dict]], title: Optional[str] = None,
                         save_path: Optional[str] = None) -> Optional[plt.Figure]:
    """
    Plot TEG conversion results over a sequence of calculations.

    Args:
        history: Performance history as DataFrame or list of TEGPerformance dictionaries
        title: Plot title
        save_path: Path to save plot (if None, not saved)

    Returns:
        Matplotlib figure, None if the history is empty or malformed
    """
    data = _to_dataframe(history)
    required = {'electrical_power', 'efficiency', 'temperature_difference'}
    if data.empty or not required.issubset(data.columns):
        logger.error("Invalid TEG performance data format")
        return None

    index = np.arange(len(data))
    fig = plt.figure(figsize=(12, 9))
    gs = gridspec.GridSpec(3, 1, height_ratios=[2, 1, 1])

    # Electrical output
    ax1 = fig.add_subplot(gs[0])
    ax1.plot(index, data['electrical_power'], '-o', color=COLORS['teg'],
             linewidth=DEFAULT_LINE_WIDTH, markersize=DEFAULT_MARKER_SIZE, label='Electrical Power')
    if 'power_density' in data.columns:
        ax1_twin = ax1.twinx()
        ax1_twin.plot(index, data['power_density'], '--', color=COLORS['ambient'],
                      linewidth=1, label='Power Density')
        ax1_twin.set_ylabel('Power Density (W/m²)')

        lines, labels = ax1.get_legend_handles_labels()
        lines2, labels2 = ax1_twin.get_legend_handles_labels()
        ax1.legend(lines + lines2, labels + labels2, loc='best')
    else:
        ax1.legend(loc='best')
    ax1.set_ylabel('Power (W)')
    ax1.set_title('TEG Electrical Output')
    ax1.grid(True, alpha=DEFAULT_GRID_ALPHA)

    # Conversion efficiency
    ax2 = fig.add_subplot(gs[1], sharex=ax1)
    ax2.plot(index, data['efficiency'], '-', color=COLORS['total'], linewidth=DEFAULT_LINE_WIDTH)
    ax2.set_ylabel('Efficiency (%)')
    ax2.set_title('Conversion Efficiency')
    ax2.grid(True, alpha=DEFAULT_GRID_ALPHA)

    # Temperature differences
    ax3 = fig.add_subplot(gs[2], sharex=ax1)
    ax3.plot(index, data['temperature_difference'], '-', color=COLORS['brake'],
             linewidth=DEFAULT_LINE_WIDTH, label='Applied ΔT')
    if 'effective_temperature_difference' in data.columns:
        ax3.plot(index, data['effective_temperature_difference'], '--', color=COLORS['teg'],
                 linewidth=DEFAULT_LINE_WIDTH, label='Effective ΔT')
    ax3.set_xlabel('Calculation')
    ax3.set_ylabel('ΔT (K)')
    ax3.set_title('Temperature Difference')
    ax3.grid(True, alpha=DEFAULT_GRID_ALPHA)
    ax3.legend(loc='best')

    return _finish(fig, title, save_path)


#------------------------------------------------------------------------------
# Energy recovery plots
#------------------------------------------------------------------------------

def plot_energy_recovery_history(history: Union[pd.DataFrame, List[Dict]],
                                 labels: Optional[List[str]] = None,
                                 title: Optional[str] = None,
                                 save_path: Optional[str] = None) -> Optional[plt.Figure]:
    """
    Plot integrated braking results per braking event.

    Args:
        history: Braking history as DataFrame or list of IntegratedBrakingOutputs dictionaries
        labels: Optional event labels for the x axis
        title: Plot title
        save_path: Path to save plot (if None, not saved)

    Returns:
        Matplotlib figure, None if the history is empty or malformed
    """
    data = _to_dataframe(history)
    required = {'regenerative_power', 'teg_power', 'system_efficiency', 'brake_temperature'}
    if data.empty or not required.issubset(data.columns):
        logger.error("Invalid energy recovery data format")
        return None

    index = np.arange(len(data))
    fig = plt.figure(figsize=(14, 10))
    gs = gridspec.GridSpec(3, 1, height_ratios=[2, 1, 1])

    # Recovered power split
    ax1 = fig.add_subplot(gs[0])
    ax1.bar(index, data['regenerative_power'], color=COLORS['regenerative'], label='Regenerative')
    ax1.bar(index, data['teg_power'], bottom=data['regenerative_power'],
            color=COLORS['teg'], label='TEG')
    if 'mechanical_braking_power' in data.columns:
        ax1.plot(index, data['mechanical_braking_power'], 'k--', marker='o',
                 linewidth=1, label='Friction Braking')
    ax1.set_ylabel('Power (W)')
    ax1.set_title('Recovered Power')
    ax1.grid(True, axis='y', alpha=DEFAULT_GRID_ALPHA)
    ax1.legend(loc='best')

    # System efficiency
    ax2 = fig.add_subplot(gs[1], sharex=ax1)
    ax2.plot(index, data['system_efficiency'], '-o', color=COLORS['total'],
             linewidth=DEFAULT_LINE_WIDTH, label='System')
    if 'thermal_efficiency' in data.columns:
        ax2.plot(index, data['thermal_efficiency'], '--s', color=COLORS['teg'],
                 linewidth=DEFAULT_LINE_WIDTH, label='TEG')
    ax2.set_ylabel('Efficiency (%)')
    ax2.set_title('Recovery Efficiency')
    ax2.grid(True, alpha=DEFAULT_GRID_ALPHA)
    ax2.legend(loc='best')

    # Temperatures
    ax3 = fig.add_subplot(gs[2], sharex=ax1)
    ax3.plot(index, data['brake_temperature'], '-o', color=COLORS['brake'],
             linewidth=DEFAULT_LINE_WIDTH, label='Brake')
    if 'teg_hot_side_temperature' in data.columns:
        ax3.plot(index, data['teg_hot_side_temperature'], '--', color=COLORS['teg'],
                 linewidth=DEFAULT_LINE_WIDTH, label='TEG Hot Side')
        ax3.plot(index, data['teg_cold_side_temperature'], '--', color=COLORS['regenerative'],
                 linewidth=DEFAULT_LINE_WIDTH, label='TEG Cold Side')
    ax3.set_xlabel('Braking Event')
    ax3.set_ylabel('Temperature (°C)')
    ax3.set_title('Brake and TEG Temperatures')
    ax3.grid(True, alpha=DEFAULT_GRID_ALPHA)
    ax3.legend(loc='best')

    if labels:
        ax3.set_xticks(index)
        ax3.set_xticklabels(labels, rotation=30, ha='right')

    return _finish(fig, title, save_path)


#------------------------------------------------------------------------------
# Thermal management plots
#------------------------------------------------------------------------------

def plot_cooling_strategy_map(thermal_manager, mode=None,
                              temperatures: Optional[np.ndarray] = None,
                              ambient_temperature: float = 25.0,
                              airflow: float = 10.0,
                              heat_generation: float = 5000.0,
                              title: Optional[str] = None,
                              save_path: Optional[str] = None) -> plt.Figure:
    """
    Plot cooling commands and heat rejection over a brake temperature sweep.

    Args:
        thermal_manager: ThermalManager whose strategy is mapped
        mode: ManagementMode, adaptive if None
        temperatures: Brake temperatures in °C, 25-290°C if None
        ambient_temperature: Ambient temperature in °C
        airflow: Cooling airflow velocity in m/s
        heat_generation: Heat load assumed for the adaptive correction in W
        title: Plot title
        save_path: Path to save plot (if None, not saved)

    Returns:
        Matplotlib figure
    """
    from ..thermal.thermal_manager import BrakingThermalInputs, ManagementMode

    mode = mode or ManagementMode.ADAPTIVE
    if temperatures is None:
        upper = thermal_manager.config.emergency_shutdown_temp - 10
        temperatures = np.linspace(ambient_temperature, upper, 100)

    fan_speeds, pump_speeds, cooling_powers, rejections = [], [], [], []
    for brake_temp in temperatures:
        inputs = BrakingThermalInputs(
            vehicle_speed=0.0, braking_force=0.0, braking_power=heat_generation,
            brake_temperature=float(brake_temp), motor_temperature=ambient_temperature,
            ambient_temperature=ambient_temperature, airflow=airflow,
            braking_duration=0.0, regenerative_braking_ratio=0.0
        )
        strategy = thermal_manager.determine_cooling_strategy(inputs, mode, heat_generation)
        fan_speeds.append(strategy.fan_speed * 100)
        pump_speeds.append(strategy.pump_speed * 100)
        cooling_powers.append(strategy.cooling_power)
        rejections.append(thermal_manager.calculate_heat_rejection(inputs, strategy))

    config = thermal_manager.config
    fig = plt.figure(figsize=(12, 8))
    gs = gridspec.GridSpec(2, 1, height_ratios=[1, 1])

    # Actuator commands
    ax1 = fig.add_subplot(gs[0])
    ax1.plot(temperatures, fan_speeds, '-', color=COLORS['fan'], linewidth=DEFAULT_LINE_WIDTH, label='Fan')
    ax1.plot(temperatures, pump_speeds, '--', color=COLORS['pump'], linewidth=DEFAULT_LINE_WIDTH, label='Pump')
    for threshold, style, label in [
        (config.optimal_temp_min, ':', 'Optimal Min'),
        (config.optimal_temp_max, '--', 'Optimal Max'),
        (config.emergency_shutdown_temp * 0.9, '-', 'Emergency Cooling'),
    ]:
        ax1.axvline(x=threshold, color=COLORS['ambient'], linestyle=style, alpha=0.7, label=label)
    ax1.set_ylabel('Command (%)')
    ax1.set_title(f'Cooling Commands ({mode.value} mode)')
    ax1.grid(True, alpha=DEFAULT_GRID_ALPHA)
    ax1.legend(loc='best')

    # Power
    ax2 = fig.add_subplot(gs[1], sharex=ax1)
    ax2.plot(temperatures, cooling_powers, '-', color=COLORS['teg'],
             linewidth=DEFAULT_LINE_WIDTH, label='Cooling Power')
    ax2.plot(temperatures, rejections, '-', color=COLORS['total'],
             linewidth=DEFAULT_LINE_WIDTH, label='Heat Rejection')
    ax2.set_xlabel('Brake Temperature (°C)')
    ax2.set_ylabel('Power (W)')
    ax2.set_title('Cooling Power and Heat Rejection')
    ax2.grid(True, alpha=DEFAULT_GRID_ALPHA)
    ax2.legend(loc='best')

    return _finish(fig, title, save_path)
