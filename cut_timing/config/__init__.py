"""Configuration management for calibration tables and machine constants."""

import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Dict, Any

from ..exceptions import ConfigurationError
from ..motion.movement_cost import MachineProfile
from ..parameters.tables import MachineCalibration, ParameterTable
from ..services.estimator import CuttingTimeEstimator
from ..settings import CONFIG_PATH

CONFIG_DIR = Path(__file__).parent
DEFAULT_CONFIG_PATH = CONFIG_DIR / "default_config.json"

TABLE_KEYS = ('cutting_speeds_mm_min', 'pierce_times_s', 'kerf_mm')


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to config file (default: default_config.json)

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Malformed config file {config_path}: {e}") from e


def save_config(config: Dict[str, Any], config_path: str = None):
    """
    Save configuration to JSON file.

    Args:
        config: Configuration dictionary
        config_path: Path to save config (default: default_config.json)
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=4)


def create_calibration_from_config(config: Dict[str, Any] = None) -> MachineCalibration:
    """
    Create MachineCalibration from configuration dictionary.

    Tables missing from the config keep the built-in calibration.

    Args:
        config: Configuration dict (loads default if None)

    Returns:
        MachineCalibration instance
    """
    if config is None:
        config = load_config()

    defaults = MachineCalibration()
    tables = {}
    for key, attr in zip(TABLE_KEYS, ('cutting_speeds', 'pierce_times', 'kerf')):
        if key in config:
            if not isinstance(config[key], dict):
                raise ConfigurationError(f"'{key}' must be an object of thickness -> value")
            tables[attr] = ParameterTable(key, config[key])
        else:
            tables[attr] = getattr(defaults, attr)

    return MachineCalibration(**tables)


def create_machine_profile_from_config(config: Dict[str, Any] = None) -> MachineProfile:
    """
    Create MachineProfile from configuration dictionary.

    Args:
        config: Configuration dict (loads default if None)

    Returns:
        MachineProfile instance
    """
    if config is None:
        config = load_config()

    machine_config = config.get('machine_profile', {})
    known = {f.name for f in fields(MachineProfile)}
    unknown = set(machine_config) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown machine profile keys: {sorted(unknown)}",
            details={'known': sorted(known)}
        )

    defaults = MachineProfile()
    try:
        values = {
            name: float(machine_config.get(name, getattr(defaults, name)))
            for name in known
        }
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Non-numeric machine profile value: {e}") from e

    return MachineProfile(**values)


def config_from_calibration(calibration: MachineCalibration,
                            machine: MachineProfile = None) -> Dict[str, Any]:
    """Serialize calibration tables and machine constants to a config dict."""
    machine = machine or MachineProfile()
    return {
        'cutting_speeds_mm_min': {str(k): v for k, v in calibration.cutting_speeds.items()},
        'pierce_times_s': {str(k): v for k, v in calibration.pierce_times.items()},
        'kerf_mm': {str(k): v for k, v in calibration.kerf.items()},
        'machine_profile': asdict(machine)
    }


def create_estimator_from_config(config_path: str = None) -> CuttingTimeEstimator:
    """
    Build a CuttingTimeEstimator from a config file.

    Args:
        config_path: Config file (default: settings.CONFIG_PATH, else packaged defaults)
    """
    config = load_config(config_path or CONFIG_PATH)
    return CuttingTimeEstimator(
        calibration=create_calibration_from_config(config),
        machine=create_machine_profile_from_config(config)
    )


__all__ = [
    'load_config',
    'save_config',
    'create_calibration_from_config',
    'create_machine_profile_from_config',
    'config_from_calibration',
    'create_estimator_from_config',
    'DEFAULT_CONFIG_PATH'
]
