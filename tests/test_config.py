"""
Tests for JSON calibration config and settings.
"""

import json
import logging

import pytest

import cut_timing.config as config_module
from cut_timing.config import (
    DEFAULT_CONFIG_PATH,
    load_config,
    save_config,
    create_calibration_from_config,
    create_machine_profile_from_config,
    config_from_calibration,
    create_estimator_from_config
)
from cut_timing.exceptions import ConfigurationError, InvalidParameterTableError
from cut_timing.models import CuttingTimeOptions, cutting
from cut_timing.motion import MachineProfile
from cut_timing.parameters import (
    MachineCalibration, CUTTING_SPEEDS_MM_MIN, PIERCE_TIMES_S, KERF_MM
)
from cut_timing.settings import configure_logging


def test_packaged_config_matches_builtin_calibration():
    config = load_config()
    calibration = create_calibration_from_config(config)

    assert calibration.cutting_speeds.to_dict() == CUTTING_SPEEDS_MM_MIN
    assert calibration.pierce_times.to_dict() == PIERCE_TIMES_S
    assert calibration.kerf.to_dict() == KERF_MM
    assert create_machine_profile_from_config(config) == MachineProfile()


def test_default_config_path_exists():
    assert DEFAULT_CONFIG_PATH.exists()
    assert DEFAULT_CONFIG_PATH.name == 'default_config.json'


def test_round_trip(tmp_path):
    machine = MachineProfile(rapid_speed_mm_min=20000.0, setup_time_s=3.0)
    config = config_from_calibration(MachineCalibration(), machine)
    path = tmp_path / 'machine.json'

    save_config(config, str(path))
    loaded = load_config(str(path))

    assert create_machine_profile_from_config(loaded) == machine
    calibration = create_calibration_from_config(loaded)
    assert calibration.cutting_speed(1.0) == pytest.approx(6133.333, abs=1e-3)
    assert calibration.kerf_for(2.0) == 0.25


def test_partial_config_keeps_defaults():
    calibration = create_calibration_from_config({'pierce_times_s': {'1.0': 9.0}})
    assert calibration.pierce_time(3.0) == 9.0
    assert calibration.cutting_speed(5.0) == 2200

    machine = create_machine_profile_from_config({'machine_profile': {'setup_time_s': 0}})
    assert machine.setup_time_s == 0.0
    assert machine.rapid_speed_mm_min == 16000.0


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / 'nope.json'))


def test_malformed_config_file(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"cutting_speeds_mm_min": ', encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_config(str(path))


@pytest.mark.parametrize('config, error', [
    ({'cutting_speeds_mm_min': {}}, InvalidParameterTableError),
    ({'cutting_speeds_mm_min': [1, 2]}, ConfigurationError),
    ({'kerf_mm': {'1.0': 0.1, '1': 0.2}}, InvalidParameterTableError),
])
def test_invalid_tables_in_config(config, error):
    with pytest.raises(error):
        create_calibration_from_config(config)


def test_invalid_machine_profile_in_config():
    with pytest.raises(ConfigurationError):
        create_machine_profile_from_config({'machine_profile': {'warp_speed': 9}})
    with pytest.raises(ConfigurationError):
        create_machine_profile_from_config({'machine_profile': {'setup_time_s': 'slow'}})
    with pytest.raises(ConfigurationError):
        create_machine_profile_from_config({'machine_profile': {'max_distance_for_jump_mm': 1.0}})


def test_estimator_from_config_file(tmp_path):
    config = load_config()
    config['cutting_speeds_mm_min'] = {'1.0': 600.0}
    config['kerf_mm'] = {'1.0': 0.0}
    config['machine_profile']['acceleration_time_s'] = 0.0
    path = tmp_path / 'slow.json'
    path.write_text(json.dumps(config), encoding='utf-8')

    estimator = create_estimator_from_config(str(path))
    result = estimator.estimate([cutting(0, 0, 100, 0)], CuttingTimeOptions(material_thickness=1.0))
    assert result.cutting_time_sec == pytest.approx(10.0)


def test_estimator_from_settings_path(tmp_path, monkeypatch):
    path = tmp_path / 'env.json'
    save_config({'pierce_times_s': {'1.0': 4.0}}, str(path))
    monkeypatch.setattr(config_module, 'CONFIG_PATH', str(path))

    estimator = create_estimator_from_config()
    assert estimator.resolve_pierce_time(2.0) == 4.0


def test_estimator_from_packaged_defaults(monkeypatch):
    monkeypatch.setattr(config_module, 'CONFIG_PATH', None)
    estimator = create_estimator_from_config()
    assert estimator.resolve_cutting_speed(5.0) == 2200


def test_configure_logging_accepts_level_names():
    configure_logging('debug')
    assert logging.getLogger('cut_timing').getEffectiveLevel() <= logging.DEBUG
