"""
Tests for solver configuration loading and validation.
"""

import json

import pytest

from cachematrix.config import (
    SOLVER_SCHEMA,
    default_config,
    load_config,
    solver_options,
    validate_config,
)
from cachematrix.exceptions import ConfigError


@pytest.mark.usefixtures("clean_env")
class TestLoadConfig:
    """Test load_config precedence and error handling."""

    def test_defaults(self):
        config = load_config()

        assert config == {
            'tolerance': None,
            'strict_square': True,
            'log_level': 'INFO',
            'log_format': 'readable',
        }

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "solver.json"
        path.write_text(json.dumps({'tolerance': 1e-10, 'log_format': 'json'}))

        config = load_config(path)

        assert config['tolerance'] == 1e-10
        assert config['log_format'] == 'json'
        assert config['strict_square'] is True

    def test_overrides_win(self, tmp_path, monkeypatch):
        path = tmp_path / "solver.json"
        path.write_text(json.dumps({'tolerance': 1e-10}))
        monkeypatch.setenv("CACHEMATRIX_TOLERANCE", "1e-9")

        config = load_config(path, overrides={'tolerance': 1e-6})

        assert config['tolerance'] == 1e-6

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / "solver.json"
        path.write_text(json.dumps({'tolerance': 1e-10}))
        monkeypatch.setenv("CACHEMATRIX_TOLERANCE", "1e-9")

        assert load_config(path)['tolerance'] == 1e-9

    def test_none_override_ignored(self):
        config = load_config(overrides={'tolerance': None, 'log_level': 'DEBUG'})

        assert config['tolerance'] is None
        assert config['log_level'] == 'DEBUG'

    def test_invalid_env_tolerance(self, monkeypatch):
        monkeypatch.setenv("CACHEMATRIX_TOLERANCE", "tiny")

        with pytest.raises(ConfigError) as exc_info:
            load_config()

        assert exc_info.value.field == 'tolerance'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")

        assert "missing.json" in exc_info.value.config_path

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "solver.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "solver.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="JSON object"):
            load_config(path)

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "solver.json"
        path.write_text(json.dumps({'tolerance': -1, 'log_level': 'LOUD'}))

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        message = str(exc_info.value)
        assert "'tolerance'" in message
        assert "'log_level'" in message


class TestValidateConfig:

    def test_valid(self):
        assert validate_config(default_config()) == []

    def test_unknown_field(self):
        errors = validate_config({'precision': 3})
        assert len(errors) == 1

    def test_wrong_type(self):
        errors = validate_config({'strict_square': 'yes'})
        assert errors == ["Field 'strict_square': Expected type boolean, got str"]

    def test_defaults_match_schema(self):
        assert set(default_config()) == set(SOLVER_SCHEMA['properties'])


class TestSolverOptions:

    def test_no_tolerance(self):
        assert solver_options({'tolerance': None}) == {}

    def test_tolerance(self):
        assert solver_options({'tolerance': 1e-8}) == {'tol': 1e-8}
