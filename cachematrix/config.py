"""
Solver Configuration

Loads solver options from an optional JSON file, the environment and
explicit overrides, and validates the result against a JSON Schema.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema
from jsonschema import Draft7Validator, ValidationError

from cachematrix.exceptions import ConfigError

logger = logging.getLogger(__name__)

TOLERANCE_ENV_VAR = 'CACHEMATRIX_TOLERANCE'

SOLVER_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "tolerance": {
            "type": ["number", "null"],
            "minimum": 0,
            "default": None,
            "description": "Reciprocal condition number below which a matrix is treated as singular"
        },
        "strict_square": {
            "type": "boolean",
            "default": True,
            "description": "Reject non-square matrices when they are set"
        },
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR"],
            "default": "INFO"
        },
        "log_format": {
            "type": "string",
            "enum": ["readable", "json"],
            "default": "readable"
        }
    },
    "additionalProperties": False
}


def default_config() -> Dict[str, Any]:
    """Return the schema defaults."""
    return {
        key: copy.deepcopy(prop['default'])
        for key, prop in SOLVER_SCHEMA['properties'].items()
        if 'default' in prop
    }


def _format_validation_error(error: ValidationError) -> str:
    """Format a validation error into a readable message."""
    path = '.'.join(str(p) for p in error.path)
    field_path = f"'{path}'" if path else "root"

    if error.validator == 'type':
        expected = error.validator_value
        actual = type(error.instance).__name__
        return f"Field {field_path}: Expected type {expected}, got {actual}"
    elif error.validator == 'enum':
        allowed = error.validator_value
        return f"Field {field_path}: Value '{error.instance}' not in allowed values {allowed}"
    elif error.validator in ['minimum', 'maximum']:
        limit = error.validator_value
        return f"Field {field_path}: Value {error.instance} violates {error.validator} constraint ({limit})"
    else:
        return f"Field {field_path}: {error.message}"


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration against SOLVER_SCHEMA.

    Returns:
        List of error messages (empty when valid)
    """
    try:
        validator = Draft7Validator(SOLVER_SCHEMA)
        return [_format_validation_error(e) for e in validator.iter_errors(config)]
    except jsonschema.SchemaError as e:
        return [f"Schema error: {e}"]


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError("Configuration file not found", config_path=str(path)) from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON: {e}", config_path=str(path)) from e
    except OSError as e:
        raise ConfigError(f"Could not read configuration: {e}", config_path=str(path)) from e

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object", config_path=str(path))
    return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build the solver configuration.

    Precedence (lowest to highest): schema defaults, the JSON file at path,
    the CACHEMATRIX_TOLERANCE environment variable, overrides. Override
    values of None are ignored.

    Raises:
        ConfigError: If the file cannot be read or the result is invalid
    """
    config = default_config()

    if path is not None:
        config.update(_read_config_file(Path(path)))
        logger.debug("Loaded solver configuration from %s", path)

    env_tolerance = os.environ.get(TOLERANCE_ENV_VAR)
    if env_tolerance:
        try:
            config['tolerance'] = float(env_tolerance)
        except ValueError as e:
            raise ConfigError(
                f"{TOLERANCE_ENV_VAR} is not a number: {env_tolerance!r}",
                field='tolerance'
            ) from e

    if overrides:
        config.update({k: v for k, v in overrides.items() if v is not None})

    errors = validate_config(config)
    if errors:
        raise ConfigError(
            "Invalid solver configuration: " + "; ".join(errors),
            config_path=str(path) if path is not None else None
        )
    return config


def solver_options(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return the keyword options to forward to the inverter."""
    tolerance = config.get('tolerance')
    if tolerance is None:
        return {}
    return {'tol': tolerance}
