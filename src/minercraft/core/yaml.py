"""YAML configuration loading for minercraft.

Loads client configuration files with ``yaml.safe_load`` so untrusted YAML
cannot instantiate arbitrary Python objects. Every failure is reported as a
[ConfigurationError][minercraft.core.exceptions.ConfigurationError].

Examples:
    ```python
    from minercraft.core.yaml import load_yaml

    config = load_yaml("config/minercraft.yaml")
    ```

See Also:
    [Client.from_yaml()][minercraft.client.client.Client.from_yaml]: Client
        factory that delegates to this function.
    [ClientConfig][minercraft.client.configs.ClientConfig]: Pydantic model
        constructed from the returned dictionary.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    Args:
        config_path: Path to the YAML file (absolute or relative).

    Returns:
        Parsed configuration as a nested dictionary. Returns an empty dict
        if the file exists but contains no data.

    Raises:
        ConfigurationError: If the file does not exist, contains invalid
            YAML, or its top-level value is not a mapping.

    Warning:
        The structure of the returned dictionary is not validated here.
        Callers pass it to [ClientConfig][minercraft.client.configs.ClientConfig].
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    return data
