"""YAML configuration loading for ssconf.

Loads fetcher settings with ``yaml.safe_load`` so a config file can never
instantiate arbitrary Python objects. Used by
[PinnedFetcher.from_yaml()][ssconf.fetcher.PinnedFetcher.from_yaml] and the
``--config`` option of the CLI.

Examples:
    ```python
    from ssconf.core.yaml import load_yaml

    settings = load_yaml("fetcher.yaml")
    ```
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
        Parsed configuration as a dictionary. An empty file yields ``{}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file is not valid YAML or its top level
            is not a mapping.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

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
