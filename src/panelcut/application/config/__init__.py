"""Settings, seed data and part file loading.

Public API:
    - PanelcutSettings: Runtime settings model
    - SeedData, RateDefinition, PanelDefinition, EdgeDefinition: Seed models
    - load_settings: Load settings from an optional file and the environment
    - load_settings_from_dict: Validate settings from a dictionary
    - load_seed_data: Load the default (or a custom) seed file
    - load_default_rates: Rate table of the packaged default price list
    - load_part / load_part_from_dict: Load a part configuration
    - configure_logging: Set up root logging for entry points
    - ConfigError: Exception for configuration errors

Example:
    >>> from pathlib import Path
    >>> from panelcut.application.config import load_part, ConfigError
    >>>
    >>> try:
    ...     part = load_part(Path("side-panel.json")).to_domain()
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from panelcut.application.config.loader import (
    ConfigError,
    configure_logging,
    load_default_rates,
    load_part,
    load_part_from_dict,
    load_seed_data,
    load_settings,
    load_settings_from_dict,
    settings_from_env,
)
from panelcut.application.config.schema import (
    EdgeDefinition,
    PanelcutSettings,
    PanelDefinition,
    RateDefinition,
    SeedData,
)

__all__ = [
    "ConfigError",
    "EdgeDefinition",
    "PanelDefinition",
    "PanelcutSettings",
    "RateDefinition",
    "SeedData",
    "configure_logging",
    "load_default_rates",
    "load_part",
    "load_part_from_dict",
    "load_seed_data",
    "load_settings",
    "load_settings_from_dict",
    "settings_from_env",
]
