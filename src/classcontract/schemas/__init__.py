"""Pydantic configuration schemas for classcontract.

Exports
-------
resolve_settings : function
    Single entrypoint for settings resolution
ContractSettings : class
    Validated, immutable settings for one declaration
EnvironmentSettings : class
    Settings parsed from the process environment
"""

from classcontract.schemas.settings import (
    DISABLE_ENV_VAR,
    ContractSettings,
    EnvironmentSettings,
    resolve_settings,
)

__all__ = [
    'DISABLE_ENV_VAR',
    'resolve_settings',
    'ContractSettings',
    'EnvironmentSettings',
]
