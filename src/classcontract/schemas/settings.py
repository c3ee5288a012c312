"""Contract settings and the process-wide enforcement switch.

Settings are resolved once per declaration (each contract() or invariant()
call), never per method call. A class declared while contracts are disabled
gets no wrappers at all, so it runs exactly as if no contract was written.

Precedence (highest to lowest):
1. Environment (CLASSCONTRACT_DISABLE)
2. Explicit settings passed to the declaration
3. Defaults (contracts enabled)
"""

import os
from typing import Mapping, Optional, Union

from pydantic import ConfigDict, Field

from classcontract.schemas.base import ContractBaseModel

DISABLE_ENV_VAR = "CLASSCONTRACT_DISABLE"


class ContractSettings(ContractBaseModel):
    """Resolved settings consulted when a contract is declared.

    Usage
    -----
        @contract("withdraw", accepts("Num"), settings=ContractSettings(enabled=False))
        class Account:
            ...
    """

    enabled: bool = True

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        frozen=True,
    )


class EnvironmentSettings(ContractBaseModel):
    """Settings read from the process environment.

    ``disable`` accepts the usual boolean spellings (``1``, ``true``,
    ``yes``, ``on`` and their negatives); anything else is a validation error.
    """

    disable: bool = Field(default=False, alias=DISABLE_ENV_VAR)

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "EnvironmentSettings":
        if environ is None:
            environ = os.environ
        values = {}
        raw = environ.get(DISABLE_ENV_VAR)
        if raw is not None and raw.strip():
            values[DISABLE_ENV_VAR] = raw.strip()
        return cls.model_validate(values)


def resolve_settings(
    settings: Optional[Union[dict, ContractSettings]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ContractSettings:
    """Resolve the settings for one declaration.

    Parameters
    ----------
    settings : dict or ContractSettings, optional
        Explicit settings from the declaration. If None, defaults are used.
    environ : mapping, optional
        Environment to read the switch from (default ``os.environ``).

    Returns
    -------
    ContractSettings
        Validated, immutable settings.

    Raises
    ------
    ValidationError
        If the explicit settings or the environment value are invalid.

    Examples
    --------
    >>> resolve_settings({"enabled": True}, environ={"CLASSCONTRACT_DISABLE": "1"}).enabled
    False
    """
    if settings is None:
        resolved = ContractSettings()
    elif not isinstance(settings, ContractSettings):
        resolved = ContractSettings.model_validate(settings)
    else:
        resolved = settings

    env = EnvironmentSettings.from_environ(environ)
    if env.disable and resolved.enabled:
        resolved = resolved.model_copy(update={"enabled": False})

    return resolved
