"""Base Pydantic model with strict defaults for classcontract settings."""

from pydantic import BaseModel, ConfigDict


class ContractBaseModel(BaseModel):
    """Base model for all classcontract configuration schemas.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Strips whitespace from strings (environment values included)
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        str_strip_whitespace=True,
    )
