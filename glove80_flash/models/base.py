"""Base model for all glove80-flash Pydantic models.

All glove80-flash models share one validation configuration.
"""

from pydantic import BaseModel, ConfigDict


class Glove80BaseModel(BaseModel):
    """Base model class for all glove80-flash Pydantic models.

    Unknown fields are rejected so a mistyped key in a config file fails
    loudly instead of being ignored.
    """

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )
