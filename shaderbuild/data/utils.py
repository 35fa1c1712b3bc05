from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

NonEmptyString = Annotated[str, StringConstraints(min_length=1)]
"""Type alias for non-empty strings with minimum length of 1."""

UnitName = Annotated[
    str, StringConstraints(min_length=1, strip_whitespace=True, pattern=r"^[^/\\-][^/\\]*$")
]
"""Type alias for a shader unit base name. A unit name is a plain file stem: it must not
contain path separators or start with ``-``, which the compiler would read as a flag."""


class BaseModelWithDocstrings(BaseModel):
    """Base model with the attribute docstrings being extracted to the model JSON schema."""

    model_config = ConfigDict(use_attribute_docstrings=True)


class FrozenModelWithDocstrings(BaseModelWithDocstrings):
    """Immutable, hashable variant of ``BaseModelWithDocstrings``."""

    model_config = ConfigDict(use_attribute_docstrings=True, frozen=True)
