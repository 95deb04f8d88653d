"""Shared schema base and validators."""

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])")
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72  # bcrypt ignores anything longer


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python. Either spelling is accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def check_password_strength(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError("Password must be at least 8 characters long")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError("Password must be at most 72 bytes long")
    if not PASSWORD_PATTERN.match(value):
        raise ValueError("Password must contain uppercase, lowercase, number, and special character")
    return value


Password = Annotated[str, AfterValidator(check_password_strength)]


class MessageResponse(BaseModel):
    message: str
