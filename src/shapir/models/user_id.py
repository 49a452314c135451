"""User identifier model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from shapir.errors import InvalidArgumentError


class UserIdKind(str, Enum):
    ID = "Id"
    EMAIL = "Email"


@dataclass(slots=True, frozen=True)
class UserId:
    """
    A user identified either by ShareFile id or by e-mail address.

    E-mail values are validated (and normalized) at construction; malformed
    mailboxes raise InvalidArgumentError.
    """

    kind: UserIdKind
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidArgumentError(
                f"UserId of kind '{self.kind.value}' requires a non-empty value",
            )
        if self.kind is UserIdKind.EMAIL:
            try:
                validated = validate_email(self.value, check_deliverability=False)
            except EmailNotValidError as exc:
                raise InvalidArgumentError(
                    f"Invalid e-mail address: {self.value}",
                    details={"email": self.value},
                    cause=exc,
                ) from exc
            object.__setattr__(self, "value", validated.normalized)

    @classmethod
    def by_id(cls, user_id: str) -> UserId:
        return cls(UserIdKind.ID, user_id)

    @classmethod
    def by_email(cls, email: str) -> UserId:
        return cls(UserIdKind.EMAIL, email)

    @property
    def is_id(self) -> bool:
        return self.kind is UserIdKind.ID

    @property
    def is_email(self) -> bool:
        return self.kind is UserIdKind.EMAIL

    @property
    def id(self) -> Optional[str]:
        return self.value if self.is_id else None

    @property
    def email(self) -> Optional[str]:
        return self.value if self.is_email else None

    def to_json(self) -> dict[str, str]:
        return {self.kind.value: self.value}
