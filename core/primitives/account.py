"""
ShopTracker Account Primitive — User Directory Record
======================================================
An Account is the root of its own record: no other entity owns it.

The username is the immutable identity key. Password, role and the
active flag are replaced through the Directory Service; an Account
value itself is never mutated in place.

The password field is an opaque comparable secret. Hashing is the
responsibility of the storage layer, not of this primitive.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from core.primitives.actor import Actor, Role


@dataclass(frozen=True)
class Account:
    username: str
    password: str
    full_name: str
    email: str
    role: Role = Role.USER
    active: bool = True

    def __post_init__(self):
        if not isinstance(self.username, str) or not self.username.strip():
            raise ValueError("username must be a non-empty string.")
        if not isinstance(self.password, str):
            raise ValueError("password must be a string.")
        if not isinstance(self.full_name, str):
            raise ValueError("full_name must be a string.")
        if not isinstance(self.email, str):
            raise ValueError("email must be a string.")
        object.__setattr__(self, "username", self.username.strip())
        object.__setattr__(self, "role", Role.parse(self.role))

    def as_actor(self) -> Actor:
        return Actor(username=self.username, role=self.role)

    def with_role(self, role: Role) -> Account:
        return replace(self, role=Role.parse(role))

    def with_password(self, password: str) -> Account:
        return replace(self, password=password)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on username, full name or email."""
        q = query.lower()
        return (
            q in self.username.lower()
            or q in self.full_name.lower()
            or q in self.email.lower()
        )

    def to_dict(self) -> dict:
        # Credential deliberately omitted from the display form.
        return {
            "username": self.username,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "active": self.active,
        }
