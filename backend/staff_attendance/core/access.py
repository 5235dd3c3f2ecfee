"""
Role-based access control.

A Principal is built from the session for every authenticated request and is
passed down to the services, which call ``require`` before mutating and
``can_see`` / ``visible`` before returning rows.
"""

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, TypeVar

from staff_attendance.core.exceptions import RoleError
from staff_attendance.models.user import UserRole

T = TypeVar("T")


class Capability(str, enum.Enum):
    """Things a role may do."""
    READ_ALL = "read_all"
    WRITE_ATTENDANCE = "write_attendance"
    WRITE_STAFF = "write_staff"
    WRITE_HOLIDAYS = "write_holidays"
    MANAGE_USERS = "manage_users"
    VIEW_OWN_REPORT = "view_own_report"


ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.ADMIN: frozenset({
        Capability.READ_ALL,
        Capability.WRITE_ATTENDANCE,
        Capability.WRITE_STAFF,
        Capability.WRITE_HOLIDAYS,
        Capability.MANAGE_USERS,
    }),
    UserRole.MANAGER: frozenset({
        Capability.READ_ALL,
        Capability.WRITE_ATTENDANCE,
    }),
    UserRole.EMPLOYEE: frozenset({
        Capability.VIEW_OWN_REPORT,
    }),
}


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""
    user_id: int
    username: str
    role: UserRole
    staff_id: Optional[str] = None

    def can(self, capability: Capability) -> bool:
        return capability in ROLE_CAPABILITIES.get(self.role, frozenset())

    def require(self, capability: Capability) -> None:
        """Raise RoleError unless the role grants ``capability``."""
        if not self.can(capability):
            raise RoleError(f"Role '{self.role.value}' may not perform this action")

    @property
    def sees_everyone(self) -> bool:
        return self.can(Capability.READ_ALL)

    def can_see(self, staff_id: str) -> bool:
        return self.sees_everyone or (self.staff_id is not None and staff_id == self.staff_id)

    def visible(self, items: Iterable[T], key=lambda item: item.id) -> List[T]:
        """Keep only the items whose staff id the caller may read."""
        if self.sees_everyone:
            return list(items)
        return [item for item in items if self.can_see(key(item))]

    def visible_map(self, mapping: Dict[str, T]) -> Dict[str, T]:
        """Filter a {staff_id: value} mapping."""
        if self.sees_everyone:
            return dict(mapping)
        return {sid: value for sid, value in mapping.items() if self.can_see(sid)}

    def to_session(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "staffId": self.staff_id,
        }
