from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from jamii.core.utils import split_path
from jamii.schemas.auth import Role

ALL_ROLES = frozenset(Role)

@dataclass(frozen=True)
class Route:
    path: str
    roles: FrozenSet[Role] = field(default_factory=frozenset)  # empty: any signed-in user
    public: bool = False
    guest_only: bool = False
    nav_label: Optional[str] = None

    def matches(self, path: str) -> bool:
        pattern = split_path(self.path)
        segments = split_path(path)
        if len(pattern) != len(segments):
            return False
        for expected, actual in zip(pattern, segments):
            if expected.startswith("{") and expected.endswith("}"):
                continue
            if expected != actual:
                return False
        return True

    def allows(self, role: Role) -> bool:
        return not self.roles or role in self.roles


def _roles(*roles: Role) -> FrozenSet[Role]:
    return frozenset(roles)

ROUTES: List[Route] = [
    Route("/", public=True, guest_only=True),
    Route("/not-found", public=True),
    Route("/change-password"),
    Route("/dashboard", ALL_ROLES, nav_label="Dashboard"),
    Route("/dashboard/doctors", _roles(Role.ADMIN), nav_label="Doctors"),
    Route("/dashboard/staff", _roles(Role.ADMIN, Role.DOCTOR), nav_label="Staff"),
    Route("/dashboard/clinics", _roles(Role.ADMIN, Role.DOCTOR), nav_label="Clinics"),
    Route("/dashboard/patients", ALL_ROLES, nav_label="Patients"),
    Route("/dashboard/users", _roles(Role.ADMIN, Role.DOCTOR)),
    Route("/dashboard/patients/{id}", ALL_ROLES),
    Route("/dashboard/patients/{id}/cases", ALL_ROLES),
    Route("/dashboard/patients/{id}/cases/{case_id}", ALL_ROLES),
    Route("/dashboard/medical-cases", ALL_ROLES),
    Route("/dashboard/medical-cases/{id}/complications", ALL_ROLES),
    Route("/dashboard/set-specialty", _roles(Role.DOCTOR)),
    Route("/onboarding/create-clinic", _roles(Role.ADMIN)),
    Route("/onboarding/create-staff", _roles(Role.ADMIN, Role.DOCTOR)),
]

def match_route(path: str, routes: Optional[List[Route]] = None) -> Optional[Route]:
    for route in routes if routes is not None else ROUTES:
        if route.matches(path):
            return route
    return None

def navigation_for(role: Role, routes: Optional[List[Route]] = None) -> List[Route]:
    return [r for r in (routes if routes is not None else ROUTES) if r.nav_label and r.allows(role)]
