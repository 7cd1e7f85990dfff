from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from jamii.core.config import Settings, settings as default_settings
from jamii.core.utils import split_path
from jamii.routing.routes import ROUTES, Route, match_route
from jamii.schemas.auth import User
from jamii.services.session_service import SessionStore

class GuardState(str, Enum):
    RESOLVING = "resolving"
    UNAUTHENTICATED = "unauthenticated"
    FORCED_RESET = "forced-reset"
    AUTHORIZED = "authorized"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    redirect: Optional[str] = None
    render: bool = False


class RouteGuard:
    """
    Decides whether a path may render for the current session.

    Role requirements live on the route table, so views never check roles
    themselves. Forbidden paths are sent to the not-found page.
    """

    def __init__(self, session: SessionStore, routes: Optional[List[Route]] = None, settings: Optional[Settings] = None):
        self.session = session
        self.routes = routes if routes is not None else ROUTES
        self.settings = settings or default_settings

    def _same(self, path: str, target: str) -> bool:
        return split_path(path) == split_path(target)

    def evaluate(self, path: str) -> GuardDecision:
        if self.session.is_loading:
            return GuardDecision(GuardState.RESOLVING)

        route = match_route(path, self.routes)
        user = self.session.user

        if user is None:
            if route is not None and route.public:
                return GuardDecision(GuardState.UNAUTHENTICATED, render=True)
            return GuardDecision(GuardState.UNAUTHENTICATED, redirect=self.settings.LOGIN_ROUTE)

        on_change_password = self._same(path, self.settings.CHANGE_PASSWORD_ROUTE)

        if user.reset_initial_password:
            if on_change_password:
                return GuardDecision(GuardState.FORCED_RESET, render=True)
            return GuardDecision(GuardState.FORCED_RESET, redirect=self.settings.CHANGE_PASSWORD_ROUTE)

        # Reset done, or already signed in: leave the one-off pages
        if on_change_password or (route is not None and route.guest_only):
            return GuardDecision(GuardState.AUTHORIZED, redirect=self.settings.HOME_ROUTE)

        if route is None or not (route.public or route.allows(user.role)):
            if self._same(path, self.settings.NOT_FOUND_ROUTE):
                return GuardDecision(GuardState.FORBIDDEN, render=True)
            return GuardDecision(GuardState.FORBIDDEN, redirect=self.settings.NOT_FOUND_ROUTE)

        return GuardDecision(GuardState.AUTHORIZED, render=True)

    def can_access(self, path: str) -> bool:
        decision = self.evaluate(path)
        return decision.state == GuardState.AUTHORIZED and decision.render


def landing_route(user: Optional[User], settings: Optional[Settings] = None) -> str:
    settings = settings or default_settings
    if user is None:
        return settings.LOGIN_ROUTE
    if user.reset_initial_password:
        return settings.CHANGE_PASSWORD_ROUTE
    return settings.HOME_ROUTE
