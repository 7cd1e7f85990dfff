from typing import Optional

from jamii.api import endpoints
from jamii.api.client import ApiClient
from jamii.core.logger import logger
from jamii.schemas.auth import User
from jamii.schemas.user import ChangePasswordRequest, SpecialtyUpdate
from jamii.services.session_service import SessionStore

class AccountService:
    def __init__(self, api: ApiClient, session: SessionStore):
        self.api = api
        self.session = session

    async def change_password(self, data: ChangePasswordRequest) -> None:
        await self.api.request_json(
            endpoints.CHANGE_PASSWORD,
            method="POST",
            json=data.model_dump(),
            fallback="Failed to change password.",
        )
        # Lifts the forced-reset state; the route guard redirects away
        self.session.mark_password_changed()
        logger.info("Password changed")

    async def set_specialty(self, data: SpecialtyUpdate) -> Optional[User]:
        await self.api.request_json(
            endpoints.SET_SPECIALTY,
            method="POST",
            json=data.model_dump(),
            fallback="Failed to save specialty.",
        )
        return await self.session.refresh_user()
