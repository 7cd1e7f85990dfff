from typing import List

from jamii.api import endpoints
from jamii.api.client import ApiClient
from jamii.core.logger import logger
from jamii.schemas.user import StaffCreate, StaffMember

class StaffService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def list_staff(self) -> List[StaffMember]:
        data = await self.api.request_json(endpoints.STAFF, fallback="Failed to fetch staff.")
        return [StaffMember.model_validate(item) for item in data or []]

    async def create_staff(self, staff_data: StaffCreate) -> dict:
        data = await self.api.request_json(
            endpoints.CREATE_STAFF,
            method="POST",
            json=staff_data.model_dump(mode="json"),
            fallback="Failed to create staff member.",
        )
        logger.info(f"Created staff account for {staff_data.first_name} in clinic {staff_data.clinic_id}")
        return data or {}
