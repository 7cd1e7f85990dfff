from typing import List

from jamii.api import endpoints
from jamii.api.client import ApiClient
from jamii.core.logger import logger
from jamii.schemas.user import Doctor, DoctorCreate

class DoctorService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def list_doctors(self) -> List[Doctor]:
        data = await self.api.request_json(endpoints.DOCTORS, fallback="Failed to fetch doctors.")
        return [Doctor.model_validate(item) for item in data or []]

    async def create_doctor(self, doctor_data: DoctorCreate) -> dict:
        data = await self.api.request_json(
            endpoints.CREATE_USER,
            method="POST",
            json=doctor_data.model_dump(mode="json"),
            fallback="Failed to create doctor.",
        )
        logger.info(f"Created doctor account for {doctor_data.first_name}")
        return data or {}
