from typing import List, Optional

from jamii.api import endpoints
from jamii.api.client import ApiClient
from jamii.core.exceptions import ApiError, ClinicScopeError
from jamii.core.logger import logger
from jamii.schemas.auth import Role
from jamii.schemas.patient import (
    Complication,
    ComplicationUpdate,
    MedicalCase,
    MedicalCaseCreate,
    Patient,
    PatientCreate,
)
from jamii.services.clinic_service import ClinicScope

class PatientService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def list_patients(self) -> List[Patient]:
        data = await self.api.request_json(endpoints.PATIENTS, fallback="Failed to fetch patients.")
        return [Patient.model_validate(item) for item in data or []]

    async def get_patient(self, patient_id: int) -> Optional[Patient]:
        # There is no detail endpoint; look the patient up in the full list
        patients = await self.list_patients()
        return next((p for p in patients if p.id == patient_id), None)

    async def create_patient(self, patient_data: PatientCreate) -> dict:
        data = await self.api.request_json(
            endpoints.CREATE_PATIENT,
            method="POST",
            json=patient_data.model_dump(mode="json"),
            fallback="Failed to create patient.",
        )
        logger.info(f"Created patient record for {patient_data.first_name} {patient_data.last_name}")
        return data or {}

    async def list_cases(self, patient_id: int) -> List[MedicalCase]:
        data = await self.api.request_json(
            endpoints.PATIENT_CASES.format(patient_id=patient_id),
            fallback="Failed to fetch medical cases.",
        )
        return [MedicalCase.model_validate(item) for item in data or []]


class MedicalCaseService:
    def __init__(self, api: ApiClient, scope: ClinicScope):
        self.api = api
        self.scope = scope

    async def list_cases(self) -> List[MedicalCase]:
        data = await self.api.request_json(endpoints.MEDICAL_CASES, fallback="Failed to fetch medical cases.")
        cases = [MedicalCase.model_validate(item) for item in data or []]
        return self.scope.narrow(cases, field="clinic_name")

    async def get_case(self, case_id: int) -> MedicalCase:
        data = await self.api.request_json(
            endpoints.MEDICAL_CASE.format(case_id=case_id),
            fallback="Failed to fetch case details.",
        )
        return MedicalCase.model_validate(data)

    async def create_case(self, patient_id: int, case_data: MedicalCaseCreate) -> dict:
        payload = {
            **case_data.model_dump(mode="json"),
            "patient": patient_id,
            "is_active": True,
        }

        user = self.scope.session.user
        if user is not None and user.role == Role.DOCTOR:
            if self.scope.selected_clinic is None:
                raise ClinicScopeError("Clinic ID is missing. Cannot create case.")
            payload["clinic_id"] = self.scope.selected_clinic.clinic_id

        data = await self.api.request_json(
            endpoints.CREATE_MEDICAL_CASE,
            method="POST",
            json=payload,
            fallback="Failed to create medical case.",
        )
        logger.info(f"Created medical case for patient {patient_id}")
        return data or {}

    async def delete_case(self, case_id: int) -> None:
        await self.api.request_json(
            endpoints.DELETE_MEDICAL_CASE.format(case_id=case_id),
            method="DELETE",
            fallback="Failed to delete medical case.",
        )
        logger.info(f"Deleted medical case {case_id}")


class ComplicationService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get(self, case_id: int) -> Optional[Complication]:
        try:
            data = await self.api.request_json(
                endpoints.COMPLICATION.format(case_id=case_id),
                fallback="Failed to fetch complication details.",
            )
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise
        return Complication.model_validate(data) if data else None

    async def save(self, case_id: int, complication: ComplicationUpdate) -> Optional[Complication]:
        data = await self.api.request_json(
            endpoints.COMPLICATION.format(case_id=case_id),
            method="POST",
            json=complication.model_dump(mode="json"),
            fallback="Failed to save complication details.",
        )
        return Complication.model_validate(data) if isinstance(data, dict) else None

    async def delete(self, case_id: int) -> bool:
        """Returns False when there was no complication record to delete."""
        try:
            await self.api.request_json(
                endpoints.DELETE_COMPLICATION.format(case_id=case_id),
                method="DELETE",
                fallback="Failed to delete complication record.",
            )
        except ApiError as exc:
            if exc.status_code == 404:
                return False
            raise
        return True
