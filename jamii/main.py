from dataclasses import dataclass
from typing import Optional

import httpx

from jamii.api.client import ApiClient
from jamii.core.config import Settings, settings as default_settings
from jamii.core.logger import logger
from jamii.core.notifications import Notifier
from jamii.core.storage import ClientStorage, get_storage
from jamii.middleware.log_middleware import LogMiddleware
from jamii.routing.guard import RouteGuard
from jamii.services.auth_service import AccountService
from jamii.services.clinic_service import ClinicScope, ClinicService
from jamii.services.doctor_service import DoctorService
from jamii.services.patient_service import ComplicationService, MedicalCaseService, PatientService
from jamii.services.session_service import SessionStore
from jamii.services.staff_service import StaffService

@dataclass
class Dashboard:
    settings: Settings
    http: httpx.AsyncClient
    storage: ClientStorage
    notifier: Notifier
    session: SessionStore
    api: ApiClient
    scope: ClinicScope
    guard: RouteGuard
    clinics: ClinicService
    doctors: DoctorService
    staff: StaffService
    patients: PatientService
    cases: MedicalCaseService
    complications: ComplicationService
    accounts: AccountService

    async def start(self):
        """Restore the persisted session and resolve the clinic scope once."""
        self.session.initialize()
        await self.scope.wait()
        return self

    async def close(self):
        self.scope.close()
        await self.http.aclose()

    async def __aenter__(self):
        return await self.start()

    async def __aexit__(self, *exc_info):
        await self.close()


def create_dashboard(
    settings: Optional[Settings] = None,
    storage: Optional[ClientStorage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dashboard:
    settings = settings or default_settings
    storage = storage if storage is not None else get_storage(settings)

    http = httpx.AsyncClient(
        base_url=settings.API_ROOT,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        transport=transport,
        event_hooks=LogMiddleware().event_hooks,
    )
    notifier = Notifier()
    session = SessionStore(http, storage, settings)
    api = ApiClient(http, session, notifier)
    scope = ClinicScope(api, session, storage, notifier, settings)

    logger.info(f"{settings.PROJECT_NAME} dashboard client targeting {settings.API_ROOT}")

    return Dashboard(
        settings=settings,
        http=http,
        storage=storage,
        notifier=notifier,
        session=session,
        api=api,
        scope=scope,
        guard=RouteGuard(session, settings=settings),
        clinics=ClinicService(api),
        doctors=DoctorService(api),
        staff=StaffService(api),
        patients=PatientService(api),
        cases=MedicalCaseService(api, scope),
        complications=ComplicationService(api),
        accounts=AccountService(api, session),
    )
