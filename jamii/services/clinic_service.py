import asyncio
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from jamii.api import endpoints
from jamii.api.client import ApiClient
from jamii.core.config import Settings, settings as default_settings
from jamii.core.exceptions import JamiiError, UnauthorizedError
from jamii.core.logger import logger
from jamii.core.notifications import Notifier
from jamii.core.storage import ClientStorage
from jamii.core.utils import collapse_path, parse_clinic_id
from jamii.schemas.auth import Role, User
from jamii.schemas.clinic import AssignedClinicRecord, ClinicCreate, ClinicRecord, ClinicSummary
from jamii.services.session_service import SessionStore

CLINIC_ENDPOINTS = {
    Role.ADMIN: endpoints.CLINICS,
    Role.DOCTOR: endpoints.DOCTOR_CLINICS,
    Role.STAFF: endpoints.STAFF_CLINICS,
}

def normalize_clinics(role: Role, payload: Any) -> List[ClinicSummary]:
    if not isinstance(payload, list):
        raise ValueError("Expected a list of clinics")
    record_type = ClinicRecord if role == Role.ADMIN else AssignedClinicRecord
    return [record_type.model_validate(item).summary() for item in payload]


class ClinicService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def list_clinics(self) -> List[ClinicRecord]:
        data = await self.api.request_json(endpoints.CLINICS, fallback="Failed to fetch clinics.")
        return [ClinicRecord.model_validate(item) for item in data or []]

    async def create_clinic(self, clinic_data: ClinicCreate) -> Optional[ClinicRecord]:
        data = await self.api.request_json(
            endpoints.CREATE_CLINIC,
            method="POST",
            json=clinic_data.model_dump(),
            fallback="Failed to create clinic.",
        )
        logger.info(f"Created clinic {clinic_data.name}")
        return ClinicRecord.model_validate(data) if isinstance(data, dict) and "id" in data else None


class ClinicScope:
    """
    Which clinic the dashboard is currently looking at.

    Admins may look at all clinics (no selection). Doctors and staff always
    have one of their clinics selected whenever they have any.
    """

    def __init__(
        self,
        api: ApiClient,
        session: SessionStore,
        storage: ClientStorage,
        notifier: Notifier,
        settings: Optional[Settings] = None,
    ):
        self.api = api
        self.session = session
        self.storage = storage
        self.notifier = notifier
        self.settings = settings or default_settings

        self.clinics: List[ClinicSummary] = []
        self.selected_clinic: Optional[ClinicSummary] = None
        self.is_loading = True
        self.refresh_task: Optional[asyncio.Task] = None
        self._generation = 0
        self._identity = None
        self._unsubscribe = session.subscribe(self._on_session_change)

    @property
    def is_all(self) -> bool:
        user = self.session.user
        return user is not None and user.role == Role.ADMIN and self.selected_clinic is None

    @property
    def selected_clinic_id(self) -> Optional[int]:
        return self.selected_clinic.clinic_id if self.selected_clinic else None

    def close(self):
        self._unsubscribe()
        if self.refresh_task and not self.refresh_task.done():
            self.refresh_task.cancel()

    async def wait(self) -> Optional[ClinicSummary]:
        """Wait for a resolve started by a session change, if any."""
        while self.refresh_task is not None and not self.refresh_task.done():
            # A superseded task is cancelled; that is not an error here
            await asyncio.gather(self.refresh_task, return_exceptions=True)
        return self.selected_clinic

    def _on_session_change(self, user: Optional[User]):
        # Only a different user or role invalidates the scope
        identity = (user.id, user.role) if user else None
        if identity == self._identity:
            if user is None:
                self.is_loading = False
            return
        self._identity = identity
        self._generation += 1
        self.clinics = []
        self.selected_clinic = None

        if user is None:
            self.is_loading = False
            return

        self.is_loading = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet; whoever starts one calls resolve()
            return
        if self.refresh_task and not self.refresh_task.done():
            self.refresh_task.cancel()
        self.refresh_task = loop.create_task(self.resolve())

    def _store_selection(self, clinic: Optional[ClinicSummary]):
        if clinic is None:
            self.storage.remove_item(self.settings.CLINIC_STORAGE_KEY)
        else:
            self.storage.set_item(self.settings.CLINIC_STORAGE_KEY, str(clinic.clinic_id))

    def _find(self, clinic_id: Optional[int]) -> Optional[ClinicSummary]:
        if clinic_id is None:
            return None
        return next((c for c in self.clinics if c.clinic_id == clinic_id), None)

    async def resolve(self, role: Optional[Role] = None) -> Optional[ClinicSummary]:
        user = self.session.user
        role = role or (user.role if user else None)
        generation = self._generation

        if user is None or role is None:
            self.clinics = []
            self.selected_clinic = None
            self.is_loading = False
            return None

        self.is_loading = True
        endpoint = CLINIC_ENDPOINTS[Role(role)]

        try:
            data = await self.api.request_json(endpoint, fallback="Failed to fetch clinics for user.")
            clinics = normalize_clinics(Role(role), data)
        except UnauthorizedError:
            # Already reported and logged out by the request layer
            if generation == self._generation:
                self.clinics = []
                self.selected_clinic = None
                self.is_loading = False
            return None
        except (JamiiError, ValidationError, ValueError) as exc:
            if generation != self._generation:
                return None
            logger.warning(f"Could not fetch clinics for {Role(role).value}: {exc}")
            self.notifier.notify("Error", "Could not fetch your clinics.", variant="warning")
            self.clinics = []
            self.selected_clinic = None
            self.is_loading = False
            return None

        # Drop results that belong to a session that is no longer current
        current = self.session.user
        if generation != self._generation or current is None or current.id != user.id:
            logger.info("Discarding clinic list fetched for a previous session")
            return None

        self.clinics = clinics
        stored = self._find(parse_clinic_id(self.storage.get_item(self.settings.CLINIC_STORAGE_KEY)))

        if stored is not None:
            self.selected_clinic = stored
        elif clinics and Role(role) != Role.ADMIN:
            self.selected_clinic = clinics[0]
            self._store_selection(clinics[0])
        else:
            self.selected_clinic = None
            self._store_selection(None)

        self.is_loading = False
        logger.info(f"Clinic scope resolved: {len(clinics)} clinic(s), selected={self.selected_clinic_id}")
        return self.selected_clinic

    def set_selection(self, clinic_id: Optional[int], current_path: Optional[str] = None) -> Optional[str]:
        """
        Select a clinic by id (``None`` means all/none).

        Returns the path to navigate to when ``current_path`` points at a
        record under the old scope, otherwise ``None``.
        """
        clinic = self._find(clinic_id)
        self.selected_clinic = clinic
        self._store_selection(clinic)
        return collapse_path(current_path)

    def narrow(self, items: Iterable[Any], field: str = "clinic_name") -> List[Any]:
        items = list(items)
        if self.selected_clinic is None:
            return items
        target = self.selected_clinic.clinic_name if field == "clinic_name" else self.selected_clinic.clinic_id
        return [item for item in items if _value(item, field) == target]

def _value(item: Any, field: str) -> Any:
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)
