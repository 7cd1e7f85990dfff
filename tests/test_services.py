from datetime import date

import pytest
from pydantic import ValidationError

from jamii.core.exceptions import ApiError, ClinicScopeError
from jamii.routing.guard import GuardState
from jamii.schemas.clinic import ClinicCreate
from jamii.schemas.patient import ComplicationUpdate, MedicalCaseCreate, PatientCreate
from jamii.schemas.user import ChangePasswordRequest, SpecialtyUpdate, StaffCreate


async def login(dashboard, api_state, role, **kwargs):
    email = f"{role}@jamii.test"
    api_state.add_account(email, "password1", role=role, **kwargs)
    await dashboard.start()
    await dashboard.session.login(email, "password1")
    await dashboard.scope.wait()


def patient_payload(**overrides):
    data = {
        "email": "achieng@example.com",
        "first_name": "Achieng",
        "last_name": "Odhiambo",
        "gender": "female",
        "telephone": "+254700000001",
        "clinic_id": 1,
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_create_and_list_patients(dashboard, api_state):
    await login(dashboard, api_state, "staff")

    await dashboard.patients.create_patient(PatientCreate(**patient_payload()))
    patients = await dashboard.patients.list_patients()

    assert [p.first_name for p in patients] == ["Achieng"]
    assert (await dashboard.patients.get_patient(patients[0].id)).last_name == "Odhiambo"
    assert await dashboard.patients.get_patient(999) is None


@pytest.mark.asyncio
async def test_duplicate_patient_error_is_readable(dashboard, api_state):
    await login(dashboard, api_state, "staff")
    await dashboard.patients.create_patient(PatientCreate(**patient_payload()))

    with pytest.raises(ApiError) as exc_info:
        await dashboard.patients.create_patient(PatientCreate(**patient_payload()))

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "patient with this email already exists."


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"email": "not-an-email"},
    {"first_name": ""},
    {"gender": "other"},
    {"telephone": "123"},
    {"clinic_id": 0},
])
async def test_invalid_forms_never_reach_network(dashboard, api_state, overrides):
    await login(dashboard, api_state, "staff")
    sent = len(api_state.received)

    with pytest.raises(ValidationError):
        await dashboard.patients.create_patient(PatientCreate(**patient_payload(**overrides)))

    assert len(api_state.received) == sent


def test_password_confirmation_must_match():
    with pytest.raises(ValidationError):
        ChangePasswordRequest(new_password="longenough", confirm_password="different")
    with pytest.raises(ValidationError):
        ChangePasswordRequest(new_password="short", confirm_password="short")


def test_form_models_validate_fields():
    with pytest.raises(ValidationError):
        ClinicCreate(name=" ", location="Nairobi", contact_number="+254700000000")
    with pytest.raises(ValidationError):
        SpecialtyUpdate(specialty="x")
    with pytest.raises(ValidationError):
        StaffCreate(email="a@b.co", first_name="A", last_name="B", gender="male",
                    telephone="0700000000", position="", clinic_id=1)


@pytest.mark.asyncio
async def test_doctor_case_needs_selected_clinic(dashboard, api_state):
    await login(dashboard, api_state, "doctor")
    case = MedicalCaseCreate(title="Fracture", description="Left arm", case_date=date(2024, 5, 2))

    with pytest.raises(ClinicScopeError):
        await dashboard.cases.create_case(4, case)
    assert not any(r["path"] == "/api/patients/create/medical-case/" for r in api_state.received)


@pytest.mark.asyncio
async def test_doctor_case_carries_selected_clinic(dashboard, api_state):
    api_state.assigned_clinics = [{"clinic_id": 7, "clinic_name": "Wellness"}]
    await login(dashboard, api_state, "doctor")
    case = MedicalCaseCreate(title="Fracture", description="Left arm", case_date=date(2024, 5, 2))

    await dashboard.cases.create_case(4, case)

    created = api_state.cases[-1]
    assert created["clinic_id"] == 7
    assert created["patient"] == 4
    assert created["case_date"] == "2024-05-02"
    assert created["is_active"] is True


@pytest.mark.asyncio
async def test_case_list_is_narrowed_to_selected_clinic(dashboard, api_state):
    api_state.clinics = [{"id": 1, "name": "Central"}, {"id": 2, "name": "Riverside"}]
    api_state.cases = [
        {"id": 1, "title": "A", "clinic_name": "Central"},
        {"id": 2, "title": "B", "clinic_name": "Riverside"},
    ]
    await login(dashboard, api_state, "admin")

    assert len(await dashboard.cases.list_cases()) == 2
    dashboard.scope.set_selection(2)
    assert [c.title for c in await dashboard.cases.list_cases()] == ["B"]


@pytest.mark.asyncio
async def test_complication_lifecycle(dashboard, api_state):
    await login(dashboard, api_state, "doctor")

    assert await dashboard.complications.get(3) is None
    saved = await dashboard.complications.save(3, ComplicationUpdate(complication_occurred=True, description="Infection"))
    assert saved.complication_occurred is True
    assert (await dashboard.complications.get(3)).description == "Infection"
    assert await dashboard.complications.delete(3) is True
    assert await dashboard.complications.delete(3) is False


@pytest.mark.asyncio
async def test_clinic_registry(dashboard, api_state):
    await login(dashboard, api_state, "admin")

    created = await dashboard.clinics.create_clinic(
        ClinicCreate(name="Sunshine Clinic", location="Nairobi, Kenya", contact_number="+254700000000")
    )

    assert created.id == 1
    assert [c.name for c in await dashboard.clinics.list_clinics()] == ["Sunshine Clinic"]


@pytest.mark.asyncio
async def test_change_password_lifts_forced_reset(dashboard, api_state):
    await login(dashboard, api_state, "staff", reset_initial_password=True)
    assert dashboard.guard.evaluate("/dashboard").state == GuardState.FORCED_RESET

    await dashboard.accounts.change_password(
        ChangePasswordRequest(new_password="a-better-one", confirm_password="a-better-one")
    )

    assert dashboard.session.user.reset_initial_password is False
    assert dashboard.guard.evaluate("/change-password").redirect == "/dashboard"


@pytest.mark.asyncio
async def test_set_specialty_refreshes_user(dashboard, api_state):
    await login(dashboard, api_state, "doctor")

    user = await dashboard.accounts.set_specialty(SpecialtyUpdate(specialty="Orthopaedics"))

    assert user.specialty == "Orthopaedics"


@pytest.mark.asyncio
async def test_resource_call_after_token_revoked(dashboard, api_state):
    await login(dashboard, api_state, "staff")
    api_state.valid_tokens.clear()

    from jamii.core.exceptions import UnauthorizedError
    with pytest.raises(UnauthorizedError):
        await dashboard.patients.list_patients()

    assert dashboard.session.user is None
    assert dashboard.notifier.count("Session Expired") == 1
    assert dashboard.guard.evaluate("/dashboard/patients").redirect == "/"
