import pytest

from jamii.core.exceptions import AuthenticationError
from jamii.schemas.auth import Role

from fake_api import b64url, make_token


@pytest.mark.asyncio
async def test_initialize_without_token(dashboard):
    session = dashboard.session
    assert session.is_loading is True
    assert session.initialize() is None
    assert session.is_loading is False
    assert session.token is None
    assert session.user is None


@pytest.mark.asyncio
async def test_initialize_restores_stored_token(dashboard, storage, settings):
    token = "x." + b64url({"user_id": "1", "name": "A", "email": "a@x.com", "role": "admin"}) + ".y"
    storage.set_item(settings.TOKEN_STORAGE_KEY, token)

    user = dashboard.session.initialize()

    assert user.role == Role.ADMIN
    assert dashboard.session.token == token
    assert dashboard.session.is_loading is False


@pytest.mark.parametrize("bad_token", ["garbage", "a.b.c", "x." + b64url({"user_id": "1"}) + ".y"])
@pytest.mark.asyncio
async def test_initialize_discards_undecodable_token(dashboard, storage, settings, bad_token):
    storage.set_item(settings.TOKEN_STORAGE_KEY, bad_token)
    storage.set_item(settings.RESET_PASSWORD_STORAGE_KEY, "true")

    dashboard.session.initialize()

    assert dashboard.session.user is None
    assert dashboard.session.token is None
    assert storage.get_item(settings.TOKEN_STORAGE_KEY) is None
    assert storage.get_item(settings.RESET_PASSWORD_STORAGE_KEY) is None
    assert dashboard.notifier.history == []


@pytest.mark.asyncio
async def test_initialize_runs_once(dashboard, storage, settings):
    dashboard.session.initialize()
    storage.set_item(settings.TOKEN_STORAGE_KEY, make_token())
    assert dashboard.session.initialize() is None
    assert dashboard.session.user is None


@pytest.mark.asyncio
async def test_initialize_reads_forced_reset_flag(dashboard, storage, settings):
    storage.set_item(settings.TOKEN_STORAGE_KEY, make_token(role="doctor"))
    storage.set_item(settings.RESET_PASSWORD_STORAGE_KEY, "true")
    assert dashboard.session.initialize().reset_initial_password is True


@pytest.mark.asyncio
async def test_login_sets_token_and_user(dashboard, api_state, storage, settings):
    token = api_state.add_account("doc@jamii.test", "s3cret-pass", role="doctor", user_id="7", name="Dr. Otieno")
    dashboard.session.initialize()

    user = await dashboard.session.login("doc@jamii.test", "s3cret-pass")

    assert user.role == Role.DOCTOR
    assert user.id == "7"
    assert dashboard.session.user == user
    assert dashboard.session.get_token() == token
    assert storage.get_item(settings.TOKEN_STORAGE_KEY) == token
    assert storage.get_item(settings.RESET_PASSWORD_STORAGE_KEY) is None


@pytest.mark.asyncio
async def test_login_role_matches_token_claim(dashboard, api_state):
    for index, role in enumerate(["admin", "doctor", "staff"]):
        api_state.add_account(f"{role}@jamii.test", "password1", role=role, user_id=str(index))
        user = await dashboard.session.login(f"{role}@jamii.test", "password1")
        assert user.role.value == role


@pytest.mark.asyncio
async def test_login_persists_forced_reset_flag(dashboard, api_state, storage, settings):
    api_state.add_account("new@jamii.test", "temp-pass", role="staff", reset_initial_password=True)
    user = await dashboard.session.login("new@jamii.test", "temp-pass")
    assert user.reset_initial_password is True
    assert storage.get_item(settings.RESET_PASSWORD_STORAGE_KEY) == "true"


@pytest.mark.asyncio
async def test_login_failure_surfaces_server_detail(dashboard):
    dashboard.session.initialize()
    with pytest.raises(AuthenticationError) as exc_info:
        await dashboard.session.login("bad@x.com", "wrong")
    assert str(exc_info.value) == "Invalid credentials"
    assert dashboard.session.user is None
    assert dashboard.session.token is None


@pytest.mark.asyncio
async def test_login_failure_keeps_existing_session(dashboard, api_state):
    api_state.add_account("admin@jamii.test", "password1", role="admin")
    user = await dashboard.session.login("admin@jamii.test", "password1")
    token = dashboard.session.token

    with pytest.raises(AuthenticationError):
        await dashboard.session.login("admin@jamii.test", "nope")

    assert dashboard.session.user == user
    assert dashboard.session.token == token


@pytest.mark.asyncio
async def test_login_failure_on_server_error(dashboard, api_state):
    api_state.failing_paths.add("/api/login/")
    with pytest.raises(AuthenticationError) as exc_info:
        await dashboard.session.login("a@x.com", "pw")
    assert str(exc_info.value) == "Server error"


@pytest.mark.asyncio
async def test_logout_is_idempotent(dashboard, api_state, storage, settings):
    api_state.add_account("admin@jamii.test", "password1", role="admin")
    await dashboard.session.login("admin@jamii.test", "password1")

    dashboard.session.logout()
    first = (dashboard.session.token, dashboard.session.user, storage.get_item(settings.TOKEN_STORAGE_KEY))
    dashboard.session.logout()
    second = (dashboard.session.token, dashboard.session.user, storage.get_item(settings.TOKEN_STORAGE_KEY))

    assert first == second == (None, None, None)


@pytest.mark.asyncio
async def test_listeners_fire_on_change_only(dashboard, storage, settings):
    seen = []
    dashboard.session.subscribe(seen.append)
    storage.set_item(settings.TOKEN_STORAGE_KEY, make_token(role="staff"))

    dashboard.session.initialize()
    dashboard.session.logout()
    dashboard.session.logout()

    assert [u.role if u else None for u in seen] == [Role.STAFF, None]


@pytest.mark.asyncio
async def test_unsubscribe(dashboard):
    seen = []
    unsubscribe = dashboard.session.subscribe(seen.append)
    unsubscribe()
    dashboard.session.initialize()
    assert seen == []


@pytest.mark.asyncio
async def test_refresh_user_merges_details(dashboard, api_state):
    api_state.add_account("doc@jamii.test", "password1", role="doctor", name="Dr. Token")
    api_state.accounts["doc@jamii.test"].specialty = "Cardiology"
    await dashboard.session.login("doc@jamii.test", "password1")

    user = await dashboard.session.refresh_user()

    assert user.specialty == "Cardiology"
    assert user.name == "Dr. Refreshed"
    assert user.role == Role.DOCTOR


@pytest.mark.asyncio
async def test_refresh_user_failure_keeps_user(dashboard, api_state):
    api_state.add_account("doc@jamii.test", "password1", role="doctor")
    user = await dashboard.session.login("doc@jamii.test", "password1")
    api_state.failing_paths.add("/api/users/me/")

    assert await dashboard.session.refresh_user() == user


@pytest.mark.asyncio
async def test_mark_password_changed_clears_flag(dashboard, storage, settings):
    storage.set_item(settings.TOKEN_STORAGE_KEY, make_token())
    storage.set_item(settings.RESET_PASSWORD_STORAGE_KEY, "true")
    dashboard.session.initialize()

    dashboard.session.mark_password_changed()

    assert dashboard.session.user.reset_initial_password is False
    assert storage.get_item(settings.RESET_PASSWORD_STORAGE_KEY) is None
