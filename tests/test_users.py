"""Profile, theme and favorite-location tests (both store backends)."""

import pytest

from src.domain.enums import LocationType, Theme
from src.domain.exceptions import ConflictError, NotFoundError


@pytest.mark.asyncio
async def test_register_defaults(users):
    user = await users.register("newbie", "opaque")
    assert user.id == 1
    assert user.theme is Theme.DARK
    assert user.display_name == "newbie"


@pytest.mark.asyncio
async def test_duplicate_username_conflicts(users, driver):
    with pytest.raises(ConflictError):
        await users.register("driver_a", "other")


@pytest.mark.asyncio
async def test_update_profile_ignores_unknown_fields(users, driver):
    updated = await users.update_profile(
        driver.id, phone="+91 90000 00000", username="hijack", password="x"
    )
    assert updated.phone == "+91 90000 00000"
    assert updated.username == "driver_a"
    assert updated.password == "secret"


@pytest.mark.asyncio
async def test_update_theme(users, driver):
    updated = await users.update_theme(driver.id, Theme.LIGHT)
    assert updated.theme is Theme.LIGHT
    assert (await users.get_user(driver.id)).theme is Theme.LIGHT


@pytest.mark.asyncio
async def test_update_missing_user(users):
    with pytest.raises(NotFoundError):
        await users.update_theme(99, Theme.LIGHT)


@pytest.mark.asyncio
async def test_favorite_locations_are_per_user(users, driver, rider):
    await users.add_favorite_location(driver.id, "Home", "Kothrud", LocationType.HOME)
    await users.add_favorite_location(driver.id, "Work", "Baner", LocationType.WORK)
    await users.add_favorite_location(rider.id, "College", "COEP", LocationType.COLLEGE)

    mine = await users.list_favorite_locations(driver.id)
    assert [(loc.name, loc.type) for loc in mine] == [
        ("Home", LocationType.HOME),
        ("Work", LocationType.WORK),
    ]
    assert len(await users.list_favorite_locations(rider.id)) == 1
