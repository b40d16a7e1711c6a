from datetime import datetime

import pytest

from schemas.enums import Role
from schemas.profile import ClientProfile, TrainerProfile
from services.errors import ProfileNotFound, StoreError, ValidationError
from services.roster_aggregator import load_roster
from tests.conftest import BASE_TIME


@pytest.mark.asyncio
async def test_log_exercise_stores_calories(gateway, store):
    result = await gateway.log_exercise("c1", "Cycling", BASE_TIME, 45)

    assert result.record.calories_burned == 315
    assert result.invalidation.client_id == "c1"
    stored = store.collections["exercise_logs"][result.record.id]
    assert stored["calories_burned"] == 315
    assert stored["notes"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("duration", [0, -5])
async def test_log_exercise_rejects_non_positive_duration(gateway, store, duration):
    with pytest.raises(ValidationError):
        await gateway.log_exercise("c1", "Cycling", BASE_TIME, duration)
    assert store.collections["exercise_logs"] == {}


@pytest.mark.asyncio
async def test_log_meal_defaults_optional_fields(gateway, store):
    result = await gateway.log_meal("c1", BASE_TIME, "Eggs and toast")

    assert result.record.diet_plan_id is None
    assert store.collections["meal_logs"][result.record.id]["meal_description"] == "Eggs and toast"


@pytest.mark.asyncio
async def test_log_weight_validates(gateway):
    result = await gateway.log_weight("c1", 82.3, BASE_TIME)
    assert result.record.weight_kg == 82.3

    with pytest.raises(ValidationError):
        await gateway.log_weight("c1", 0, BASE_TIME)
    with pytest.raises(ValidationError):
        await gateway.log_weight("c1", 80.0, "not a date")


@pytest.mark.asyncio
async def test_plan_entries_carry_author(gateway):
    diet = await gateway.add_diet_plan_entry("c1", "t1", "Porridge", "Oats, milk, banana", "07:30")
    training = await gateway.add_training_plan_entry("c1", "t1", "Bench press", 4, 8)

    assert diet.record.created_by == "t1"
    assert diet.record.recommended_time == "07:30"
    assert training.record.sets == 4
    assert training.record.notes is None
    assert training.invalidation.trainer_id == "t1"

    with pytest.raises(ValidationError):
        await gateway.add_training_plan_entry("c1", "t1", "Bench press", 0, 8)


@pytest.mark.asyncio
async def test_write_failure_is_surfaced(gateway, store):
    store.fail("meal_logs", "insert")

    with pytest.raises(StoreError):
        await gateway.log_meal("c1", BASE_TIME, "Soup")


@pytest.mark.asyncio
async def test_toggle_payment_flips_only_that_client(gateway, store, seed):
    seed.trainer("t1")
    seed.client("c1", trainer_id="t1", payment_status=True)
    seed.client("c2", trainer_id="t1", payment_status=True)
    seed.client("c3", trainer_id="t1", payment_status=False)

    result = await gateway.toggle_payment_status("c1")

    profiles = store.collections["profiles"]
    assert result.record.payment_status is False
    assert profiles["c1"]["payment_status"] is False
    assert profiles["c2"]["payment_status"] is True
    assert profiles["c3"]["payment_status"] is False
    assert result.invalidation.trainer_id == "t1"


@pytest.mark.asyncio
async def test_set_payment_status_with_due_date(gateway, store, seed):
    seed.client("c1", trainer_id="t1", payment_status=False)
    due = datetime(2026, 2, 1)

    result = await gateway.set_payment_status("c1", True, due_date=due)

    assert result.record.payment_status is True
    assert result.record.payment_due_date == due


@pytest.mark.asyncio
async def test_set_payment_status_unknown_client(gateway):
    with pytest.raises(ProfileNotFound):
        await gateway.set_payment_status("ghost", True)


@pytest.mark.asyncio
async def test_create_client_account(gateway, store, seed):
    trainer = seed.trainer("t1")

    result = await gateway.create_client_account("t1", "new@client.io", "secret123", "New Client")

    client = result.record
    assert isinstance(client, ClientProfile)
    assert client.trainer_id == "t1"
    assert client.payment_status is True
    roster = await load_roster(store, trainer)
    assert [entry.profile.id for entry in roster.entries] == [client.id]


@pytest.mark.asyncio
async def test_create_client_account_requires_existing_trainer(gateway, store):
    with pytest.raises(ValidationError):
        await gateway.create_client_account("nobody", "new@client.io", "secret123", "New Client")
    assert store.collections["auth_identities"] == {}


@pytest.mark.asyncio
async def test_create_client_account_profile_failure_leaves_orphan(gateway, store, seed):
    trainer = seed.trainer("t1")
    store.fail("profiles", "set")

    with pytest.raises(StoreError):
        await gateway.create_client_account("t1", "orphan@client.io", "secret123", "Orphan")

    identities = list(store.collections["auth_identities"].values())
    assert [identity["email"] for identity in identities] == ["orphan@client.io"]
    roster = await load_roster(store, trainer)
    assert roster.entries == []


@pytest.mark.asyncio
async def test_register_trainer_starts_active(gateway, store):
    result = await gateway.register("coach@gym.io", "secret123", "Coach", Role.TRAINER)

    assert isinstance(result.record, TrainerProfile)
    assert store.collections["profiles"][result.record.id]["payment_status"] is True


@pytest.mark.asyncio
async def test_register_client_starts_suspended(gateway, seed):
    seed.trainer("t1")

    result = await gateway.register("me@home.io", "secret123", "Me", "client", trainer_id="t1")

    assert isinstance(result.record, ClientProfile)
    assert result.record.payment_status is False


@pytest.mark.asyncio
async def test_register_client_needs_trainer(gateway, seed):
    seed.client("c1", trainer_id="t1")

    with pytest.raises(ValidationError):
        await gateway.register("me@home.io", "secret123", "Me", Role.CLIENT)
    with pytest.raises(ValidationError):
        await gateway.register("me@home.io", "secret123", "Me", Role.CLIENT, trainer_id="c1")
    with pytest.raises(ValidationError):
        await gateway.register("me@home.io", "secret123", "Me", "admin")


@pytest.mark.asyncio
async def test_set_payment_status_leaves_trainer_untouched(gateway, store, seed):
    seed.trainer("t1")

    with pytest.raises(ValidationError):
        await gateway.set_payment_status("t1", False)

    assert store.collections["profiles"]["t1"]["payment_status"] is True


@pytest.mark.asyncio
async def test_log_meal_against_own_diet_plan(gateway, store, seed):
    seed.diet_plan("c1", "t1", "Porridge", BASE_TIME)
    seed.diet_plan("c2", "t1", "Salad", BASE_TIME)

    result = await gateway.log_meal("c1", BASE_TIME, "Porridge as planned", diet_plan_id="c1-d0")
    assert result.record.diet_plan_id == "c1-d0"

    with pytest.raises(ValidationError):
        await gateway.log_meal("c1", BASE_TIME, "Someone else's salad", diet_plan_id="c2-d1")
    with pytest.raises(ValidationError):
        await gateway.log_meal("c1", BASE_TIME, "Ghost plan", diet_plan_id="missing")
    assert len(store.collections["meal_logs"]) == 1
