from datetime import timedelta

import pytest

from schemas.enums import ViewMode
from services.errors import AccessDenied, StoreError
from services.roster_aggregator import build_detail_view, load_roster, load_roster_entry, select_client
from tests.conftest import BASE_TIME


@pytest.mark.asyncio
async def test_roster_lists_own_clients_newest_first(store, seed):
    trainer = seed.trainer("t1")
    seed.trainer("t2")
    seed.client("c-old", trainer_id="t1", created_at=BASE_TIME)
    seed.client("c-new", trainer_id="t1", created_at=BASE_TIME + timedelta(days=2))
    seed.client("c-mid", trainer_id="t1", created_at=BASE_TIME + timedelta(days=1))
    seed.client("c-other", trainer_id="t2")

    roster = await load_roster(store, trainer)

    assert [entry.profile.id for entry in roster.entries] == ["c-new", "c-mid", "c-old"]


@pytest.mark.asyncio
async def test_roster_windows_are_bounded(store, seed):
    trainer = seed.trainer("t1")
    seed.client("c1", trainer_id="t1")
    for hour in range(12):
        seed.meal("c1", BASE_TIME + timedelta(hours=hour))
        seed.exercise("c1", 10, BASE_TIME + timedelta(hours=hour))
    seed.weights("c1", [70.0, 70.5, 71.0, 71.2, 71.9, 72.0, 73.1])
    for day in range(4):
        seed.diet_plan("c1", "t1", f"Meal {day}", BASE_TIME + timedelta(days=day))
        seed.training_plan("c1", "t1", f"Lift {day}", BASE_TIME + timedelta(days=day))

    roster = await load_roster(store, trainer)
    data = roster.entries[0].data

    assert len(data.meal_logs) == 10
    assert len(data.exercise_logs) == 10
    assert len(data.weight_logs) == 5
    assert len(data.diet_plans) == 4
    assert len(data.training_plans) == 4
    assert data.meal_logs[0].meal_time == BASE_TIME + timedelta(hours=11)
    assert data.latest_weight == 70.0
    assert data.total_calories_burned == 10 * 70


@pytest.mark.asyncio
async def test_active_and_inactive_counts(store, seed):
    trainer = seed.trainer("t1")
    seed.client("c1", trainer_id="t1", payment_status=True)
    seed.client("c2", trainer_id="t1", payment_status=False)
    seed.client("c3", trainer_id="t1", payment_status=True)

    roster = await load_roster(store, trainer)

    assert roster.total_clients == 3
    assert roster.active_clients == 2
    assert roster.inactive_clients == 1
    assert roster.active_clients + roster.inactive_clients == len(roster.entries)


@pytest.mark.asyncio
async def test_empty_roster(store, seed):
    roster = await load_roster(store, seed.trainer("t1"))

    assert roster.entries == []
    assert roster.active_clients == 0
    assert roster.inactive_clients == 0


@pytest.mark.asyncio
async def test_client_listing_failure_propagates(store, seed):
    trainer = seed.trainer("t1")
    store.fail("profiles", "query")

    with pytest.raises(StoreError):
        await load_roster(store, trainer)


@pytest.mark.asyncio
async def test_per_client_stream_failure_is_tolerated(store, seed):
    trainer = seed.trainer("t1")
    seed.client("c1", trainer_id="t1")
    seed.meal("c1", BASE_TIME)
    store.fail("exercise_logs", "query")

    roster = await load_roster(store, trainer)

    assert roster.entries[0].data.failed_collections == ["exercise_logs"]
    assert len(roster.entries[0].data.meal_logs) == 1


@pytest.mark.asyncio
async def test_select_client_modes_reuse_loaded_data(store, seed):
    trainer = seed.trainer("t1")
    seed.client("c1", trainer_id="t1")
    seed.diet_plan("c1", "t1", "Salad", BASE_TIME)
    seed.training_plan("c1", "t1", "Squat", BASE_TIME)
    roster = await load_roster(store, trainer)

    # Later writes must not show up: the detail view reads the loaded roster
    seed.diet_plan("c1", "t1", "Soup", BASE_TIME + timedelta(days=1))

    overview = select_client(roster, "c1")
    diet = select_client(roster, "c1", ViewMode.DIET)
    training = select_client(roster, "c1", ViewMode.TRAINING)

    assert overview.mode == ViewMode.OVERVIEW
    assert overview.overview.client_id == "c1"
    assert [d.meal_name for d in diet.diet_plans] == ["Salad"]
    assert diet.training_plans is None
    assert [t.exercise_name for t in training.training_plans] == ["Squat"]
    assert training.overview is None


@pytest.mark.asyncio
async def test_select_unknown_client(store, seed):
    roster = await load_roster(store, seed.trainer("t1"))

    with pytest.raises(AccessDenied):
        select_client(roster, "c-elsewhere", ViewMode.DIET)


@pytest.mark.asyncio
async def test_single_entry_load_ignores_other_clients(store, seed):
    seed.trainer("t1")
    clients = [seed.client(f"c{i}", trainer_id="t1") for i in range(4)]
    for day in range(12):
        seed.exercise("c2", 10, BASE_TIME + timedelta(days=day))
    store.calls.clear()

    entry = await load_roster_entry(store, clients[2])

    assert store.calls["query"] == 5
    assert len(entry.data.exercise_logs) == 10
    assert build_detail_view(entry).overview.client_id == "c2"
