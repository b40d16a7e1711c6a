import copy
import uuid
from collections import Counter, defaultdict
from datetime import datetime, timedelta

import pytest

from config.settings import Settings
from models.database import (
    PROFILES,
    DIET_PLANS,
    MEAL_LOGS,
    EXERCISE_LOGS,
    WEIGHT_LOGS,
    TRAINING_PLANS,
)
from schemas.profile import ClientProfile, TrainerProfile
from services.auth_service import AuthService
from services.errors import StoreError
from services.mutations import MutationGateway

BASE_TIME = datetime(2026, 1, 1, 8, 0, 0)


class InMemoryStore:
    """Dict-backed store with the same interface as ``DocumentStore``.

    ``fail(collection, op)`` makes that operation raise ``StoreError``;
    ``calls`` counts operations by name.
    """

    def __init__(self):
        self.collections = defaultdict(dict)
        self.failing = set()
        self.calls = Counter()

    def fail(self, collection, *ops):
        for op in ops or ("get", "set", "update", "insert", "query"):
            self.failing.add((collection, op))

    def seed(self, collection, doc_id, data):
        document = {key: value for key, value in data.items() if key != "id"}
        document.setdefault("created_at", BASE_TIME)
        self.collections[collection][doc_id] = document
        return dict(copy.deepcopy(document), id=doc_id)

    def _check(self, collection, op):
        self.calls[op] += 1
        if (collection, op) in self.failing:
            raise StoreError(f"{op} on {collection} failed", collection)

    def _out(self, doc_id, document):
        return dict(copy.deepcopy(document), id=doc_id)

    async def get(self, collection, doc_id):
        self._check(collection, "get")
        document = self.collections[collection].get(doc_id)
        return self._out(doc_id, document) if document is not None else None

    async def set(self, collection, doc_id, data):
        self._check(collection, "set")
        document = {key: value for key, value in data.items() if key != "id"}
        document.setdefault("created_at", datetime.utcnow())
        self.collections[collection][doc_id] = copy.deepcopy(document)
        return self._out(doc_id, document)

    async def update(self, collection, doc_id, changes):
        self._check(collection, "update")
        if doc_id not in self.collections[collection]:
            return False
        self.collections[collection][doc_id].update(copy.deepcopy(changes))
        return True

    async def insert(self, collection, data):
        self._check(collection, "insert")
        doc_id = str(uuid.uuid4())
        document = {key: value for key, value in data.items() if key != "id"}
        document.setdefault("created_at", datetime.utcnow())
        self.collections[collection][doc_id] = copy.deepcopy(document)
        return self._out(doc_id, document)

    async def query(self, collection, field, value, order_by=None, descending=True, limit=None):
        self._check(collection, "query")
        documents = [
            self._out(doc_id, document)
            for doc_id, document in self.collections[collection].items()
            if document.get(field) == value
        ]
        if order_by:
            documents.sort(key=lambda document: document[order_by], reverse=descending)
        if limit:
            documents = documents[:limit]
        return documents


class Seeder:
    """Writes fixture records straight into an ``InMemoryStore``."""

    def __init__(self, store):
        self.store = store

    def trainer(self, trainer_id="trainer-1", full_name="Laura Trainer", created_at=BASE_TIME):
        document = self.store.seed(PROFILES, trainer_id, {
            "role": "trainer",
            "full_name": full_name,
            "payment_status": True,
            "trainer_id": None,
            "created_at": created_at,
        })
        return TrainerProfile(**document)

    def client(self, client_id="client-1", trainer_id="trainer-1", full_name="Diego Client",
               payment_status=True, created_at=BASE_TIME):
        document = self.store.seed(PROFILES, client_id, {
            "role": "client",
            "full_name": full_name,
            "payment_status": payment_status,
            "trainer_id": trainer_id,
            "created_at": created_at,
        })
        return ClientProfile(**document)

    def weights(self, client_id, weights_newest_first):
        """Seed weight logs one day apart, newest first."""
        count = len(weights_newest_first)
        for index, weight in enumerate(weights_newest_first):
            measured_at = BASE_TIME + timedelta(days=count - index)
            self.store.seed(WEIGHT_LOGS, f"{client_id}-w{index}", {
                "client_id": client_id,
                "weight_kg": weight,
                "measured_at": measured_at,
            })

    def exercise(self, client_id, duration_minutes, exercise_time, name="Running"):
        doc_id = f"{client_id}-e{len(self.store.collections[EXERCISE_LOGS])}"
        self.store.seed(EXERCISE_LOGS, doc_id, {
            "client_id": client_id,
            "exercise_name": name,
            "duration_minutes": duration_minutes,
            "exercise_time": exercise_time,
            "calories_burned": duration_minutes * 7,
        })

    def meal(self, client_id, meal_time, description="Oats with fruit"):
        doc_id = f"{client_id}-m{len(self.store.collections[MEAL_LOGS])}"
        self.store.seed(MEAL_LOGS, doc_id, {
            "client_id": client_id,
            "meal_time": meal_time,
            "meal_description": description,
            "diet_plan_id": None,
        })

    def diet_plan(self, client_id, trainer_id, meal_name, created_at):
        doc_id = f"{client_id}-d{len(self.store.collections[DIET_PLANS])}"
        self.store.seed(DIET_PLANS, doc_id, {
            "client_id": client_id,
            "created_by": trainer_id,
            "meal_name": meal_name,
            "meal_description": f"{meal_name} as planned",
            "recommended_time": None,
            "created_at": created_at,
        })

    def training_plan(self, client_id, trainer_id, exercise_name, created_at):
        doc_id = f"{client_id}-t{len(self.store.collections[TRAINING_PLANS])}"
        self.store.seed(TRAINING_PLANS, doc_id, {
            "client_id": client_id,
            "created_by": trainer_id,
            "exercise_name": exercise_name,
            "sets": 3,
            "reps": 12,
            "notes": None,
            "created_at": created_at,
        })


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def seed(store):
    return Seeder(store)


@pytest.fixture
def test_settings():
    return Settings(jwt_secret_key="test-secret", access_token_expire_minutes=5)


@pytest.fixture
def auth(store, test_settings):
    return AuthService(store, test_settings)


@pytest.fixture
def gateway(store, auth):
    return MutationGateway(store, auth)
