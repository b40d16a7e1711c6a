"""Narrow document-store interface over MongoDB.

Every read and write the coaching services perform goes through
:class:`DocumentStore`: keyed get/set/update for profiles and equality-filtered,
ordered, optionally limited queries for the log and plan collections. Driver
failures are re-raised as :class:`services.errors.StoreError`.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from services.errors import StoreError
from utils.logger import setup_logger

logger = setup_logger(__name__)


def _from_mongo(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Expose Mongo's ``_id`` as ``id``."""
    if document is None:
        return None
    document = dict(document)
    if "_id" in document:
        document["id"] = str(document.pop("_id"))
    return document


def _to_mongo(doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    document = {key: value for key, value in data.items() if key != "id"}
    document["_id"] = doc_id
    return document


class DocumentStore:
    """Async document store backed by a Motor database."""

    def __init__(self, database):
        self._db = database

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Fetch one document by id, or ``None`` when it does not exist."""
        try:
            document = await self._db[collection].find_one({"_id": doc_id})
        except PyMongoError as e:
            raise StoreError(f"Error reading {collection}/{doc_id}: {e}", collection) from e
        return _from_mongo(document)

    async def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create or replace the document stored under ``doc_id``."""
        document = _to_mongo(doc_id, data)
        document.setdefault("created_at", datetime.utcnow())
        try:
            await self._db[collection].replace_one({"_id": doc_id}, document, upsert=True)
        except PyMongoError as e:
            raise StoreError(f"Error writing {collection}/{doc_id}: {e}", collection) from e
        return _from_mongo(document)

    async def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> bool:
        """Apply ``changes`` to an existing document. Returns whether it matched."""
        try:
            result = await self._db[collection].update_one({"_id": doc_id}, {"$set": changes})
        except PyMongoError as e:
            raise StoreError(f"Error updating {collection}/{doc_id}: {e}", collection) from e
        return result.matched_count > 0

    async def insert(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new document under a generated id and return it."""
        document = _to_mongo(str(uuid.uuid4()), data)
        document.setdefault("created_at", datetime.utcnow())
        try:
            await self._db[collection].insert_one(document)
        except PyMongoError as e:
            raise StoreError(f"Error inserting into {collection}: {e}", collection) from e
        return _from_mongo(document)

    async def query(
        self,
        collection: str,
        field: str,
        value: Any,
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Return documents where ``field == value``, optionally ordered and limited."""
        try:
            cursor = self._db[collection].find({field: value})
            if order_by:
                cursor = cursor.sort(order_by, DESCENDING if descending else ASCENDING)
            if limit:
                cursor = cursor.limit(limit)
            documents = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise StoreError(f"Error querying {collection}: {e}", collection) from e
        return [_from_mongo(document) for document in documents]
