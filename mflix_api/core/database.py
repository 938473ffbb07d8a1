from dataclasses import dataclass
from pymongo import MongoClient
from pymongo.database import Database
from bson.errors import BSONError
from pymongo.errors import PyMongoError
from fastapi import Request
from mflix_api.core.config import Settings
from mflix_api.core.errors import StoreError
from typing import Any, Dict, List, Optional
import logging
import threading

logger = logging.getLogger(__name__)

# Driver failures, plus client-side BSON encoding failures (e.g. ints wider than 8 bytes)
STORE_ERRORS = (PyMongoError, BSONError, OverflowError)

@dataclass
class UpdateOutcome:
    matched_count: int
    modified_count: int

@dataclass
class DeleteOutcome:
    deleted_count: int

class MongoDocumentStore:
    """
    Thin adapter over a MongoDB database exposing the five document primitives
    used by the resource handlers.

    The MongoClient is created on first use and then shared by every call.
    """

    def __init__(self, uri: str, db_name: str):
        self.uri = uri
        self.db_name = db_name
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoDocumentStore":
        return cls(uri=settings.MONGODB_URI, db_name=settings.MONGODB_DB_NAME)

    def get_db(self) -> Database:
        """
        Returns the memoized database handle, connecting on the first call.
        Concurrent first callers wait on the lock and reuse the same client.
        """
        if self._db is None:
            with self._lock:
                if self._db is None:
                    try:
                        client = MongoClient(self.uri)
                        self._db = client[self.db_name]
                        self._client = client
                        logger.info(f"Created MongoDB client for database '{self.db_name}'")
                    except STORE_ERRORS as e:
                        logger.error(f"Failed to create MongoDB client: {e}")
                        raise StoreError(details=str(e))
        return self._db

    def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return self.get_db()[collection].find_one(query)
        except STORE_ERRORS as e:
            raise StoreError(details=str(e))

    def find_many(self, collection: str, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        try:
            return list(self.get_db()[collection].find(query or {}))
        except STORE_ERRORS as e:
            raise StoreError(details=str(e))

    def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        created = dict(document)
        try:
            result = self.get_db()[collection].insert_one(created)
        except STORE_ERRORS as e:
            raise StoreError(details=str(e))
        created["_id"] = result.inserted_id
        return created

    def update_one(self, collection: str, query: Dict[str, Any], fields: Dict[str, Any]) -> UpdateOutcome:
        if "_id" in fields:
            raise ValueError("_id cannot be part of an update payload")
        try:
            result = self.get_db()[collection].update_one(query, {"$set": fields})
        except STORE_ERRORS as e:
            raise StoreError(details=str(e))
        return UpdateOutcome(matched_count=result.matched_count, modified_count=result.modified_count)

    def delete_one(self, collection: str, query: Dict[str, Any]) -> DeleteOutcome:
        try:
            result = self.get_db()[collection].delete_one(query)
        except STORE_ERRORS as e:
            raise StoreError(details=str(e))
        return DeleteOutcome(deleted_count=result.deleted_count)

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                logger.info("Closed MongoDB client")
            self._client = None
            self._db = None

def get_store(request: Request) -> MongoDocumentStore:
    """
    Returns the document store owned by the running application.
    This function is used for dependency injection in FastAPI.
    """
    return request.app.state.store
