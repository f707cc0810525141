# database/store.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from bson import ObjectId
from bson.errors import BSONError
from fastapi.encoders import jsonable_encoder
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FailureKind(str, Enum):
    INVALID_ID = "invalid_id"
    INVALID_DOCUMENT = "invalid_document"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    reason: str = ""


Result = Union[Ok[T], Failure]


@dataclass(frozen=True)
class UpdateCounts:
    matched: int
    modified: int


def to_json_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Make a stored document safe for a JSON response (ObjectId -> str)."""
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})


def parse_object_id(raw: str) -> Optional[ObjectId]:
    if not ObjectId.is_valid(raw):
        return None
    return ObjectId(raw)


class DocumentStore:
    """
    Thin wrapper over a motor database.

    Every operation issues exactly one call against one collection and
    returns Ok or Failure instead of raising.
    """

    def __init__(self, database, client=None):
        # database is None when the client could not be built at startup.
        self.database = database
        self.client = client

    def _collection(self, name: str):
        if self.database is None:
            raise ConnectionFailure("no database connection")
        return self.database[name]

    async def ping(self) -> bool:
        try:
            if self.database is None:
                raise ConnectionFailure("no database connection")
            await self.database.command("ping")
        except PyMongoError as exc:
            logger.error("MongoDB connection error: %s", exc)
            return False
        logger.info("MongoDB connected (database=%s)", getattr(self.database, "name", "?"))
        return True

    def close(self) -> None:
        if self.client is not None:
            self.client.close()

    async def find_all(self, collection: str) -> Result[List[Dict[str, Any]]]:
        try:
            docs = await self._collection(collection).find().to_list(length=None)
        except PyMongoError as exc:
            return _unavailable(collection, "find", exc)
        return Ok([to_json_document(doc) for doc in docs])

    async def find_one(self, collection: str, query: Dict[str, Any]) -> Result[Optional[Dict[str, Any]]]:
        try:
            doc = await self._collection(collection).find_one(query)
        except PyMongoError as exc:
            return _unavailable(collection, "find_one", exc)
        return Ok(to_json_document(doc) if doc is not None else None)

    async def insert_one(self, collection: str, document: Any) -> Result[str]:
        if not isinstance(document, dict):
            return Failure(FailureKind.INVALID_DOCUMENT, "document must be an object")
        try:
            result = await self._collection(collection).insert_one(document)
        except (BSONError, OverflowError) as exc:
            logger.debug("insert into %s rejected: %s", collection, exc)
            return Failure(FailureKind.INVALID_DOCUMENT, str(exc))
        except PyMongoError as exc:
            return _unavailable(collection, "insert_one", exc)
        return Ok(str(result.inserted_id))

    async def set_field(self, collection: str, doc_id: str, field: str, value: Any) -> Result[UpdateCounts]:
        object_id = parse_object_id(doc_id)
        if object_id is None:
            return Failure(FailureKind.INVALID_ID, doc_id)
        try:
            result = await self._collection(collection).update_one(
                {"_id": object_id},
                {"$set": {field: value}}
            )
        except (BSONError, OverflowError) as exc:
            logger.debug("update on %s rejected: %s", collection, exc)
            return Failure(FailureKind.INVALID_DOCUMENT, str(exc))
        except PyMongoError as exc:
            return _unavailable(collection, "update_one", exc)
        return Ok(UpdateCounts(matched=result.matched_count, modified=result.modified_count))

    async def delete_one(self, collection: str, doc_id: str) -> Result[int]:
        object_id = parse_object_id(doc_id)
        if object_id is None:
            return Failure(FailureKind.INVALID_ID, doc_id)
        try:
            result = await self._collection(collection).delete_one({"_id": object_id})
        except PyMongoError as exc:
            return _unavailable(collection, "delete_one", exc)
        return Ok(result.deleted_count)


def _unavailable(collection: str, operation: str, exc: Exception) -> Failure:
    logger.debug("%s on %s failed: %s", operation, collection, exc)
    return Failure(FailureKind.UNAVAILABLE, str(exc))
