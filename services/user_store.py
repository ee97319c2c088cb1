# services/user_store.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from models.account import Account, ROLE_ADMIN
from services.db_service import get_db
from services.errors import Conflict, StaleAccount

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserStore:
    """
    Account persistence over a MongoDB collection.

    Writes are whole-document replaces guarded by a ``version`` counter:
    ``save`` only succeeds if nobody else saved the account since it was read.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def ensure_indexes(self) -> None:
        self.collection.create_index(
            [("email", ASCENDING), ("role", ASCENDING)],
            unique=True,
            name="uniq_email_role",
        )
        self.collection.create_index(
            [("schoolId", ASCENDING)],
            unique=True,
            partialFilterExpression={"role": ROLE_ADMIN},
            name="uniq_admin_per_school",
        )
        self.collection.create_index(
            [("role", ASCENDING), ("schoolId", ASCENDING)],
            name="role_school",
        )

    def find_by_id(self, account_id: str) -> Optional[Account]:
        if not ObjectId.is_valid(account_id):
            return None
        doc = self.collection.find_one({"_id": ObjectId(account_id)})
        return Account.from_document(doc) if doc else None

    def find_by_email_and_role(self, email: str, role: str) -> Optional[Account]:
        doc = self.collection.find_one({"email": email, "role": role})
        return Account.from_document(doc) if doc else None

    def find_by_role_and_school(self, role: str, school_id: str) -> List[Account]:
        cursor = self.collection.find({"role": role, "schoolId": school_id}).sort("_id", ASCENDING)
        return [Account.from_document(doc) for doc in cursor]

    def exists_by_email(self, email: str) -> bool:
        return self.collection.count_documents({"email": email}, limit=1) > 0

    def exists_by_email_and_role(self, email: str, role: str) -> bool:
        return self.collection.count_documents({"email": email, "role": role}, limit=1) > 0

    def _duplicate_conflict(self, account: Account, exc: DuplicateKeyError) -> Conflict:
        key_pattern = (exc.details or {}).get("keyPattern") or {}
        if key_pattern:
            email_clash = "email" in key_pattern
        else:
            # No key details (older servers, in-memory clients): ask the collection
            email_clash = self.exists_by_email_and_role(account.email, account.role)
        if not email_clash and account.role == ROLE_ADMIN:
            logger.info("Rejected second admin for school %s", account.school_id)
            return Conflict("An admin already exists for this school")
        return Conflict("Email already registered")

    def save(self, account: Account) -> Account:
        """Insert a new account or replace an existing one; returns the stored state."""
        now = _utcnow()
        if account.id is None:
            new = account.model_copy(update={"version": 1, "created_at": now, "updated_at": now})
            doc = new.to_document()
            try:
                result = self.collection.insert_one(doc)
            except DuplicateKeyError as exc:
                raise self._duplicate_conflict(new, exc) from exc
            return new.model_copy(update={"id": str(result.inserted_id)})

        expected = account.version
        saved = account.model_copy(update={"version": expected + 1, "updated_at": now})
        replacement = saved.to_document()
        replacement.pop("_id")
        result = self.collection.replace_one(
            {"_id": ObjectId(account.id), "version": expected},
            replacement,
        )
        if result.matched_count == 0:
            logger.info("Stale save for account %s at version %s", account.id, expected)
            raise StaleAccount()
        return saved


def get_user_store() -> UserStore:
    return UserStore(get_db()[USERS_COLLECTION])
