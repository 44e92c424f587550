"""MongoDB implementation of AccountRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from adapter.mongodb import ACCOUNTS_COLLECTION_NAME
from adapter.mongodb.query import render_filter, render_sort, to_bson_value
from domain.model.account import Account, Gender
from domain.model.errors import DuplicateError, NotFoundError
from domain.model.search import AccountPage, SearchQuery

logger = getLogger(__name__)


def _utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo:
        return value
    return value.replace(tzinfo=timezone.utc)


class MongoAccountRepository:
    """Account store backed by a MongoDB collection.

    Driver errors other than duplicate keys propagate to the caller.
    """

    def __init__(self, db: Database):
        self.collection = db[ACCOUNTS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for accounts collection."""
        from adapter.mongodb.indexes import ACCOUNT_INDEXES, apply_indexes

        try:
            return apply_indexes(self.collection, ACCOUNT_INDEXES)
        except Exception as e:
            logger.error("Failed to create accounts indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Account:
        """Convert MongoDB document to Account domain model."""
        dob = doc.get('date_of_birth')
        gender = doc.get('gender')
        return Account(
            id=doc['_id'],
            email=doc['email'],
            first_name=doc['first_name'],
            last_name=doc['last_name'],
            created_at=_utc(doc['created_at']),
            updated_at=_utc(doc['updated_at']),
            password_hash=doc.get('password_hash'),
            date_of_birth=dob.date() if dob else None,
            gender=Gender(gender) if gender else None,
            city=doc.get('city'),
            country=doc.get('country'),
            bio=doc.get('bio'),
            interests=list(doc.get('interests') or []),
            skills=list(doc.get('skills') or []),
            last_login_at=_utc(doc.get('last_login_at')),
            is_active=doc.get('is_active', True),
        )

    def _profile_doc(self, account: Account) -> dict:
        return {
            'first_name': account.first_name,
            'last_name': account.last_name,
            'date_of_birth': to_bson_value(account.date_of_birth) if account.date_of_birth else None,
            'gender': account.gender.value if account.gender else None,
            'city': account.city,
            'country': account.country,
            'bio': account.bio,
            'interests': list(account.interests),
            'skills': list(account.skills),
            'is_active': account.is_active,
        }

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, first_name: str, last_name: str) -> Account:
        """Insert a new account. The unique email index turns races into DuplicateError."""
        now = datetime.now(timezone.utc)
        doc = {
            '_id': uuid.uuid4().hex,
            'email': email,
            'password_hash': password_hash,
            'first_name': first_name,
            'last_name': last_name,
            'date_of_birth': None,
            'gender': None,
            'city': None,
            'country': None,
            'bio': None,
            'interests': [],
            'skills': [],
            'last_login_at': None,
            'is_active': True,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("Account creation failed: email already exists")
            raise DuplicateError("User with this email already exists")

        logger.debug("Account inserted", extra={"userId": doc['_id']})
        return self._to_domain(doc)

    def save(self, account: Account) -> Account:
        """Write profile fields of an existing account; bumps updated_at.

        Raises NotFoundError when no document has the account's ID.
        """
        now = datetime.now(timezone.utc)
        doc = self._profile_doc(account)
        doc['updated_at'] = now

        result = self.collection.update_one({'_id': account.id}, {'$set': doc})
        if result.matched_count == 0:
            logger.warning("Account not found for update", extra={"userId": account.id})
            raise NotFoundError("User not found")

        account.updated_at = now
        return account

    def update_last_login(self, account_id: str, when: datetime) -> bool:
        result = self.collection.update_one(
            {'_id': account_id},
            {'$set': {'last_login_at': when, 'updated_at': when}},
        )
        return result.matched_count > 0

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> Account | None:
        doc = self.collection.find_one({'email': email})
        return self._to_domain(doc) if doc else None

    def get_by_id(self, account_id: str) -> Account | None:
        doc = self.collection.find_one({'_id': account_id})
        return self._to_domain(doc) if doc else None

    def search(self, query: SearchQuery) -> AccountPage:
        """Count all matches, then fetch the sorted page slice."""
        mongo_filter = render_filter(query.predicates)

        total = self.collection.count_documents(mongo_filter)
        docs = (
            self.collection.find(mongo_filter)
            .sort(render_sort(query))
            .skip(query.skip)
            .limit(query.limit)
        )

        accounts = [self._to_domain(doc) for doc in docs]
        logger.debug("Searched accounts", extra={"count": len(accounts), "total": total})
        return AccountPage(accounts=accounts, total=total)
