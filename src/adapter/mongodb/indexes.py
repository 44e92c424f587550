"""MongoDB index definitions and management.

Index specs are declared per collection; `apply_indexes` creates them,
replacing an existing index that clashes by name or by key spec.
"""

from dataclasses import dataclass, field
from logging import getLogger

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

logger = getLogger(__name__)


@dataclass(frozen=True)
class IndexSpec:
    name: str
    keys: list[tuple[str, int]]
    options: dict = field(default_factory=dict)


ACCOUNT_INDEXES = [
    IndexSpec('idx_accounts_email', [('email', 1)], {'unique': True}),
    IndexSpec('idx_accounts_active_created_at', [('is_active', 1), ('created_at', -1)]),
    IndexSpec('idx_accounts_interests', [('interests', 1)]),
    IndexSpec('idx_accounts_skills', [('skills', 1)]),
    IndexSpec('idx_accounts_last_login_at', [('last_login_at', -1)], {'sparse': True}),
]

# Index flags compared when deciding whether an existing index must be rebuilt
INDEX_FLAGS = ('unique', 'sparse')


def apply_indexes(collection: Collection, specs: list[IndexSpec]) -> bool:
    """Create every index in `specs`. Return False if any could not be applied."""
    ok = True
    for spec in specs:
        try:
            collection.create_index(spec.keys, name=spec.name, **spec.options)
        except PyMongoError as e:
            if "already exists" not in str(e) and "Conflict" not in str(e):
                raise
            ok = _replace_conflicting(collection, spec) and ok
    return ok


def _options_match(info: dict, options: dict) -> bool:
    return all(bool(info.get(opt)) == bool(options.get(opt)) for opt in INDEX_FLAGS)


def _replace_conflicting(collection: Collection, spec: IndexSpec) -> bool:
    """Drop the index that clashes with `spec` and recreate it.

    A clash is an index that shares only the name or only the key spec, or one
    that shares both but differs in its flags (e.g. a non-unique email index).
    """
    wanted = dict(spec.keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        same_name = idx_name == spec.name
        same_keys = dict(idx_info.get('key', [])) == wanted
        stale = same_name and same_keys and not _options_match(idx_info, spec.options)
        if same_name != same_keys or stale:
            logger.warning("Dropping conflicting index", extra={"index": idx_name, "replacement": spec.name})
            collection.drop_index(idx_name)
            collection.create_index(spec.keys, name=spec.name, **spec.options)
            return True

    logger.error("Failed to resolve index conflict", extra={"index": spec.name})
    return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.account_repository import MongoAccountRepository

    return MongoAccountRepository(db).ensure_indexes()
