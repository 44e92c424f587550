"""Account lifecycle events published to the event bus."""

from datetime import datetime, timezone

from domain.model.account import Account

USER_REGISTERED = 'user.registered'
USER_LOGGED_IN = 'user.logged_in'
USER_PROFILE_UPDATED = 'user.profile_updated'


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with a trailing Z."""
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def identity_payload(account: Account, **extra) -> dict:
    """Event data carrying the account's identity fields."""
    payload = {
        'userId': account.id,
        'email': account.email,
        'firstName': account.first_name,
        'lastName': account.last_name,
    }
    payload.update(extra)
    payload['timestamp'] = utc_timestamp()
    return payload
