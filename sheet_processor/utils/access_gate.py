# Single policy table deciding what an authenticated caller may do
from enum import Enum
from .exceptions import Forbidden
import logging

logger = logging.getLogger(__name__)

ROLE_USER = 'user'
ROLE_ADMIN = 'admin'


class Action(Enum):
    UPLOAD = 'upload'
    LIST_HISTORY = 'list-history'
    VIEW = 'view'
    DELETE = 'delete'
    PROJECT = 'project'
    DASHBOARD_VIEW = 'dashboard-view'


class Decision(Enum):
    ALLOWED = 'allowed'
    DENIED = 'denied'


class Caller:
    """An already-authenticated identity and its role."""
    def __init__(self, identity, role):
        self.identity = identity
        self.role = role

    def __repr__(self):
        return f"Caller(identity={self.identity!r}, role={self.role!r})"


# Actions each role may perform on resources owned by someone else
CROSS_OWNER_ACTIONS = {
    ROLE_USER: frozenset(),
    ROLE_ADMIN: frozenset({Action.DASHBOARD_VIEW}),
}


def authorize(caller, action, resource_owner=None):
    """
    Decides whether a caller may perform an action.

    Args:
        caller (Caller): The authenticated caller.
        action (Action): The requested action.
        resource_owner: Identity of the resource's owner, or None when the action targets no existing resource.
    """
    if caller is None or caller.role not in CROSS_OWNER_ACTIONS:
        return Decision.DENIED
    if resource_owner is None or resource_owner == caller.identity:
        return Decision.ALLOWED
    if action in CROSS_OWNER_ACTIONS[caller.role]:
        return Decision.ALLOWED
    return Decision.DENIED


def require(caller, action, resource_owner=None):
    """Raises Forbidden unless the caller may perform the action."""
    if authorize(caller, action, resource_owner) != Decision.ALLOWED:
        logger.warning("Denied %s for %r", action.value, caller)
        raise Forbidden("Access denied")
