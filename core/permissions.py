from __future__ import annotations

# Mirrors the server's built-in roles. Only used to hide controls; the API
# still enforces access on every call.
ROLE_PERMISSIONS: dict[str, dict[str, set[str]]] = {
    "admin": {
        "skus": {"read", "create", "update", "delete"},
        "inventory": {"read", "create", "update", "delete"},
        "transactions": {"read", "create", "update", "delete"},
        "users": {"read", "create", "update", "delete"},
        "settings": {"read", "update"},
        "logs": {"read", "create"},
    },
    "manager": {
        "skus": {"read", "create", "update"},
        "inventory": {"read", "create", "update"},
        "transactions": {"read", "create", "update"},
        "users": {"read"},
        "settings": {"read", "update"},
        "logs": {"read"},
    },
    "user": {
        "skus": {"read", "create", "update"},
        "inventory": {"read", "update"},
        "transactions": {"read", "create"},
        "logs": {"read"},
    },
    "viewer": {
        "skus": {"read"},
        "inventory": {"read"},
        "transactions": {"read"},
        "logs": {"read"},
    },
}

ROLES = list(ROLE_PERMISSIONS)


def can(role: str, resource: str, action: str) -> bool:
    return action in ROLE_PERMISSIONS.get(role, {}).get(resource, set())
