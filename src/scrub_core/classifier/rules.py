"""Built-in field name rules."""
from __future__ import annotations

# Exact names, compared case-insensitively. Values under these names are
# replaced with an md5 marker so they stay correlatable across records.
HASHED_FIELD_NAMES = (
    "contextURL",
    "context_url",
    "workspaceID",
    "workspace_id",
    "workspaceInstanceID",
    "instanceID",
    "instance_id",
    "metaID",
    "meta_id",
    "userID",
    "user_id",
    "username",
    "user_name",
)

# Case-insensitive patterns searched anywhere in the field name.
REDACTED_FIELD_PATTERNS = (
    r"auth_",
    r"password",
    r"passwd",
    r"token",
    r"key",
    r"secret",
    r"email",
    r"credential",
    r"cookie",
)

__all__ = ["HASHED_FIELD_NAMES", "REDACTED_FIELD_PATTERNS"]
