"""Default configuration values for listsync."""

from __future__ import annotations

from typing import Final

# Page size used until the user picks one; the chosen size is remembered in
# the settings file under ``LIST_LIMIT_SETTINGS_KEY``.
DEFAULT_PAGE_SIZE: Final[int] = 20
LIST_LIMIT_SETTINGS_KEY: Final[str] = "list.limit"

DEFAULT_ID_KEY: Final[str] = "id"

# Seconds between two polls of a record that has not reached its steady status.
DEFAULT_REFRESH_INTERVAL_SEC: Final[float] = 10.0

# Operations that change the shape of the result set.  Their responses are
# never patched into records; the current page is fetched again instead.
REFRESH_OPERATIONS: Final[frozenset[str]] = frozenset({"create", "delete", "batch_delete"})

# Response statuses below this value mean success.
ERROR_STATUS_THRESHOLD: Final[int] = 400

# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

DEFAULT_API_VERSION: Final[str] = "v1"
API_URL_ENV_VAR: Final[str] = "LISTSYNC_API_URL"
API_TOKEN_ENV_VAR: Final[str] = "LISTSYNC_API_TOKEN"
HTTP_TIMEOUT_SEC: Final[float] = 30.0
