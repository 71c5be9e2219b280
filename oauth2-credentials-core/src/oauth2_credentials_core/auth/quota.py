"""Quota project capability for credentials.

Any credential can opt in to quota/billing attribution by providing a
``get_quota_project_id()`` method. Nothing needs to inherit from
`QuotaProjectIdProvider`; request decoration checks for the capability
structurally.

Example:
    ```python
    class ServiceAccountCredentials(OAuth2Credentials):
        def __init__(self, ..., quota_project_id: str | None = None):
            ...
            self._quota_project_id = quota_project_id

        def get_quota_project_id(self) -> str | None:
            return self._quota_project_id


    quota_project_id_of(ServiceAccountCredentials(..., quota_project_id="proj-123"))  # "proj-123"
    quota_project_id_of(object())  # None
    ```
"""

from typing import Protocol, runtime_checkable

QUOTA_PROJECT_HEADER = "x-goog-user-project"


@runtime_checkable
class QuotaProjectIdProvider(Protocol):
    """A credential that can name the project used for quota and billing."""

    def get_quota_project_id(self) -> str | None: ...


def quota_project_id_of(credentials: object) -> str | None:
    """Return the quota project id of `credentials`, or None if it has no such capability."""
    if not isinstance(credentials, QuotaProjectIdProvider):
        return None
    return credentials.get_quota_project_id()
