"""Authorization policy applied by the bookmark ownership checks."""
from dataclasses import dataclass

from core.config import Settings, get_settings


@dataclass(frozen=True)
class AuthorizationPolicy:
    """
    Account-level rules layered on top of the owner checks.

    Ownership is always required for mutations. The policy only decides which
    classes of otherwise-authorized callers are still turned away.
    """

    demo_users_read_only: bool = True

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AuthorizationPolicy":
        """Build the policy from application settings."""
        settings = settings or get_settings()
        return cls(demo_users_read_only=settings.demo_users_read_only)
