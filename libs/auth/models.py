from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

ADMIN_ROLES = frozenset({"admin", "master"})


class AuthUser(BaseModel):
    """
    Represents an authenticated user from a Supabase JWT.

    The storefront role (``user``, ``admin`` or ``master``) is carried in the
    token's ``app_metadata.role`` claim.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="sub")
    email: Optional[EmailStr] = None
    role: str = "authenticated"
    app_metadata: dict = Field(default_factory=dict)

    @property
    def app_role(self) -> str:
        return str(self.app_metadata.get("role") or "user")

    @property
    def is_admin(self) -> bool:
        return self.role == "service_role" or self.app_role in ADMIN_ROLES

    @property
    def is_master(self) -> bool:
        return self.app_role == "master"
