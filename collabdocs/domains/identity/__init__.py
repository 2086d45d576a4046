from collabdocs.domains.identity.entities import User
from collabdocs.domains.identity.schemas import UserSummary, UserResponse, OAuthProfile
from collabdocs.domains.identity.services import IdentityService, USERS_LIST_LIMIT

__all__ = [
    "User",
    "UserSummary", "UserResponse", "OAuthProfile",
    "IdentityService", "USERS_LIST_LIMIT"
]
