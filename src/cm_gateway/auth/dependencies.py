"""FastAPI dependencies: get_current_user, require_admin.

Usage in any protected router:
    from src.cm_gateway.auth.dependencies import get_current_user

    @router.get("/protected")
    async def protected(user: User = Depends(get_current_user)):
        ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.bootstrap import Services, get_services
from src.cm_common.errors import AccountDisabledError, AdminRequiredError, InvalidCredentialsError
from src.cm_gateway.auth.jwt_handler import decode_token
from src.cm_gateway.user.models import User

# tokenUrl tells Swagger UI where to get a token (used for the "Authorize" button)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    services: Services = Depends(get_services),
) -> User:
    """Validate the Bearer access token and return the caller.

    Raises HTTP 401 if the token is missing, invalid, expired, or names an
    unknown user; AccountDisabledError if the account is disabled.
    """
    try:
        payload = decode_token(token, expected_type="access")
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    user_id = payload.get("sub")
    if not user_id:
        raise _CREDENTIALS_EXCEPTION

    user = services.users.get(str(user_id))
    if user is None:
        raise _CREDENTIALS_EXCEPTION
    if not user.is_active:
        raise AccountDisabledError()
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise AdminRequiredError()
    return current_user
