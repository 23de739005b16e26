from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer


bearer_scheme = HTTPBearer(auto_error=False)

MISSING_TOKEN_DETAIL = "Authorization Bearer token is required"


def extract_github_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    """Return the GitHub access token carried in the Authorization header.

    The token is forwarded to GitHub as is; obtaining it is up to the client.

    Raises:
        HTTPException: 401 if credentials are missing, not Bearer, or blank.
    """

    if (
        credentials is None
        or credentials.scheme.lower() != "bearer"
        or not credentials.credentials.strip()
    ):
        raise HTTPException(status_code=401, detail=MISSING_TOKEN_DETAIL)

    return credentials.credentials.strip()


def token_from_authorization(header_value: str | None) -> str | None:
    """Return the Bearer token from a raw Authorization header, if any."""

    if not header_value:
        return None
    scheme, _, token = header_value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
