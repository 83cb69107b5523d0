from fastapi import HTTPException
from fastapi import Security
from fastapi.security import APIKeyHeader

# GitHub itself accepts both `Authorization: Bearer <t>` and `token <t>`.
GITHUB_TOKEN_SCHEMES = frozenset({"bearer", "token"})

authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


def parse_github_authorization(value: str | None) -> str | None:
    """Return the token from an Authorization header value, or None."""

    scheme, _, credentials = (value or "").strip().partition(" ")
    credentials = credentials.strip()
    if scheme.lower() not in GITHUB_TOKEN_SCHEMES or not credentials:
        return None
    return credentials


def github_token(authorization: str | None = Security(authorization_header)) -> str:
    """FastAPI dependency yielding the caller's GitHub token.

    Raises:
        HTTPException: 401 with a challenge when no usable token was sent.
    """

    token = parse_github_authorization(authorization)
    if token is None:
        raise HTTPException(
            status_code=401,
            detail="GitHub token is required",
            headers={"WWW-Authenticate": 'Bearer realm="github"'},
        )
    return token
