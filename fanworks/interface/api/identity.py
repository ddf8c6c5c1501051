"""Caller identity and client details for API routes."""

from fastapi import HTTPException, Request, status

from fanworks.application.usecase.common import Requester
from fanworks.domain.service import JWTService


def get_requester(jwt_service: JWTService, auth_token: str | None) -> Requester:
    """Requester from the auth cookie; anonymous when missing or invalid."""
    payload = jwt_service.get_payload_from_token(auth_token)
    if payload is None:
        return Requester()
    return Requester(
        user_id=str(payload.user_id), handle=payload.handle, role=payload.role
    )


def require_requester(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> Requester:
    """Requester from the auth cookie.

    Raises:
        HTTPException: 401 if the request is not authenticated
    """
    requester = get_requester(jwt_service, auth_token)
    if not requester.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return requester


def client_details(request: Request) -> tuple[str | None, str | None]:
    """Origin address and user agent of the request."""
    origin_ip = request.client.host if request.client else None
    return origin_ip, request.headers.get("user-agent")
