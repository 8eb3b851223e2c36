"""Shared FastAPI dependencies: station service handle and auth gates."""

from fastapi import Header, Request

from errors import AuthenticationRequired, InvalidCredentials, PermissionDenied
from services.auth import Identity, TokenVerifier, extract_bearer_token
from services.station import StationService


def get_station_service(request: Request) -> StationService:
    return request.app.state.station_service


def get_station_id(request: Request) -> str:
    return request.app.state.settings.azuracast_station_id


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def require_user(request: Request, authorization: str | None = Header(None)) -> Identity:
    token = extract_bearer_token(authorization)
    if not token:
        raise AuthenticationRequired()

    identity = get_token_verifier(request).verify(token)
    if identity is None:
        raise InvalidCredentials()
    return identity


def require_admin(request: Request, authorization: str | None = Header(None)) -> Identity:
    identity = require_user(request, authorization)
    if not identity.is_admin:
        raise PermissionDenied()
    return identity
