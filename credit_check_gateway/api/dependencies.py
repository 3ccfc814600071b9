"""Dependency injection for FastAPI endpoints"""

import logging
import re

from fastapi import Depends, HTTPException, Request

from credit_check_gateway.domain.exceptions import AuthenticationError
from credit_check_gateway.domain.models import CallerIdentity
from credit_check_gateway.infrastructure.clients.identity import IdentityClient
from credit_check_gateway.infrastructure.clients.report_provider import ReportProviderClient

BEARER_PATTERN = re.compile(r"^Bearer (.+)$")


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_report_client() -> ReportProviderClient:
    """Provide report provider client instance"""
    return ReportProviderClient()


def get_identity_client() -> IdentityClient:
    """Provide identity verification client instance"""
    return IdentityClient()


async def get_current_caller(
    request: Request,
    identity_client: IdentityClient = Depends(get_identity_client),
) -> CallerIdentity:
    """Authenticate the caller from the Authorization: Bearer <ID_TOKEN> header"""
    match = BEARER_PATTERN.match(request.headers.get("Authorization", ""))
    if not match:
        raise HTTPException(status_code=401, detail="Missing authentication token")

    try:
        return await identity_client.verify_token(match.group(1))
    except AuthenticationError as e:
        logging.warning(f"Authentication failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=401, detail="Invalid or expired token")
