"""
Connection routes - requests and the caller's connections.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.deps import get_current_user
from skillswap.core.database import get_db
from skillswap.core.rate_limit import limiter, RATE_CONNECTION_REQUEST
from skillswap.models.user import User
from skillswap.schemas.connection import (
    ConnectionRequestCreate,
    ConnectionRequestRespond,
    ConnectionRequestResponse,
    ConnectionStatus,
)
from skillswap.schemas.user import UserSummary
from skillswap.services.connection_service import ConnectionService
from skillswap.services.user_service import UserService

router = APIRouter(prefix="/connections", tags=["connections"])

connection_service = ConnectionService()
user_service = UserService()


@router.get("", response_model=List[UserSummary])
async def list_connections(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Users the caller is connected to."""
    return await user_service.list_connections(db, current_user.id)


@router.get("/requests", response_model=List[ConnectionRequestResponse])
async def list_incoming_requests(
    status_filter: Optional[ConnectionStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Requests addressed to the caller, oldest first."""
    return await connection_service.list_incoming_requests(db, current_user.id, status_filter)


@router.get("/requests/sent", response_model=List[ConnectionRequestResponse])
async def list_outgoing_requests(
    status_filter: Optional[ConnectionStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Requests the caller has sent, newest first."""
    return await connection_service.list_outgoing_requests(db, current_user.id, status_filter)


@router.post("/requests", response_model=ConnectionRequestResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_CONNECTION_REQUEST)
async def send_connection_request(
    request: Request,
    response: Response,
    body: ConnectionRequestCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Send a connection request.

    If a request to the same user is still pending it is returned as is,
    with 200 instead of 201.
    """
    sent, created = await connection_service.open_connection_request(
        db,
        current_user.id,
        body.to_user_id,
        message=body.message,
        i_will_learn=body.i_will_learn,
        they_will_learn=body.they_will_learn,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return sent


@router.post("/requests/{request_id}/respond", response_model=ConnectionRequestResponse)
async def respond_to_connection_request(
    request_id: UUID,
    body: ConnectionRequestRespond,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Accept or reject a request addressed to the caller."""
    return await connection_service.respond_to_connection_request(
        db, current_user.id, request_id, body.accept
    )
