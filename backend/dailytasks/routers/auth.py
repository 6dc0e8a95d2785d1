from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from supabase import AsyncClient

from dailytasks.core.backend import get_backend, oauth2_scheme
from dailytasks.core.errors import AuthFailure, InvalidToken
from dailytasks.core.security import decode_access_token
from dailytasks.core.websocket import manager
from dailytasks.models.user import Principal
from dailytasks.schemas.auth import Credentials, Message, Profile, Token
from dailytasks.services.board import TaskBoard
from dailytasks.services.session import SessionGate

router = APIRouter(prefix="/auth", tags=["auth"])

async def get_current_principal(token: Optional[str] = Depends(oauth2_scheme)) -> Principal:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception
    try:
        return decode_access_token(token)
    except InvalidToken:
        raise credentials_exception

def _token_for(gate: SessionGate) -> Token:
    principal = gate.require_principal()
    return Token(
        access_token=gate.access_token,
        user_id=principal.id,
        email=principal.email,
    )

@router.post("/signup", response_model=Token)
async def sign_up(credentials: Credentials, client: AsyncClient = Depends(get_backend)):
    gate = SessionGate(client)
    try:
        principal = await gate.sign_up(credentials.email, credentials.password)
    except AuthFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    if principal is None:
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED,
            content={"message": "Check your inbox to confirm the account, then sign in"},
        )
    return _token_for(gate)

@router.post("/signin", response_model=Token)
async def sign_in(credentials: Credentials, client: AsyncClient = Depends(get_backend)):
    gate = SessionGate(client)
    try:
        await gate.sign_in(credentials.email, credentials.password)
    except AuthFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return _token_for(gate)

@router.post("/signout", response_model=Message)
async def sign_out(
    token: Optional[str] = Depends(oauth2_scheme),
    current: Principal = Depends(get_current_principal),
    client: AsyncClient = Depends(get_backend),
):
    """Revoke the token; open task feeds of this user receive the cleared board."""

    async def notify_signed_out(board: TaskBoard):
        await manager.send_to(
            current.id, {"type": "signed_out", **board.snapshot().model_dump(mode="json")}
        )

    gate = SessionGate(client, current, token)
    board = TaskBoard(client, current, on_change=notify_signed_out)
    gate.subscribe(board.set_principal)
    await gate.sign_out()
    return Message(message="Logged out successfully")

@router.get("/me", response_model=Profile)
async def me(
    current: Principal = Depends(get_current_principal),
    client: AsyncClient = Depends(get_backend),
):
    """Profile page: who is signed in and how far along they are."""
    board = TaskBoard(client, current, ownership=True)
    await board.reload()
    return Profile(
        id=current.id,
        email=current.email,
        total_tasks=board.summary.total,
        completed_tasks=board.summary.completed,
    )
