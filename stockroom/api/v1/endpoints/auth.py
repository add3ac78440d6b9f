"""
Authentication API endpoints for sign-up and session login.
"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Request, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.database import get_db
from stockroom.core.security import get_session_id
from stockroom.services.user_accounts import UserAccounts

router = APIRouter()
user_accounts = UserAccounts()


class SignupRequest(BaseModel):
    email: Optional[str] = Field(None, description="Email address")
    password: Optional[str] = Field(None, description="Password")
    name: Optional[str] = Field(None, description="Display name, defaults to the email's local part")


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, description="Email address")
    password: Optional[str] = Field(None, description="Password")


@router.post("/signup", status_code=201)
async def signup(request: SignupRequest, db: Session = Depends(get_db)):
    """Create a user account."""
    try:
        user = await user_accounts.signup(db, request.email, request.password, request.name)
        return {"message": "User created successfully", "user": user}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login")
async def login(request: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """
    Log in with email and password.

    Sets the session cookie; the session id is also returned for use as a
    bearer token.
    """
    result = await user_accounts.login(db, request.email, request.password)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=result["session_id"],
        max_age=settings.session_ttl,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure
    )
    return result


@router.post("/logout")
async def logout(request: Request, response: Response):
    await user_accounts.logout(get_session_id(request))
    response.delete_cookie(settings.session_cookie_name)
    return {"message": "Logged out"}


@router.get("/session")
async def get_session(request: Request):
    """Get the current session, or 401 when there is none."""
    session = await user_accounts.get_session(get_session_id(request))
    if not session:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return {"user": {"id": session["user_id"], "email": session.get("email"), "name": session.get("name")}}
