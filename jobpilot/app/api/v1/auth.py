"""
Authentication endpoints - Register, Login, Current User, and per-user credentials
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.user import User
from jobpilot.app.schemas.user import (
    ConnectionTestOut,
    CredentialsIn,
    CredentialsOut,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    user_to_credentials_out,
)
from jobpilot.app.services.api_logger import api_call_options_from_request, audited_call
from jobpilot.app.services.auth_service import AuthService
from jobpilot.app.services.job_connectors import ConnectorManager
from jobpilot.app.services.llm import get_openai_client, resolve_openai_key

logger = get_logger("api.auth")
router = APIRouter()

OPENAI_MODELS_ENDPOINT = "https://api.openai.com/v1/models"


def _user_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, username=user.username, email=user.email)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user account. Returns an access token (user is logged in after register).

    - **username**: unique, at least 3 characters
    - **password**: at least 6 characters
    - **email**: optional
    """
    logger.info("Registration attempt for username=%s", user_data.username)
    result = AuthService.register_user(db, user_data)
    if not result["success"]:
        logger.warning("Registration failed username=%s reason=%s", user_data.username, result["message"])
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result["message"])

    user = result["user"]
    logger.info("User registered successfully user_id=%s", user.id)
    return TokenResponse(
        access_token=result["access_token"],
        token_type=result["token_type"],
        user=_user_response(user),
        message=result["message"],
    )


@router.post("/login", response_model=TokenResponse)
def login(login_data: UserLogin, db: Session = Depends(get_db)):
    """Login user and get access token"""
    logger.info("Login attempt for username=%s", login_data.username)
    result = AuthService.login_user(db, login_data)
    if not result["success"]:
        logger.warning("Login failed username=%s reason=%s", login_data.username, result["message"])
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result["message"],
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = result["user"]
    logger.info("User logged in successfully user_id=%s", user.id)
    return TokenResponse(
        access_token=result["access_token"],
        token_type=result["token_type"],
        user=_user_response(user),
        message=result["message"],
    )


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Current authenticated user. Used to refresh auth state on app load."""
    return _user_response(current_user)


@router.get("/credentials", response_model=CredentialsOut)
def get_credentials(current_user: User = Depends(get_current_user)):
    """Which third-party credentials are stored. Secrets are never returned."""
    return user_to_credentials_out(current_user)


@router.put("/credentials", response_model=CredentialsOut)
def update_credentials(
    data: CredentialsIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Store OpenAI / Adzuna credentials. Not validated here; use the test endpoint."""
    user = AuthService.update_credentials(db, current_user, data)
    return user_to_credentials_out(user)


def _test_openai(user: User, options: dict) -> ConnectionTestOut:
    key = resolve_openai_key(user.openai_api_key)
    if not key:
        return ConnectionTestOut(service="openai", success=False, message="OpenAI API key is not configured")
    client = get_openai_client(key)
    try:
        audited_call(
            options["service"],
            options["endpoint"],
            "GET",
            lambda: client.models.list(),
            request_data=options["request_data"],
            user_id=options["user_id"],
        )
    except Exception as e:
        logger.warning("OpenAI connection test failed user_id=%s error=%s", user.id, e)
        return ConnectionTestOut(service="openai", success=False, message="OpenAI connection failed. Check your API key.")
    return ConnectionTestOut(service="openai", success=True, message="OpenAI connection successful")


@router.post("/credentials/test/{service}", response_model=ConnectionTestOut)
async def test_credentials(
    service: str,
    request: Request,
    current_user: User = Depends(get_current_user),
):
    """Make one cheap authenticated call against `openai` or `adzuna`."""
    service = service.strip().lower()
    if service == "openai":
        options = await api_call_options_from_request(
            request, "OpenAI", OPENAI_MODELS_ENDPOINT, "GET", user=current_user
        )
        return await run_in_threadpool(_test_openai, current_user, options)
    if service == "adzuna":
        adzuna = ConnectorManager(current_user).get("adzuna")
        success, message = await run_in_threadpool(adzuna.test_connection)
        logger.info("Adzuna connection test user_id=%s success=%s", current_user.id, success)
        return ConnectionTestOut(service="adzuna", success=success, message=message)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown service. Use 'openai' or 'adzuna'.")
