"""Authentication endpoints."""

from fastapi import APIRouter, Depends

from jobseeker.api.deps import get_auth_service, get_current_user, get_email_service
from jobseeker.api.schemas import (
    Envelope,
    LoginData,
    LoginRequest,
    MessageData,
    RegisterRequest,
    ResendVerificationRequest,
    UserData,
    UserMessageData,
    UserResponse,
    VerifyEmailRequest,
)
from jobseeker.services import AuthService, EmailService
from jobseeker.utils.security import TokenPayload

router = APIRouter()


@router.post("/register", status_code=201, response_model=Envelope[UserMessageData])
def register(
    data: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
    email: EmailService = Depends(get_email_service),
):
    """Register a new account and send a verification code."""
    user, code = auth.register(data.email, data.password)
    email.send_verification_email(user.email, code)

    return Envelope(
        data=UserMessageData(
            user=UserResponse.from_user(user),
            message="Registration successful. Please check your email for verification code.",
        )
    )


@router.post("/verify-email", response_model=Envelope[UserMessageData])
def verify_email(data: VerifyEmailRequest, auth: AuthService = Depends(get_auth_service)):
    """Verify an email address with its code."""
    user = auth.verify_email(data.email, data.code)
    return Envelope(
        data=UserMessageData(
            user=UserResponse.from_user(user),
            message="Email verified successfully. You can now log in.",
        )
    )


@router.post("/login", response_model=Envelope[LoginData])
def login(data: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Log in and receive a bearer token."""
    user, token = auth.login(data.email, data.password)
    return Envelope(data=LoginData(user=UserResponse.from_user(user), token=token))


@router.get("/me", response_model=Envelope[UserData])
def me(
    current: TokenPayload = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    """Get the authenticated user."""
    user = auth.get_user(current.user_id)
    return Envelope(data=UserData(user=UserResponse.from_user(user)))


@router.post("/logout", response_model=Envelope[MessageData])
def logout():
    """Tokens are stateless; the client discards its token."""
    return Envelope(data=MessageData(message="Logout successful. Please clear your token on the client side."))


@router.post("/resend-verification", response_model=Envelope[MessageData])
def resend_verification(
    data: ResendVerificationRequest,
    auth: AuthService = Depends(get_auth_service),
    email: EmailService = Depends(get_email_service),
):
    """Send a fresh verification code."""
    code = auth.resend_verification_code(data.email)
    email.send_verification_email(data.email.strip().lower(), code)
    return Envelope(data=MessageData(message="Verification code sent. Please check your email."))
