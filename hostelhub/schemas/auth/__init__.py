from hostelhub.schemas.auth.auth import LoginRequest, RegisterRequest, TokenResponse

__all__ = ["RegisterRequest", "LoginRequest", "TokenResponse"]
