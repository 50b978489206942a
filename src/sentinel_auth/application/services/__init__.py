from sentinel_auth.application.services.authentication_service import (
    AuthenticationService,
)

__all__ = ["AuthenticationService"]
