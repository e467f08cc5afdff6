from nepstay.services.auth.authentication_service import AuthenticationService, LoginResult

__all__ = ["AuthenticationService", "LoginResult"]
