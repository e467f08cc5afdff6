from nepstay.schemas.auth.login import LoginRequest

__all__ = ["LoginRequest"]
