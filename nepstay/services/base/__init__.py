from nepstay.services.base.base_service import BaseService

__all__ = ["BaseService"]
