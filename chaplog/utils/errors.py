from typing import Dict, List, Optional


class ChapLogError(Exception):
    status_code = 500

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(ChapLogError):
    status_code = 400


class UnauthorizedError(ChapLogError):
    status_code = 401


class ForbiddenError(ChapLogError):
    status_code = 403


class NotFoundError(ChapLogError):
    status_code = 404


class ConflictError(ChapLogError):
    status_code = 409
