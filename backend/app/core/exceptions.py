class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class SeatingError(AppError):
    """Raised when a seating query is called with invalid input."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class DataAccessError(AppError):
    """Raised when the relational store fails underneath a seating lookup."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=503, details=details)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)
