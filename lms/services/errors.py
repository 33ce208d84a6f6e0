from fastapi import status


class ApplicationError(Exception):
    """Use-case failure that already knows its HTTP status."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(ApplicationError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(ApplicationError):
    status_code = status.HTTP_409_CONFLICT


class QuizClosedError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
