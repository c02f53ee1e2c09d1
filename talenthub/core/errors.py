"""
Domain errors raised by the vacancy services
The HTTP layer maps each one to its status code
"""


class TalentHubError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(TalentHubError):
    status_code = 400


class ForbiddenError(TalentHubError):
    status_code = 403


class NotFoundError(TalentHubError):
    status_code = 404


class ConflictError(TalentHubError):
    status_code = 409
