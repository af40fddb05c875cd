"""Typed failures raised by the directory service.

Each carries the HTTP status the API answers with and a message safe to show
to the caller.
"""


class DirectoryError(Exception):
    status_code = 400

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class ValidationError(DirectoryError):
    status_code = 400


class BadRequest(DirectoryError):
    status_code = 400


class NotFound(DirectoryError):
    status_code = 404


class Conflict(DirectoryError):
    status_code = 409
