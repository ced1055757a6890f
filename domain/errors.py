class TaskError(Exception):
    """Base for errors that map onto an HTTP status at the API boundary."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskError):
    status_code = 400


class NotFoundError(TaskError):
    status_code = 404


class StorageError(TaskError):
    status_code = 500
