from scratch_game.error_codes import ErrorCodes

class AppException(Exception):
    def __init__(self, error_code, status_message, exit_code=1, details=None):
        super().__init__(status_message)
        self.error_code = error_code
        self.status_message = status_message
        self.exit_code = exit_code
        self.details = details if details is not None else {}

class InvalidConfigException(AppException):
    def __init__(self, status_message="Invalid game configuration", details=None):
        super().__init__(
            error_code=ErrorCodes.INVALID_CONFIG,
            status_message=status_message,
            exit_code=3,
            details=details
        )

class InvalidArgumentException(AppException):
    def __init__(self, status_message="Invalid argument", details=None):
        super().__init__(
            error_code=ErrorCodes.INVALID_ARGUMENT,
            status_message=status_message,
            exit_code=2,
            details=details
        )
