class ErrorCodes:
    INVALID_CONFIG = "SCR_INVALID_CONFIG"
    INVALID_ARGUMENT = "SCR_INVALID_ARGUMENT"
