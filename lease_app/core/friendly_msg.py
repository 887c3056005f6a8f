from decimal import DecimalException

from pydantic import ValidationError

from .errors import BackendUnavailable

DEFAULT_MESSAGE = "Something went wrong on our end. Please try again."

# checked in order, so subclasses come before their bases
FRIENDLY_MESSAGES = {
    BackendUnavailable: "The property management backend is unavailable. Please try again later.",
    TimeoutError: "The request took too long. Please try again later.",
    ConnectionError: "Unable to connect to a required service. Please try again later.",
    ValidationError: "The backend returned a record this service could not read.",
    DecimalException: "A monetary amount could not be calculated.",
    ValueError: "Invalid data received. Please check your input and try again.",
    KeyError: "Some required information is missing.",
}


def get_friendly_message(error: Exception) -> str:
    for exc_type, msg in FRIENDLY_MESSAGES.items():
        if isinstance(error, exc_type):
            return msg
    return DEFAULT_MESSAGE
