"""
Custom exceptions for the pronunciation coach application.
"""


class PronCoachException(Exception):
    """Base exception class for the pronunciation coach."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidInputError(PronCoachException):
    """Exception raised when a scoring function receives a non-text or non-numeric argument."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=400)


class InvalidRequestError(PronCoachException):
    """Exception raised when request is invalid."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status_code=400)


class PhraseNotFoundError(PronCoachException):
    """Exception raised when a phrase level or sound focus does not exist."""

    def __init__(self, message: str = "Phrase not found"):
        super().__init__(message, status_code=404)


class InvalidAudioFormatError(PronCoachException):
    """Exception raised when an uploaded recording has an unsupported extension."""

    def __init__(self, message: str = "Invalid audio format"):
        super().__init__(message, status_code=400)


class FileTooLargeError(PronCoachException):
    """Exception raised when uploaded file is too large."""

    def __init__(self, message: str = "File size exceeds maximum allowed size"):
        super().__init__(message, status_code=413)


class TranscriptionError(PronCoachException):
    """Exception raised when the speech-to-text service fails."""

    def __init__(self, message: str = "Transcription failed"):
        super().__init__(message, status_code=502)


class TranscriberUnavailableError(PronCoachException):
    """Exception raised when no speech-to-text service is configured."""

    def __init__(self, message: str = "Transcription service not configured"):
        super().__init__(message, status_code=503)
