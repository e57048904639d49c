"""
Speech-to-text collaborator.
The coach only needs "audio in, text out"; this module defines that
interface and an HTTP client for a remote transcription service.
"""
from typing import Optional, Protocol

import httpx

from app.utils.exceptions import TranscriptionError
from app.utils.logger import get_logger

logger = get_logger(__name__)


class Transcriber(Protocol):
    """Anything that turns a recording into text."""

    def transcribe(self, audio: bytes, filename: str) -> str:
        ...


class HttpTranscriptionClient:
    """
    Transcriber backed by a remote speech-to-text service.

    Posts the recording as multipart form data (field 'file') and reads
    the 'transcription' (or 'text') field of the JSON response.
    """

    def __init__(
        self,
        service_url: str,
        timeout: float = 10.0,
        language: str = 'en-US',
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize transcription client.

        Args:
            service_url: Full URL of the transcription endpoint
            timeout: Request timeout in seconds
            language: Language hint sent with every request
            transport: httpx transport override (mock transports in tests)
        """
        self.service_url = service_url.rstrip('/')
        self.timeout = timeout
        self.language = language
        self.transport = transport
        logger.info(f"Transcription client initialized with service URL: {self.service_url}")

    def transcribe(self, audio: bytes, filename: str) -> str:
        """
        Transcribe a recording.

        Args:
            audio: Raw audio bytes
            filename: Original file name, forwarded to the service

        Returns:
            Transcribed text, possibly empty when no speech was detected

        Raises:
            TranscriptionError: On timeout, connection failure, error status
                or a response without a transcription
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    self.service_url,
                    files={'file': (filename, audio)},
                    data={'language': self.language}
                )
        except httpx.TimeoutException:
            logger.error(f"Transcription service timeout after {self.timeout}s")
            raise TranscriptionError(f"Transcription service timed out after {self.timeout}s")
        except httpx.RequestError as e:
            logger.error(f"Error connecting to transcription service: {e}")
            raise TranscriptionError("Could not reach transcription service")

        if response.status_code != 200:
            logger.error(f"Unexpected response from transcription service: {response.status_code}")
            raise TranscriptionError(
                f"Transcription service returned status {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError:
            raise TranscriptionError("Transcription service returned invalid JSON")

        text = body.get('transcription', body.get('text')) if isinstance(body, dict) else None
        if not isinstance(text, str):
            raise TranscriptionError("Transcription service response has no transcription")

        logger.debug(f"Transcribed '{filename}': '{text}'")
        return text.strip()
