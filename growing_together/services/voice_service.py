"""Voice playback for child dialogue.

Best effort: synthesis runs on a single background worker so at most one
utterance is in progress at a time, and every failure is logged and dropped.
The turn controller never waits on it.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from openai import OpenAI

from growing_together.config import settings
from growing_together.core.errors import PlaybackFailure
from growing_together.core.logging import get_logger
from growing_together.core.models import Gender

logger = get_logger(__name__)

# (gender, is_young) -> voice
VOICE_TABLE: dict[tuple[Gender, bool], str] = {
    (Gender.GIRL, True): "shimmer",
    (Gender.GIRL, False): "nova",
    (Gender.BOY, True): "fable",
    (Gender.BOY, False): "echo",
}

YOUNG_VOICE_MAX_AGE = 12


def select_voice(age: int, gender: Gender) -> str:
    return VOICE_TABLE[(gender, age <= YOUNG_VOICE_MAX_AGE)]


def build_instructions(age: int, emotion: Optional[str]) -> str:
    """Speaking direction for the synthesizer."""
    if age < 3:
        voice = "a very small child who can only say a few words"
    elif age <= YOUNG_VOICE_MAX_AGE:
        voice = f"a child aged {age}"
    else:
        voice = f"a teenager aged {age}"
    if emotion:
        return f"Speak as {voice}, sounding {emotion}."
    return f"Speak as {voice}."


class SpeechSynthesizer(ABC):
    """Text-to-speech backend."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def synthesize(
        self, text: str, voice: str, instructions: Optional[str] = None
    ) -> bytes:
        """Return encoded audio (mp3) for ``text``."""
        ...


class OpenAISpeechSynthesizer(SpeechSynthesizer):
    """Speech synthesis through the OpenAI audio API."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini-tts") -> None:
        self._client = OpenAI(api_key=api_key)
        self._model = model

    @property
    def name(self) -> str:
        return "openai"

    def synthesize(
        self, text: str, voice: str, instructions: Optional[str] = None
    ) -> bytes:
        kwargs = {
            "model": self._model,
            "voice": voice,
            "input": text,
            "response_format": "mp3",
        }
        if instructions:
            kwargs["instructions"] = instructions
        response = self._client.audio.speech.create(**kwargs)
        return response.read()


class VoiceService:
    """Fire-and-forget speech for child utterances.

    With no synthesizer the service is disabled and ``speak`` does nothing.
    """

    def __init__(self, synthesizer: Optional[SpeechSynthesizer] = None) -> None:
        self._synthesizer = synthesizer
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="voice")
        self._clips: dict[str, bytes] = {}
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._synthesizer.name if self._synthesizer else "none"

    @property
    def enabled(self) -> bool:
        return self._synthesizer is not None

    def speak(
        self,
        session_id: str,
        text: str,
        age: int,
        gender: Gender,
        emotion: Optional[str] = None,
    ):
        """Queue an utterance. Returns the pending future, or None if disabled."""
        if not self.enabled or not text:
            logger.debug("Voice disabled or empty text, skipping")
            return None
        return self._executor.submit(
            self._play, session_id, text, age, gender, emotion
        )

    def latest_clip(self, session_id: str) -> Optional[bytes]:
        with self._lock:
            return self._clips.get(session_id)

    def forget(self, session_id: str) -> None:
        with self._lock:
            self._clips.pop(session_id, None)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _play(
        self,
        session_id: str,
        text: str,
        age: int,
        gender: Gender,
        emotion: Optional[str],
    ) -> None:
        try:
            audio = self._synthesize(text, age, gender, emotion)
        except PlaybackFailure as e:
            logger.warning("Voice playback dropped for session %s: %s", session_id, e)
            return

        with self._lock:
            self._clips[session_id] = audio
        logger.debug("Voice clip ready for session %s (%d bytes)", session_id, len(audio))

    def _synthesize(
        self, text: str, age: int, gender: Gender, emotion: Optional[str]
    ) -> bytes:
        assert self._synthesizer is not None
        try:
            return self._synthesizer.synthesize(
                text,
                voice=select_voice(age, gender),
                instructions=build_instructions(age, emotion),
            )
        except Exception as e:
            raise PlaybackFailure(f"Speech synthesis failed: {e}") from e


def get_voice_service(provider_name: Optional[str] = None) -> VoiceService:
    """Build the voice service from TTS_PROVIDER."""
    name = provider_name or settings.TTS_PROVIDER

    if name == "openai":
        if settings.TTS_API_KEY:
            logger.debug("Using OpenAISpeechSynthesizer with model: %s", settings.TTS_MODEL)
            return VoiceService(
                OpenAISpeechSynthesizer(
                    api_key=settings.TTS_API_KEY, model=settings.TTS_MODEL
                )
            )
        logger.warning("TTS_API_KEY not set, voice playback disabled")
        return VoiceService()

    if name != "none":
        logger.warning("Unknown TTS provider '%s', voice playback disabled", name)
    return VoiceService()
