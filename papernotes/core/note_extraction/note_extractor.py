"""
Note extraction from full paper text.

Fills the notes prompt, forces the chat model to answer through the
`formatNotes` function, then isolates and strictly validates the payload
into NoteRecords.

Dependencies: langchain_core, langchain_google_genai, pydantic
System role: Note extraction stage of the notes pipeline
"""

import asyncio
import json
import logging
import time

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import ValidationError

from papernotes.configs.llm import LLMSettings
from papernotes.core.exceptions import ExtractionError
from papernotes.core.note_extraction.notes_prompt import (
    NOTES_PROMPT,
    NOTES_TOOL_NAME,
    NOTES_TOOL_SCHEMA,
)
from papernotes.core.note_extraction.notes_schema import NOTE_LIST_ADAPTER, NoteRecord

logger = logging.getLogger(__name__)


def create_chat_model(settings: LLMSettings) -> ChatGoogleGenerativeAI:
    """
    Build the Gemini chat model used for note taking.

    Args:
        settings: Model identifier, temperature and API key

    Returns:
        ChatGoogleGenerativeAI: Configured chat model
    """
    return ChatGoogleGenerativeAI(
        model=settings.model,
        temperature=settings.temperature,
        google_api_key=settings.api_key or None,
    )


def extract_function_arguments(message: BaseMessage) -> str | None:
    """
    Pull the raw `formatNotes` argument string out of a model response.

    Looks at a legacy `function_call`, then OpenAI-style raw tool calls,
    then LangChain's parsed tool calls (re-encoded as JSON).

    Args:
        message: Chat model response

    Returns:
        str | None: Argument string, or None when the model answered in free text
    """
    kwargs = message.additional_kwargs or {}

    function_call = kwargs.get("function_call") or {}
    if function_call.get("arguments"):
        return function_call["arguments"]

    for call in kwargs.get("tool_calls") or []:
        function = call.get("function") or {}
        if function.get("name") == NOTES_TOOL_NAME and function.get("arguments"):
            return function["arguments"]

    for call in getattr(message, "tool_calls", None) or []:
        if call.get("name") == NOTES_TOOL_NAME:
            return json.dumps(call.get("args") or {})

    return None


def isolate_notes_array(arguments: str) -> str:
    """
    Cut the notes array out of the argument string.

    Keeps everything from the first `[` to the last `]` inclusive, so a
    `{"notes": [...]}` wrapper or stray prose around the array is dropped.

    Args:
        arguments: Raw function-call arguments

    Returns:
        str: JSON array text

    Raises:
        ExtractionError: No bracket pair found
    """
    start = arguments.find("[")
    end = arguments.rfind("]")
    if start == -1 or end < start:
        raise ExtractionError(
            "malformed payload",
            details={"reason": "no JSON array in function arguments"},
        )
    return arguments[start : end + 1]


def parse_notes_payload(arguments: str) -> list[NoteRecord]:
    """
    Decode and validate a function-call payload into NoteRecords.

    Args:
        arguments: Raw function-call arguments

    Returns:
        list[NoteRecord]: Validated notes (possibly empty)

    Raises:
        ExtractionError: Payload is not a valid list of notes
    """
    array = isolate_notes_array(arguments)
    try:
        return NOTE_LIST_ADAPTER.validate_json(array)
    except ValidationError as e:
        raise ExtractionError(
            "malformed payload",
            details={"reason": f"{e.error_count()} validation error(s)", "errors": e.errors()[:3]},
        ) from e


class NoteExtractor:
    """Turn a paper's full text into validated notes via a forced function call."""

    def __init__(
        self,
        settings: LLMSettings,
        model: BaseChatModel | None = None,
    ) -> None:
        """
        Initialize extractor with model settings.

        Args:
            settings: LLM settings (model, temperature, key, timeout)
            model: Chat model override (built from settings if None)
        """
        self._settings = settings
        self._model = model or create_chat_model(settings)
        self._bound_model = self._model.bind_tools(
            [NOTES_TOOL_SCHEMA],
            tool_choice=NOTES_TOOL_NAME,
        )

    async def extract(
        self,
        full_text: str,
        source_location: str | None = None,
    ) -> list[NoteRecord]:
        """
        Extract notes from paper text.

        Args:
            full_text: Complete paper text
            source_location: Paper URL, used for error context only

        Returns:
            list[NoteRecord]: Notes, each with non-blank text

        Raises:
            ExtractionError: Model call failed, timed out, or returned no valid payload
        """
        start_time = time.perf_counter()
        prompt = NOTES_PROMPT.format_prompt(paper=full_text)

        try:
            response = await asyncio.wait_for(
                self._bound_model.ainvoke(prompt),
                timeout=self._settings.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ExtractionError(
                f"Model call timed out after {self._settings.timeout_seconds}s",
                source_location=source_location,
            ) from e
        except Exception as e:
            raise ExtractionError(
                f"Model call failed: {e}",
                source_location=source_location,
                details={"model": self._settings.model},
            ) from e

        arguments = extract_function_arguments(response)
        if arguments is None:
            raise ExtractionError(
                "no structured response",
                source_location=source_location,
                details={"model": self._settings.model},
            )

        try:
            notes = parse_notes_payload(arguments)
        except ExtractionError as e:
            e.source_location = source_location
            if source_location:
                e.details["source_location"] = source_location
            raise

        logger.info(
            "Extracted notes",
            extra={
                "source_location": source_location,
                "note_count": len(notes),
                "text_length": len(full_text),
                "elapsed_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        return notes
