"""Recover a JSON value from free-form model output.

The model is asked for bare JSON but routinely wraps it in markdown fences,
adds prose around it, leaves trailing commas or omits a value after a key.
``extract_structure`` handles exactly those cases with one bounded repair
pass; anything else is reported as an error rather than guessed at.
"""
import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)

# Applied in order, once, only after a strict parse has failed.
_REPAIRS: tuple[tuple[re.Pattern, str], ...] = (
    # "last5Values":, -> the model dropped the array entirely
    (re.compile(r'"last5Values"\s*:\s*,'), '"last5Values": [],'),
    # "key":, -> explicit null so the sanitizer can default it
    (re.compile(r'":\s*,'), '": null,'),
    # trailing commas before a closing delimiter
    (re.compile(r",\s*([\]}])"), r"\1"),
)

_CLOSERS = {"{": "}", "[": "]"}


class ExtractionError(ValueError):
    """No usable JSON could be recovered from a model response."""


class NoStructureFound(ExtractionError):
    def __init__(self, message: str = "No JSON structure found in response"):
        super().__init__(message)


class UnrecoverableSyntax(ExtractionError):
    def __init__(self, cleaned_text: str):
        super().__init__("Could not find valid JSON object")
        self.cleaned_text = cleaned_text


def _strip_fences(text: str) -> str:
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text


def _balanced_end(text: str, start: int) -> int:
    """Index of the delimiter closing ``text[start]``, or -1 if it never closes.

    Brackets inside string literals are ignored.
    """
    opener = text[start]
    closer = _CLOSERS[opener]
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
    return -1


def _locate_span(text: str) -> str:
    first_brace = text.find("{")
    first_bracket = text.find("[")
    if first_brace == -1 and first_bracket == -1:
        raise NoStructureFound()

    if first_bracket == -1 or (first_brace != -1 and first_brace < first_bracket):
        start = first_brace
    else:
        start = first_bracket

    end = _balanced_end(text, start)
    if end == -1:
        # Unbalanced text: fall back to the last closing delimiter.
        end = text.rfind(_CLOSERS[text[start]])
    if end < start:
        raise NoStructureFound()
    return text[start:end + 1]


def _repair(text: str) -> str:
    for pattern, replacement in _REPAIRS:
        text = pattern.sub(replacement, text)
    return text


def extract_structure(raw: str) -> Any:
    """Return the JSON object or array embedded in ``raw``.

    Raises NoStructureFound when there is no ``{`` or ``[`` to work with,
    and UnrecoverableSyntax when the candidate span still fails to parse
    after the repair pass.
    """
    text = _strip_fences((raw or "").strip())
    candidate = _locate_span(text)

    try:
        return json.loads(candidate)
    # JSONDecodeError, or a plain ValueError for ints past the digit limit
    except ValueError:
        pass

    repaired = _repair(candidate)
    try:
        value = json.loads(repaired)
    except ValueError:
        logger.error("JSON parse failed after repair. Text: %s", candidate)
        raise UnrecoverableSyntax(candidate) from None
    logger.debug("Recovered model JSON with the repair pass")
    return value
