"""
Loose JSON extraction for LLM agent replies.

The hosted agent is instructed to answer with a JSON document, but LLM output is
only mostly well-formed. Accepted forms:
- bare JSON object
- ```json fenced block, optionally surrounded by prose
- an object with minor defects: trailing commas, unquoted keys, single-quoted
  strings, Python literals (True/False/None), truncated tail

Pipeline: select candidate -> strict parse -> shape check. When the strict parse
fails, each brace-balanced object embedded in the candidate gets one repair
pass, a strict parse and the shape check; the first that passes wins.
Every failure ends in ExtractionResult.failure(); nothing raises.
"""

from __future__ import annotations

import json
import logging
import re
import string
from typing import Any, Iterator, List, Optional, Tuple

from mindmate.domain.entities.agent_response import AgentResponse, ExtractionResult

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
_MAX_ENVELOPES = 32

_IDENT_START = frozenset(string.ascii_letters + "_$")
_IDENT_CHARS = _IDENT_START | frozenset(string.digits + "-")
_PY_LITERALS = {"True": "true", "False": "false", "None": "null"}
_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\b": "\\b", "\f": "\\f"}


def _select_candidate(raw: str) -> str:
    """Return the body of the first ```json fence, or the whole input."""
    m = _FENCE_RE.search(raw)
    return m.group(1) if m else raw


def _next_significant(text: str, pos: int) -> str:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return text[pos] if pos < len(text) else ""


def _drop_trailing_comma(out: List[str]) -> None:
    idx = len(out) - 1
    while idx >= 0 and out[idx].isspace():
        idx -= 1
    if idx >= 0 and out[idx] == ",":
        del out[idx]


def _read_string(text: str, start: int) -> Tuple[str, int]:
    """
    Read a quoted string starting at text[start] and re-emit it as a JSON
    double-quoted literal. Handles single quotes and unterminated strings.
    """
    quote = text[start]
    buf: List[str] = []
    j = start + 1
    n = len(text)
    while j < n:
        c = text[j]
        if c == "\\":
            if j + 1 >= n:
                break
            nxt = text[j + 1]
            if nxt == "'":
                buf.append("'")
            else:
                buf.append(c + nxt)
            j += 2
            continue
        if c == quote:
            return '"' + "".join(buf) + '"', j + 1
        if c == '"':
            buf.append('\\"')
        elif c in _CONTROL_ESCAPES:
            buf.append(_CONTROL_ESCAPES[c])
        else:
            buf.append(c)
        j += 1
    # Unterminated: close it where the text ends
    return '"' + "".join(buf) + '"', n


def _envelope_end(text: str, start: int) -> int:
    """Index just past the '}' that balances text[start], or -1 if it never closes."""
    depth = 0
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in "\"'":
            _, i = _read_string(text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return -1


def _envelopes(s: str) -> Iterator[str]:
    """
    Yield candidate objects embedded in prose, left to right.

    Each '{' outside an earlier balanced object starts a candidate: the
    balanced slice when it closes, else the rest of the text.
    """
    start = s.find("{")
    if start == -1:
        yield s.strip()
        return
    tried = 0
    while start != -1 and tried < _MAX_ENVELOPES:
        tried += 1
        end = _envelope_end(s, start)
        if end == -1:
            yield s[start:]
            start = s.find("{", start + 1)
        else:
            yield s[start:end]
            start = s.find("{", end)


def _repair(text: str) -> str:
    """
    Single lenient rewrite pass over a JSON-ish candidate.

    Outside of strings:
    - bare identifiers followed by ':' become quoted keys
    - True/False/None become true/false/null
    - commas directly before '}' or ']' are removed
    - unclosed '{' / '[' are closed in nesting order at the end
    """
    out: List[str] = []
    closers: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in "\"'":
            literal, i = _read_string(text, i)
            out.append(literal)
            continue
        if ch in "{[":
            closers.append("}" if ch == "{" else "]")
            out.append(ch)
        elif ch in "}]":
            _drop_trailing_comma(out)
            if closers and closers[-1] == ch:
                closers.pop()
            out.append(ch)
        elif ch in _IDENT_START:
            j = i
            while j < n and text[j] in _IDENT_CHARS:
                j += 1
            word = text[i:j]
            if _next_significant(text, j) == ":":
                out.append(json.dumps(word))
            else:
                out.append(_PY_LITERALS.get(word, word))
            i = j
            continue
        else:
            out.append(ch)
        i += 1

    if closers:
        _drop_trailing_comma(out)
        out.extend(reversed(closers))
    return "".join(out)


def _shape_problem(tree: Any) -> Optional[str]:
    if not isinstance(tree, dict):
        return "top-level JSON value is not an object"
    response = tree.get("response")
    if not isinstance(response, dict):
        return "missing 'response' object"
    message = response.get("message")
    if not isinstance(message, str) or not message.strip():
        return "missing or empty 'response.message'"
    return None


def extract(raw: str) -> ExtractionResult:
    """
    Recover an AgentResponse from raw agent text.

    Returns ExtractionResult.success(...) when a JSON object with a non-empty
    response.message is recoverable, else ExtractionResult.failure(reason).
    """
    if not isinstance(raw, str):
        return ExtractionResult.failure(f"expected text, got {type(raw).__name__}")
    try:
        candidate = _select_candidate(raw)
        try:
            tree = json.loads(candidate)
        except json.JSONDecodeError as e1:
            reason = f"unparseable JSON: {e1}"
            for envelope in _envelopes(candidate):
                try:
                    tree = json.loads(_repair(envelope))
                except json.JSONDecodeError as e2:
                    reason = f"unparseable JSON: {e1}; after repair: {e2}"
                    continue
                problem = _shape_problem(tree)
                if problem:
                    reason = problem
                    continue
                logger.info("Repaired malformed JSON from agent response")
                return ExtractionResult.success(AgentResponse.from_dict(tree))
            return ExtractionResult.failure(reason)

        problem = _shape_problem(tree)
        if problem:
            return ExtractionResult.failure(problem)
        return ExtractionResult.success(AgentResponse.from_dict(tree))
    except Exception as e:
        logger.debug(f"Extraction aborted: {e!r}")
        return ExtractionResult.failure(f"extraction error: {e}")


class LooseJsonExtractor:
    """IResponseExtractor implementation backed by extract()."""

    def extract(self, raw: str) -> ExtractionResult:
        return extract(raw)


__all__ = ["extract", "LooseJsonExtractor"]
