"""Decode OSC window-title sequences into title events."""

import logging
import re
from typing import Optional

from ..config.models import TabTitleConfig
from .models import ExplicitKind, ExplicitPayload, ShellTitle, TitleEvent

logger = logging.getLogger(__name__)

# ESC ] 0 ; text BEL   or   ESC ] 2 ; text ESC \
_OSC_TITLE = re.compile(r"\x1b\][02];([^\x07\x1b]*)(?:\x07|\x1b\\)")
# A title sequence cut off at the end of a chunk
_OSC_TITLE_PARTIAL = re.compile(r"\x1b(?:\](?:[02](?:;[^\x07\x1b]*\x1b?)?)?)?\Z")

MAX_PENDING_OSC_CHARS = 4096

SHELL_INTEGRATION_VAR = "TERMY_SHELL_INTEGRATION"
TAB_TITLE_PREFIX_VAR = "TERMY_TAB_TITLE_PREFIX"


def extract_osc_titles(data: str) -> list[str]:
    """Return the text of every complete OSC 0/2 title sequence in ``data``."""
    return [match.group(1) for match in _OSC_TITLE.finditer(data)]


class OscTitleScanner:
    """Pulls title sequences out of a stream of terminal output chunks.

    A sequence split across chunks is held back until its terminator
    arrives. Held-back text longer than ``MAX_PENDING_OSC_CHARS`` is dropped.
    """

    def __init__(self):
        self._pending = ""

    @property
    def pending(self) -> str:
        return self._pending

    def feed(self, data: str) -> list[str]:
        data = self._pending + data
        self._pending = ""

        titles = []
        end = 0
        for match in _OSC_TITLE.finditer(data):
            titles.append(match.group(1))
            end = match.end()

        partial = _OSC_TITLE_PARTIAL.search(data, end)
        if partial is not None:
            if len(partial.group(0)) > MAX_PENDING_OSC_CHARS:
                logger.debug("Dropping unterminated title sequence of %d chars", len(partial.group(0)))
            else:
                self._pending = partial.group(0)
        return titles

    def reset(self) -> None:
        self._pending = ""


def decode_title(title: str, prefix: str) -> Optional[TitleEvent]:
    """Turn a raw terminal title into a title event.

    Titles starting with ``prefix`` are explicit payloads of the form
    ``<kind>:<payload>``; a payload without a known kind is a plain title.
    Everything else is a shell title.

    Args:
        title: Title text from the OSC sequence
        prefix: Configured ``tab_title_explicit_prefix``

    Returns:
        The event to dispatch, or None for an empty title
    """
    title = title.strip()
    if not title:
        return None

    prefix = prefix.strip()
    if not prefix or not title.startswith(prefix):
        return ShellTitle(text=title)

    payload = title[len(prefix):].strip()
    if not payload:
        return None

    kind_name, sep, body = payload.partition(":")
    if sep:
        try:
            kind = ExplicitKind(kind_name.strip().lower())
        except ValueError:
            return ExplicitPayload(kind=ExplicitKind.TITLE, payload=payload)
        return ExplicitPayload(kind=kind, payload=body.strip())

    return ExplicitPayload(kind=ExplicitKind.TITLE, payload=payload)


def shell_integration_env(config: TabTitleConfig) -> dict[str, str]:
    """Environment variables exported to child shells."""
    if not config.shell_integration:
        return {}
    return {
        SHELL_INTEGRATION_VAR: "1",
        TAB_TITLE_PREFIX_VAR: config.explicit_prefix,
    }
