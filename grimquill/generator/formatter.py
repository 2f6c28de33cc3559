"""
Cosmetic cleanup of detokenized text: capitalization, quote balancing and
punctuation spacing. Best effort only, not a grammar checker.
"""

import re
import logging

# Configure logging
logger = logging.getLogger(__name__)

SENTENCE_ENDINGS = (".", "!", "?")


class TextFormatter:
    """Post-processes generated text into a presentable sentence."""

    def __init__(self) -> None:
        self._quote_pair = re.compile(r'"\s*([^"]*?)\s*"')
        self._space_before_punct = re.compile(r"\s+([,;:.!?])")
        self._space_after_punct = re.compile(r"([,;:.!?])(?=[\w(\[{])")
        self._quoted = re.compile(r'"([^"]*)"([,;:.!?]?)')
        self._space_after_open = re.compile(r"([(\[{])\s+")
        self._space_before_close = re.compile(r"\s+([)\]}])")
        self._whitespace = re.compile(r"\s+")
        self._double_space = re.compile(r" {2,}")

    def format(self, text: str) -> str:
        """
        Clean up a detokenized string.

        Args:
            text: Raw detokenized text

        Returns:
            Formatted text ending in sentence punctuation (empty stays empty)

        Examples:
            >>> TextFormatter().format('he said " hi there " ,then left')
            'He said "hi there," then left.'
        """
        text = self._strip_leading(text)

        if text[:1].isascii() and text[:1].islower():
            text = text[0].upper() + text[1:]

        if text.count('"') % 2 == 1:
            logger.debug("Removing unbalanced quotes")
            text = self._double_space.sub(" ", text.replace('"', "")).strip()
        else:
            text = self._normalize_spacing(text)

        if text and not text.endswith(SENTENCE_ENDINGS):
            text += "."

        return text

    def _strip_leading(self, text: str) -> str:
        for i, char in enumerate(text):
            if char.isalnum() or char == '"':
                return text[i:]
        return ""

    def _normalize_spacing(self, text: str) -> str:
        text = self._whitespace.sub(" ", text)
        text = self._quote_pair.sub(r'"\1"', text)
        text = self._space_before_punct.sub(r"\1", text)
        text = self._space_after_punct.sub(r"\1 ", text)
        text = self._settle_quotes(text)
        text = self._space_after_open.sub(r"\1", text)
        text = self._space_before_close.sub(r"\1", text)
        return self._whitespace.sub(" ", text).strip()

    def _settle_quotes(self, text: str) -> str:
        # Matches always start on an opening quote, so pairs stay aligned
        def settle(match: "re.Match[str]") -> str:
            inner, punct = match.group(1), match.group(2)
            quoted = f'"{inner}{punct}"'

            before = text[match.start() - 1] if match.start() > 0 else ""
            after = text[match.end()] if match.end() < len(text) else ""

            if before.isalnum() or before in {",", ";", ":", ".", "!", "?"}:
                quoted = " " + quoted
            if after.isalnum():
                quoted += " "
            return quoted

        return self._quoted.sub(settle, text)
