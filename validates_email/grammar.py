"""
Grammar Module

Recognizes syntactically well-formed email addresses.

The recognizer is a single left-to-right scanner with three explicit states
(normal, inside quotes, after a backslash). It never raises for malformed
input: a rejected address is reported as ``None`` from ``recognize`` and as a
reason string from ``explain``.
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class ScanState(Enum):
    """States of the local part scanner."""
    NORMAL = 'normal'
    IN_QUOTES = 'in_quotes'
    AFTER_ESCAPE = 'after_escape'


@dataclass(frozen=True)
class ParsedAddress:
    """
    A successfully recognized address.

    Attributes:
        local_part: Everything before the separating '@', quotes included
        domain: Everything after the separating '@'
        quoted: Whether the local part is a quoted string
        escaped: Whether the local part contains backslash escapes
    """
    local_part: str
    domain: str
    quoted: bool = False
    escaped: bool = False

    @property
    def address(self) -> str:
        return f'{self.local_part}@{self.domain}'


class GrammarRecognizer:
    """
    Email grammar recognizer.

    Supports dot-atom and quoted local parts and hostname domains. Comments,
    folding whitespace and IP-literal domains are not supported.

    Example:
        >>> recognizer = GrammarRecognizer()
        >>> recognizer.recognize('"Fred\\\\ Bloggs"@example.com').quoted
        True
        >>> recognizer.recognize('Fred\\\\ Bloggs@example.com') is None
        True
    """

    MAX_LOCAL_LENGTH = 64
    MAX_DOMAIN_LENGTH = 255
    MAX_LABEL_LENGTH = 63
    MAX_EMAIL_LENGTH = MAX_LOCAL_LENGTH + 1 + MAX_DOMAIN_LENGTH
    MIN_TLD_LENGTH = 2

    # The apostrophe is always allowed unquoted (o'brien@example.com)
    ATOM_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&*+/=?^_`{|}~-") | {"'"}
    LABEL_CHARS = frozenset(string.ascii_letters + string.digits + '-')

    def recognize(self, candidate) -> Optional[ParsedAddress]:
        """
        Recognize an email address.

        Args:
            candidate: The string (or ASCII bytes) to check

        Returns:
            ParsedAddress if the candidate is well-formed, None otherwise
        """
        return self.parse(candidate)[0]

    def explain(self, candidate) -> Optional[str]:
        """Return why the candidate is rejected, or None if it is accepted."""
        return self.parse(candidate)[1]

    def parse(self, candidate) -> Tuple[Optional[ParsedAddress], Optional[str]]:
        """
        Parse a candidate into its parts.

        Returns:
            Tuple of (parsed_address, reason); exactly one of them is None
        """
        parsed, reason = self._parse(candidate)
        if reason is not None:
            logger.debug("Rejected %r: %s", candidate, reason)
        return parsed, reason

    def _parse(self, candidate) -> Tuple[Optional[ParsedAddress], Optional[str]]:
        if isinstance(candidate, bytes):
            try:
                candidate = candidate.decode('ascii')
            except UnicodeDecodeError:
                return None, "Email contains non-ASCII bytes"

        if not isinstance(candidate, str):
            return None, f"Email must be a string, got {type(candidate).__name__}"

        if not candidate:
            return None, "Email address is empty"

        if len(candidate) > self.MAX_EMAIL_LENGTH:
            return None, f"Email exceeds maximum length of {self.MAX_EMAIL_LENGTH} characters"

        at_index, quoted, escaped, reason = self._scan(candidate)
        if reason:
            return None, reason

        local_part = candidate[:at_index]
        domain = candidate[at_index + 1:]

        if len(local_part) > self.MAX_LOCAL_LENGTH:
            return None, f"Local part exceeds maximum length of {self.MAX_LOCAL_LENGTH} characters"
        if len(domain) > self.MAX_DOMAIN_LENGTH:
            return None, f"Domain exceeds maximum length of {self.MAX_DOMAIN_LENGTH} characters"

        if quoted:
            reason = self._check_quoted_local(local_part)
        else:
            reason = self._check_unquoted_local(local_part)
        if reason:
            return None, reason

        reason = self._check_domain(domain)
        if reason:
            return None, reason

        return ParsedAddress(local_part, domain, quoted=quoted, escaped=escaped), None

    def _scan(self, candidate: str) -> Tuple[int, bool, bool, Optional[str]]:
        """
        Find the separating '@' and classify the local part.

        Returns:
            Tuple of (at_index, quoted, escaped, reason)
        """
        state = ScanState.NORMAL
        at_index = -1
        quoted = False
        escaped = False

        for index, char in enumerate(candidate):
            if ord(char) > 127:
                return -1, quoted, escaped, "Email contains non-ASCII characters"

            if at_index >= 0:
                if char == '@':
                    return -1, quoted, escaped, "Email contains multiple '@' symbols"
                continue

            if state is ScanState.AFTER_ESCAPE:
                # any ASCII character may follow a backslash
                state = ScanState.IN_QUOTES
            elif state is ScanState.IN_QUOTES:
                if char == '\\':
                    state = ScanState.AFTER_ESCAPE
                    escaped = True
                elif char == '"':
                    if candidate[index + 1:index + 2] != '@':
                        return -1, quoted, escaped, "Quoted string must span the whole local part"
                    state = ScanState.NORMAL
                elif not _is_printable(char):
                    return -1, quoted, escaped, f"Unescaped control character {char!r} in quoted string"
            elif char == '"':
                if index != 0:
                    return -1, quoted, escaped, "Quoted string must span the whole local part"
                state = ScanState.IN_QUOTES
                quoted = True
            elif char == '\\':
                return -1, quoted, escaped, "Escaped characters are only allowed inside quotes"
            elif char == '@':
                at_index = index

        if state is not ScanState.NORMAL:
            return -1, quoted, escaped, "Unterminated quoted string"
        if at_index < 0:
            return -1, quoted, escaped, "Email is missing '@' symbol"
        return at_index, quoted, escaped, None

    def _check_unquoted_local(self, local_part: str) -> Optional[str]:
        if not local_part:
            return "Local part (before @) is empty"
        if local_part.startswith('.'):
            return "Local part starts with a dot"
        if local_part.endswith('.'):
            return "Local part ends with a dot"
        if '..' in local_part:
            return "Local part contains consecutive dots"
        if '++' in local_part:
            return "Local part contains consecutive plus signs"

        for char in local_part:
            if char != '.' and char not in self.ATOM_CHARS:
                return f"Local part contains invalid character {char!r}"
        return None

    def _check_quoted_local(self, local_part: str) -> Optional[str]:
        # the scanner already guarantees the surrounding quotes and the escapes
        if len(local_part) <= 2:
            return "Quoted local part is empty"
        return None

    def _check_domain(self, domain: str) -> Optional[str]:
        if not domain:
            return "Domain part (after @) is empty"
        if domain.endswith('.'):
            return "Domain ends with a dot"
        if domain.endswith('-'):
            return "Domain ends with a hyphen"
        if '_' in domain:
            return "Domain contains an underscore"

        labels = domain.split('.')
        if len(labels) < 2:
            return "Domain is missing TLD (top-level domain)"

        for label in labels:
            if not label:
                return "Domain contains an empty label"
            if len(label) > self.MAX_LABEL_LENGTH:
                return f"Domain label exceeds maximum length of {self.MAX_LABEL_LENGTH} characters"
            if any(char not in self.LABEL_CHARS for char in label):
                return f"Domain label {label!r} contains invalid characters"
            if label.startswith('-') or label.endswith('-'):
                return f"Domain label {label!r} starts or ends with a hyphen"

        tld = labels[-1]
        if len(tld) < self.MIN_TLD_LENGTH:
            return f"TLD must be at least {self.MIN_TLD_LENGTH} characters"
        if tld.isdigit():
            return "TLD cannot be numeric"
        return None


def _is_printable(char: str) -> bool:
    return ' ' <= char <= '~'


_default_recognizer = GrammarRecognizer()


def recognize(candidate) -> Optional[ParsedAddress]:
    """Recognize ``candidate`` with the default recognizer."""
    return _default_recognizer.recognize(candidate)
