"""Tokenizer for the order language.

Orders are one statement per line. A semicolon starts a comment that runs
to the end of the line. The tokenizer classifies each word by its shape:
ids by prefix, numbers by digits, keywords by name. Anything else is plain
lower-cased text.
"""

import re
import unicodedata
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class TokenKind(Enum):
    """Kinds of tokens produced by the tokenizer."""
    EOF = auto()
    EOL = auto()
    BLOCK_OPEN = auto()
    BLOCK_CLOSE = auto()

    INTEGER = auto()
    NUMBER = auto()
    QUOTED_TEXT = auto()
    TEXT = auto()

    COLONY_ID = auto()
    DEPOSIT_ID = auto()
    SHIP_ID = auto()

    ASSEMBLE = auto()
    CONTROL = auto()
    NAME = auto()

    AUTOMATION_UNIT = auto()
    CONSUMER_GOODS_UNIT = auto()
    FACTORY_UNIT = auto()
    FARM_UNIT = auto()
    HYPER_DRIVE_UNIT = auto()
    LIFE_SUPPORT_UNIT = auto()
    MINE_UNIT = auto()
    RESEARCH_UNIT = auto()
    SENSOR_UNIT = auto()
    SPACE_DRIVE_UNIT = auto()
    STRUCTURAL_UNIT = auto()
    TRANSPORT_UNIT = auto()


# Every unit keyword kind; any of these may be produced by a factory group
UNIT_KINDS = frozenset(
    {
        TokenKind.AUTOMATION_UNIT,
        TokenKind.CONSUMER_GOODS_UNIT,
        TokenKind.FACTORY_UNIT,
        TokenKind.FARM_UNIT,
        TokenKind.HYPER_DRIVE_UNIT,
        TokenKind.LIFE_SUPPORT_UNIT,
        TokenKind.MINE_UNIT,
        TokenKind.RESEARCH_UNIT,
        TokenKind.SENSOR_UNIT,
        TokenKind.SPACE_DRIVE_UNIT,
        TokenKind.STRUCTURAL_UNIT,
        TokenKind.TRANSPORT_UNIT,
    }
)

VERBS = {
    "assemble": TokenKind.ASSEMBLE,
    "control": TokenKind.CONTROL,
    "name": TokenKind.NAME,
}

# Untiered unit keywords
BARE_UNITS = {
    "consumer-goods": TokenKind.CONSUMER_GOODS_UNIT,
    "research": TokenKind.RESEARCH_UNIT,
    "structural": TokenKind.STRUCTURAL_UNIT,
}

# Tiered unit keywords are "<prefix>-<tech level>"
TIERED_UNITS = {
    "automation": TokenKind.AUTOMATION_UNIT,
    "factory": TokenKind.FACTORY_UNIT,
    "farm": TokenKind.FARM_UNIT,
    "hyper-drive": TokenKind.HYPER_DRIVE_UNIT,
    "life-support": TokenKind.LIFE_SUPPORT_UNIT,
    "mine": TokenKind.MINE_UNIT,
    "sensor": TokenKind.SENSOR_UNIT,
    "space-drive": TokenKind.SPACE_DRIVE_UNIT,
    "transport": TokenKind.TRANSPORT_UNIT,
}

COLONY_ID_RE = re.compile(r"^[cC]\d+$")
SHIP_ID_RE = re.compile(r"^[sS]\d+$")
DEPOSIT_ID_RE = re.compile(r"^[dD][pP]\d+$")
INTEGER_RE = re.compile(r"^\d[\d,_]*$")
NUMBER_RE = re.compile(r"^(\d[\d,_]*)?\.\d+$|^\d[\d,_]*\.$")
TIERED_UNIT_RE = re.compile(r"^([a-z]+(?:-[a-z]+)*)-(\d+)$")

WORD_PUNCTUATION = "-,.%_"


@dataclass
class Token:
    """A token from the input buffer."""

    kind: TokenKind
    line: int  # line number in the input
    text: str = ""  # always populated except for EOL and EOF
    integer: int = 0  # populated only for INTEGER
    number: float = 0.0  # populated only for NUMBER

    def __str__(self) -> str:
        return self.text


def _is_control(ch: str) -> bool:
    return unicodedata.category(ch) == "Cc"


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in WORD_PUNCTUATION


def classify_word(word: str, line: int) -> Token:
    """Turn a bare word into a token of the right kind.

    Args:
        word: Run of letters, digits and word punctuation
        line: Line number the word was found on

    Returns:
        Classified token
    """
    if COLONY_ID_RE.match(word):
        return Token(TokenKind.COLONY_ID, line, word.upper())
    if SHIP_ID_RE.match(word):
        return Token(TokenKind.SHIP_ID, line, word.upper())
    if DEPOSIT_ID_RE.match(word):
        return Token(TokenKind.DEPOSIT_ID, line, word.upper())

    if INTEGER_RE.match(word):
        digits = word.replace(",", "").replace("_", "")
        try:
            integer = int(digits)
        except ValueError:
            # past the interpreter's digit limit; let the parser reject it
            return Token(TokenKind.TEXT, line, word)
        return Token(TokenKind.INTEGER, line, word, integer=integer)
    if NUMBER_RE.match(word):
        digits = word.replace(",", "").replace("_", "")
        return Token(TokenKind.NUMBER, line, word, number=float(digits))

    lower = word.lower()
    if lower in VERBS:
        return Token(VERBS[lower], line, lower)
    if lower in BARE_UNITS:
        return Token(BARE_UNITS[lower], line, lower)
    match = TIERED_UNIT_RE.match(lower)
    if match and match.group(1) in TIERED_UNITS:
        return Token(TIERED_UNITS[match.group(1)], line, lower)

    return Token(TokenKind.TEXT, line, lower)


class Tokenizer:
    """Pull tokens one at a time from order text.

    Tokens may be pushed back with `unget`; pushed back tokens are returned
    first, most recent first. At end of input `next` returns EOF forever.
    """

    def __init__(self, text: str):
        self.buffer = text
        self.offset = 0
        self.line = 1
        self.pushback: list[Token] = []

    def is_eof(self) -> bool:
        """True when the input is consumed and nothing has been pushed back."""
        return self.offset >= len(self.buffer) and not self.pushback

    def unget(self, token: Token) -> None:
        if token.kind == TokenKind.EOF:
            return
        self.pushback.append(token)

    def _peek_char(self) -> Optional[str]:
        if self.offset >= len(self.buffer):
            return None
        return self.buffer[self.offset]

    def next(self) -> Token:
        """Return the next available token."""
        if self.pushback:
            return self.pushback.pop()

        # skip whitespace, control characters and comments
        ch = None
        while self.offset < len(self.buffer):
            ch = self.buffer[self.offset]
            self.offset += 1
            if ch == "\n":
                self.line += 1
                return Token(TokenKind.EOL, self.line - 1)
            elif ch == ";":
                while self._peek_char() not in (None, "\n"):
                    self.offset += 1
                ch = None
            elif _is_control(ch) or ch.isspace():
                ch = None
            else:
                break

        if ch is None:
            return Token(TokenKind.EOF, self.line)

        if ch == "{":
            return Token(TokenKind.BLOCK_OPEN, self.line, ch)
        elif ch == "}":
            return Token(TokenKind.BLOCK_CLOSE, self.line, ch)

        if ch == '"':
            return self._quoted_text()

        word = [ch]
        while self.offset < len(self.buffer) and _is_word_char(self.buffer[self.offset]):
            word.append(self.buffer[self.offset])
            self.offset += 1
        if len(word) == 1 and not _is_word_char(ch):
            # stray punctuation is a word of its own
            return Token(TokenKind.TEXT, self.line, ch)
        return classify_word("".join(word), self.line)

    def _quoted_text(self) -> Token:
        # the opening quote has been consumed
        text = ['"']
        while self._peek_char() not in (None, "\n"):
            ch = self.buffer[self.offset]
            self.offset += 1
            if ch == "\t":
                text.append(" ")
            elif ch == '"':
                text.append('"')
                break
            elif _is_control(ch):
                continue
            else:
                text.append(ch)
        return Token(TokenKind.QUOTED_TEXT, self.line, "".join(text))

    def __iter__(self):
        while True:
            token = self.next()
            yield token
            if token.kind == TokenKind.EOF:
                return
