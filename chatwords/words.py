"""Shell-like lexer for splitting chat command lines into words."""

import enum
import string as _string
from dataclasses import dataclass
from typing import Optional, Union

# Characters with the Unicode White_Space property.
WHITE_SPACE = frozenset(
    chr(c)
    for c in [
        *range(0x09, 0x0E),
        0x20,
        0x85,
        0xA0,
        0x1680,
        *range(0x2000, 0x200B),
        0x2028,
        0x2029,
        0x202F,
        0x205F,
        0x3000,
    ]
)

ASCII_PUNCTUATION = frozenset(_string.punctuation)

# Whitespace recognized by the decoding tokenizer.
WORD_SEPARATORS = frozenset(" \t\r\n")

ESCAPES = {
    "t": "\t",
    "r": "\r",
    "n": "\n",
}


def is_trim_separator(c: str) -> bool:
    """Check if a character separates words for TrimmedWords."""
    return c in WHITE_SPACE or c in ASCII_PUNCTUATION


class StorageKind(enum.Enum):
    """Where the text behind a WordsStorage comes from."""

    SHARED = "shared"
    STATIC = "static"


@dataclass(frozen=True)
class WordsStorage:
    """
    Immutable text backing a Words tokenizer.

    SHARED wraps text owned at runtime, like a received chat line, and may be
    handed to any number of tokenizers. STATIC wraps constant text such as
    command templates. Both read the same way and neither is ever modified.
    """

    kind: StorageKind
    text: str

    @classmethod
    def shared(cls, text: str) -> "WordsStorage":
        """Wrap text owned at runtime."""
        return cls(StorageKind.SHARED, text)

    @classmethod
    def static(cls, text: str) -> "WordsStorage":
        """Wrap constant text."""
        return cls(StorageKind.STATIC, text)

    @classmethod
    def of(cls, value: Union["WordsStorage", str]) -> "WordsStorage":
        """
        Convert a value into storage.

        Args:
            value: Existing storage, which is returned as-is, or a string,
                which is wrapped as shared text

        Returns:
            The storage for value

        Raises:
            TypeError: If value is not text
        """
        if isinstance(value, WordsStorage):
            return value
        if isinstance(value, str):
            return cls.shared(value)
        raise TypeError(f"Cannot split {type(value).__name__}, expected str")

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)

    def __getitem__(self, index: Union[int, slice]) -> str:
        return self.text[index]


def words(value: Union[WordsStorage, str]) -> "Words":
    """Construct an iterator over words in a string."""
    return Words(value)


class Words:
    """
    An iterator over words in a string.

    Rules:
    - Runs of space, tab, CR and LF separate words
    - Backslash escapes the next character (\\t, \\r and \\n decode to
      tab, CR and LF)
    - Double quotes (") group text containing whitespace
    - Quotes are removed, and text on both sides of a quoted run joins the
      same word when no whitespace separates them

    Malformed input never raises: a trailing backslash is dropped and an
    unterminated quote ends with the input.
    """

    def __init__(self, value: Union[WordsStorage, str]):
        self._storage = WordsStorage.of(value)
        text = self._storage.text

        # One character lookahead, and the offset of the character after it.
        self._b0: Optional[tuple[int, str]] = (0, text[0]) if text else None
        self._off = min(1, len(text))
        self._buffer: list[str] = []

    @property
    def storage(self) -> WordsStorage:
        return self._storage

    def string(self) -> str:
        """Access the underlying string."""
        return self._storage.text

    def take(self) -> Optional[tuple[int, str]]:
        """Take the next character."""
        text = self._storage.text
        following = None

        if self._off < len(text):
            following = (self._off, text[self._off])
            self._off += 1

        out, self._b0 = self._b0, following
        return out

    def peek(self) -> Optional[tuple[int, str]]:
        """Look at the next character."""
        return self._b0

    def rest(self) -> str:
        """The rest of the input, starting with the lookahead character."""
        if self._b0 is None:
            return ""
        return self._storage.text[self._b0[0]:]

    def copy(self) -> "Words":
        """Copy the tokenizer, sharing its storage but not its position."""
        other = type(self).__new__(type(self))
        other._storage = self._storage
        other._b0 = self._b0
        other._off = self._off
        other._buffer = list(self._buffer)
        return other

    __copy__ = copy

    def _escape(self) -> None:
        """Process an escape."""
        taken = self.take()

        if taken is None:
            return

        c = taken[1]
        self._buffer.append(ESCAPES.get(c, c))

    def _quoted(self) -> None:
        """Process a quoted run, up to an unescaped quote or the end of input."""
        while True:
            taken = self.take()

            if taken is None:
                return

            c = taken[1]

            if c == "\\":
                self._escape()
            elif c == '"':
                return
            else:
                self._buffer.append(c)

    def _peek_char(self) -> str:
        ahead = self.peek()
        return ahead[1] if ahead is not None else ""

    def _flush(self) -> str:
        word = "".join(self._buffer)
        self._buffer.clear()
        return word

    def __iter__(self) -> "Words":
        return self

    def __next__(self) -> str:
        if not self._storage:
            raise StopIteration

        while True:
            taken = self.take()

            if taken is None:
                break

            c = taken[1]

            if c in WORD_SEPARATORS:
                # Consume all whitespace so that rest() starts at a word.
                while self._peek_char() in WORD_SEPARATORS:
                    self.take()

                if self._buffer:
                    return self._flush()

                continue

            if c == "\\":
                self._escape()
            elif c == '"':
                self._quoted()
            else:
                self._buffer.append(c)

        if self._buffer:
            return self._flush()

        raise StopIteration

    def __repr__(self) -> str:
        return f"Words(string={self.string()!r}, rest={self.rest()!r})"


class TrimmedWords:
    """
    An iterator over words separated by whitespace or ASCII punctuation.

    There is no quoting or escaping. Words are slices of the input, and the
    remaining input never starts with a separator.
    """

    def __init__(self, string: str):
        self._string = string
        self._start = _skip_separators(string, 0)

    def remaining(self) -> str:
        """The input which has not been split yet."""
        return self._string[self._start:]

    def __iter__(self) -> "TrimmedWords":
        return self

    def __next__(self) -> str:
        string = self._string
        start = self._start

        if start >= len(string):
            raise StopIteration

        end = _find_separator(string, start)

        if end is None:
            # Last word, leave an empty view behind.
            self._start = len(string)
            return string[start:]

        self._start = _skip_separators(string, end)
        return string[start:end]

    def __repr__(self) -> str:
        return f"TrimmedWords(remaining={self.remaining()!r})"


def _find_separator(string: str, start: int) -> Optional[int]:
    for i in range(start, len(string)):
        if is_trim_separator(string[i]):
            return i
    return None


def _skip_separators(string: str, start: int) -> int:
    i = start
    while i < len(string) and is_trim_separator(string[i]):
        i += 1
    return i
