"""Lexer for SVG path data.

Path data is a sequence of one-letter commands followed by numbers, with
commas and whitespace as optional separators. Numbers may also run together
when the sign of the next number separates them (``1.5-2.3`` is two numbers).
"""

from collections.abc import Iterator

PATH_COMMANDS = frozenset("MmLlHhVvCcSsQqTtAaZz")

_SEPARATORS = frozenset(" \t\r\n\f,")
_DIGITS = frozenset("0123456789")
_NUMBER_START = frozenset("0123456789.-+")


class PathTokenizer:
    """Cursor over a path data string.

    The tokenizer never raises: malformed numbers come back as whatever
    substring could be read, possibly empty, and converting them is up to
    the caller.

    Attributes:
        data: Path data being read
        position: Offset of the next unread character
    """

    def __init__(self, data: str) -> None:
        self.data = data
        self.position = 0

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.data)

    def peek(self) -> str:
        """Next unread character, or an empty string at the end."""
        if self.at_end:
            return ""
        return self.data[self.position]

    def advance(self) -> str:
        """Consume and return the next character."""
        character = self.peek()
        if character:
            self.position += 1
        return character

    def skip_separators(self) -> None:
        """Advance past whitespace and commas."""
        while not self.at_end and self.data[self.position] in _SEPARATORS:
            self.position += 1

    def at_number(self) -> bool:
        """Whether the next character can start a number."""
        return self.peek() in _NUMBER_START and not self.at_end

    def extract_number(self) -> str:
        """Read the next numeric token.

        Consumes digits, one decimal point, a sign as the first character and
        an exponent with its own sign. A sign anywhere else, a second decimal
        point or any other character ends the token without being consumed.

        Returns:
            The token text (empty if no number starts here)

        Examples:
            >>> t = PathTokenizer("1.5-2.3")
            >>> t.extract_number(), t.extract_number()
            ('1.5', '-2.3')
        """
        self.skip_separators()
        start = self.position
        seen_dot = False
        seen_exponent = False

        while not self.at_end:
            character = self.data[self.position]
            if character in "-+":
                previous = self.data[self.position - 1] if self.position > start else ""
                if self.position != start and previous not in "eE":
                    break
            elif character == ".":
                if seen_dot or seen_exponent:
                    break
                seen_dot = True
            elif character in "eE":
                if seen_exponent or self.position == start:
                    break
                seen_exponent = True
            elif character not in _DIGITS:
                break
            self.position += 1

        return self.data[start : self.position]


def tokenize(data: str) -> Iterator[str]:
    """Split path data into command letters and numeric tokens.

    Characters that are neither separators, commands nor numbers are
    dropped.

    Args:
        data: Path data string

    Yields:
        Command letters and number strings in order

    Examples:
        >>> list(tokenize("6.192-10e-4,12.385"))
        ['6.192', '-10e-4', '12.385']
    """
    tokenizer = PathTokenizer(data)
    while True:
        tokenizer.skip_separators()
        if tokenizer.at_end:
            return
        character = tokenizer.peek()
        if character in PATH_COMMANDS:
            yield tokenizer.advance()
        elif tokenizer.at_number():
            token = tokenizer.extract_number()
            if token:
                yield token
            else:
                tokenizer.advance()
        else:
            tokenizer.advance()
