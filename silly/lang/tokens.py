"""Tokens for the SILLY language and the stream that reads them from source text.

A lexeme is one of
    - a single delimiter: { } ( ) [ ]
    - a double-quoted string, scanned up to and including the closing quote
    - a single-quoted character, always exactly three characters ('c')
    - any other run of characters up to (not including) the next delimiter

Source text is first split on whitespace, so string literals cannot contain spaces. A lexeme never fails to be
read: malformed quoting shows up later as a Token whose category is UNKNOWN.
"""

from dataclasses import dataclass
from enum import Enum

from silly.lang.error import UnexpectedEndOfInput


class Category(Enum):
    UNKNOWN = "unknown"
    DELIM = "delimiter"
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    BOOL_FUNC = "boolean operator"
    MATH_FUNC = "math operator"
    SEQ_FUNC = "sequence operator"
    NUM_LITERAL = "number"
    BOOL_LITERAL = "boolean"
    CHAR_LITERAL = "character"
    STR_LITERAL = "string"


@dataclass(frozen=True)
class Token:
    """Immutable token. Equality and hashing only look at the spelling; the category is derived from it."""
    DELIMS = ("{", "}", "(", ")", "[", "]")
    KEYWORDS = ("=", "print", "if", "else", "while", "repeat", "func", "return")
    BOOL_FUNCS = ("==", "!=", ">", ">=", "<", "<=", "and", "or", "not")
    MATH_FUNCS = ("+", "*", "/")
    SEQ_FUNCS = ("len", "get", "cat", "str")
    BOOLEANS = ("true", "false")

    spelling: str

    @property
    def category(self):
        tok = self.spelling
        if not tok:
            return Category.UNKNOWN

        if tok[0].isdigit() or (tok[0] == "-" and len(tok) > 1 and tok[1].isdigit()):
            if "_" in tok:  # float() accepts digit separators, SILLY does not
                return Category.UNKNOWN
            try:
                float(tok)
            except ValueError:
                return Category.UNKNOWN
            return Category.NUM_LITERAL

        tables = [
            (Token.DELIMS, Category.DELIM),
            (Token.KEYWORDS, Category.KEYWORD),
            (Token.BOOL_FUNCS, Category.BOOL_FUNC),
            (Token.MATH_FUNCS, Category.MATH_FUNC),
            (Token.SEQ_FUNCS, Category.SEQ_FUNC),
            (Token.BOOLEANS, Category.BOOL_LITERAL),
        ]
        for table, category in tables:
            if tok in table:
                return category

        if tok[0].isalpha():
            return Category.IDENTIFIER if tok.isalnum() else Category.UNKNOWN
        elif tok[0] == "\"":
            return Category.STR_LITERAL if len(tok) > 1 and tok[-1] == "\"" else Category.UNKNOWN
        elif tok[0] == "'":
            return Category.CHAR_LITERAL if len(tok) == 3 and tok[2] == "'" else Category.UNKNOWN
        return Category.UNKNOWN

    @property
    def is_literal(self):
        """Whether or not this token can stand alone as a simple expression."""
        return self.category in (Category.IDENTIFIER, Category.NUM_LITERAL, Category.BOOL_LITERAL,
                                 Category.CHAR_LITERAL, Category.STR_LITERAL)

    def __repr__(self):
        return f"Token('{self.spelling}')"

    def __str__(self):
        return self.spelling


class TokenStream:
    """Reads tokens from any iterable of lines (an open file, sys.stdin, a list of strings). Lines are consumed
    lazily, so an interactive source only blocks when another token is actually needed.
    """

    def __init__(self, source):
        if isinstance(source, str):
            source = source.splitlines()
        self._lines = iter(source)
        self._chunks = []       # whitespace-delimited chunks of the current line not yet touched
        self._buffer = ""       # rest of the chunk the last lexeme came from
        self._next_token = None
        self.line_num = 0       # line the buffered chunk came from, used for error messages

    def _fill(self):
        """Reads lines until there is a chunk available or the source is exhausted. Returns whether any chunk is
        available.
        """
        while not self._chunks:
            try:
                line = next(self._lines)
            except StopIteration:
                return False
            self.line_num += 1
            self._chunks = line.split()
        return True

    def lookahead(self):
        """Returns the next token without consuming it."""
        if self._next_token is None:
            if not self._buffer:
                if not self._fill():
                    raise UnexpectedEndOfInput()
                self._buffer = self._chunks.pop(0)

            self._next_token = Token(self._buffer[:TokenStream.lexeme_length(self._buffer)])
        return self._next_token

    def next(self):
        """Returns the next token and consumes it."""
        token = self.lookahead()
        self._next_token = None
        self._buffer = self._buffer[len(token.spelling):]
        return token

    def has_next(self):
        return self._next_token is not None or bool(self._buffer) or self._fill()

    @staticmethod
    def lexeme_length(chunk):
        """Length of the lexeme at the start of a non-empty, whitespace-free chunk."""
        if chunk[0] in Token.DELIMS:
            return 1
        elif chunk[0] == "\"":
            end = chunk.find("\"", 1)
            return len(chunk) if end == -1 else end + 1
        elif chunk[0] == "'":
            return min(3, len(chunk))

        idx = 1
        while idx < len(chunk) and chunk[idx] not in Token.DELIMS:
            idx += 1
        return idx

    def __iter__(self):
        while self.has_next():
            yield self.next()
