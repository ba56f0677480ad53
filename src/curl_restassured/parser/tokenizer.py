"""Shell-aware splitting of a raw curl command line."""

import re

QUOTES = "\"'"

# backslash escapes the shell resolves inside double quotes
DOUBLE_QUOTE_ESCAPE_RE = re.compile(r"\\([\"\\$`])")


class UnterminatedQuoteError(ValueError):
    """Raised in strict mode when a quote is opened but never closed."""


def join_continuations(command: str) -> str:
    """Collapse line continuations (POSIX ``\\``, PowerShell ``` ` ```, CMD ``^``)."""
    cmd = re.sub(r"\\\s*\r?\n", " ", command)
    cmd = re.sub(r"`\s*\r?\n", " ", cmd)
    cmd = re.sub(r"\^\s*\r?\n", " ", cmd)
    return cmd


def tokenize(command: str, strict: bool = False) -> list[str]:
    """Split a command into tokens.

    Whitespace outside quotes separates tokens; quoted text is kept verbatim,
    quote characters included. An unterminated quote swallows the rest of the
    input into the current token unless ``strict`` is set.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote = ""
    in_token = False
    escaped = False

    for ch in join_continuations(command):
        if quote:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\" and quote == '"':
                escaped = True
            elif ch == quote:
                quote = ""
        elif ch in QUOTES:
            quote = ch
            current.append(ch)
            in_token = True
        elif ch.isspace():
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(ch)
            in_token = True

    if quote and strict:
        raise UnterminatedQuoteError(f"Unterminated {quote} quote in command")
    if in_token:
        tokens.append("".join(current))
    return tokens


def _unescape(text: str, quote: str) -> str:
    # single quotes take everything literally
    if quote != '"':
        return text
    return DOUBLE_QUOTE_ESCAPE_RE.sub(r"\1", text)


def unquote(token: str) -> str:
    """Strip one surrounding pair of quotes, or a dangling opening quote.

    Inside double quotes, backslash-escaped quotes, backslashes, dollar signs
    and backticks are resolved to the bare character.
    """
    if len(token) >= 2 and token[0] in QUOTES and token[-1] == token[0]:
        return _unescape(token[1:-1], token[0])
    if token and token[0] in QUOTES and token.count(token[0]) == 1:
        return _unescape(token[1:], token[0])
    return token
