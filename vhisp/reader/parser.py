"""
  Vhisp Reader: Lexer and Parser

- Regex lexer, recursive-descent parser over a token stream
- Emits a tagged syntax tree rather than values; vhisp.reader.convert turns
  the tree into Values.

   Grammar (alternatives are tried in order):

     number : /-?[0-9]+(\\.[0-9]+)?/ ;
     symbol : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&%|^]+/ ;
     sexpr  : '(' <expr>* ')' ;
     qexpr  : '{' <expr>* '}' ;
     expr   : <number> | <symbol> | <sexpr> | <qexpr> ;
     vhisp  : /^/ <expr>* /$/ ;

   Node tags:

    - ">"       -> the root; children are a "regex" start anchor, the
                   top-level expressions, and a "regex" end anchor
    - "number"  -> leaf, contents is the literal text
    - "symbol"  -> leaf, contents is the literal text
    - "sexpr"   -> children are "char" '(' , expressions, "char" ')'
    - "qexpr"   -> children are "char" '{' , expressions, "char" '}'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Optional

from vhisp.errors import VhispSyntaxError


TOKEN_RE = re.compile(
    r"(?P<ws>\s+)"
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<number>-?[0-9]+(?:\.[0-9]+)?)"  # tried before symbol
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&%|^]+)"
)

EXPR_START = "number, symbol, '(' or '{'"


class Token(NamedTuple):
    type: Optional[str]
    value: str
    line: int
    column: int


@dataclass
class SyntaxNode:
    tag: str
    contents: str = ""
    children: list[SyntaxNode] = field(default_factory=list)
    line: int = 1
    column: int = 1

    @property
    def children_num(self) -> int:
        return len(self.children)

    def __str__(self) -> str:
        if not self.children:
            return f"{self.tag} '{self.contents}'"
        return f"{self.tag} [{', '.join(str(c) for c in self.children)}]"


def _describe(token: Token) -> str:
    if token.type is None:
        return "end of input"
    return f"'{token.value}'"


def lex(source: str, filename: str = "<stdin>", first_line: int = 1) -> Iterator[Token]:
    """Token generator: yields Tokens, finishing with an end-of-input token."""
    pos = 0
    line = first_line
    line_start = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise VhispSyntaxError(
                f"expected {EXPR_START} at '{source[pos]}'",
                filename,
                line,
                pos - line_start + 1,
            )
        kind = m.lastgroup
        text = m.group()
        if kind == "ws":
            for i, ch in enumerate(text):
                if ch == "\n":
                    line += 1
                    line_start = pos + i + 1
        else:
            yield Token(kind, text, line, pos - line_start + 1)
        pos = m.end()

    yield Token(None, "", line, pos - line_start + 1)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], filename: str = "<stdin>"):
        self.tokens = iter(token_iter)
        self.filename = filename
        self.buffer: list[Token] = []

    def peek(self) -> Token:
        if not self.buffer:
            self.buffer.append(next(self.tokens))
        return self.buffer[0]

    def advance(self) -> Token:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens)

    def _fail(self, expected: str) -> None:
        token = self.peek()
        raise VhispSyntaxError(
            f"expected {expected} at {_describe(token)}",
            self.filename,
            token.line,
            token.column,
        )

    def parse_expr(self) -> SyntaxNode:
        token = self.peek()

        if token.type in ("number", "symbol"):
            self.advance()
            return SyntaxNode(token.type, token.value, line=token.line, column=token.column)

        if token.type == "lparen":
            return self._parse_list("sexpr", "rparen")

        if token.type == "lbrace":
            return self._parse_list("qexpr", "rbrace")

        self._fail(EXPR_START)

    def _parse_list(self, tag: str, close: str) -> SyntaxNode:
        open_tok = self.advance()
        node = SyntaxNode(tag, line=open_tok.line, column=open_tok.column)
        node.children.append(
            SyntaxNode("char", open_tok.value, line=open_tok.line, column=open_tok.column)
        )
        closer = ")" if close == "rparen" else "}"
        while self.peek().type != close:
            if self.peek().type not in ("number", "symbol", "lparen", "lbrace"):
                self._fail(f"{EXPR_START} or '{closer}'")
            node.children.append(self.parse_expr())
        close_tok = self.advance()
        node.children.append(
            SyntaxNode("char", close_tok.value, line=close_tok.line, column=close_tok.column)
        )
        return node

    def parse_program(self) -> SyntaxNode:
        """Parse the whole input: /^/ <expr>* /$/."""
        root = SyntaxNode(">")
        root.children.append(SyntaxNode("regex"))
        while self.peek().type is not None:
            if self.peek().type in ("rparen", "rbrace"):
                self._fail(f"{EXPR_START} or end of input")
            root.children.append(self.parse_expr())
        end = self.peek()
        root.children.append(SyntaxNode("regex", line=end.line, column=end.column))
        return root


def parse(source: str, filename: str = "<stdin>", first_line: int = 1) -> SyntaxNode:
    """Parse `source` into a syntax tree rooted at a ">" node.

    Line numbers in diagnostics start at `first_line`, so a caller feeding a
    file one line at a time can report positions within the file.

    Raises VhispSyntaxError with a `<file>:<line>:<col>: error: ...` diagnostic.
    """
    return TokenStream(lex(source, filename, first_line), filename).parse_program()
