"""
Delimiter and separator lookups used to anchor fix operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from ...tokens import Span, Token, TokenPredicate


class TokenQuery(Protocol):
    """Token lookups provided by the host document."""

    def token_after(self, span: Span, predicate: Optional[TokenPredicate] = None) -> Optional[Token]: ...

    def token_before(self, span: Span, predicate: Optional[TokenPredicate] = None) -> Optional[Token]: ...

    def first_token(self, span: Span, predicate: Optional[TokenPredicate] = None) -> Optional[Token]: ...

    def last_token(self, span: Span, predicate: Optional[TokenPredicate] = None) -> Optional[Token]: ...

    def first_token_between(
        self, left: Span, right: Span, predicate: Optional[TokenPredicate] = None
    ) -> Optional[Token]: ...


@dataclass(frozen=True)
class Region:
    """Ad-hoc span between two offsets."""
    start: int
    end: int


def punctuator(value: str) -> TokenPredicate:
    return lambda token: token.is_punctuator(value)


def is_any_punctuator(token: Token) -> bool:
    return token.kind == "punctuator"


def opening(tokens: TokenQuery, span: Span, value: str) -> Optional[Token]:
    """The first token of span, if it is the `value` punctuator."""
    token = tokens.first_token(span)
    if token is not None and token.is_punctuator(value):
        return token
    return None


def closing(tokens: TokenQuery, span: Span, value: str) -> Optional[Token]:
    """The last token of span, if it is the `value` punctuator."""
    token = tokens.last_token(span)
    if token is not None and token.is_punctuator(value):
        return token
    return None


def comma_after(tokens: TokenQuery, span: Span) -> Optional[Token]:
    """The separator right after span; None when the next punctuator is not a comma."""
    token = tokens.token_after(span, is_any_punctuator)
    if token is not None and token.value == ",":
        return token
    return None


def trailing_comma(tokens: TokenQuery, children: Sequence[Span], closer: Optional[Span]) -> Optional[Token]:
    """Comma between the last child and the closing delimiter."""
    if not children or closer is None:
        return None
    return tokens.first_token_between(children[-1], closer, punctuator(","))
