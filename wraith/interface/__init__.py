"""Order language: tokenizer and parser for player submissions."""

from .order_parser import ErrorType, OrderParseError, OrderParser, ParseResult, parse_orders
from .tokens import Token, Tokenizer, TokenKind

__all__ = [
    "ErrorType",
    "OrderParseError",
    "OrderParser",
    "ParseResult",
    "Token",
    "TokenKind",
    "Tokenizer",
    "parse_orders",
]
