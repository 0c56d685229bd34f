"""Order language parser.

This module parses a player's order submission, one statement per line,
into order records the turn executor can apply:

    assemble C1 500 factory-1 structural
    assemble C1 2,000 farm-1
    assemble C1 1_500 mine-1 DP3
    name S7 "Intrepid"
    control C12

A malformed line never spoils the rest of the submission. The parser records
one error for the line, rejects the remaining tokens up to the end of the
line, and carries on with the next line.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..models.order import AssembleOrder, ControlOrder, NameOrder, Order, RejectedOrder
from .tokens import UNIT_KINDS, Token, Tokenizer, TokenKind

logger = logging.getLogger(__name__)

HULL_IDS = (TokenKind.COLONY_ID, TokenKind.SHIP_ID)
END_OF_STATEMENT = (TokenKind.EOL, TokenKind.EOF)


class ErrorType(Enum):
    """Classification of order input errors."""
    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"


class OrderParseError(Exception):
    """A parse failure on one line of an order submission.

    The parser collects these rather than raising them, so one bad line is
    reported without losing the rest of the orders.
    """

    def __init__(self, error_type: ErrorType, line: int, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            line: Line number of the offending statement
            message: Human-readable error message
        """
        self.error_type = error_type
        self.line = line
        self.message = message
        super().__init__(f"{line}: {message}")


@dataclass
class ParseResult:
    """Everything parsed from one submission.

    `orders` holds the statements that parsed cleanly, in input order;
    `rejected` holds the lines that did not.
    """

    orders: List[Order] = field(default_factory=list)
    rejected: List[RejectedOrder] = field(default_factory=list)

    @property
    def errors(self) -> List[OrderParseError]:
        return [error for rejected in self.rejected for error in rejected.errors]

    def echo(self) -> str:
        """Render the submission back as text, one statement per line.

        Rejected lines are shown with their errors appended as comments so
        the player can correct and resubmit them.
        """
        lines = [(order.line, str(order)) for order in self.orders]
        lines.extend((rejected.line, str(rejected)) for rejected in self.rejected)
        return "\n".join(text for _, text in sorted(lines, key=lambda item: item[0]))


class _Statement:
    """Parser state for a single statement."""

    def __init__(self, tokenizer: Tokenizer, verb: Token):
        self.z = tokenizer
        self.verb = verb
        self.line = verb.line
        self.consumed: List[Token] = [verb]
        self.error: Optional[OrderParseError] = None

    def accept(self, *kinds: TokenKind) -> Optional[Token]:
        """Take the next token if it is one of `kinds`, else push it back."""
        token = self.z.next()
        if token.kind in kinds:
            if token.kind not in END_OF_STATEMENT:
                self.consumed.append(token)
            return token
        self.z.unget(token)
        return None

    def expect(self, message: str, *kinds: TokenKind) -> Token:
        """Like `accept`, but a mismatch fails the statement."""
        token = self.accept(*kinds)
        if token is None:
            raise self._fail(message)
        return token

    def expect_end(self, message: str) -> None:
        self.expect(message, *END_OF_STATEMENT)

    def _fail(self, message: str) -> OrderParseError:
        token = self.z.next()
        self.z.unget(token)
        if token.kind in END_OF_STATEMENT:
            found = "end of line"
        else:
            found = f"{token.text!r}"
        return OrderParseError(ErrorType.SYNTAX_ERROR, self.line, f"{message}, found {found}")

    def reject(self) -> None:
        """Consume everything up to (not including) the end of the line."""
        while True:
            token = self.z.next()
            if token.kind == TokenKind.EOF:
                return
            if token.kind == TokenKind.EOL:
                self.z.unget(token)
                return
            self.consumed.append(token)


class OrderParser:
    """Parse order submissions into `Order` records."""

    def parse(self, text: str) -> ParseResult:
        """Parse a whole submission.

        Args:
            text: Raw order text, newline separated statements

        Returns:
            ParseResult with the successfully parsed orders and the rejected
            lines (each carrying its error)
        """
        result = ParseResult()
        z = Tokenizer(text)
        while not z.is_eof():
            token = z.next()
            if token.kind in END_OF_STATEMENT:
                continue

            stmt = _Statement(z, token)
            try:
                order = self._parse_statement(stmt)
            except OrderParseError as e:
                stmt.reject()
                logger.debug("line %d: %s", stmt.line, e.message)
                result.rejected.append(
                    RejectedOrder(
                        line=stmt.line,
                        tokens=[t.text for t in stmt.consumed],
                        errors=[e],
                    )
                )
                continue
            result.orders.append(order)

        logger.debug(
            "parsed %d orders, rejected %d lines", len(result.orders), len(result.rejected)
        )
        return result

    def _parse_statement(self, stmt: _Statement) -> Order:
        if stmt.verb.kind == TokenKind.ASSEMBLE:
            return self._parse_assemble(stmt)
        if stmt.verb.kind == TokenKind.NAME:
            return self._parse_name(stmt)
        if stmt.verb.kind == TokenKind.CONTROL:
            return self._parse_control(stmt)
        raise OrderParseError(
            ErrorType.UNKNOWN_COMMAND, stmt.line, f"Unknown command: '{stmt.verb.text}'"
        )

    def _parse_assemble(self, stmt: _Statement) -> AssembleOrder:
        """Parse 'assemble <hull> <quantity> <group-spec>'.

        The group spec is one of
          factory-<n> <product>
          farm-<n>
          mine-<n> <deposit>
        """
        hull = stmt.expect("expected ship or colony id", *HULL_IDS)
        quantity = stmt.expect("expected quantity", TokenKind.INTEGER)

        factory = stmt.accept(TokenKind.FACTORY_UNIT)
        if factory is not None:
            product = stmt.expect("expected unit to produce", *UNIT_KINDS)
            stmt.expect_end("unexpected input on assemble factory group order")
            return AssembleOrder(
                line=stmt.line,
                hull_id=hull.text,
                quantity=quantity.integer,
                unit=factory.text,
                product=product.text,
            )

        farm = stmt.accept(TokenKind.FARM_UNIT)
        if farm is not None:
            stmt.expect_end("unexpected input on assemble farm group order")
            return AssembleOrder(
                line=stmt.line, hull_id=hull.text, quantity=quantity.integer, unit=farm.text
            )

        mine = stmt.accept(TokenKind.MINE_UNIT)
        if mine is not None:
            deposit = stmt.expect("expected deposit to mine", TokenKind.DEPOSIT_ID)
            stmt.expect_end("unexpected input on assemble mine group order")
            return AssembleOrder(
                line=stmt.line,
                hull_id=hull.text,
                quantity=quantity.integer,
                unit=mine.text,
                deposit_id=deposit.text,
            )

        raise stmt._fail("expected factory, farm, or mine unit")

    def _parse_name(self, stmt: _Statement) -> NameOrder:
        """Parse 'name <hull> "<name>"'."""
        hull = stmt.expect("expected ship or colony id", *HULL_IDS)
        name = stmt.expect("expected quoted name", TokenKind.QUOTED_TEXT)
        text = name.text.strip('"').strip()
        if not text:
            raise OrderParseError(ErrorType.SYNTAX_ERROR, stmt.line, "name cannot be empty")
        stmt.expect_end("unexpected input on name order")
        return NameOrder(line=stmt.line, hull_id=hull.text, name=text)

    def _parse_control(self, stmt: _Statement) -> ControlOrder:
        """Parse 'control <hull>'."""
        hull = stmt.expect("expected ship or colony id", *HULL_IDS)
        stmt.expect_end("unexpected input following ship or colony id")
        return ControlOrder(line=stmt.line, hull_id=hull.text)


def parse_orders(text: str) -> ParseResult:
    """Parse an order submission with a fresh parser."""
    return OrderParser().parse(text)
