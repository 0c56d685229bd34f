"""Tests for the order language tokenizer."""

from wraith.interface.tokens import Tokenizer, TokenKind, classify_word


def kinds(text):
    return [token.kind for token in Tokenizer(text)]


def test_classify_ids_are_upper_cased():
    """Colony, ship and deposit ids are recognized in any case."""
    assert classify_word("c12", 1).kind == TokenKind.COLONY_ID
    assert classify_word("c12", 1).text == "C12"
    assert classify_word("S7", 1).kind == TokenKind.SHIP_ID
    token = classify_word("dp3", 1)
    assert token.kind == TokenKind.DEPOSIT_ID
    assert token.text == "DP3"


def test_classify_integers_ignore_separators():
    """Commas and underscores are digit group separators."""
    assert classify_word("2,000", 1).integer == 2000
    assert classify_word("1_500", 1).integer == 1500
    assert classify_word("500", 1).kind == TokenKind.INTEGER


def test_grouped_integer_is_one_token():
    tokens = list(Tokenizer("assemble C4 1_500 mine-1 DP2\n"))
    assert tokens[2].kind == TokenKind.INTEGER
    assert tokens[2].text == "1_500"
    assert tokens[2].integer == 1500
    assert tokens[3].kind == TokenKind.MINE_UNIT


def test_integer_too_long_to_convert_is_text():
    token = classify_word("9" * 5000, 1)
    assert token.kind == TokenKind.TEXT
    assert token.integer == 0


def test_classify_decimal_number():
    token = classify_word("2.5", 1)
    assert token.kind == TokenKind.NUMBER
    assert token.number == 2.5


def test_classify_keywords_case_insensitive():
    assert classify_word("ASSEMBLE", 1).kind == TokenKind.ASSEMBLE
    assert classify_word("Name", 1).kind == TokenKind.NAME
    assert classify_word("control", 1).kind == TokenKind.CONTROL
    assert classify_word("Factory-1", 1).kind == TokenKind.FACTORY_UNIT
    assert classify_word("life-support-2", 1).kind == TokenKind.LIFE_SUPPORT_UNIT
    assert classify_word("hyper-drive-3", 1).kind == TokenKind.HYPER_DRIVE_UNIT
    assert classify_word("structural", 1).kind == TokenKind.STRUCTURAL_UNIT
    assert classify_word("consumer-goods", 1).kind == TokenKind.CONSUMER_GOODS_UNIT
    assert classify_word("research", 1).kind == TokenKind.RESEARCH_UNIT


def test_classify_unknown_word_is_lower_cased_text():
    token = classify_word("Frobnicate", 1)
    assert token.kind == TokenKind.TEXT
    assert token.text == "frobnicate"


def test_untiered_keyword_without_level_is_text():
    """A tiered unit needs its tech level."""
    assert classify_word("factory", 1).kind == TokenKind.TEXT


def test_statement_tokens():
    assert kinds("assemble C1 500 factory-1 structural\n") == [
        TokenKind.ASSEMBLE,
        TokenKind.COLONY_ID,
        TokenKind.INTEGER,
        TokenKind.FACTORY_UNIT,
        TokenKind.STRUCTURAL_UNIT,
        TokenKind.EOL,
        TokenKind.EOF,
    ]


def test_comments_run_to_end_of_line():
    assert kinds("; nothing to see\ncontrol C1 ; claim it\n") == [
        TokenKind.EOL,
        TokenKind.CONTROL,
        TokenKind.COLONY_ID,
        TokenKind.EOL,
        TokenKind.EOF,
    ]


def test_line_numbers():
    tokens = list(Tokenizer("control C1\n\nname S7 \"x\"\n"))
    assert tokens[0].line == 1
    assert tokens[2].kind == TokenKind.EOL
    assert tokens[2].line == 1
    name = [t for t in tokens if t.kind == TokenKind.NAME][0]
    assert name.line == 3


def test_quoted_text_normalizes_tabs_and_controls():
    tokens = list(Tokenizer('name S7 "In\ttre\x07pid"\n'))
    quoted = tokens[2]
    assert quoted.kind == TokenKind.QUOTED_TEXT
    assert quoted.text == '"In trepid"'


def test_unterminated_quote_stops_at_end_of_line():
    tokens = list(Tokenizer('name S7 "Intrepid\ncontrol C1\n'))
    assert tokens[2].kind == TokenKind.QUOTED_TEXT
    assert tokens[2].text == '"Intrepid'
    assert tokens[3].kind == TokenKind.EOL
    assert tokens[4].kind == TokenKind.CONTROL


def test_block_delimiters():
    assert kinds("{ }") == [TokenKind.BLOCK_OPEN, TokenKind.BLOCK_CLOSE, TokenKind.EOF]


def test_stray_punctuation_is_text():
    tokens = list(Tokenizer("control C1 #\n"))
    assert tokens[2].kind == TokenKind.TEXT
    assert tokens[2].text == "#"


class TestPushback:
    """Tokens pushed back are returned again, most recent first."""

    def setup_method(self):
        self.z = Tokenizer("control C1\n")

    def test_unget_returns_token_again(self):
        first = self.z.next()
        self.z.unget(first)
        assert self.z.next() is first

    def test_eof_is_sticky_and_not_pushed_back(self):
        while self.z.next().kind != TokenKind.EOF:
            pass
        eof = self.z.next()
        assert eof.kind == TokenKind.EOF
        self.z.unget(eof)
        assert self.z.is_eof()
        assert self.z.next().kind == TokenKind.EOF

    def test_is_eof_false_while_pushback_pending(self):
        tokens = [self.z.next() for _ in range(3)]
        assert self.z.is_eof()
        self.z.unget(tokens[-1])
        assert not self.z.is_eof()
