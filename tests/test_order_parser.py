"""Tests for the order language parser."""

import pytest

from wraith.interface.order_parser import ErrorType, OrderParser, parse_orders
from wraith.models.order import AssembleOrder, ControlOrder, NameOrder

VALID_LINES = [
    "assemble C1 500 factory-1 structural",
    "assemble C2 2000 farm-1",
    "assemble C3 1500 mine-2 DP3",
    'name S7 "Intrepid"',
    "control C12",
]


def test_scenario_assemble_factory_group():
    """One assemble order for a factory group making structural."""
    result = parse_orders("assemble C1 500 factory-1 structural\n")

    assert result.errors == []
    assert len(result.orders) == 1
    order = result.orders[0]
    assert isinstance(order, AssembleOrder)
    assert order.hull_id == "C1"
    assert order.quantity == 500
    assert order.unit == "factory-1"
    assert order.product == "structural"
    assert order.line == 1


def test_scenario_name_ship():
    result = parse_orders('name S7 "Intrepid"\n')

    assert result.errors == []
    assert len(result.orders) == 1
    order = result.orders[0]
    assert isinstance(order, NameOrder)
    assert order.hull_id == "S7"
    assert order.name == "Intrepid"


def test_assemble_mine_group():
    order = parse_orders("assemble c4 1_500 mine-1 dp2\n").orders[0]
    assert order.hull_id == "C4"
    assert order.quantity == 1500
    assert order.unit == "mine-1"
    assert order.deposit_id == "DP2"
    assert order.product is None
    assert order.group_kind == "mine"


def test_assemble_farm_group():
    order = parse_orders("assemble S2 2,000 farm-2\n").orders[0]
    assert order.hull_id == "S2"
    assert order.quantity == 2000
    assert order.unit == "farm-2"
    assert order.product is None
    assert order.deposit_id is None


def test_control_order():
    order = parse_orders("control S3\n").orders[0]
    assert isinstance(order, ControlOrder)
    assert order.hull_id == "S3"
    assert order.targets_ship


def test_last_line_without_newline():
    result = parse_orders("control C1")
    assert len(result.orders) == 1
    assert result.errors == []


def test_blank_lines_and_comments_are_ignored():
    result = parse_orders("\n; turn 1 orders\n\ncontrol C1 ; mine now\n\n")
    assert len(result.orders) == 1
    assert result.orders[0].line == 4


def test_orders_keep_input_order():
    result = parse_orders("\n".join(VALID_LINES) + "\n")
    assert [order.line for order in result.orders] == [1, 2, 3, 4, 5]


@pytest.mark.parametrize("line", VALID_LINES)
def test_round_trip(line):
    """Formatting a parsed order gives back the normalized input."""
    order = parse_orders(line + "\n").orders[0]
    assert str(order) == line


def test_round_trip_normalizes_case_and_spacing():
    order = parse_orders("  ASSEMBLE   c1  1,000   Factory-2   Consumer-Goods\n").orders[0]
    assert str(order) == "assemble C1 1000 factory-2 consumer-goods"


class TestErrorRecovery:
    """A bad line costs one error and never the lines after it."""

    def setup_method(self):
        self.parser = OrderParser()

    @pytest.mark.parametrize(
        "bad_line",
        [
            "frobnicate C1",
            "assemble",
            "assemble X1 500 factory-1 structural",
            "assemble C1 lots factory-1 structural",
            "assemble C1 500 sensor-1",
            "assemble C1 500 factory-1",
            "assemble C1 500 factory-1 structural please",
            "assemble C1 500 mine-1",
            "assemble C1 500 farm-1 DP1",
            "name S7 Intrepid",
            'name S7 "Intrepid" now',
            "control",
            "control DP1",
            "} {",
        ],
    )
    def test_one_bad_line_then_valid_lines(self, bad_line):
        text = bad_line + "\n" + "\n".join(VALID_LINES) + "\n"
        result = self.parser.parse(text)

        assert len(result.orders) == len(VALID_LINES)
        assert len(result.errors) == 1
        assert result.errors[0].line == 1
        assert len(result.rejected) == 1

    def test_bad_line_in_the_middle(self):
        lines = VALID_LINES[:2] + ["assemble C1 500 500 500 500"] + VALID_LINES[2:]
        result = self.parser.parse("\n".join(lines) + "\n")

        assert len(result.orders) == len(VALID_LINES)
        assert [e.line for e in result.errors] == [3]

    def test_oversized_quantity_is_rejected(self):
        text = "assemble C1 " + "9" * 5000 + " farm-1\ncontrol C1\n"
        result = self.parser.parse(text)

        assert [str(order) for order in result.orders] == ["control C1"]
        assert len(result.errors) == 1
        assert result.errors[0].line == 1
        assert result.errors[0].error_type == ErrorType.SYNTAX_ERROR
        assert "expected quantity" in result.errors[0].message

    def test_unknown_command(self):
        result = self.parser.parse("launch S1\n")
        error = result.errors[0]
        assert error.error_type == ErrorType.UNKNOWN_COMMAND
        assert "launch" in error.message

    def test_syntax_error_names_offending_token(self):
        result = self.parser.parse("assemble C1 lots factory-1 structural\n")
        error = result.errors[0]
        assert error.error_type == ErrorType.SYNTAX_ERROR
        assert "expected quantity" in error.message
        assert "'lots'" in error.message

    def test_missing_token_reports_end_of_line(self):
        result = self.parser.parse("control\n")
        assert "end of line" in result.errors[0].message

    def test_rejected_tokens_are_kept(self):
        result = self.parser.parse("assemble C1 lots of factories\n")
        rejected = result.rejected[0]
        assert rejected.tokens == ["assemble", "C1", "lots", "of", "factories"]

    def test_empty_name_is_rejected(self):
        result = self.parser.parse('name C1 "   "\n')
        assert result.orders == []
        assert len(result.errors) == 1

    def test_echo_annotates_rejected_lines(self):
        result = self.parser.parse("control C1\nlaunch S1\n")
        lines = result.echo().splitlines()

        assert lines[0] == "control C1"
        assert lines[1].startswith("launch S1  ;; ")
        assert "Unknown command" in lines[1]
