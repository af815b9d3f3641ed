import math
import unittest

from silly.lang.error import SillyRuntimeError
from silly.lang.values import BooleanValue, CharValue, Kind, ListValue, NumberValue, StringValue


class RenderingTestCase(unittest.TestCase):

    def test_number(self):
        cases = {
            42.0: "42",
            3.5: "3.5",
            -2.0: "-2",
            0.0: "0",
            0.1: "0.1",
            math.inf: "Infinity",
            -math.inf: "-Infinity",
            math.nan: "NaN",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(NumberValue(case)), case)

    def test_scalars(self):
        self.assertEqual("true", str(BooleanValue(True)))
        self.assertEqual("false", str(BooleanValue(False)))
        self.assertEqual("x", str(CharValue("x")))

    def test_list(self):
        cases = {
            ListValue(): "[]",
            ListValue((NumberValue(1.0), NumberValue(2.5))): "[1 2.5]",
            ListValue((StringValue.of("ab"), CharValue("c"), BooleanValue(False))): "[\"ab\" 'c' false]",
            ListValue((ListValue((NumberValue(1.0),)), ListValue())): "[[1] []]",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(case), expected)

    def test_string(self):
        self.assertEqual("hello", str(StringValue.of("hello")))
        self.assertEqual("", str(StringValue.of("")))
        self.assertEqual((CharValue("h"), CharValue("i")), StringValue.of("hi").elements)


class CompareTestCase(unittest.TestCase):

    def test_same_kind(self):
        cases = [
            (NumberValue(1.0), NumberValue(2.0), -1),
            (NumberValue(2.0), NumberValue(2.0), 0),
            (BooleanValue(True), BooleanValue(False), 1),
            (CharValue("a"), CharValue("b"), -1),
            (StringValue.of("abc"), StringValue.of("abd"), -1),
            (StringValue.of("b"), StringValue.of("abc"), 1),
            (ListValue((NumberValue(1.0),)), ListValue((NumberValue(1.0),)), 0),
        ]
        for left, right, expected in cases:
            self.assertEqual(expected, left.compare_to(right), (left, right))

    def test_nan_orders_above_everything(self):
        nan = NumberValue(math.nan)
        self.assertEqual(0, nan.compare_to(NumberValue(math.nan)))
        self.assertGreater(nan.compare_to(NumberValue(math.inf)), 0)
        self.assertLess(NumberValue(1.0).compare_to(nan), 0)
        self.assertNotEqual(0, nan.compare_to(NumberValue(1.0)))

    def test_list_orders_by_rendering(self):
        # "[10]" < "[9]" as text even though 10 > 9
        ten = ListValue((NumberValue(10.0),))
        nine = ListValue((NumberValue(9.0),))
        self.assertLess(ten.compare_to(nine), 0)

    def test_kind_mismatch(self):
        should_raise = [
            (NumberValue(1.0), BooleanValue(True)),
            (CharValue("a"), StringValue.of("a")),
            (ListValue(), StringValue.of("")),
        ]
        for left, right in should_raise:
            self.assertRaises(SillyRuntimeError, left.compare_to, right)

    def test_kinds(self):
        cases = {
            Kind.NUMBER: NumberValue(1.0),
            Kind.BOOLEAN: BooleanValue(True),
            Kind.CHARACTER: CharValue("c"),
            Kind.LIST: ListValue(),
            Kind.STRING: StringValue.of("s"),
        }
        for kind, value in cases.items():
            self.assertIs(kind, value.kind)

    def test_is_integer(self):
        should_pass = [0.0, 3.0, -4.0]
        for case in should_pass:
            self.assertTrue(NumberValue(case).is_integer, case)

        should_fail = [1.5, math.inf, math.nan]
        for case in should_fail:
            self.assertFalse(NumberValue(case).is_integer, case)


if __name__ == '__main__':
    unittest.main()
