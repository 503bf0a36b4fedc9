# coding: utf-8


__all__ = ["ValuesTestCase"]


import math
import decimal
import warnings
import unittest

from sciround import (
    DecimalValue, CentralValue, Uncertainty, Sign, ErrorShape, RoundingError, RoundingWarning,
    MAX_MANTISSA, parse_decimal, digit_count, reduce_to_three_significant_digits, pdg_rule,
    pdg_round, two_digit_round, round_to_exponent, quadrature_sum, symmetrize_errors,
    ensure_uncertainties, group_labels,
)


def unc(*tokens):
    return [Uncertainty.from_string(t) for t in tokens]


class ValuesTestCase(unittest.TestCase):

    def test_parse_decimal(self):
        self.assertEqual(parse_decimal("27.432"), ("", 27432, -3))
        self.assertEqual(parse_decimal("-0.05"), ("-", 5, -2))
        self.assertEqual(parse_decimal(" +12 "), ("+", 12, 0))
        self.assertEqual(parse_decimal("12."), ("", 12, 0))
        self.assertEqual(parse_decimal(".5"), ("", 5, -1))
        self.assertEqual(parse_decimal("0.00"), ("", 0, -2))

        for token in ["", "  ", "1.2.3", "12a", "1e5", "+", "-", ".", "1,000", "- 1"]:
            with self.assertRaises(RoundingError):
                parse_decimal(token)

        with self.assertRaises(TypeError):
            parse_decimal(12)

    def test_parse_overflow(self):
        self.assertEqual(parse_decimal("18446744073709551615")[1], MAX_MANTISSA)
        self.assertEqual(parse_decimal("1844674407370955161.5")[1:], (MAX_MANTISSA, -1))

        with self.assertRaises(RoundingError):
            parse_decimal("18446744073709551616")
        with self.assertRaises(RoundingError):
            parse_decimal("0.99999999999999999999")

    def test_digit_count(self):
        self.assertEqual(digit_count(0), 1)
        self.assertEqual(digit_count(9), 1)
        self.assertEqual(digit_count(10), 2)
        self.assertEqual(digit_count(12345), 5)
        self.assertEqual(CentralValue.from_string("27.432").digits, 5)

        with self.assertRaises(ValueError):
            digit_count(-1)

    def test_digit_count_of_tokens(self):
        tokens = [
            "1", "9", "10", "27.432", "12300", "100.0", "3.14159", "-42.0", "+7.77", "5.",
            "18446744073709551615",
        ]
        for token in tokens:
            n = sum(c.isdigit() for c in token)
            self.assertEqual(CentralValue.from_string(token).digits, n)
            self.assertEqual(Uncertainty.from_string(token).digits, n)

    def test_central_value(self):
        c = CentralValue.from_string("-0.05")
        self.assertEqual(c.sign, Sign.NEGATIVE)
        self.assertEqual(c.sign, "negative")
        self.assertEqual((c.mantissa, c.exponent), (5, -2))
        self.assertEqual(str(c), "-0.05")
        self.assertTrue(c.negative)

        c = CentralValue.from_string("+1.5")
        self.assertEqual(c.sign, Sign.NON_NEGATIVE)
        self.assertEqual(str(c), "1.5")

        with self.assertRaises(ValueError):
            CentralValue(1, 0, "positive")

    def test_uncertainty(self):
        self.assertEqual(Uncertainty.from_string("0.3").shape, ErrorShape.SYMMETRIC)
        self.assertEqual(Uncertainty.from_string("+0.3").shape, ErrorShape.UPPER)
        self.assertEqual(Uncertainty.from_string("-0.3").shape, ErrorShape.LOWER)
        self.assertEqual(str(Uncertainty.from_string("+0.3")), "0.3")
        self.assertEqual(str(Uncertainty.from_string("-0.3")), "-0.3")
        self.assertFalse(Uncertainty.from_string("0.3").is_asymmetric)
        self.assertTrue(Uncertainty.from_string("-0.3").is_asymmetric)

        u = Uncertainty.from_numeric(-0.3, ErrorShape.LOWER)
        self.assertEqual((u.mantissa, u.exponent, u.shape), (3, -1, ErrorShape.LOWER))
        u = Uncertainty.from_numeric(-0.3)
        self.assertEqual(u.shape, ErrorShape.LOWER)
        u = Uncertainty.from_anything("-0.3", shape="upper")
        self.assertEqual((str(u), u.shape), ("0.3", ErrorShape.UPPER))

        with self.assertRaises(TypeError):
            Uncertainty.from_anything(CentralValue(1, 0))

    def test_forced_shape(self):
        u = Uncertainty.from_anything("+0.52", shape=ErrorShape.LOWER)
        self.assertEqual((u.mantissa, u.exponent, u.shape), (52, -2, ErrorShape.LOWER))
        u = Uncertainty.from_anything(" 0.48 ", shape=ErrorShape.UPPER)
        self.assertEqual((u.mantissa, u.exponent, u.shape), (48, -2, ErrorShape.UPPER))

        # only a single leading sign is accepted
        for token in ["+-0.52", "--0.48", "++1", "-+1", "+ 1"]:
            with self.assertRaises(RoundingError):
                Uncertainty.from_anything(token, shape=ErrorShape.UPPER)
            with self.assertRaises(RoundingError):
                ensure_uncertainties([(token, "0.1")])
            with self.assertRaises(RoundingError):
                ensure_uncertainties([("0.1", token)])

    def test_from_numeric(self):
        c = CentralValue.from_numeric(1e-05)
        self.assertEqual((c.mantissa, c.exponent), (1, -5))

        c = CentralValue.from_numeric(0.1)
        self.assertEqual((c.mantissa, c.exponent), (1, -1))

        c = CentralValue.from_numeric(12)
        self.assertEqual((c.mantissa, c.exponent), (12, 0))

        c = CentralValue.from_numeric(decimal.Decimal("2.50"))
        self.assertEqual((c.mantissa, c.exponent), (250, -2))

        c = CentralValue.from_numeric(-27.432)
        self.assertEqual(str(c), "-27.432")

        with self.assertRaises(TypeError):
            CentralValue.from_numeric(True)
        with self.assertRaises(RoundingError):
            CentralValue.from_numeric(float("nan"))
        with self.assertRaises(RoundingError):
            CentralValue.from_numeric(float("inf"))

    def test_fields(self):
        v = DecimalValue(123, -1)
        with self.assertRaises(ValueError):
            v.mantissa = -1
        with self.assertRaises(RoundingError):
            v.mantissa = MAX_MANTISSA + 1
        with self.assertRaises(TypeError):
            v.mantissa = "1"
        with self.assertRaises(TypeError):
            v.exponent = 1.5

    def test_to_string(self):
        self.assertEqual(CentralValue(123, 2).to_string(), "12300")
        self.assertEqual(CentralValue(123, 2).to_string(factorize_powers=True), "123")
        self.assertEqual(CentralValue(123, -1).to_string(factorize_powers=True), "123")
        self.assertEqual(CentralValue(123, -5).to_string(), "0.00123")
        self.assertEqual(CentralValue(123, -3).to_string(), "0.123")
        self.assertEqual(CentralValue(123, -1).to_string(), "12.3")
        self.assertEqual(CentralValue(0, -2).to_string(), "0.00")
        self.assertEqual(CentralValue(123, -1, Sign.NEGATIVE).to_string(), "-12.3")
        self.assertEqual(Uncertainty(5, 0, ErrorShape.LOWER).to_string(), "-5")

    def test_integer_round_trip(self):
        text = CentralValue(MAX_MANTISSA, 0).to_string()
        self.assertEqual(CentralValue.from_string(text).to_string(), text)
        self.assertEqual(CentralValue(0, 0).to_string(), "0")

        for m in [1, 7, 12, 120, 999, 12345, 18446744073709551]:
            for e in range(4):
                text = CentralValue(m, e).to_string()
                self.assertNotIn(".", text)
                self.assertEqual(CentralValue.from_string(text).to_string(), text)

                text = CentralValue(m, e, Sign.NEGATIVE).to_string()
                self.assertEqual(CentralValue.from_string(text).to_string(), text)

                text = Uncertainty(m, e, ErrorShape.LOWER).to_string()
                self.assertEqual(Uncertainty.from_string(text).to_string(), text)

    def test_conversion(self):
        c = CentralValue(5, -2, Sign.NEGATIVE)
        self.assertEqual(c.to_decimal(), decimal.Decimal("-0.05"))
        self.assertEqual(c.to_float(), -0.05)
        self.assertEqual(float(Uncertainty(25, -1)), 2.5)

    def test_copy_and_compare(self):
        c = CentralValue(5, -2, Sign.NEGATIVE)
        c2 = c.copy(mantissa=6)
        self.assertIsInstance(c2, CentralValue)
        self.assertEqual((c2.mantissa, c2.exponent, c2.sign), (6, -2, Sign.NEGATIVE))
        self.assertEqual(c.mantissa, 5)

        self.assertEqual(c, c.copy())
        self.assertNotEqual(c, c2)
        self.assertNotEqual(CentralValue(1, 0), Uncertainty(1, 0))
        self.assertNotEqual(Uncertainty(1, 0), Uncertainty(1, 0, ErrorShape.UPPER))
        self.assertEqual(len({Uncertainty(1, 0), Uncertainty(1, 0)}), 1)

    def test_reduce_to_three_significant_digits(self):
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            v = reduce_to_three_significant_digits(Uncertainty(12345, -3))
            self.assertEqual(len(w), 0)
        self.assertEqual((v.mantissa, v.exponent), (123, -1))

        with self.assertWarns(RoundingWarning):
            v = reduce_to_three_significant_digits(Uncertainty(5, 0))
        self.assertEqual((v.mantissa, v.exponent), (500, -2))

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            reduce_to_three_significant_digits(Uncertainty(5, 0), quiet=True)
            self.assertEqual(len(w), 0)

    def test_pdg_rule(self):
        def rule(m):
            v = pdg_rule(Uncertainty(m, 0))
            return v.mantissa, v.exponent

        self.assertEqual(rule(100), (10, 1))
        self.assertEqual(rule(345), (35, 1))
        self.assertEqual(rule(354), (35, 1))
        self.assertEqual(rule(355), (4, 2))
        self.assertEqual(rule(949), (9, 2))
        self.assertEqual(rule(950), (10, 2))
        self.assertEqual(rule(999), (10, 2))

        with self.assertRaises(RoundingError):
            rule(12)
        with self.assertRaises(RoundingError):
            rule(1000)

        # result is never longer than two digits
        for m in range(100, 1000):
            self.assertLessEqual(digit_count(rule(m)[0]), 2)

    def test_pdg_round(self):
        def r(s):
            return str(pdg_round(Uncertainty.from_string(s)))

        self.assertEqual(r("0.352"), "0.35")
        self.assertEqual(r("0.835"), "0.8")
        self.assertEqual(r("0.962"), "1.0")
        self.assertEqual(r("2.134"), "2.1")
        self.assertEqual(r("-0.292"), "-0.29")

        v = pdg_round(CentralValue.from_string("-27.432"))
        self.assertEqual(v.sign, Sign.NEGATIVE)
        self.assertEqual(str(v), "-27")

    def test_two_digit_round(self):
        def r(s):
            return two_digit_round(Uncertainty.from_string(s))

        self.assertEqual(str(r("0.125")), "0.13")
        self.assertEqual(str(r("0.995")), "1.0")
        self.assertEqual((r("0.995").mantissa, r("0.995").exponent), (10, -1))
        self.assertEqual(str(r("9.96")), "10")
        self.assertEqual(str(r("1234")), "1200")
        self.assertEqual(str(r("0.3134")), "0.31")

    def test_two_digit_round_range(self):
        for m in range(100, 1000):
            for e in [-4, 0, 2]:
                v = two_digit_round(Uncertainty(m, e))
                expected = (m + 5) // 10
                if expected == 100:
                    self.assertEqual((v.mantissa, v.exponent), (10, e + 2))
                else:
                    self.assertEqual((v.mantissa, v.exponent), (expected, e + 1))
                self.assertEqual(digit_count(v.mantissa), 2)

                # deterministic and independent of the shape
                self.assertEqual(two_digit_round(Uncertainty(m, e)), v)
                lower = two_digit_round(Uncertainty(m, e, ErrorShape.LOWER))
                self.assertEqual((lower.mantissa, lower.exponent), (v.mantissa, v.exponent))

        # padded inputs
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RoundingWarning)
            for m in range(1, 100):
                v = two_digit_round(Uncertainty(m, 0))
                self.assertEqual(v.to_decimal(), decimal.Decimal(m))

    def test_round_to_exponent(self):
        def r(s, e):
            return str(round_to_exponent(CentralValue.from_string(s), e))

        self.assertEqual(r("27.432", -1), "27.4")
        self.assertEqual(r("0.999", -1), "1.0")
        self.assertEqual(r("0.125", -2), "0.13")
        self.assertEqual(r("-27.462", -2), "-27.46")
        self.assertEqual(r("27.4", -1), "27.4")
        self.assertEqual(r("0.00", -1), "0.0")

        with self.assertRaises(RoundingError):
            r("27", -1)

    def test_quadrature_sum(self):
        total = quadrature_sum([Uncertainty(3, 0), Uncertainty(4, 0)])
        self.assertEqual(total.to_float(), 5.0)
        self.assertEqual(total.shape, ErrorShape.SYMMETRIC)

        single = Uncertainty(3, -1, ErrorShape.UPPER)
        self.assertIs(quadrature_sum([single]), single)

        total = quadrature_sum(unc("+0.4", "-0.2"))
        self.assertAlmostEqual(total.to_float(), math.sqrt(0.06))
        self.assertFalse(total.is_asymmetric)

        total = quadrature_sum(unc("+0.4", "-0.2", "0.1"))
        self.assertAlmostEqual(total.to_float(), math.sqrt(0.07))

    def test_quadrature_sum_unpaired(self):
        with self.assertWarns(RoundingWarning):
            quadrature_sum(unc("+0.4", "0.3"))

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            quadrature_sum(unc("+0.4", "0.3"), quiet=True)
            self.assertEqual(len(w), 0)

    def test_symmetrize_errors(self):
        errors = unc("+0.30", "-0.31", "0.1")
        sym = symmetrize_errors(errors)
        self.assertEqual([str(e) for e in sym], ["0.305", "0.1"])
        self.assertEqual(sym[0].shape, ErrorShape.SYMMETRIC)

        # input untouched and idempotent
        self.assertEqual(len(errors), 3)
        self.assertEqual(symmetrize_errors(sym), sym)

        # threshold
        errors = unc("+0.5", "-0.4")
        self.assertEqual(symmetrize_errors(errors), errors)
        self.assertEqual([str(e) for e in symmetrize_errors(errors, threshold=0.3)], ["0.45"])

        # multiple pairs
        sym = symmetrize_errors(unc("+1.0", "-1.02", "0.5", "+0.20", "-0.21"))
        self.assertEqual([str(e) for e in sym], ["1.01", "0.5", "0.205"])

    def test_symmetrize_errors_unpaired(self):
        errors = unc("0.1", "-0.3")
        with self.assertWarns(RoundingWarning):
            sym = symmetrize_errors(errors)
        self.assertEqual(sym, errors)

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            symmetrize_errors(errors, quiet=True)
            self.assertEqual(len(w), 0)

    def test_group_labels(self):
        uncs = unc("+0.31", "-0.29", "0.01")
        self.assertEqual(group_labels(["stat", "syst", "theo"], uncs), ["stat", "theo"])
        self.assertEqual(group_labels(["stat", "theo"], uncs), ["stat", "theo"])
        self.assertEqual(group_labels(["stat"], uncs), ["stat"])
        self.assertEqual(group_labels(["a", "b", "c", "d"], uncs), ["a", "b"])
        self.assertEqual(group_labels([], uncs), [])
        self.assertIsNone(group_labels(None, uncs))

        uncs = unc("0.1", "0.2")
        self.assertEqual(group_labels(["a", "b"], uncs), ["a", "b"])

        # resolved labels survive the merge of a pair
        uncs = unc("+0.30", "-0.31", "0.1")
        labels = group_labels(["stat", "syst", "theo"], uncs)
        self.assertEqual(len(labels), len(symmetrize_errors(uncs)))
