import math
import random
import unittest

from polycalc.parse import parse
from polycalc.polynomials import (
    Polynomial, InvalidOperandError,
    add, subtract, multiply, evaluate, format_polynomial)

def random_polynomial(rng, max_degree=6, max_terms=4):
    """A sparse polynomial with small integer-valued coefficients, so that
    sums and products are exact in floating point."""
    terms = {}
    for _ in range(rng.randint(1, max_terms)):
        terms[rng.randint(0, max_degree)] = float(rng.choice([-5, -3, -2, -1, 1, 2, 3, 4, 7]))
    return Polynomial(terms)

class TestPolynomials(unittest.TestCase):

    def setUp(self):
        self.rng = random.Random(20240611)

    def test_sorting(self):
        self.assertLess(Polynomial({0: 2019, 1: 944, 2: 95}), Polynomial({0: 2012, 1: 945, 2: 95}))
        self.assertGreater(Polynomial({0: 2012, 1: 945, 2: 95}), Polynomial({0: 2019, 1: 944, 2: 95}))
        self.assertLess(Polynomial({1: 100}), Polynomial({2: 1}))

    def test_sorting_against_plain_mappings(self):
        assert Polynomial({1: 1.0}) < {2: 1.0}
        assert Polynomial({2: 1.0}) > {1: 5.0}
        assert Polynomial({1: 1.0}) <= {1: 1.0}
        with self.assertRaises(TypeError):
            Polynomial({1: 1.0}) < 3

    def test_mapping_protocol(self):
        p = Polynomial({2: 2, 0: -5})
        self.assertEqual(len(p), 2)
        self.assertEqual(p[2], 2.0)
        self.assertEqual(sorted(p), [0, 2])
        self.assertEqual(p.get_coefficient(1), 0.0)
        assert p == {2: 2.0, 0: -5.0}
        assert hash(p) == hash(Polynomial({0: -5.0, 2: 2.0}))

    def test_degree(self):
        self.assertEqual(Polynomial({3: 1, 7: 2}).degree, 7)
        self.assertEqual(Polynomial({7: 2}).leading_coefficient, 2.0)
        self.assertEqual(Polynomial.ZERO.degree, 0)
        assert Polynomial.ZERO.leading_coefficient is None

    def test_rejects_bad_terms(self):
        with self.assertRaises(InvalidOperandError):
            Polynomial({-1: 1.0})
        with self.assertRaises(InvalidOperandError):
            Polynomial({1.5: 1.0})
        with self.assertRaises(InvalidOperandError):
            Polynomial({1: "2"})

    def test_add_prunes(self):
        self.assertEqual(add(parse("x+1"), parse("x-1")), {1: 2.0})

    def test_subtract(self):
        self.assertEqual(subtract(parse("3x^2 + x"), parse("x^2 + x + 4")), {2: 2.0, 0: -4.0})

    def test_multiply(self):
        self.assertEqual(multiply(parse("x+1"), parse("x-1")), {2: 1.0, 0: -1.0})
        self.assertEqual(multiply(parse("2x^3"), parse("-3x^4")), {7: -6.0})
        self.assertEqual(multiply(parse("x+1"), Polynomial.ZERO), {})

    def test_operators(self):
        p, q = parse("x+1"), parse("x-1")
        self.assertEqual(p + q, add(p, q))
        self.assertEqual(p - q, {0: 2.0})
        self.assertEqual(p * q, multiply(p, q))
        self.assertEqual(2 * p, {1: 2.0, 0: 2.0})
        self.assertEqual(-p, {1: -1.0, 0: -1.0})
        self.assertEqual(p(3), 4.0)

    def test_operands_are_not_mutated(self):
        p, q = parse("x+1"), parse("x-1")
        add(p, q)
        subtract(p, q)
        multiply(p, q)
        self.assertEqual(p, {1: 1.0, 0: 1.0})
        self.assertEqual(q, {1: 1.0, 0: -1.0})

    def test_plain_dicts_are_accepted(self):
        self.assertEqual(add({1: 1.0}, {1: 2.0, 0: 1.0}), {1: 3.0, 0: 1.0})

    def test_invalid_operand(self):
        p = parse("x")
        for f in (add, subtract, multiply):
            with self.assertRaises(InvalidOperandError):
                f(p, None)
            with self.assertRaises(InvalidOperandError):
                f(None, p)
        with self.assertRaises(InvalidOperandError):
            evaluate(None, 1.0)
        with self.assertRaises(InvalidOperandError):
            evaluate(p, "1.0")

    def test_evaluate(self):
        self.assertEqual(evaluate(parse("2x^2+3x-5"), 2.0), 9.0)
        self.assertEqual(evaluate(parse("x^0 + 4"), 0.0), 5.0)
        self.assertEqual(evaluate(Polynomial.ZERO, 3.0), 0.0)

    def test_evaluate_overflows_to_infinity(self):
        self.assertEqual(evaluate(parse("x^400"), 10.0), math.inf)
        self.assertEqual(evaluate(parse("-2x^401"), 10.0), -math.inf)
        self.assertEqual(evaluate(parse("x^401"), -10.0), -math.inf)
        self.assertEqual(evaluate(parse("x^400"), -10.0), math.inf)
        self.assertEqual(evaluate(parse("x^400 + 0x^500"), 10.0), math.inf)
        self.assertEqual(evaluate(parse("x"), 10 ** 400), math.inf)
        self.assertEqual(evaluate(parse("x^2"), -10 ** 400), math.inf)
        self.assertEqual(evaluate(parse("x^400"), 0.1), 0.0)

    def test_evaluate_matches_direct_sum(self):
        for _ in range(50):
            p = random_polynomial(self.rng)
            v = self.rng.uniform(-3, 3)
            expected = sum(c * v ** e for e, c in p.items())
            self.assertAlmostEqual(evaluate(p, v), expected)

    def test_identity(self):
        for _ in range(50):
            p = random_polynomial(self.rng).pruned()
            self.assertEqual(add(p, Polynomial.ZERO), p)
            self.assertEqual(subtract(p, p), {})

    def test_commutativity(self):
        for _ in range(50):
            p = random_polynomial(self.rng)
            q = random_polynomial(self.rng)
            self.assertEqual(add(p, q), add(q, p))
            self.assertEqual(multiply(p, q), multiply(q, p))

    def test_results_have_no_zero_terms(self):
        for _ in range(50):
            p = random_polynomial(self.rng)
            q = random_polynomial(self.rng)
            for r in (add(p, q), subtract(p, q), multiply(p, q)):
                assert all(c != 0 for c in r.values()), r

class TestFormatting(unittest.TestCase):

    def test_format(self):
        self.assertEqual(format_polynomial(parse("2x^2+3x-5")), "2.0x^2 + 3.0x -5.0")
        self.assertEqual(format_polynomial(parse("x^3 - x + 1")), "x^3 -1.0x + 1.0")
        self.assertEqual(format_polynomial(parse("1")), "1.0")
        self.assertEqual(str(parse("x")), "x")

    def test_format_skips_zero_terms(self):
        self.assertEqual(format_polynomial(parse("0x^2 + x")), "x")

    def test_format_non_finite(self):
        self.assertEqual(format_polynomial({2: math.inf, 0: -math.inf}), "infx^2 -inf")
        self.assertEqual(format_polynomial({1: math.nan}), "nanx")

    def test_format_zero(self):
        self.assertEqual(format_polynomial(Polynomial.ZERO), "0")

    def test_round_trip(self):
        rng = random.Random(7)
        for _ in range(100):
            p = random_polynomial(rng)
            q = random_polynomial(rng)
            for r in (add(p, q), subtract(p, q), multiply(p, q)):
                self.assertEqual(parse(format_polynomial(r)).pruned(), r)

    def test_round_trip_fractional(self):
        r = multiply(parse("0.1x + 1e-07"), parse("3.3x^2 - 12345.678"))
        self.assertEqual(parse(format_polynomial(r)), r)
