"""
Randomized Enclosure Soundness Tests

Sample points inside random enclosures and check that the scalar result at
every sample lies inside the computed enclosure.
"""

import mpmath
import numpy as np
import pytest
from scipy import special
import rflint
from rflint import Enclosure


N_BOXES = 200
N_SAMPLES = 12


def random_enclosure(rng, low, high, max_width):
    lo = rng.uniform(low, high)
    hi = min(lo + rng.uniform(0.0, max_width), high)
    return Enclosure(lo, hi, rng.uniform(lo, hi))


def sample(rng, f):
    """Bounds, nominal value and interior points of f."""
    return np.concatenate([[f.lo, f.hi, f.v], rng.uniform(f.lo, f.hi, N_SAMPLES)])


def assert_encloses(result, value, *args):
    assert result.lo <= value <= result.hi, (args, value, result)


class TestArithmeticSoundness:
    """Results of the four operations at sample points stay in bounds."""

    @pytest.mark.parametrize("op, scalar", [
        (rflint.add, np.add),
        (rflint.subtract, np.subtract),
        (rflint.multiply, np.multiply),
    ])
    def test_binary(self, op, scalar):
        rng = np.random.default_rng(101)
        for _ in range(N_BOXES):
            f1 = random_enclosure(rng, -1e3, 1e3, 50.0)
            f2 = random_enclosure(rng, -1e3, 1e3, 50.0)
            c = op(f1, f2)
            for x, y in zip(sample(rng, f1), sample(rng, f2)):
                assert_encloses(c, scalar(x, y), x, y)
            assert c.v == scalar(f1.v, f2.v)

    def test_divide(self):
        rng = np.random.default_rng(102)
        for _ in range(N_BOXES):
            f1 = random_enclosure(rng, -1e3, 1e3, 50.0)
            f2 = random_enclosure(rng, 0.5, 100.0, 20.0)
            if rng.random() < 0.5:
                f2 = -f2
            c = rflint.divide(f1, f2)
            for x, y in zip(sample(rng, f1), sample(rng, f2)):
                assert_encloses(c, x / y, x, y)

    def test_nominal_tracks_scalar(self):
        rng = np.random.default_rng(103)
        for _ in range(N_BOXES):
            f1 = random_enclosure(rng, -10.0, 10.0, 1.0)
            f2 = random_enclosure(rng, 1.0, 10.0, 1.0)
            assert (f1 + f2).v == f1.v + f2.v
            assert (f1 * f2).v == f1.v * f2.v
            assert (f1 / f2).v == f1.v / f2.v


UNARY_CASES = [
    (rflint.exp, np.exp, -50.0, 50.0),
    (rflint.exp2, np.exp2, -50.0, 50.0),
    (rflint.expm1, np.expm1, -10.0, 10.0),
    (rflint.cbrt, np.cbrt, -100.0, 100.0),
    (rflint.sinh, np.sinh, -10.0, 10.0),
    (rflint.cosh, np.cosh, -10.0, 10.0),
    (rflint.tanh, np.tanh, -5.0, 5.0),
    (rflint.asinh, np.arcsinh, -100.0, 100.0),
    (rflint.atan, np.arctan, -100.0, 100.0),
    (rflint.log, np.log, 1e-3, 1e3),
    (rflint.log2, np.log2, 1e-3, 1e3),
    (rflint.log10, np.log10, 1e-3, 1e3),
    (rflint.log1p, np.log1p, -0.99, 100.0),
    (rflint.sqrt, np.sqrt, 0.0, 1e4),
    (rflint.acosh, np.arccosh, 1.0, 100.0),
    (rflint.asin, np.arcsin, -1.0, 1.0),
    (rflint.acos, np.arccos, -1.0, 1.0),
    (rflint.atanh, np.arctanh, -0.99, 0.99),
    (rflint.sin, np.sin, -20.0, 20.0),
    (rflint.cos, np.cos, -20.0, 20.0),
    (rflint.tan, np.tan, -20.0, 20.0),
    (rflint.absolute, np.abs, -10.0, 10.0),
    (rflint.erf, special.erf, -6.0, 6.0),
    (rflint.erfc, special.erfc, -6.0, 27.0),
]


class TestElementarySoundness:
    """Elementary functions at sample points stay in bounds."""

    @pytest.mark.parametrize("fn, scalar, low, high", UNARY_CASES,
                             ids=lambda case: getattr(case, '__name__', None))
    def test_unary(self, fn, scalar, low, high):
        rng = np.random.default_rng(201)
        width = (high - low) / 8
        for _ in range(N_BOXES):
            f = random_enclosure(rng, low, high, width)
            c = fn(f)
            assert not c.is_nan()
            for x in sample(rng, f):
                y = scalar(x)
                if np.isfinite(y):
                    assert_encloses(c, y, x)
            assert c.v == scalar(f.v)

    def test_power(self):
        rng = np.random.default_rng(202)
        for _ in range(N_BOXES):
            base = random_enclosure(rng, 0.1, 10.0, 2.0)
            exponent = random_enclosure(rng, -3.0, 3.0, 1.0)
            c = rflint.power(base, exponent)
            for x, p in zip(sample(rng, base), sample(rng, exponent)):
                assert_encloses(c, np.power(x, p), x, p)

    def test_integer_power_of_signed_base(self):
        rng = np.random.default_rng(203)
        for _ in range(N_BOXES):
            base = random_enclosure(rng, -5.0, 5.0, 3.0)
            n = int(rng.integers(0, 6))
            c = base ** n
            for x in sample(rng, base):
                assert_encloses(c, x ** n, x, n)

    def test_hypot(self):
        rng = np.random.default_rng(204)
        for _ in range(N_BOXES):
            f1 = random_enclosure(rng, -10.0, 10.0, 4.0)
            f2 = random_enclosure(rng, -10.0, 10.0, 4.0)
            c = rflint.hypot(f1, f2)
            for x, y in zip(sample(rng, f1), sample(rng, f2)):
                assert_encloses(c, np.hypot(x, y), x, y)

    def test_atan2(self):
        """Boxes crossing the branch cut unwrap and are covered separately."""
        rng = np.random.default_rng(205)
        checked = 0
        for _ in range(N_BOXES):
            y = random_enclosure(rng, -10.0, 10.0, 4.0)
            x = random_enclosure(rng, -10.0, 10.0, 4.0)
            if y.lo < 0.0 <= y.hi and x.hi < 0.0:
                continue
            c = rflint.atan2(y, x)
            for yy, xx in zip(sample(rng, y), sample(rng, x)):
                assert_encloses(c, np.arctan2(yy, xx), yy, xx)
            checked += 1
        assert checked > N_BOXES // 2


REFERENCE_PREC = 200


def assert_encloses_exact(result, value, *args):
    """Compare binary64 bounds with a high precision value, without rounding."""
    assert mpmath.mpf(result.lo) <= value <= mpmath.mpf(result.hi), (args, value, result)


class TestSpecialFunctionReference:
    """erf and erfc checked against a 200-bit reference, not against scipy."""

    @pytest.mark.parametrize("fn, reference, low, high", [
        (rflint.erf, mpmath.erf, -6.0, 6.0),
        (rflint.erfc, mpmath.erfc, -6.0, 27.0),
    ], ids=['erf', 'erfc'])
    def test_point_grid(self, fn, reference, low, high):
        with mpmath.workprec(REFERENCE_PREC):
            for x in np.linspace(low, high, 4001):
                x = float(x)
                c = fn(Enclosure.point(x))
                assert_encloses_exact(c, reference(mpmath.mpf(x)), x)

    @pytest.mark.parametrize("fn, reference, low, high", [
        (rflint.erf, mpmath.erf, -6.0, 6.0),
        (rflint.erfc, mpmath.erfc, -6.0, 27.0),
    ], ids=['erf', 'erfc'])
    def test_random_boxes(self, fn, reference, low, high):
        rng = np.random.default_rng(301)
        with mpmath.workprec(REFERENCE_PREC):
            for _ in range(N_BOXES):
                f = random_enclosure(rng, low, high, 0.5)
                c = fn(f)
                for x in sample(rng, f):
                    x = float(x)
                    assert_encloses_exact(c, reference(mpmath.mpf(x)), x)

    def test_erfc_tail(self):
        """The tail, where scipy's erfc is hundreds of ulps off."""
        with mpmath.workprec(REFERENCE_PREC):
            for x in [10.5, 12.706444610697176, 15.25, 20.0, 26.0, 26.9, 27.5]:
                f = Enclosure.from_double(x)
                c = rflint.erfc(f)
                assert_encloses_exact(c, mpmath.erfc(mpmath.mpf(f.lo)), f.lo)
                assert_encloses_exact(c, mpmath.erfc(mpmath.mpf(f.hi)), f.hi)
                assert c.lo >= 0.0

    def test_library_functions_against_reference(self):
        """Two-step widening covers numpy's transcendental functions."""
        cases = [
            (rflint.exp, mpmath.exp, -50.0, 50.0),
            (rflint.log, mpmath.log, 1e-3, 1e3),
            (rflint.sin, mpmath.sin, -20.0, 20.0),
            (rflint.atan, mpmath.atan, -100.0, 100.0),
        ]
        rng = np.random.default_rng(302)
        with mpmath.workprec(REFERENCE_PREC):
            for fn, reference, low, high in cases:
                for _ in range(50):
                    f = random_enclosure(rng, low, high, (high - low) / 8)
                    c = fn(f)
                    for x in sample(rng, f):
                        x = float(x)
                        assert_encloses_exact(c, reference(mpmath.mpf(x)), x)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
