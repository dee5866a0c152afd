import math
import unittest
import numpy as np
from positioncore import (
    ExchangeParams, LONG, SHORT, NO_POS, CLOSE,
    cost_from_quantity, quantity_from_cost, relative_difference,
    wallet_exposure, wallet_exposure_if_filled,
    pnl_long, pnl_short, calc_pnl, price_difference_signed,
)

class TestCost(unittest.TestCase):
    def test_cost_is_sign_independent(self):
        self.assertEqual(cost_from_quantity(2.0, 50.0, 0.1), cost_from_quantity(-2.0, 50.0, 0.1))
        self.assertAlmostEqual(cost_from_quantity(-2.0, 50.0, 0.1), 10.0)

    def test_quantity_from_cost(self):
        self.assertAlmostEqual(quantity_from_cost(100.0, 50.0, 2.0), 1.0)
        self.assertEqual(quantity_from_cost(100.0, 0.0, 1.0), 0.0)
        self.assertEqual(quantity_from_cost(100.0, -5.0, 1.0), 0.0)


class TestRelativeDifference(unittest.TestCase):
    def test_zero_reference(self):
        self.assertEqual(relative_difference(0.0, 0.0), 0.0)
        self.assertEqual(relative_difference(5.0, 0.0), float('inf'))
        self.assertEqual(relative_difference(-5.0, 0.0), float('inf'))

    def test_regular(self):
        for x, y in [(110.0, 100.0), (90.0, 100.0), (-3.0, 2.0), (0.0, -4.0)]:
            self.assertEqual(relative_difference(x, y), abs(x - y) / abs(y))

    def test_not_symmetric(self):
        self.assertEqual(relative_difference(0.0, 5.0), 1.0)
        self.assertEqual(relative_difference(5.0, 0.0), float('inf'))


class TestWalletExposure(unittest.TestCase):
    def test_non_positive_balance(self):
        for balance in (0.0, -100.0):
            for psize, pprice in [(1.0, 100.0), (-3.0, 20.0), (0.0, 0.0)]:
                self.assertEqual(wallet_exposure(1.0, balance, psize, pprice), 0.0)

    def test_flat_position(self):
        self.assertEqual(wallet_exposure(1.0, 1000.0, 0.0, 123.0), 0.0)

    def test_exposure(self):
        self.assertAlmostEqual(wallet_exposure(1.0, 1000.0, 2.0, 150.0), 0.3)
        self.assertAlmostEqual(wallet_exposure(0.5, 1000.0, -2.0, 150.0), 0.15)

    def test_if_filled(self):
        params = ExchangeParams(qty_step=0.01, c_mult=1.0)
        self.assertAlmostEqual(wallet_exposure_if_filled(1000.0, 1.0, 100.0, 1.0, 200.0, params), 0.3)
        # sizes are taken as magnitudes
        self.assertAlmostEqual(wallet_exposure_if_filled(1000.0, -1.0, 100.0, -1.0, 200.0, params), 0.3)
        # qty is quantized before merging
        self.assertAlmostEqual(wallet_exposure_if_filled(1000.0, 0.0, 0.0, 0.504, 100.0, params), 0.05)
        self.assertEqual(wallet_exposure_if_filled(0.0, 1.0, 100.0, 1.0, 200.0, params), 0.0)


class TestPnl(unittest.TestCase):
    def test_long_short(self):
        self.assertAlmostEqual(pnl_long(100.0, 110.0, 2.0, 1.0), 20.0)
        self.assertAlmostEqual(pnl_long(100.0, 110.0, -2.0, 1.0), 20.0)
        self.assertAlmostEqual(pnl_short(100.0, 110.0, 2.0, 1.0), -20.0)
        self.assertAlmostEqual(pnl_short(100.0, 90.0, -2.0, 0.5), 10.0)

    def test_dispatch(self):
        self.assertEqual(calc_pnl(LONG, 100.0, 110.0, 2.0, 1.0), pnl_long(100.0, 110.0, 2.0, 1.0))
        self.assertEqual(calc_pnl(SHORT, 100.0, 110.0, 2.0, 1.0), pnl_short(100.0, 110.0, 2.0, 1.0))
        self.assertEqual(calc_pnl(0, 100.0, 110.0, 2.0, 1.0), 20.0)
        with self.assertRaises(ValueError):
            calc_pnl(NO_POS, 100.0, 110.0, 2.0, 1.0)


class TestPriceDifferenceSigned(unittest.TestCase):
    def test_long(self):
        self.assertAlmostEqual(price_difference_signed(LONG, 100.0, 90.0), 0.1)
        self.assertAlmostEqual(price_difference_signed(LONG, 100.0, 110.0), -0.1)

    def test_short(self):
        self.assertAlmostEqual(price_difference_signed(SHORT, 100.0, 110.0), 0.1)
        self.assertAlmostEqual(price_difference_signed(SHORT, 100.0, 90.0), -0.1)

    def test_no_entry_price(self):
        for pside in (LONG, SHORT):
            self.assertEqual(price_difference_signed(pside, 0.0, 90.0), 0.0)
            self.assertEqual(price_difference_signed(pside, -1.0, 90.0), 0.0)

    def test_invalid_side(self):
        for pside in (NO_POS, CLOSE, 7, -1):
            with self.assertRaises(ValueError):
                price_difference_signed(pside, 100.0, 90.0)

    def test_plain_int_sides(self):
        self.assertEqual(price_difference_signed(1, 100.0, 100.0), 0.0)
        self.assertFalse(math.isnan(price_difference_signed(0, 100.0, 50.0)))
        self.assertAlmostEqual(price_difference_signed(np.int64(0), 100.0, 90.0), 0.1)

    def test_bool_and_float_sides_rejected(self):
        for pside in (True, False, 0.0, 1.0):
            with self.assertRaises(ValueError):
                price_difference_signed(pside, 100.0, 90.0)
            with self.assertRaises(ValueError):
                calc_pnl(pside, 100.0, 110.0, 2.0, 1.0)

if __name__ == "__main__":
    unittest.main()
