# pos/tests/test_cart.py

from dataclasses import dataclass
from decimal import Decimal

from django.test import SimpleTestCase, TestCase

from inventory.models import Medicine
from pos.cart import NOTICE_ERROR, NOTICE_WARNING, CartBuilder
from sales.models import Order
from sales.services.results import CommitFailure, CommitLine, CommitSuccess


@dataclass
class PickedMedicine:
    """Search-result row as the POS picker holds it."""

    id: int
    name: str
    unit: str
    price: Decimal
    quantity: int


def _picked(id=1, name="Amoxicillin 500mg", unit="box", price="1000.00", quantity=5):
    return PickedMedicine(id=id, name=name, unit=unit, price=Decimal(price), quantity=quantity)


class CartAddLineTests(SimpleTestCase):
    """
    GUARANTEES:
    - A medicine appears at most once in the cart
    - Requested quantity never exceeds last-known stock
    - Stock problems come back as notices, never as exceptions
    """

    def setUp(self):
        self.cart = CartBuilder()

    def test_new_cart_is_empty(self):
        self.assertTrue(self.cart.is_empty)
        self.assertEqual(len(self.cart), 0)
        self.assertEqual(self.cart.total(), Decimal("0.00"))
        self.assertEqual(self.cart.payload(), ())

    def test_add_new_medicine(self):
        notice = self.cart.add_line(_picked(), 2)

        self.assertIsNone(notice)
        line = self.cart.get(1)
        self.assertEqual(line.requested_quantity, 2)
        self.assertEqual(line.stock_snapshot, 5)
        self.assertEqual(line.unit_price_snapshot, Decimal("1000.00"))
        self.assertIn(1, self.cart)

    def test_add_existing_medicine_increments(self):
        self.cart.add_line(_picked())
        self.cart.add_line(_picked(), 3)

        self.assertEqual(len(self.cart), 1)
        self.assertEqual(self.cart.get(1).requested_quantity, 4)

    def test_increment_past_stock_is_ignored_with_warning(self):
        self.cart.add_line(_picked(quantity=3), 2)

        notice = self.cart.add_line(_picked(quantity=3), 2)

        self.assertEqual(notice.level, NOTICE_WARNING)
        self.assertEqual(notice.medicine_id, 1)
        self.assertIn("Only 3 box of Amoxicillin 500mg left", notice.message)
        self.assertEqual(self.cart.get(1).requested_quantity, 2)

    def test_re_add_refreshes_last_known_stock(self):
        self.cart.add_line(_picked(quantity=5), 1)

        notice = self.cart.add_line(_picked(quantity=1), 1)

        self.assertEqual(notice.level, NOTICE_WARNING)
        self.assertEqual(self.cart.get(1).stock_snapshot, 1)
        self.assertEqual(self.cart.get(1).requested_quantity, 1)

    def test_out_of_stock_medicine_is_not_added(self):
        notice = self.cart.add_line(_picked(quantity=0))

        self.assertEqual(notice.level, NOTICE_ERROR)
        self.assertIn("out of stock", notice.message)
        self.assertTrue(self.cart.is_empty)

    def test_new_line_is_clamped_to_stock(self):
        notice = self.cart.add_line(_picked(quantity=2), 5)

        self.assertEqual(notice.level, NOTICE_WARNING)
        self.assertEqual(self.cart.get(1).requested_quantity, 2)

    def test_non_positive_qty_is_a_programming_error(self):
        for bad in (0, -1, 1.5, True):
            with self.subTest(qty=bad):
                with self.assertRaises(ValueError):
                    self.cart.add_line(_picked(), bad)

        self.assertTrue(self.cart.is_empty)


class CartEditTests(SimpleTestCase):
    def setUp(self):
        self.cart = CartBuilder()
        self.cart.add_line(_picked(id=1, quantity=5), 2)
        self.cart.add_line(_picked(id=2, name="ORS", unit="sachet", price="15.00", quantity=10), 4)

    def test_set_quantity_within_stock(self):
        self.assertIsNone(self.cart.set_quantity(1, 5))
        self.assertEqual(self.cart.get(1).requested_quantity, 5)

    def test_set_quantity_above_stock_clamps(self):
        notice = self.cart.set_quantity(1, 9)

        self.assertEqual(notice.level, NOTICE_WARNING)
        self.assertEqual(self.cart.get(1).requested_quantity, 5)

    def test_set_quantity_zero_removes_line(self):
        self.cart.set_quantity(1, 0)

        self.assertNotIn(1, self.cart)
        self.assertEqual(len(self.cart), 1)

    def test_set_quantity_on_unknown_line_is_noop(self):
        self.assertIsNone(self.cart.set_quantity(99, 3))
        self.assertEqual(len(self.cart), 2)

    def test_set_quantity_rejects_non_whole_numbers(self):
        for bad in (2.7, "3", True, None):
            with self.subTest(qty=bad):
                with self.assertRaises(ValueError):
                    self.cart.set_quantity(1, bad)

        self.assertEqual(self.cart.get(1).requested_quantity, 2)

    def test_set_quantity_when_stock_ran_out_removes_line(self):
        self.cart.add_line(_picked(id=1, quantity=0), 1)

        notice = self.cart.set_quantity(1, 1)

        self.assertEqual(notice.level, NOTICE_ERROR)
        self.assertNotIn(1, self.cart)

    def test_remove_line(self):
        self.cart.remove_line(2)
        self.cart.remove_line(2)

        self.assertEqual([line.medicine_id for line in self.cart.lines], [1])

    def test_total_uses_snapshot_prices(self):
        self.assertEqual(self.cart.total(), Decimal("2060.00"))

    def test_payload_keeps_insertion_order_and_drops_snapshots(self):
        payload = self.cart.payload()

        self.assertEqual(
            payload,
            (
                CommitLine(medicine_id=1, requested_quantity=2),
                CommitLine(medicine_id=2, requested_quantity=4),
            ),
        )

    def test_clear(self):
        self.cart.clear()
        self.assertTrue(self.cart.is_empty)


class CartSubmitTests(SimpleTestCase):
    """
    GUARANTEES:
    - The payload is handed to the engine exactly once per submit
    - Success clears the cart, failure keeps it for revision
    """

    def setUp(self):
        self.cart = CartBuilder()
        self.cart.add_line(_picked(), 2)
        self.calls = []

    def _engine(self, result):
        def commit(lines, *, user=None):
            self.calls.append((lines, user))
            return result

        return commit

    def test_success_clears_cart(self):
        ok = CommitSuccess(order_id="abc", invoice_no="ORD20260101-0000AAAA", total_amount=Decimal("2000.00"))

        result = self.cart.submit(commit=self._engine(ok), user="dr")

        self.assertIs(result, ok)
        self.assertEqual(self.calls, [((CommitLine(1, 2),), "dr")])
        self.assertTrue(self.cart.is_empty)

    def test_failure_keeps_cart(self):
        failed = CommitFailure(
            kind="insufficient_stock",
            code="INSUFFICIENT_STOCK",
            message="Insufficient stock",
            offending_item_ids=(1,),
        )

        result = self.cart.submit(commit=self._engine(failed))

        self.assertFalse(result.success)
        self.assertEqual(len(self.calls), 1)
        self.assertEqual(self.cart.get(1).requested_quantity, 2)


class CartCheckoutIntegrationTests(TestCase):
    """Cart snapshots are never trusted at commit."""

    def setUp(self):
        self.medicine = Medicine.objects.create(
            name="Amlodipine 5mg", unit="strip", price="80.00", quantity=4
        )

    def test_submit_commits_through_engine(self):
        cart = CartBuilder()
        cart.add_line(self.medicine, 3)

        result = cart.submit()

        self.assertTrue(result.success)
        self.assertTrue(cart.is_empty)
        self.medicine.refresh_from_db()
        self.assertEqual(self.medicine.quantity, 1)

    def test_stale_snapshot_is_rechecked_at_commit(self):
        cart = CartBuilder()
        cart.add_line(self.medicine, 3)

        # another session sells most of the stock meanwhile
        Medicine.objects.filter(pk=self.medicine.pk).update(quantity=1, price="95.00")

        result = cart.submit()

        self.assertFalse(result.success)
        self.assertEqual(result.kind, "insufficient_stock")
        self.assertEqual(len(cart), 1)
        self.assertEqual(Order.objects.count(), 0)

        cart.set_quantity(self.medicine.id, 1)
        result = cart.submit()

        self.assertTrue(result.success)
        self.assertEqual(result.total_amount, Decimal("95.00"))
