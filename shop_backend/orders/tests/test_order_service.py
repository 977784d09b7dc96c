# orders/tests/test_order_service.py

import threading
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import connection
from django.test import TestCase, TransactionTestCase

from cart.models import CartItem
from cart.services.cart_service import add_item
from orders.models import Order, OrderItem, OrderStatus
from orders.services.exceptions import EmptyCartError, OrderNotFoundError
from orders.services.order_service import create_order, get_user_order, list_user_orders
from products.models import Category, Product
from products.services.inventory import InsufficientStockError

User = get_user_model()

ADDRESS = {
    "full_name": "Ada Buyer",
    "address": "12 Harbour Street",
    "city": "Portland",
    "state": "Oregon",
    "zip_code": "97201",
    "country": "USA",
}


class CreateOrderTests(TestCase):
    """
    Cart -> order transaction.

    GUARANTEES:
    - Totals are computed server-side from effective prices
    - Stock is decremented and the cart emptied in the same transaction
    - Item prices are frozen at order time
    - Any failing line aborts the whole order with nothing written
    """

    def setUp(self):
        self.user = User.objects.create_user(email="buyer@example.com", password="pass")
        category = Category.objects.create(name="Living Room")
        self.rug = Product.objects.create(
            category=category,
            name="Wool Rug",
            price=Decimal("60.00"),
            stock=5,
        )
        self.lamp = Product.objects.create(
            category=category,
            name="Table Lamp",
            price=Decimal("80.00"),
            stock=3,
            on_sale=True,
            discount=25,
        )

    def _checkout(self, user=None, **kwargs):
        return create_order(
            user=user or self.user,
            shipping_address=ADDRESS,
            payment_method="card",
            **kwargs,
        )

    # --------------------------------------------------
    # Happy path
    # --------------------------------------------------

    def test_creates_order_with_server_totals(self):
        add_item(user=self.user, product_id=self.rug.id, quantity=2)

        order = self._checkout()

        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertEqual(order.subtotal, Decimal("120.00"))
        self.assertEqual(order.shipping, Decimal("0.00"))
        self.assertEqual(order.tax, Decimal("9.60"))
        self.assertEqual(order.total, Decimal("129.60"))
        self.assertEqual(order.shipping_address["city"], "Portland")
        self.assertEqual(order.payment_method, "card")

        items = list(order.items.all())
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].quantity, 2)
        self.assertEqual(items[0].price, Decimal("60.00"))

        self.rug.refresh_from_db()
        self.assertEqual(self.rug.stock, 3)
        self.assertFalse(CartItem.objects.filter(cart__user=self.user).exists())

    def test_discounted_line_is_priced_at_effective_price(self):
        add_item(user=self.user, product_id=self.lamp.id, quantity=1)

        order = self._checkout()

        self.assertEqual(order.items.get().price, Decimal("60.00"))
        self.assertEqual(order.subtotal, Decimal("60.00"))
        self.assertEqual(order.shipping, Decimal("10.00"))
        self.assertEqual(order.tax, Decimal("5.60"))
        self.assertEqual(order.total, Decimal("75.60"))

    def test_multiple_lines(self):
        add_item(user=self.user, product_id=self.rug.id, quantity=1)
        add_item(user=self.user, product_id=self.lamp.id, quantity=2)

        order = self._checkout()

        self.assertEqual(order.items.count(), 2)
        self.assertEqual(order.subtotal, Decimal("180.00"))
        self.rug.refresh_from_db()
        self.lamp.refresh_from_db()
        self.assertEqual(self.rug.stock, 4)
        self.assertEqual(self.lamp.stock, 1)

    def test_line_totals_add_up_to_subtotal(self):
        vase = Product.objects.create(
            category=self.rug.category,
            name="Glass Vase",
            price=Decimal("9.99"),
            stock=20,
            on_sale=True,
            discount=15,
        )
        add_item(user=self.user, product_id=vase.id, quantity=10)

        order = self._checkout()

        item = order.items.get()
        self.assertEqual(item.price, Decimal("8.49"))
        self.assertEqual(item.line_total, Decimal("84.90"))
        self.assertEqual(order.subtotal, Decimal("84.90"))
        self.assertEqual(order.shipping, Decimal("10.00"))
        self.assertEqual(order.tax, Decimal("7.59"))
        self.assertEqual(order.total, Decimal("102.49"))

    def test_price_snapshot_survives_product_changes(self):
        add_item(user=self.user, product_id=self.lamp.id, quantity=1)
        order = self._checkout()

        self.lamp.price = Decimal("200.00")
        self.lamp.on_sale = False
        self.lamp.save()

        item = OrderItem.objects.get(order=order)
        self.assertEqual(item.price, Decimal("60.00"))
        order.refresh_from_db()
        self.assertEqual(order.total, Decimal("75.60"))

    def test_catalog_cache_invalidated_after_commit(self):
        add_item(user=self.user, product_id=self.rug.id, quantity=1)
        catalog_cache = mock.Mock()

        with self.captureOnCommitCallbacks(execute=True):
            self._checkout(catalog_cache=catalog_cache)

        catalog_cache.invalidate_products.assert_called_once_with([str(self.rug.id)])

    # --------------------------------------------------
    # Failures
    # --------------------------------------------------

    def test_empty_cart_is_rejected(self):
        with self.assertRaises(EmptyCartError):
            self._checkout()

        self.assertEqual(Order.objects.count(), 0)

    def test_insufficient_stock_writes_nothing(self):
        add_item(user=self.user, product_id=self.rug.id, quantity=2)
        add_item(user=self.user, product_id=self.lamp.id, quantity=3)
        Product.objects.filter(id=self.lamp.id).update(stock=2)

        with self.assertRaises(InsufficientStockError) as ctx:
            self._checkout()

        self.assertEqual(ctx.exception.available, 2)
        self.assertEqual(ctx.exception.requested, 3)
        self.assertIn("Table Lamp", str(ctx.exception))

        self.assertEqual(Order.objects.count(), 0)
        self.rug.refresh_from_db()
        self.assertEqual(self.rug.stock, 5)
        self.assertEqual(CartItem.objects.filter(cart__user=self.user).count(), 2)

    def test_inactive_product_counts_as_out_of_stock(self):
        add_item(user=self.user, product_id=self.rug.id, quantity=1)
        Product.objects.filter(id=self.rug.id).update(is_active=False)

        with self.assertRaises(InsufficientStockError) as ctx:
            self._checkout()

        self.assertEqual(ctx.exception.available, 0)
        self.assertEqual(Order.objects.count(), 0)

    def test_last_unit_goes_to_one_buyer(self):
        other = User.objects.create_user(email="second@example.com", password="pass")
        Product.objects.filter(id=self.rug.id).update(stock=1)
        add_item(user=self.user, product_id=self.rug.id, quantity=1)
        add_item(user=other, product_id=self.rug.id, quantity=1)

        self._checkout()
        with self.assertRaises(InsufficientStockError):
            self._checkout(user=other)

        self.rug.refresh_from_db()
        self.assertEqual(self.rug.stock, 0)
        self.assertEqual(Order.objects.count(), 1)
        self.assertTrue(CartItem.objects.filter(cart__user=other).exists())

    def test_lost_decrement_race_rolls_back_order(self):
        add_item(user=self.user, product_id=self.rug.id, quantity=1)
        add_item(user=self.user, product_id=self.lamp.id, quantity=2)
        Product.objects.filter(id=self.lamp.id).update(stock=1)

        # Validation passes on a stale read; the guarded UPDATE still refuses.
        with mock.patch("orders.services.order_service.ensure_available"):
            with self.assertRaises(InsufficientStockError):
                self._checkout()

        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderItem.objects.count(), 0)
        self.rug.refresh_from_db()
        self.lamp.refresh_from_db()
        self.assertEqual(self.rug.stock, 5)
        self.assertEqual(self.lamp.stock, 1)
        self.assertEqual(CartItem.objects.filter(cart__user=self.user).count(), 2)


class ConcurrentCheckoutTests(TransactionTestCase):
    """
    Buyers race for scarce stock on separate threads and DB connections.

    GUARANTEES:
    - Exactly as many checkouts succeed as there are units
    - Every other buyer gets InsufficientStockError and keeps their cart
    - Stock ends at zero, never below
    """

    def setUp(self):
        category = Category.objects.create(name="Hallway")
        self.mirror = Product.objects.create(
            category=category,
            name="Arched Mirror",
            price=Decimal("140.00"),
            stock=1,
        )

    def _buyers(self, count):
        buyers = []
        for n in range(count):
            buyer = User.objects.create_user(email=f"racer{n}@example.com", password="pass")
            add_item(user=buyer, product_id=self.mirror.id, quantity=1)
            buyers.append(buyer)
        return buyers

    def _race(self, buyers):
        barrier = threading.Barrier(len(buyers))
        outcomes = {}

        def checkout(buyer):
            try:
                barrier.wait(timeout=10)
                outcomes[buyer.email] = create_order(
                    user=buyer,
                    shipping_address=ADDRESS,
                    payment_method="card",
                )
            except Exception as exc:  # collected and asserted on below
                outcomes[buyer.email] = exc
            finally:
                connection.close()

        threads = [threading.Thread(target=checkout, args=(buyer,)) for buyer in buyers]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)

        self.assertEqual(len(outcomes), len(buyers))
        won = [o for o in outcomes.values() if isinstance(o, Order)]
        lost = [o for o in outcomes.values() if not isinstance(o, Order)]
        for exc in lost:
            self.assertIsInstance(exc, InsufficientStockError)
        return won, lost

    def test_last_unit_sells_once(self):
        buyers = self._buyers(2)

        won, lost = self._race(buyers)

        self.assertEqual(len(won), 1)
        self.assertEqual(len(lost), 1)
        self.assertEqual(lost[0].available, 0)

        self.mirror.refresh_from_db()
        self.assertEqual(self.mirror.stock, 0)
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(OrderItem.objects.count(), 1)

        loser = next(b for b in buyers if b.id != won[0].user_id)
        self.assertTrue(CartItem.objects.filter(cart__user=loser).exists())

    def test_many_buyers_never_oversell(self):
        Product.objects.filter(id=self.mirror.id).update(stock=3)
        buyers = self._buyers(6)

        won, lost = self._race(buyers)

        self.assertEqual(len(won), 3)
        self.assertEqual(len(lost), 3)
        self.mirror.refresh_from_db()
        self.assertEqual(self.mirror.stock, 0)
        self.assertEqual(Order.objects.count(), 3)


class OrderImmutabilityTests(TestCase):
    """
    GUARANTEES:
    - Order money and address fields cannot change after creation
    - Order items are append-only
    """

    def setUp(self):
        self.user = User.objects.create_user(email="buyer@example.com", password="pass")
        category = Category.objects.create(name="Bedroom")
        product = Product.objects.create(
            category=category,
            name="Linen Duvet",
            price=Decimal("150.00"),
            stock=4,
        )
        add_item(user=self.user, product_id=product.id, quantity=1)
        self.order = create_order(user=self.user, shipping_address=ADDRESS, payment_method="card")

    def test_money_fields_are_immutable(self):
        self.order.total = Decimal("1.00")

        with self.assertRaises(ValidationError):
            self.order.save()

    def test_address_is_immutable(self):
        self.order.shipping_address = {**ADDRESS, "city": "Elsewhere"}

        with self.assertRaises(ValidationError):
            self.order.save()

    def test_status_may_change(self):
        self.order.status = OrderStatus.PROCESSING
        self.order.save(update_fields=["status", "updated_at"])

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, OrderStatus.PROCESSING)

    def test_items_cannot_be_edited(self):
        item = self.order.items.get()
        item.price = Decimal("0.01")

        with self.assertRaises(ValidationError):
            item.save()

    def test_inconsistent_totals_rejected_on_create(self):
        with self.assertRaises(ValidationError):
            Order.objects.create(
                user=self.user,
                subtotal=Decimal("10.00"),
                shipping=Decimal("0.00"),
                tax=Decimal("0.80"),
                total=Decimal("99.00"),
                shipping_address=ADDRESS,
                payment_method="card",
            )


class OrderReadTests(TestCase):
    """
    GUARANTEES:
    - Users only see their own orders, newest first
    - Unknown and malformed ids are not found
    """

    def setUp(self):
        self.user = User.objects.create_user(email="buyer@example.com", password="pass")
        self.other = User.objects.create_user(email="other@example.com", password="pass")
        category = Category.objects.create(name="Kitchen")
        self.product = Product.objects.create(
            category=category,
            name="Oak Cutting Board",
            price=Decimal("30.00"),
            stock=10,
        )

    def _order_for(self, user):
        add_item(user=user, product_id=self.product.id, quantity=1)
        return create_order(user=user, shipping_address=ADDRESS, payment_method="card")

    def test_list_only_own_orders_newest_first(self):
        first = self._order_for(self.user)
        second = self._order_for(self.user)
        self._order_for(self.other)

        ids = [o.id for o in list_user_orders(user=self.user)]

        self.assertEqual(set(ids), {first.id, second.id})
        self.assertEqual(len(ids), 2)

    def test_get_own_order(self):
        order = self._order_for(self.user)

        self.assertEqual(get_user_order(user=self.user, order_id=order.id).id, order.id)

    def test_other_users_order_is_not_found(self):
        order = self._order_for(self.other)

        with self.assertRaises(OrderNotFoundError):
            get_user_order(user=self.user, order_id=order.id)

    def test_malformed_id_is_not_found(self):
        with self.assertRaises(OrderNotFoundError):
            get_user_order(user=self.user, order_id="not-a-uuid")
