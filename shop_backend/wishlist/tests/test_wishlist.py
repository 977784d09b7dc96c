# wishlist/tests/test_wishlist.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from products.models import Category, Product
from products.services.inventory import ProductNotFoundError
from wishlist.models import WishlistItem
from wishlist.services.wishlist_service import (
    DuplicateWishlistItemError,
    WishlistItemNotFoundError,
    add_item,
    get_wishlist_with_items,
    is_in_wishlist,
    remove_item,
)

User = get_user_model()

UNKNOWN_PRODUCT = "5b0f7c3e-8d1a-4d6b-9f3e-2a1c0b9d8e7f"


class WishlistServiceTests(TestCase):
    """
    GUARANTEES:
    - A product is listed at most once per user
    - Only active products can be added
    - Wishlists are private to their owner
    """

    def setUp(self):
        self.user = User.objects.create_user(email="dreamer@example.com", password="pass")
        self.other = User.objects.create_user(email="other@example.com", password="pass")
        category = Category.objects.create(name="Dining")
        self.table = Product.objects.create(
            category=category,
            name="Walnut Dining Table",
            price=Decimal("1200.00"),
            stock=0,
        )
        self.chair = Product.objects.create(
            category=category,
            name="Cane Chair",
            price=Decimal("180.00"),
            stock=4,
        )

    def test_add_and_check(self):
        add_item(user=self.user, product_id=self.table.id)

        self.assertTrue(is_in_wishlist(user=self.user, product_id=self.table.id))
        self.assertFalse(is_in_wishlist(user=self.user, product_id=self.chair.id))
        self.assertFalse(is_in_wishlist(user=self.other, product_id=self.table.id))

    def test_out_of_stock_products_can_be_wished_for(self):
        item = add_item(user=self.user, product_id=self.table.id)

        self.assertEqual(item.product.stock, 0)

    def test_duplicate_is_rejected(self):
        add_item(user=self.user, product_id=self.chair.id)

        with self.assertRaises(DuplicateWishlistItemError):
            add_item(user=self.user, product_id=self.chair.id)

        self.assertEqual(WishlistItem.objects.count(), 1)

    def test_inactive_or_unknown_product(self):
        Product.objects.filter(id=self.chair.id).update(is_active=False)

        with self.assertRaises(ProductNotFoundError):
            add_item(user=self.user, product_id=self.chair.id)
        with self.assertRaises(ProductNotFoundError):
            add_item(user=self.user, product_id=UNKNOWN_PRODUCT)

    def test_remove(self):
        add_item(user=self.user, product_id=self.chair.id)

        with self.assertRaises(WishlistItemNotFoundError):
            remove_item(user=self.other, product_id=self.chair.id)

        remove_item(user=self.user, product_id=self.chair.id)
        self.assertFalse(is_in_wishlist(user=self.user, product_id=self.chair.id))

        with self.assertRaises(WishlistItemNotFoundError):
            remove_item(user=self.user, product_id=self.chair.id)

    def test_wishlist_is_created_lazily(self):
        wishlist = get_wishlist_with_items(user=self.user)

        self.assertEqual(wishlist.user_id, self.user.id)
        self.assertEqual(wishlist.item_count, 0)


class WishlistApiTests(TestCase):
    """
    GUARANTEES:
    - Every wishlist endpoint needs a JWT
    - Add is 201, repeat add is 409, remove of a missing item is 404
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="dreamer@example.com", password="pass")
        category = Category.objects.create(name="Outdoor")
        self.lantern = Product.objects.create(
            category=category,
            name="Iron Lantern",
            price=Decimal("35.00"),
            stock=9,
        )
        self.item_url = f"/api/wishlist/items/{self.lantern.id}/"

    def test_requires_authentication(self):
        for res in (
            self.client.get("/api/wishlist/"),
            self.client.post(self.item_url),
            self.client.get(f"{self.item_url}check/"),
        ):
            self.assertEqual(res.status_code, 401)
            self.assertEqual(res.data["error"]["code"], "UNAUTHORIZED")

    def test_add_check_list_remove(self):
        self.client.force_authenticate(self.user)

        self.assertFalse(self.client.get(f"{self.item_url}check/").data["in_wishlist"])

        res = self.client.post(self.item_url)
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["product"]["name"], "Iron Lantern")
        self.assertEqual(res.data["product"]["category_detail"]["name"], "Outdoor")

        check = self.client.get(f"{self.item_url}check/").data
        self.assertTrue(check["in_wishlist"])
        self.assertEqual(check["product_id"], str(self.lantern.id))

        listing = self.client.get("/api/wishlist/").data
        self.assertEqual(listing["item_count"], 1)
        self.assertEqual(listing["items"][0]["product"]["id"], str(self.lantern.id))

        self.assertEqual(self.client.delete(self.item_url).status_code, 204)
        self.assertEqual(self.client.get("/api/wishlist/").data["item_count"], 0)

    def test_repeat_add_is_conflict(self):
        self.client.force_authenticate(self.user)
        self.client.post(self.item_url)

        res = self.client.post(self.item_url)

        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["error"]["message"], "Product already in wishlist")

    def test_remove_missing_item_is_not_found(self):
        self.client.force_authenticate(self.user)

        res = self.client.delete(self.item_url)

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_unknown_product_is_not_found(self):
        self.client.force_authenticate(self.user)

        res = self.client.post(f"/api/wishlist/items/{UNKNOWN_PRODUCT}/")

        self.assertEqual(res.status_code, 404)
