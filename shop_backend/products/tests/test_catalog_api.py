# products/tests/test_catalog_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient

from products.models import Category, Product

User = get_user_model()


class CatalogApiTests(TestCase):
    """
    Catalog endpoints.

    GUARANTEES:
    - Anyone can browse; only admins can write
    - Listing filters work (category, price bounds, stock, sale, search)
    - Cached reads are invalidated after admin writes
    """

    def setUp(self):
        cache.clear()
        self.client = APIClient()

        self.admin = User.objects.create_user(email="admin@example.com", password="pass", role="admin")
        self.customer = User.objects.create_user(email="buyer@example.com", password="pass")

        self.living = Category.objects.create(name="Living Room", featured=True)
        self.lighting = Category.objects.create(name="Lighting")

        self.sofa = Product.objects.create(
            category=self.living,
            name="Velvet Sofa",
            description="Three seater",
            price=Decimal("900.00"),
            stock=4,
            featured=True,
        )
        self.table = Product.objects.create(
            category=self.living,
            name="Oak Coffee Table",
            price=Decimal("250.00"),
            stock=0,
        )
        self.lamp = Product.objects.create(
            category=self.lighting,
            name="Brass Floor Lamp",
            price=Decimal("120.00"),
            stock=10,
            on_sale=True,
            discount=25,
        )
        self.hidden = Product.objects.create(
            category=self.lighting,
            name="Retired Pendant",
            price=Decimal("80.00"),
            stock=3,
            is_active=False,
        )

    def _names(self, res):
        return {p["name"] for p in res.data["results"]}

    # --------------------------------------------------
    # Reads
    # --------------------------------------------------

    def test_anonymous_list_is_paginated_and_hides_inactive(self):
        res = self.client.get("/api/products/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["meta"]["total"], 3)
        self.assertNotIn("Retired Pendant", self._names(res))

    def test_filters(self):
        self.assertEqual(
            self._names(self.client.get("/api/products/", {"category": str(self.lighting.id)})),
            {"Brass Floor Lamp"},
        )
        self.assertEqual(
            self._names(self.client.get("/api/products/", {"min_price": "200", "max_price": "300"})),
            {"Oak Coffee Table"},
        )
        self.assertEqual(
            self._names(self.client.get("/api/products/", {"in_stock": "true"})),
            {"Velvet Sofa", "Brass Floor Lamp"},
        )
        self.assertEqual(
            self._names(self.client.get("/api/products/", {"on_sale": "true"})),
            {"Brass Floor Lamp"},
        )
        self.assertEqual(
            self._names(self.client.get("/api/products/", {"search": "seater"})),
            {"Velvet Sofa"},
        )

    def test_ordering_by_price(self):
        res = self.client.get("/api/products/", {"ordering": "price"})

        prices = [Decimal(p["price"]) for p in res.data["results"]]
        self.assertEqual(prices, sorted(prices))

    def test_detail_exposes_effective_price(self):
        res = self.client.get(f"/api/products/{self.lamp.id}/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["effective_price"], "90.00")
        self.assertEqual(res.data["category_detail"]["name"], "Lighting")

    def test_unknown_product_is_not_found(self):
        res = self.client.get("/api/products/00000000-0000-0000-0000-000000000000/")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")

    def test_categories_list_and_featured(self):
        res = self.client.get("/api/categories/")
        self.assertEqual([c["name"] for c in res.data], ["Lighting", "Living Room"])

        res = self.client.get("/api/categories/", {"featured": "true"})
        self.assertEqual([c["name"] for c in res.data], ["Living Room"])

    # --------------------------------------------------
    # Writes / permissions
    # --------------------------------------------------

    def test_customer_cannot_create_product(self):
        self.client.force_authenticate(self.customer)

        res = self.client.post(
            "/api/products/",
            {"name": "Rug", "category": str(self.living.id), "price": "50.00"},
            format="json",
        )

        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["error"]["code"], "FORBIDDEN")

    def test_anonymous_write_is_unauthorized(self):
        res = self.client.delete(f"/api/products/{self.sofa.id}/")

        self.assertEqual(res.status_code, 401)

    def test_admin_creates_product(self):
        self.client.force_authenticate(self.admin)

        res = self.client.post(
            "/api/products/",
            {
                "name": "Wool Rug",
                "category": str(self.living.id),
                "price": "150.00",
                "stock": 7,
                "on_sale": True,
                "discount": 10,
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["effective_price"], "135.00")
        self.assertTrue(Product.objects.filter(name="Wool Rug", stock=7).exists())

    def test_admin_rejects_invalid_discount(self):
        self.client.force_authenticate(self.admin)

        res = self.client.patch(f"/api/products/{self.sofa.id}/", {"discount": 150}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")

    # --------------------------------------------------
    # Cache
    # --------------------------------------------------

    def test_cached_detail_is_invalidated_by_admin_update(self):
        first = self.client.get(f"/api/products/{self.sofa.id}/")
        self.assertEqual(first.data["price"], "900.00")

        # Direct DB write bypasses invalidation: cached payload is served.
        Product.objects.filter(id=self.sofa.id).update(price=Decimal("850.00"))
        self.assertEqual(self.client.get(f"/api/products/{self.sofa.id}/").data["price"], "900.00")

        self.client.force_authenticate(self.admin)
        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.patch(
                f"/api/products/{self.sofa.id}/", {"price": "800.00"}, format="json"
            )
        self.assertEqual(res.status_code, 200)

        self.client.force_authenticate(None)
        self.assertEqual(self.client.get(f"/api/products/{self.sofa.id}/").data["price"], "800.00")

    def test_category_rename_refreshes_cached_product_detail(self):
        first = self.client.get(f"/api/products/{self.sofa.id}/")
        self.assertEqual(first.data["category_detail"]["name"], "Living Room")

        self.client.force_authenticate(self.admin)
        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.patch(
                f"/api/categories/{self.living.id}/", {"name": "Lounge"}, format="json"
            )
        self.assertEqual(res.status_code, 200)

        self.client.force_authenticate(None)
        res = self.client.get(f"/api/products/{self.sofa.id}/")
        self.assertEqual(res.data["category_detail"]["name"], "Lounge")

    def test_cached_listing_is_invalidated_by_admin_create(self):
        self.assertEqual(self.client.get("/api/products/").data["meta"]["total"], 3)

        self.client.force_authenticate(self.admin)
        with self.captureOnCommitCallbacks(execute=True):
            self.client.post(
                "/api/products/",
                {"name": "Side Table", "category": str(self.living.id), "price": "75.00", "stock": 2},
                format="json",
            )

        self.client.force_authenticate(None)
        self.assertEqual(self.client.get("/api/products/").data["meta"]["total"], 4)


class RecommendationApiTests(TestCase):
    """
    GUARANTEES:
    - Same-category, in-stock products come first
    - Featured products from other categories top up the list
    - The product itself and out-of-stock products never appear
    - Trending ranks by review count, then rating
    """

    def setUp(self):
        cache.clear()
        self.client = APIClient()

        self.living = Category.objects.create(name="Living Room")
        self.bedroom = Category.objects.create(name="Bedroom")

        def make(category, name, **kw):
            data = {"category": category, "name": name, "price": Decimal("100.00"), "stock": 5}
            data.update(kw)
            return Product.objects.create(**data)

        self.sofa = make(self.living, "Sofa")
        self.chair = make(self.living, "Armchair", rating=Decimal("4.5"))
        self.ottoman = make(self.living, "Ottoman", featured=True, rating=Decimal("3.0"))
        self.sold_out = make(self.living, "Sold Out Shelf", stock=0)
        self.bed = make(self.bedroom, "Bed Frame", featured=True)
        self.nightstand = make(self.bedroom, "Nightstand")

    def test_recommendations(self):
        res = self.client.get(f"/api/products/{self.sofa.id}/recommendations/")

        self.assertEqual(res.status_code, 200)
        names = [p["name"] for p in res.data]
        self.assertEqual(names, ["Ottoman", "Armchair", "Bed Frame"])

    def test_trending_ranks_by_reviews_then_rating(self):
        Product.objects.filter(id=self.nightstand.id).update(reviews_count=12, rating=Decimal("4.0"))
        Product.objects.filter(id=self.chair.id).update(reviews_count=12)
        Product.objects.filter(id=self.sold_out.id).update(reviews_count=50)

        res = self.client.get("/api/recommendations/trending/")

        self.assertEqual(res.status_code, 200)
        names = [p["name"] for p in res.data]
        self.assertEqual(names[:2], ["Armchair", "Nightstand"])
        self.assertNotIn("Sold Out Shelf", names)
        self.assertEqual(len(names), 5)
