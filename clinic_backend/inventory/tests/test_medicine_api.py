# inventory/tests/test_medicine_api.py

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from inventory.models import Medicine


class MedicineApiTests(APITestCase):
    """
    /api/inventory/medicines/

    GUARANTEES:
    - Listing is ordered by id and filterable by active
    - DELETE is a soft delete; restore re-activates
    - Stock and price cannot be written negative
    """

    def setUp(self):
        self.client = APIClient()
        self.list_url = reverse("medicines-list")

        self.ibuprofen = Medicine.objects.create(name="Ibuprofen 400mg", unit="box", price="320.00", quantity=8)
        self.ors = Medicine.objects.create(name="ORS", unit="sachet", price="30.00", quantity=200)
        self.retired = Medicine.objects.create(
            name="Ibuprofen syrup", unit="bottle", price="150.00", quantity=4, active=False
        )

    def test_list_is_ordered_by_id(self):
        res = self.client.get(self.list_url)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        ids = [row["id"] for row in res.data["results"]]
        self.assertEqual(ids, [self.ibuprofen.id, self.ors.id, self.retired.id])

    def test_list_filter_active(self):
        res = self.client.get(self.list_url, {"active": "true"})

        ids = [row["id"] for row in res.data["results"]]
        self.assertEqual(ids, [self.ibuprofen.id, self.ors.id])

    def test_low_stock_flag_is_exposed(self):
        res = self.client.get(reverse("medicines-detail", args=[self.ibuprofen.id]))

        self.assertTrue(res.data["is_low_stock"])

    def test_create_medicine(self):
        res = self.client.post(
            self.list_url,
            {"name": "  Cetirizine 10mg ", "unit": "strip", "price": "45.00", "quantity": 50},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["name"], "Cetirizine 10mg")
        self.assertTrue(res.data["active"])

    def test_negative_values_are_rejected(self):
        res = self.client.post(
            self.list_url,
            {"name": "Bad", "unit": "box", "price": "-1.00", "quantity": -3},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("price", res.data)
        self.assertIn("quantity", res.data)

    def test_active_is_not_writable(self):
        res = self.client.patch(
            reverse("medicines-detail", args=[self.ors.id]),
            {"active": False, "quantity": 150},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.ors.refresh_from_db()
        self.assertTrue(self.ors.active)
        self.assertEqual(self.ors.quantity, 150)

    def test_delete_is_soft(self):
        res = self.client.delete(reverse("medicines-detail", args=[self.ors.id]))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.ors.refresh_from_db()
        self.assertFalse(self.ors.active)

    def test_restore(self):
        res = self.client.post(reverse("medicines-restore", args=[self.retired.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["active"])
        self.retired.refresh_from_db()
        self.assertTrue(self.retired.active)


class MedicineSearchApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("medicines-search")

        for i in range(8):
            Medicine.objects.create(name=f"Amoxicillin {i}", unit="box", price="100.00", quantity=5)
        Medicine.objects.create(name="Amoxicillin retired", unit="box", price="100.00", quantity=5, active=False)

    def test_default_limit(self):
        res = self.client.get(self.url, {"q": "amox"})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 5)

    def test_explicit_limit_excludes_inactive(self):
        res = self.client.get(self.url, {"q": "AMOX", "limit": 20})

        self.assertEqual(len(res.data), 8)
        self.assertNotIn("Amoxicillin retired", [row["name"] for row in res.data])

    def test_blank_query_returns_empty_list(self):
        res = self.client.get(self.url, {"q": ""})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, [])

    def test_invalid_limit_is_rejected(self):
        res = self.client.get(self.url, {"q": "amox", "limit": 0})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

        res = self.client.get(self.url, {"q": "amox", "limit": 51})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
