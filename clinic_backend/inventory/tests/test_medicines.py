# inventory/tests/test_medicines.py

from decimal import Decimal
from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.db import IntegrityError, transaction
from django.test import TestCase, override_settings

from inventory.models import Medicine
from inventory.services.catalog import (
    MAX_SEARCH_LIMIT,
    restore_medicine,
    search_active_medicines,
    soft_delete_medicine,
)


class MedicineModelTests(TestCase):
    """
    GUARANTEES:
    - Stock and price can never be stored negative
    - Low-stock flag follows the configured threshold
    """

    def setUp(self):
        self.medicine = Medicine.objects.create(
            name="Paracetamol 500mg", unit="strip", price="50.00", quantity=20
        )

    def test_negative_quantity_rejected_by_database(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Medicine.objects.filter(pk=self.medicine.pk).update(quantity=-1)

    def test_negative_price_rejected_by_database(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Medicine.objects.filter(pk=self.medicine.pk).update(price=Decimal("-1.00"))

    def test_clean_rejects_blank_name(self):
        self.medicine.name = "  "
        with self.assertRaises(ValidationError):
            self.medicine.clean()

    @override_settings(LOW_STOCK_THRESHOLD=10)
    def test_low_stock_flag(self):
        self.assertFalse(self.medicine.is_low_stock)

        self.medicine.quantity = 10
        self.assertTrue(self.medicine.is_low_stock)

        self.medicine.quantity = 0
        self.assertTrue(self.medicine.is_low_stock)

    def test_default_ordering_is_by_id(self):
        later = Medicine.objects.create(name="Aspirin", unit="strip", price="10.00", quantity=1)

        self.assertEqual(list(Medicine.objects.values_list("pk", flat=True)), [self.medicine.pk, later.pk])


class MedicineCatalogTests(TestCase):
    """
    GUARANTEES:
    - Search matches names case-insensitively and never returns inactive rows
    - Soft delete hides the row without removing it
    """

    def setUp(self):
        self.names = [
            "Amoxicillin 250mg",
            "Amoxicillin 500mg",
            "Amoxiclav 625mg",
            "Ampicillin",
            "Azithromycin",
            "Co-amoxiclav syrup",
            "Amoxicillin drops",
        ]
        self.medicines = [
            Medicine.objects.create(name=name, unit="box", price="100.00", quantity=5)
            for name in self.names
        ]

    def test_search_is_case_insensitive_substring(self):
        results = search_active_medicines("AMOXI", limit=50)

        self.assertEqual(
            [m.name for m in results],
            sorted(n for n in self.names if "amoxi" in n.lower()),
        )

    @override_settings(MEDICINE_SEARCH_LIMIT=5)
    def test_search_default_limit(self):
        self.assertEqual(len(search_active_medicines("a")), 5)

    def test_search_limit_is_capped(self):
        for i in range(MAX_SEARCH_LIMIT + 5):
            Medicine.objects.create(name=f"Vitamin C {i}", unit="tab", price="5.00", quantity=1)

        self.assertEqual(len(search_active_medicines("vitamin", limit=500)), MAX_SEARCH_LIMIT)

    def test_search_rejects_bad_limit(self):
        with self.assertRaises(ValueError):
            search_active_medicines("amox", limit=0)

    def test_blank_query_returns_nothing(self):
        self.assertEqual(search_active_medicines(""), [])
        self.assertEqual(search_active_medicines("   "), [])
        self.assertEqual(search_active_medicines(None), [])

    def test_soft_delete_hides_from_search(self):
        target = self.medicines[1]

        soft_delete_medicine(target)

        self.assertTrue(Medicine.objects.filter(pk=target.pk).exists())
        self.assertNotIn(target.pk, [m.pk for m in search_active_medicines("amoxicillin", limit=50)])

    def test_restore_brings_medicine_back(self):
        target = self.medicines[0]
        soft_delete_medicine(target)

        restored = restore_medicine(target)

        self.assertTrue(restored.active)
        self.assertIn(target.pk, [m.pk for m in search_active_medicines("250mg")])


class SeedMedicinesCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_medicines", stdout=StringIO())
        first = Medicine.objects.count()

        call_command("seed_medicines", stdout=StringIO())

        self.assertGreater(first, 0)
        self.assertEqual(Medicine.objects.count(), first)
