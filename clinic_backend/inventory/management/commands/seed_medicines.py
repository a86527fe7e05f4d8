from decimal import Decimal

from django.core.management.base import BaseCommand

from inventory.models import Medicine


class Command(BaseCommand):
    help = "Seed a demo medicine inventory"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset-stock",
            action="store_true",
            help="Overwrite quantity/price of medicines that already exist",
        )

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding medicines..."))

        # name, unit, price, quantity
        medicines_data = [
            ("Paracetamol 500mg", "box", Decimal("25000.00"), 120),
            ("Amoxicillin 500mg", "strip", Decimal("18000.00"), 60),
            ("Vitamin C 1000mg", "bottle", Decimal("45000.00"), 30),
            ("Ibuprofen 400mg", "box", Decimal("32000.00"), 8),
            ("Oral Rehydration Salts", "sachet", Decimal("3000.00"), 200),
        ]

        created_count = 0
        for name, unit, price, qty in medicines_data:
            medicine, created = Medicine.objects.get_or_create(
                name=name,
                defaults={"unit": unit, "price": price, "quantity": qty},
            )
            if created:
                created_count += 1
            elif options["reset_stock"]:
                medicine.price = price
                medicine.quantity = qty
                medicine.active = True
                medicine.save(update_fields=["price", "quantity", "active", "updated_at"])

        self.stdout.write(
            self.style.SUCCESS(f"Medicines seeded ({created_count} new).")
        )
