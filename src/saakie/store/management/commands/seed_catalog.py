"""Management command to seed the default saree categories."""

from django.core.management.base import BaseCommand

from saakie.store.models import Category


CATEGORIES = [
    {
        "name": "Silk Sarees",
        "slug": "silk-sarees",
        "description": "Kanjeevaram, Banarasi and other handwoven silks.",
        "sort_order": 1,
    },
    {
        "name": "Cotton Sarees",
        "slug": "cotton-sarees",
        "description": "Breathable handloom cottons for everyday wear.",
        "sort_order": 2,
    },
    {
        "name": "Designer Sarees",
        "slug": "designer-sarees",
        "description": "Contemporary drapes from independent designers.",
        "sort_order": 3,
    },
    {
        "name": "Wedding Collection",
        "slug": "wedding-collection",
        "description": "Bridal and wedding-guest sarees with zari and embroidery.",
        "sort_order": 4,
    },
    {
        "name": "Party Wear",
        "slug": "party-wear",
        "description": "Sequinned, georgette and net sarees for evenings out.",
        "sort_order": 5,
    },
    {
        "name": "Casual Wear",
        "slug": "casual-wear",
        "description": "Light, easy-care sarees for daily use.",
        "sort_order": 6,
    },
]


class Command(BaseCommand):
    help = "Seed the default product categories"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Overwrite existing categories with the default values",
        )

    def handle(self, *args, **options):
        self.stdout.write("\nCreating product categories...")
        created_count = 0
        for cat_data in CATEGORIES:
            existing = Category.objects.filter(slug=cat_data["slug"]).first()
            if existing:
                if options["force"]:
                    for field, value in cat_data.items():
                        setattr(existing, field, value)
                    existing.save()
                    self.stdout.write(f"  Updated existing category: {cat_data['name']}")
                else:
                    self.stdout.write(f"  Skipping existing category: {cat_data['name']}")
                continue

            Category.objects.create(**cat_data)
            created_count += 1
            self.stdout.write(self.style.SUCCESS(f"  Created: {cat_data['name']}"))

        self.stdout.write(self.style.SUCCESS("\nCatalog seed complete!"))
        self.stdout.write(f"  Categories created: {created_count}")
