"""Seed demo drivers and loads, optionally driving one load through its GPS route."""

import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from factory import random as factory_random
from faker import Faker

from loads import factories
from loads.models import Load
from loads.services.load_status import LoadStatusService

# Pings from the Dallas shipper out toward the Plano receiver
DEMO_ROUTE = [
    (32.7767, -96.7970),
    (32.8000, -96.9000),
    (32.9100, -96.7500),
    (33.0198, -96.6989),
]


class Command(BaseCommand):
    help = "Seed demo drivers and loads"

    def add_arguments(self, parser):
        parser.add_argument("--drivers", type=int, default=3)
        parser.add_argument("--loads-per-driver", type=int, default=2)
        parser.add_argument(
            "--simulate",
            action="store_true",
            help="Confirm the first load and replay a GPS route against it",
        )
        parser.add_argument(
            "--seed", type=int, default=None, help="Seed for Faker/random"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        seed = options.get("seed")
        if seed is not None:
            random.seed(seed)
            factory_random.reseed_random(seed)
            Faker.seed(seed)
            self.stdout.write(self.style.NOTICE(f"Seeding randomness with seed={seed}"))

        office = self._get_or_create_user("office", role="office_staff")
        admin = self._get_or_create_user("admin", role="admin")
        self.stdout.write(
            self.style.SUCCESS(f"Using users: {office.username}, {admin.username}")
        )

        self.stdout.write("Creating drivers with loads...")
        loads_created = []
        for _ in range(options["drivers"]):
            driver = factories.DriverFactory()
            loads_created.extend(
                factories.LoadFactory.create_batch(
                    options["loads_per_driver"], driver=driver
                )
            )

        if options["simulate"] and loads_created:
            self._simulate(loads_created[0])

        self.stdout.write(self.style.SUCCESS("Seed complete."))
        self.stdout.write(
            self.style.SUCCESS(
                f"Drivers: {options['drivers']}, Loads: {len(loads_created)}"
            )
        )

    def _simulate(self, load: Load):
        service = LoadStatusService()
        service.confirm_load(load.pk)
        for lat, lon in DEMO_ROUTE:
            service.update_from_location(load.pk, lat, lon)
            load.refresh_from_db()
            self.stdout.write(f"  {load.number} @ ({lat}, {lon}) -> {load.status}")

    def _get_or_create_user(self, username: str, role: str):
        User = get_user_model()
        user, created = User.objects.get_or_create(
            username=username,
            defaults={
                "email": f"{username}@example.com",
                "role": role,
                "is_staff": True,
            },
        )
        if created:
            user.set_password("password123")
            user.save()
        return user
