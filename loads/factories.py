"""Factories for generating demo/test data with factory_boy and Faker.

Use sequences for unique identifiers and Faker for descriptive fields.
"""

from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from factory import Faker
from factory.django import DjangoModelFactory

from . import models

# Dallas, TX shipper and a receiver ~50 km north
DALLAS_SHIPPER = (Decimal("32.77670000"), Decimal("-96.79700000"))
PLANO_RECEIVER = (Decimal("33.01980000"), Decimal("-96.69890000"))


class UserFactory(DjangoModelFactory):
    class Meta:
        model = get_user_model()
        django_get_or_create = ("username",)

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = Faker("first_name")
    last_name = Faker("last_name")
    role = "office_staff"
    is_staff = True
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        password = kwargs.pop("password", "password123")
        user = super()._create(model_class, *args, **kwargs)
        user.set_password(password)
        user.save()
        return user


class DriverFactory(UserFactory):
    username = factory.Sequence(lambda n: f"driver{n}")
    role = "driver"
    is_staff = False
    phone = factory.Sequence(lambda n: f"+1214555{n % 10000:04d}")


class LoadFactory(DjangoModelFactory):
    class Meta:
        model = models.Load

    number = factory.Sequence(lambda n: f"109-{10000 + n}")
    driver = factory.SubFactory(DriverFactory)
    destination_name = Faker("company")
    status = models.Load.Status.CREATED
    tracking_enabled = False
    shipper_latitude = DALLAS_SHIPPER[0]
    shipper_longitude = DALLAS_SHIPPER[1]
    receiver_latitude = PLANO_RECEIVER[0]
    receiver_longitude = PLANO_RECEIVER[1]

    class Params:
        # LoadFactory(tracking=True) -> confirmed load a driver is tracking
        tracking = factory.Trait(
            status=models.Load.Status.CONFIRMED,
            tracking_enabled=True,
            driver_confirmed=True,
        )


class InvoiceFactory(DjangoModelFactory):
    class Meta:
        model = models.Invoice

    load = factory.SubFactory(LoadFactory)
    invoice_number = factory.Sequence(lambda n: f"GO{7000 + n}")
    total_amount = Decimal("850.00")
    status = models.Invoice.Status.DRAFT
