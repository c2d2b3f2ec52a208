import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models


def money_field():
    return models.DecimalField(
        decimal_places=2,
        default=Decimal("0.00"),
        max_digits=14,
        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("branches", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DailyRevenue",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateTimeField(default=django.utils.timezone.now)),
                ("customers_served", models.PositiveIntegerField(default=0)),
                ("cash_amount", money_field()),
                ("bank_amount", money_field()),
                ("card_amount", money_field()),
                ("is_deleted", models.BooleanField(default=False)),
                ("delete_reason", models.CharField(blank=True, max_length=255)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "staff",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="revenue_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "branch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="revenue_entries",
                        to="branches.branch",
                    ),
                ),
                (
                    "deleted_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Daily revenue",
                "verbose_name_plural": "Daily revenue",
                "ordering": ["-date"],
                "indexes": [
                    models.Index(fields=["branch", "date"], name="revenue_branch_date_idx"),
                    models.Index(fields=["staff", "date"], name="revenue_staff_date_idx"),
                ],
            },
        ),
    ]
