"""
======================================================
PATH: orders/migrations/0002_orderdetail_journal.py
======================================================
MIGRATION: link order details to the journal that billed them
"""

from __future__ import annotations

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    dependencies = [
        ("orders", "0001_initial"),
        ("journals", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="orderdetail",
            name="journal",
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.PROTECT,
                related_name="order_details",
                to="journals.journal",
            ),
        ),
    ]
