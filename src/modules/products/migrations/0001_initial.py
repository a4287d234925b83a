import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("stores", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("description", models.CharField(max_length=60)),
                (
                    "cost",
                    models.DecimalField(
                        blank=True, decimal_places=3, max_digits=13, null=True
                    ),
                ),
                ("image", models.BinaryField(blank=True, null=True)),
            ],
            options={
                "db_table": "product",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="ProductStore",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "sale_price",
                    models.DecimalField(decimal_places=3, max_digits=13),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="prices",
                        to="products.product",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="product_prices",
                        to="stores.store",
                    ),
                ),
            ],
            options={
                "db_table": "product_store",
                "ordering": ["id"],
            },
        ),
        migrations.AddConstraint(
            model_name="productstore",
            constraint=models.UniqueConstraint(
                fields=("product", "store"), name="product_store_unique"
            ),
        ),
    ]
