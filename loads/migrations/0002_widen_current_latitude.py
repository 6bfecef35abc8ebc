from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("loads", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="load",
            name="current_latitude",
            field=models.DecimalField(
                blank=True, decimal_places=8, max_digits=11, null=True
            ),
        ),
    ]
