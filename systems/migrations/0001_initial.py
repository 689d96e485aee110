"""Create the platform settings table."""

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Setting",
            fields=[
                ("key", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("value", models.JSONField(blank=True, null=True)),
            ],
            options={
                "db_table": "orchid_settings",
                "ordering": ("key",),
            },
        ),
    ]
