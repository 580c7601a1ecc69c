from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="EquipmentStateField",
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
                ("equipment_id", models.CharField(max_length=128)),
                ("key", models.CharField(max_length=128)),
                ("value", models.TextField(blank=True, default="")),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "hgs_equipment_state_fields",
                "ordering": ["equipment_id", "key"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("equipment_id", "key"),
                        name="uq_equipment_state_field",
                    ),
                ],
            },
        ),
    ]
