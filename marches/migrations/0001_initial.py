import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Procedure",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id_projet", models.CharField(max_length=50, unique=True, verbose_name="IDProjet")),
                ("data", models.JSONField(blank=True, default=dict)),
                (
                    "statut_consultation",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("5 - Terminée", "Terminee"),
                            ("4.4 - Notification en cours", "Notification En Cours"),
                            ("4.3 - Validation RP en cours", "Validation Rp En Cours"),
                            ("4.2 - Analyse en cours", "Analyse En Cours"),
                            ("4.1 - En attente de d'ouverture", "En Attente Ouverture"),
                            ("3 - Publiée", "Publiee"),
                            ("2 - Rédaction", "Redaction"),
                            ("1 - Initiée", "Initiee"),
                        ],
                        max_length=50,
                        verbose_name="statut de la consultation",
                    ),
                ),
                ("statut_calcule_le", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "procedures",
            },
        ),
    ]
