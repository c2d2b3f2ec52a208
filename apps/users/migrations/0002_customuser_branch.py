import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("users", "0001_initial"),
        ("branches", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="customuser",
            name="branch",
            field=models.ForeignKey(
                blank=True,
                help_text="Branch the user currently works in.",
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="staff",
                to="branches.branch",
            ),
        ),
    ]
