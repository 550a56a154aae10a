from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("assessments", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="examsession",
            name="end_reason",
            field=models.CharField(
                blank=True,
                choices=[("submitted", "Submitted"), ("expired", "Expired")],
                max_length=20,
                null=True,
            ),
        ),
    ]
