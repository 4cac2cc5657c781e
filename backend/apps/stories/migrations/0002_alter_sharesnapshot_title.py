from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("stories", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="sharesnapshot",
            name="title",
            field=models.TextField(),
        ),
    ]
