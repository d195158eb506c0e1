"""
Migration: create the posts table.

Columns: id (big auto primary key), title (indexed), text.
Both text columns default to the empty string.
"""

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Post',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(blank=True, db_index=True, default='', max_length=255)),
                ('text', models.CharField(blank=True, default='', max_length=255)),
            ],
            options={
                'db_table': 'posts',
                'ordering': ['id'],
            },
        ),
    ]
