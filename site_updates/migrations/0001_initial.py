import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SiteUpdate',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(blank=True, default='', max_length=255)),
                ('body', models.TextField()),
                ('created_by', models.CharField(blank=True, max_length=100, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'site_updates',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='SiteUpdateRead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('user_id', models.CharField(db_index=True, max_length=100)),
                ('read_at', models.DateTimeField(auto_now_add=True)),
                ('site_update', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='reads',
                    to='site_updates.siteupdate',
                )),
            ],
            options={
                'db_table': 'site_update_reads',
                'constraints': [
                    models.UniqueConstraint(fields=('site_update', 'user_id'), name='uq_site_update_read_user'),
                ],
            },
        ),
    ]
