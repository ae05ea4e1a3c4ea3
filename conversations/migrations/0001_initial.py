import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Conversation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('participant_one', models.CharField(db_index=True, max_length=100)),
                ('participant_two', models.CharField(db_index=True, max_length=100)),
                ('participant_key', models.CharField(editable=False, max_length=201, unique=True)),
                ('created_by', models.CharField(max_length=100)),
                ('last_message_at', models.DateTimeField(blank=True, null=True)),
                ('participant_one_last_read_at', models.DateTimeField(blank=True, null=True)),
                ('participant_two_last_read_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'conversations',
                'indexes': [
                    models.Index(fields=['last_message_at'], name='conversations_last_msg_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Message',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sender_id', models.CharField(max_length=100)),
                ('body', models.TextField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('conversation', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='messages',
                    to='conversations.conversation',
                )),
            ],
            options={
                'db_table': 'messages',
                'ordering': ['created_at', 'id'],
                'indexes': [
                    models.Index(fields=['conversation', 'created_at'], name='messages_conv_created_idx'),
                ],
            },
        ),
    ]
