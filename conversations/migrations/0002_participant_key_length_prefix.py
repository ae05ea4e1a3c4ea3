from django.db import migrations, models


def rekey_conversations(apps, schema_editor):
    from conversations.models import canonical_pair_key

    Conversation = apps.get_model('conversations', 'Conversation')
    for conversation in Conversation.objects.all():
        conversation.participant_key = canonical_pair_key(
            conversation.participant_one, conversation.participant_two
        )
        conversation.save(update_fields=['participant_key'])


class Migration(migrations.Migration):

    dependencies = [
        ('conversations', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='conversation',
            name='participant_key',
            field=models.CharField(editable=False, max_length=210, unique=True),
        ),
        migrations.RunPython(rekey_conversations, migrations.RunPython.noop),
    ]
