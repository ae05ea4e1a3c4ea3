"""
Conversation and message operations.

Every function takes the caller explicitly. List reads degrade to an empty
result when the database fails; mutations let errors propagate.
"""

import html
import logging

import bleach
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F, OuterRef, Q, Subquery
from django.utils import timezone
from rest_framework.exceptions import APIException, ValidationError

from memberhub.exceptions import (
    ConversationNotFound,
    InvalidMessageBody,
    ProfileNotFound,
    SelfConversationError,
)
from memberhub.identity import require_caller
from profiles.models import UNKNOWN_USER_NAME, Profile
from profiles.services import display_name_for, get_profiles_by_ids

from .models import Conversation, Message, canonical_pair_key
from .notifications import ADMIN_SENDER_NAME, get_inbox_notifier

logger = logging.getLogger(__name__)


def clean_message_body(body):
    """Strip markup and surrounding whitespace, then enforce length bounds."""
    if body is None:
        raise InvalidMessageBody("Message body cannot be empty.")

    # bleach escapes the text it keeps; bodies are stored as plain text
    cleaned = html.unescape(bleach.clean(str(body), tags=[], attributes={}, strip=True)).strip()
    if not cleaned:
        raise InvalidMessageBody("Message body cannot be empty.")

    max_length = getattr(settings, 'MESSAGE_BODY_MAX_LENGTH', 5000)
    if len(cleaned) > max_length:
        raise InvalidMessageBody(f"Message body cannot exceed {max_length} characters.")
    return cleaned


def _participant_filter(user_id):
    return Q(participant_one=user_id) | Q(participant_two=user_id)


def get_conversation_for(user_id, conversation_id, lock=False):
    """The conversation if user_id takes part in it, else ConversationNotFound."""
    queryset = Conversation._default_manager.filter(_participant_filter(user_id))
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(pk=conversation_id)
    except (Conversation.DoesNotExist, DjangoValidationError):
        raise ConversationNotFound()


def find_conversation_between(user_a, user_b):
    return Conversation._default_manager.filter(
        _participant_filter(user_a),
        participant_key=canonical_pair_key(user_a, user_b),
    ).first()


def get_or_create_conversation(creator_id, other_id):
    """
    Return (conversation, created) for the unordered pair.

    The unique pair key makes the insert atomic: a concurrent creator that
    loses the race re-reads and gets the winner's row.
    """
    existing = find_conversation_between(creator_id, other_id)
    if existing:
        return existing, False

    now = timezone.now()
    try:
        with transaction.atomic():
            conversation = Conversation._default_manager.create(
                created_by=creator_id,
                participant_one=creator_id,
                participant_two=other_id,
                last_message_at=now,
                participant_one_last_read_at=now,
            )
    except IntegrityError:
        logger.info("Conversation between %s and %s created concurrently, reusing it", creator_id, other_id)
        return Conversation._default_manager.filter(_participant_filter(creator_id)).get(
            participant_key=canonical_pair_key(creator_id, other_id)
        ), False

    logger.info("Created conversation %s between %s and %s", conversation.pk, creator_id, other_id)
    return conversation, True


def start_conversation(caller, other_user_id):
    """Find or create the caller's conversation with other_user_id."""
    user_id = require_caller(caller)
    other_user_id = str(other_user_id or '').strip()
    if not other_user_id:
        raise ValidationError({'other_user_id': ["This field is required."]})
    if other_user_id == user_id:
        raise SelfConversationError()
    if not Profile._default_manager.filter(pk=other_user_id).exists():
        raise ProfileNotFound()

    conversation, created = get_or_create_conversation(user_id, other_user_id)
    return {'conversation_id': conversation.pk, 'is_new': created}


def _latest_message_queryset():
    return Message._default_manager.filter(conversation=OuterRef('pk')).order_by('-created_at', '-id')


def get_conversations(caller):
    """
    Summaries of every conversation the caller takes part in, most recent first.

    The latest message comes from a correlated subquery and profiles are
    fetched in one batch, so the whole list costs two queries.
    """
    user_id = require_caller(caller)
    latest = _latest_message_queryset()
    queryset = Conversation._default_manager.filter(
        _participant_filter(user_id)
    ).annotate(
        latest_message_body=Subquery(latest.values('body')[:1]),
        latest_message_sender_id=Subquery(latest.values('sender_id')[:1]),
    ).order_by(F('last_message_at').desc(nulls_last=True), '-created_at')

    try:
        conversations = list(queryset)
        profile_ids = set()
        for conversation in conversations:
            profile_ids.add(conversation.other_participant(user_id))
            profile_ids.add(conversation.latest_message_sender_id)
        profiles = get_profiles_by_ids(profile_ids)
    except DatabaseError:
        logger.exception("Failed to load conversations for %s", user_id)
        return []

    summaries = []
    for conversation in conversations:
        other_user_id = conversation.other_participant(user_id)
        other = profiles.get(other_user_id)
        sender_id = conversation.latest_message_sender_id
        sender = profiles.get(sender_id) if sender_id else None

        summaries.append({
            'id': conversation.pk,
            'participant_one': conversation.participant_one,
            'participant_two': conversation.participant_two,
            'last_message_at': conversation.last_message_at,
            'participant_one_last_read_at': conversation.participant_one_last_read_at,
            'participant_two_last_read_at': conversation.participant_two_last_read_at,
            'other_user_id': other_user_id,
            'other_user_name': (other.full_name if other else None) or UNKNOWN_USER_NAME,
            'other_user_username': other.username if other else None,
            'other_user_avatar_url': other.avatar_url if other else None,
            'latest_message_body': conversation.latest_message_body,
            'latest_message_sender_name': display_name_for(sender) if sender_id else None,
            'latest_message_sender_avatar_url': sender.avatar_url if sender else None,
            'is_unread': conversation.is_unread_for(user_id),
        })
    return summaries


def get_conversation_messages(caller, conversation_id):
    """All messages of a conversation, oldest first, with sender display data."""
    user_id = require_caller(caller)
    conversation = get_conversation_for(user_id, conversation_id)

    try:
        messages = list(conversation.messages.order_by('created_at', 'id'))
        profiles = get_profiles_by_ids({message.sender_id for message in messages})
    except DatabaseError:
        logger.exception("Failed to load messages of conversation %s", conversation.pk)
        return []

    results = []
    for message in messages:
        sender = profiles.get(message.sender_id)
        results.append({
            'id': message.pk,
            'body': message.body,
            'sender_id': message.sender_id,
            'sender_name': sender.full_name if sender else None,
            'sender_avatar_url': sender.avatar_url if sender else None,
            'created_at': message.created_at,
        })
    return results


def append_message(conversation, sender_id, body):
    """
    Insert a message and move the conversation's activity and the sender's
    cursor to the message timestamp. Must run inside a transaction holding
    the conversation row.
    """
    message = Message._default_manager.create(
        conversation=conversation,
        sender_id=sender_id,
        body=body,
    )
    cursor_field = conversation.last_read_field_for(sender_id)
    conversation.last_message_at = message.created_at
    setattr(conversation, cursor_field, message.created_at)
    conversation.save(update_fields=['last_message_at', cursor_field, 'updated_at'])
    return message


def send_message(caller, conversation_id, body):
    user_id = require_caller(caller)
    body = clean_message_body(body)

    with transaction.atomic():
        conversation = get_conversation_for(user_id, conversation_id, lock=True)
        message = append_message(conversation, user_id, body)

    logger.debug("Message %s sent in conversation %s by %s", message.pk, conversation.pk, user_id)
    return message


def mark_conversation_read(caller, conversation_id):
    """Move the caller's cursor to now. Returns the new cursor value."""
    user_id = require_caller(caller)
    conversation = get_conversation_for(user_id, conversation_id)

    now = timezone.now()
    Conversation._default_manager.filter(pk=conversation.pk).update(
        **{conversation.last_read_field_for(user_id): now}
    )
    return now


def delete_conversation(caller, conversation_id):
    user_id = require_caller(caller)
    conversation = get_conversation_for(user_id, conversation_id)
    conversation_pk = conversation.pk
    conversation.delete()
    logger.info("Conversation %s deleted by %s", conversation_pk, user_id)


def send_admin_message(caller, recipient_id, body, subject=None, notifier=None):
    """
    Send a direct message from a creator to a member.

    Returns {'success': True} or {'success': False, 'error': ...}; errors are
    reported, never raised.
    """
    if caller is None or not getattr(caller, 'user_id', None):
        return {'success': False, 'error': "Not authenticated"}
    if not caller.is_creator:
        return {'success': False, 'error': "Not authorized"}

    user_id = caller.user_id
    trimmed_body = (body or '').strip()

    if not recipient_id:
        return {'success': False, 'error': "Recipient ID is required"}
    if not trimmed_body:
        return {'success': False, 'error': "Message body cannot be empty"}
    if recipient_id == user_id:
        return {'success': False, 'error': "Cannot message yourself"}

    recipient = Profile._default_manager.filter(pk=recipient_id).first()
    if recipient is None:
        return {'success': False, 'error': "Recipient not found"}

    subject = (subject or '').strip()
    final_body = f"**{subject}**\n\n{trimmed_body}" if subject else trimmed_body

    try:
        final_body = clean_message_body(final_body)
        with transaction.atomic():
            conversation, _ = get_or_create_conversation(user_id, recipient_id)
            conversation = Conversation._default_manager.select_for_update().get(pk=conversation.pk)
            append_message(conversation, user_id, final_body)
    except APIException as e:
        return {'success': False, 'error': str(e.detail[0] if isinstance(e.detail, list) else e.detail)}
    except DatabaseError as e:
        logger.exception("Failed to send admin message to %s", recipient_id)
        return {'success': False, 'error': str(e)}

    if recipient.inbox_emails_enabled:
        (notifier or get_inbox_notifier()).notify(recipient_id, sender_name=ADMIN_SENDER_NAME)

    return {'success': True}
