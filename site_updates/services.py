import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from rest_framework.exceptions import ValidationError

from memberhub.exceptions import CreatorRequired, SiteUpdateNotFound
from memberhub.identity import require_caller
from profiles.services import get_profiles_by_ids

from .models import SiteUpdate, SiteUpdateRead

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_NAME = "Admin"


def _get_site_update(site_update_id):
    try:
        return SiteUpdate._default_manager.get(pk=site_update_id)
    except (SiteUpdate.DoesNotExist, DjangoValidationError):
        raise SiteUpdateNotFound()


def _read_ids_for(user_id):
    return set(
        SiteUpdateRead._default_manager.filter(user_id=user_id).values_list('site_update_id', flat=True)
    )


def get_site_updates(caller):
    """Every site update, newest first, flagged with the caller's read state."""
    user_id = require_caller(caller)

    try:
        updates = list(SiteUpdate._default_manager.order_by('-created_at'))
        if not updates:
            return []
        authors = get_profiles_by_ids({update.created_by for update in updates})
        read_ids = _read_ids_for(user_id)
    except DatabaseError:
        logger.exception("Failed to load site updates for %s", user_id)
        return []

    results = []
    for update in updates:
        author = authors.get(update.created_by)
        results.append({
            'id': update.pk,
            'title': update.title,
            'body': update.body,
            'created_at': update.created_at,
            'admin_name': (author.full_name if author else None) or DEFAULT_ADMIN_NAME,
            'admin_avatar_url': author.avatar_url if author else None,
            'is_read': update.pk in read_ids,
        })
    return results


def mark_site_update_read(caller, site_update_id):
    """Record the caller's receipt. Returns False when it already existed."""
    user_id = require_caller(caller)
    update = _get_site_update(site_update_id)
    _, created = SiteUpdateRead._default_manager.get_or_create(site_update=update, user_id=user_id)
    return created


def mark_all_site_updates_read(caller):
    """
    Insert receipts for every update the caller has not read. Returns how many
    receipts this call added; rows a concurrent request inserted first are not
    counted.
    """
    user_id = require_caller(caller)
    receipts = SiteUpdateRead._default_manager.filter(user_id=user_id)

    with transaction.atomic():
        all_ids = set(SiteUpdate._default_manager.values_list('pk', flat=True))
        if not all_ids:
            return 0
        unread_ids = all_ids - _read_ids_for(user_id)
        if not unread_ids:
            return 0
        before = receipts.count()
        SiteUpdateRead._default_manager.bulk_create(
            [SiteUpdateRead(site_update_id=pk, user_id=user_id) for pk in unread_ids],
            ignore_conflicts=True,
        )
        marked = receipts.count() - before

    logger.debug("Marked %d site updates read for %s", marked, user_id)
    return marked


def get_inbox_unread_indicator(caller):
    """Whether any of the newest site updates is unread. Never raises."""
    if caller is None or not getattr(caller, 'user_id', None):
        return {'has_unread': False}

    window = getattr(settings, 'INBOX_UNREAD_INDICATOR_WINDOW', 50)
    try:
        update_ids = list(
            SiteUpdate._default_manager.order_by('-created_at').values_list('pk', flat=True)[:window]
        )
        if not update_ids:
            return {'has_unread': False}
        read_ids = set(
            SiteUpdateRead._default_manager.filter(
                user_id=caller.user_id, site_update_id__in=update_ids
            ).values_list('site_update_id', flat=True)
        )
    except DatabaseError:
        logger.exception("Failed to compute inbox indicator for %s", caller.user_id)
        return {'has_unread': False}

    return {'has_unread': any(pk not in read_ids for pk in update_ids)}


# Admin authoring

def _require_creator(caller):
    require_caller(caller)
    if not caller.is_creator:
        raise CreatorRequired()


def _clean_body(body):
    body = (body or '').strip()
    if not body:
        raise ValidationError({'body': ["Body cannot be empty."]})
    return body


def list_site_updates_admin(caller):
    _require_creator(caller)
    return list(SiteUpdate._default_manager.order_by('-created_at'))


def create_site_update(caller, body, title=None):
    _require_creator(caller)
    update = SiteUpdate._default_manager.create(
        title=(title or '').strip(),
        body=_clean_body(body),
        created_by=caller.user_id,
    )
    logger.info("Site update %s created by %s", update.pk, caller.user_id)
    return update


def update_site_update(caller, site_update_id, body, title=None):
    """Edit an update. Existing read receipts are kept."""
    _require_creator(caller)
    update = _get_site_update(site_update_id)
    update.body = _clean_body(body)
    if title is not None:
        update.title = title.strip()
    update.save()
    return update


def delete_site_update(caller, site_update_id):
    _require_creator(caller)
    update = _get_site_update(site_update_id)
    update.delete()
    logger.info("Site update %s deleted by %s", site_update_id, caller.user_id)
