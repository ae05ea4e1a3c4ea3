from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError


class ConversationNotFound(NotFound):
    default_detail = 'Conversation not found.'
    default_code = 'conversation_not_found'


class SiteUpdateNotFound(NotFound):
    default_detail = 'Site update not found.'
    default_code = 'site_update_not_found'


class ProfileNotFound(NotFound):
    default_detail = 'Profile not found.'
    default_code = 'profile_not_found'


class CreatorRequired(PermissionDenied):
    default_detail = 'Admin access required.'
    default_code = 'creator_required'


class InvalidMessageBody(ValidationError):
    default_detail = 'Message body is invalid.'
    default_code = 'invalid_body'


class SelfConversationError(ValidationError):
    default_detail = 'Cannot start a conversation with yourself.'
    default_code = 'self_conversation'
