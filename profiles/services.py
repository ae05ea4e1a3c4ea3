from .models import UNKNOWN_USER_NAME, Profile


def get_profiles_by_ids(ids):
    """Fetch profiles for the given ids in one query, keyed by id."""
    ids = {pk for pk in ids if pk}
    if not ids:
        return {}
    return {profile.pk: profile for profile in Profile._default_manager.filter(pk__in=ids)}


def display_name_for(profile):
    if profile is None:
        return UNKNOWN_USER_NAME
    return profile.name


def get_or_default_profile(user_id):
    """The stored profile, or an unsaved one carrying default values."""
    profile = Profile._default_manager.filter(pk=user_id).first()
    if profile is None:
        profile = Profile(id=user_id)
    return profile
