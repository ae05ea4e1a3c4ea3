from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from memberhub.exceptions import ProfileNotFound
from memberhub.identity import Caller

from .models import Profile
from .serializers import ProfileSerializer, PublicProfileSerializer
from .services import get_or_default_profile


class MyProfileView(APIView):
    """Read and update the caller's own profile"""

    def get(self, request):
        caller = Caller.from_request(request)
        profile = get_or_default_profile(caller.user_id)
        return Response(ProfileSerializer(profile).data)

    def patch(self, request):
        caller = Caller.from_request(request)
        profile, _ = Profile._default_manager.get_or_create(pk=caller.user_id)
        serializer = ProfileSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)


class ProfileDetailView(APIView):
    """Public summary of another member"""

    def get(self, request, user_id):
        profile = Profile._default_manager.filter(pk=user_id, is_active=True).first()
        if profile is None:
            raise ProfileNotFound()
        return Response(PublicProfileSerializer(profile).data)
