from rest_framework import status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from memberhub.identity import Caller
from memberhub.permissions import IsCreator

from . import services
from .serializers import MemberSiteUpdateSerializer, SiteUpdateInputSerializer, SiteUpdateSerializer


class SiteUpdateListView(APIView):
    """Site updates with the caller's read state"""

    def get(self, request):
        caller = Caller.from_request(request)
        updates = services.get_site_updates(caller)
        return Response({'results': MemberSiteUpdateSerializer(updates, many=True).data})


class SiteUpdateReadView(APIView):
    def post(self, request, site_update_id):
        caller = Caller.from_request(request)
        services.mark_site_update_read(caller, site_update_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SiteUpdateReadAllView(APIView):
    def post(self, request):
        caller = Caller.from_request(request)
        marked = services.mark_all_site_updates_read(caller)
        return Response({'marked': marked})


class InboxIndicatorView(APIView):
    """Whether the inbox badge should show unread site updates"""
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            caller = Caller.from_request(request)
        except NotAuthenticated:
            caller = None
        return Response(services.get_inbox_unread_indicator(caller))


class AdminSiteUpdateListView(APIView):
    permission_classes = [IsCreator]

    def get(self, request):
        caller = Caller.from_request(request)
        updates = services.list_site_updates_admin(caller)
        return Response({'results': SiteUpdateSerializer(updates, many=True).data})

    def post(self, request):
        caller = Caller.from_request(request)
        serializer = SiteUpdateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        update = services.create_site_update(
            caller,
            serializer.validated_data['body'],
            title=serializer.validated_data.get('title'),
        )
        return Response(SiteUpdateSerializer(update).data, status=status.HTTP_201_CREATED)


class AdminSiteUpdateDetailView(APIView):
    permission_classes = [IsCreator]

    def patch(self, request, site_update_id):
        caller = Caller.from_request(request)
        serializer = SiteUpdateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        update = services.update_site_update(
            caller,
            site_update_id,
            serializer.validated_data['body'],
            title=serializer.validated_data.get('title'),
        )
        return Response(SiteUpdateSerializer(update).data)

    def delete(self, request, site_update_id):
        caller = Caller.from_request(request)
        services.delete_site_update(caller, site_update_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
