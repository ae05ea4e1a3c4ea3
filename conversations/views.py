from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from memberhub.identity import Caller
from memberhub.permissions import IsCreator

from . import services
from .serializers import (
    AdminMessageSerializer,
    ConversationMessageSerializer,
    ConversationStartSerializer,
    ConversationSummarySerializer,
    MessageSerializer,
    SendMessageSerializer,
)


class ConversationListView(APIView):
    """List all conversations of the authenticated member"""

    def get(self, request):
        caller = Caller.from_request(request)
        summaries = services.get_conversations(caller)
        serializer = ConversationSummarySerializer(summaries, many=True)
        return Response({
            'user_id': caller.user_id,
            'results': serializer.data,
            'total_count': len(summaries),
        })


class ConversationStartView(APIView):
    """Find or create a conversation with another member"""

    def post(self, request):
        caller = Caller.from_request(request)
        serializer = ConversationStartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = services.start_conversation(caller, serializer.validated_data['other_user_id'])
        return Response(
            {'conversation_id': str(result['conversation_id']), 'is_new': result['is_new']},
            status=status.HTTP_201_CREATED if result['is_new'] else status.HTTP_200_OK,
        )


class ConversationDetailView(APIView):
    def delete(self, request, conversation_id):
        caller = Caller.from_request(request)
        services.delete_conversation(caller, conversation_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ConversationMessagesView(APIView):
    """Read a conversation thread and post new messages to it"""

    def get(self, request, conversation_id):
        caller = Caller.from_request(request)
        messages = services.get_conversation_messages(caller, conversation_id)
        serializer = ConversationMessageSerializer(messages, many=True)
        return Response({
            'conversation_id': str(conversation_id),
            'results': serializer.data,
        })

    def post(self, request, conversation_id):
        caller = Caller.from_request(request)
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = services.send_message(caller, conversation_id, serializer.validated_data['body'])
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class ConversationReadView(APIView):
    def post(self, request, conversation_id):
        caller = Caller.from_request(request)
        services.mark_conversation_read(caller, conversation_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminMessageView(APIView):
    """Direct message from a site admin to a member"""
    permission_classes = [IsCreator]

    def post(self, request):
        caller = Caller.from_request(request)
        serializer = AdminMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = services.send_admin_message(
            caller,
            data['recipient_id'],
            data['body'],
            subject=data.get('subject'),
        )
        if result['success']:
            return Response(result, status=status.HTTP_201_CREATED)
        return Response(result, status=status.HTTP_400_BAD_REQUEST)
