from rest_framework import status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from .serializers import DiarySerializer, DiaryQuerySerializer, EditDiarySerializer, DiaryOverviewSerializer
from .services import create_diary, edit_diary, show_diary


class DiaryView(APIView):
    """Show, write and edit the requesting member's symptom diary."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = DiaryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        overview = show_diary(request.user, days=query.validated_data['days'])
        return Response(DiaryOverviewSerializer(overview).data)

    def post(self, request):
        serializer = DiarySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        diary = create_diary(
            request.user,
            date=data['date'],
            symptoms=data.get('symptoms', []),
            score=data['score'],
            record=data.get('record', ''),
        )
        return Response(DiarySerializer(diary).data, status=status.HTTP_201_CREATED)

    def patch(self, request):
        serializer = EditDiarySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        diary = edit_diary(
            request.user,
            date=data['date'],
            symptoms=data.get('symptoms'),
            score=data.get('score'),
            record=data.get('record'),
        )
        return Response(DiarySerializer(diary).data)
