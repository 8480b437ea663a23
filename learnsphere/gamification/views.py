"""
Gamification views - points ledger and badges
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts.permissions import HasProfile, IsAdminProfile, get_profile

from .serializers import (
    AwardPointsSerializer, BadgeSerializer, PointsTransactionSerializer, UserBadgeSerializer,
)
from .services import badges, ledger


# ============ Points ============

@api_view(['GET'])
@permission_classes([HasProfile])
def my_points(request):
    profile = get_profile(request)
    data = ledger.get_user_points(profile.pk)
    return Response({
        'total_points': data['total_points'],
        'transactions': PointsTransactionSerializer(data['transactions'], many=True).data,
    })


@api_view(['POST'])
@permission_classes([IsAdminProfile])
def award_points(request):
    """Admin-only manual adjustment of a user's points"""
    actor = get_profile(request)
    serializer = AwardPointsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    entry = ledger.award_manual(
        serializer.validated_data['user_id'],
        serializer.validated_data['points'],
        serializer.validated_data['note'],
        actor,
    )
    badges.evaluate_safely(entry.user_id)
    return Response(PointsTransactionSerializer(entry).data, status=status.HTTP_201_CREATED)


# ============ Badges ============

@api_view(['GET'])
@permission_classes([AllowAny])
def badge_list(request):
    return Response(BadgeSerializer(badges.list_badges(), many=True).data)


@api_view(['GET'])
@permission_classes([HasProfile])
def my_badges(request):
    profile = get_profile(request)
    return Response(UserBadgeSerializer(badges.user_badges(profile.pk), many=True).data)
