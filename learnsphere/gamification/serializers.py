from rest_framework import serializers

from .models import Badge, PointsTransaction, UserBadge


class PointsTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = PointsTransaction
        fields = ['id', 'source', 'points', 'course', 'metadata', 'created_at']


class AwardPointsSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    points = serializers.IntegerField()
    note = serializers.CharField(max_length=500)


class BadgeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Badge
        fields = ['id', 'name', 'required_points', 'description', 'icon']


class UserBadgeSerializer(serializers.ModelSerializer):
    badge = BadgeSerializer(read_only=True)

    class Meta:
        model = UserBadge
        fields = ['id', 'badge', 'earned_at']
