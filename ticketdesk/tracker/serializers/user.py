# ============================================
# tracker/serializers/user.py
# ============================================
from rest_framework import serializers
from tracker.models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """Embedded user reference"""
    name = serializers.CharField(source='display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'name', 'email', 'avatar']


class UserOutputSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='display_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'name', 'email', 'first_name', 'last_name',
            'avatar', 'role', 'date_joined'
        ]


class UserProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    avatar = serializers.CharField(max_length=500, required=False, allow_blank=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    password = serializers.CharField(min_length=6, required=False, write_only=True)


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.Role.choices)
