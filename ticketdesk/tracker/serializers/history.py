# ============================================
# tracker/serializers/history.py
# ============================================
from rest_framework import serializers

from tracker.models import TicketHistory
from tracker.serializers.user import UserSummarySerializer


class TicketHistoryOutputSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = TicketHistory
        fields = [
            'id', 'action', 'user', 'field', 'old_value', 'new_value',
            'changes', 'timestamp'
        ]
