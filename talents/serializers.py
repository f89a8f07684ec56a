"""
Serializers for talents app
"""
from rest_framework import serializers
from .models import TalentHistory, TeacherTalentHistory


class TalentHistorySerializer(serializers.ModelSerializer):
    """Student ledger row."""
    studentId = serializers.IntegerField(source='student_id', read_only=True)
    studentName = serializers.CharField(source='student.name', read_only=True)
    beforeBalance = serializers.IntegerField(source='before_balance', read_only=True)
    afterBalance = serializers.IntegerField(source='after_balance', read_only=True)
    grantedBy = serializers.IntegerField(source='granted_by_id', read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = TalentHistory
        fields = [
            'id', 'studentId', 'studentName', 'amount', 'beforeBalance', 'afterBalance',
            'reason', 'type', 'grantedBy', 'createdAt',
        ]
        read_only_fields = fields


class TeacherTalentHistorySerializer(serializers.ModelSerializer):
    """Teacher ledger row."""
    teacherId = serializers.IntegerField(source='teacher_id', read_only=True)
    beforeBalance = serializers.IntegerField(source='before_balance', read_only=True)
    afterBalance = serializers.IntegerField(source='after_balance', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = TeacherTalentHistory
        fields = ['id', 'teacherId', 'amount', 'beforeBalance', 'afterBalance', 'reason', 'type', 'createdAt']
        read_only_fields = fields


class AdjustTalentsSerializer(serializers.Serializer):
    """
    Admin adjustment request. Accepts a single studentId or a studentIds list.
    Zero and non-integer amounts are rejected by the ledger service.
    """
    studentId = serializers.IntegerField(required=False)
    studentIds = serializers.ListField(child=serializers.IntegerField(), required=False, allow_empty=False)
    amount = serializers.IntegerField()
    reason = serializers.CharField(required=False, allow_blank=True, max_length=200)

    def validate(self, attrs):
        ids = list(attrs.get('studentIds') or [])
        if attrs.get('studentId') is not None:
            ids.insert(0, attrs['studentId'])
        if not ids:
            raise serializers.ValidationError({'studentIds': 'studentId or studentIds is required'})
        # Keep request order, drop repeats so one student is not adjusted twice
        attrs['student_ids'] = list(dict.fromkeys(ids))
        return attrs


class GrantTalentsSerializer(serializers.Serializer):
    """Teacher grant / transfer request."""
    studentId = serializers.IntegerField()
    amount = serializers.IntegerField()
    reason = serializers.CharField(max_length=200)
    useOwnBalance = serializers.BooleanField(required=False, default=False)
