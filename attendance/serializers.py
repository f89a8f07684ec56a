"""
Serializers for attendance app
"""
from rest_framework import serializers
from .models import AttendanceRecord, WeeklyActivity


class AttendanceRecordSerializer(serializers.ModelSerializer):
    """Attendance record with the student's name for roster views."""
    studentId = serializers.IntegerField(source="student_id", read_only=True)
    studentName = serializers.CharField(source="student.name", read_only=True)
    markedBy = serializers.IntegerField(source="marked_by_id", read_only=True, allow_null=True)

    class Meta:
        model = AttendanceRecord
        fields = ['id', 'studentId', 'studentName', 'date', 'status', 'comment', 'markedBy']
        read_only_fields = fields


class SetAttendanceSerializer(serializers.Serializer):
    """
    Body shape only. Status and date rules are enforced by the attendance service
    so that they map to invalid_status / invalid_date.
    """
    studentId = serializers.IntegerField()
    date = serializers.CharField()
    status = serializers.CharField()


class AttendanceCommentSerializer(serializers.Serializer):
    comment = serializers.CharField(allow_blank=True, required=False, default="")


class WeeklyActivitySerializer(serializers.ModelSerializer):
    studentId = serializers.IntegerField(source="student_id", read_only=True)
    quietTime = serializers.BooleanField(source="quiet_time", read_only=True)
    phoneCheck = serializers.BooleanField(source="phone_check", read_only=True)

    class Meta:
        model = WeeklyActivity
        fields = ['id', 'studentId', 'date', 'scripture', 'recitation', 'quietTime', 'phoneCheck']
        read_only_fields = fields


class ToggleActivitySerializer(serializers.Serializer):
    studentId = serializers.IntegerField()
    date = serializers.CharField()
    activityType = serializers.CharField()
    checked = serializers.BooleanField()
