"""
Attendance API (admin and teachers).
Endpoints:
- GET    /api/attendance?date=YYYY-MM-DD      Records for one day
- POST   /api/attendance                      Set status { studentId, date, status }
- PATCH  /api/attendance/{id}/comment         Update comment (no talent effect)
- DELETE /api/attendance/{id}                 Delete record (reverses a present)
- GET    /api/weekly-activities?date=         Weekly flags of the week containing date
- POST   /api/weekly-activities               Toggle one weekly flag
"""
import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdminOrTeacher
from attendance.models import AttendanceRecord
from attendance.serializers import (
    AttendanceCommentSerializer,
    AttendanceRecordSerializer,
    SetAttendanceSerializer,
    ToggleActivitySerializer,
    WeeklyActivitySerializer,
)
from attendance.services.attendance_status import (
    delete_attendance,
    parse_date,
    set_attendance,
    set_attendance_comment,
)
from attendance.services.weekly_activity import toggle_activity, weekly_activities

logger = logging.getLogger(__name__)


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsAdminOrTeacher])
def attendance_view(request):
    if request.method == "GET":
        target_date = parse_date(request.query_params.get("date"))
        records = AttendanceRecord.objects.filter(date=target_date).select_related("student")
        return Response({
            "date": target_date.isoformat(),
            "records": AttendanceRecordSerializer(records, many=True).data,
        })

    serializer = SetAttendanceSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    change = set_attendance(data["studentId"], data["date"], data["status"], marked_by=request.user)
    logger.info(f"[attendance] User {request.user.id} marked student {data['studentId']} {data['status']}")
    payload = {
        "success": True,
        "record": AttendanceRecordSerializer(change.record).data,
        "previousStatus": change.old_status,
        "studentDelta": change.student_delta,
        "teacherDelta": change.teacher_delta,
    }
    return Response(payload, status=status.HTTP_201_CREATED if change.created else status.HTTP_200_OK)


@api_view(["PATCH"])
@permission_classes([IsAuthenticated, IsAdminOrTeacher])
def attendance_comment_view(request, record_id):
    serializer = AttendanceCommentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    record = set_attendance_comment(record_id, serializer.validated_data["comment"])
    return Response(AttendanceRecordSerializer(record).data)


@api_view(["DELETE"])
@permission_classes([IsAuthenticated, IsAdminOrTeacher])
def attendance_delete_view(request, record_id):
    amount = delete_attendance(record_id)
    logger.info(f"[attendance] User {request.user.id} deleted record {record_id} (student {amount:+d})")
    return Response({"success": True, "studentDelta": amount})


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsAdminOrTeacher])
def weekly_activity_view(request):
    """
    GET  /api/weekly-activities?date=YYYY-MM-DD   Rows of the week containing date
    POST /api/weekly-activities
    Body: { studentId, date, activityType: scripture|recitation|quiet_time|phone_check, checked }
    """
    if request.method == "GET":
        week, activities = weekly_activities(request.query_params.get("date"))
        return Response({
            "weekStart": week.isoformat(),
            "activities": WeeklyActivitySerializer(activities, many=True).data,
        })

    serializer = ToggleActivitySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = toggle_activity(data["studentId"], data["date"], data["activityType"], data["checked"])
    if result.changed:
        logger.info(
            f"[activity] User {request.user.id} set {data['activityType']}={result.value} "
            f"for student {data['studentId']}"
        )
    return Response({
        "success": True,
        "changed": result.changed,
        "studentDelta": result.student_delta,
        "activity": WeeklyActivitySerializer(result.activity).data if result.activity else None,
    })
