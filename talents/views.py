"""
Talent ledger API.
Endpoints:
- POST /api/talents/adjust                      Admin manual / bulk adjustment
- GET  /api/talents/history?entity=&id=         Ledger rows for a student or teacher, newest first
- POST /api/teacher/talents/grant               Teacher grant (capped) or transfer (own balance)
- GET  /api/teacher/talents/weekly-grants       This week's capped grants for the teacher
Ledger errors are rendered by config.exceptions.custom_exception_handler.
"""
import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdmin, IsTeacher
from students.serializers import StudentSerializer, TeacherSerializer
from talents.serializers import (
    AdjustTalentsSerializer,
    GrantTalentsSerializer,
    TalentHistorySerializer,
    TeacherTalentHistorySerializer,
)
from talents.services.adjustments import adjust_talents
from talents.services.grants import grant_or_transfer, weekly_grant_summary
from talents.services.history import ENTITY_STUDENT, ENTITY_TEACHER, get_history

logger = logging.getLogger(__name__)


def _request_teacher(request):
    """Teacher roster row of the logged-in user, or None."""
    teacher = getattr(request.user, 'teacher_profile', None)
    if teacher is None:
        logger.warning(f"[talents] User {request.user.id} has the teacher role but no teacher profile")
    return teacher


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsAdmin])
def talents_adjust_view(request):
    """
    POST /api/talents/adjust
    Body: { studentId | studentIds: [...], amount: int, reason?: str }
    Each student is adjusted in its own transaction; results are reported per student.
    A single-student request that fails returns that student's error status.
    """
    serializer = AdjustTalentsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    results = adjust_talents(data['student_ids'], data['amount'], data.get('reason'))
    applied = [r for r in results if r.ok]
    logger.info(f"[talents] Admin {request.user.id} adjusted {len(applied)}/{len(results)} students by {data['amount']:+d}")
    payload = {
        "success": len(applied) == len(results),
        "count": len(applied),
        "results": [
            {
                "studentId": r.student_id,
                "ok": r.ok,
                "beforeBalance": r.before_balance,
                "afterBalance": r.after_balance,
                "detail": r.detail or None,
                "code": r.code or None,
            }
            for r in results
        ],
    }
    if len(results) == 1 and not results[0].ok:
        return Response(
            {"detail": results[0].detail, "code": results[0].code, **payload},
            status=results[0].status_code,
        )
    return Response(payload)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def talents_history_view(request):
    """
    GET /api/talents/history?entity=student&id=12
    Students may only read their own history.
    """
    entity_kind = request.query_params.get("entity", ENTITY_STUDENT)
    entity_id = request.query_params.get("id") or request.query_params.get("studentId")
    if not entity_id or not str(entity_id).isdigit():
        return Response(
            {"detail": "id query param required", "code": "missing_field"},
            status=status.HTTP_400_BAD_REQUEST,
        )
    entity_id = int(entity_id)

    if request.user.role == "student":
        own = getattr(request.user, "student_profile", None)
        if entity_kind != ENTITY_STUDENT or own is None or own.id != entity_id:
            return Response({"detail": "Access denied"}, status=status.HTTP_403_FORBIDDEN)

    entity, history = get_history(entity_kind, entity_id)
    if entity_kind == ENTITY_TEACHER:
        return Response({
            "teacher": TeacherSerializer(entity).data,
            "history": TeacherTalentHistorySerializer(history, many=True).data,
        })
    return Response({
        "student": StudentSerializer(entity).data,
        "history": TalentHistorySerializer(history.select_related("student"), many=True).data,
    })


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsTeacher])
def teacher_grant_view(request):
    """
    POST /api/teacher/talents/grant
    Body: { studentId, amount, reason, useOwnBalance }
    useOwnBalance=false: weekly-capped grant (negative amounts deduct).
    useOwnBalance=true: transfer from the teacher's own balance.
    """
    teacher = _request_teacher(request)
    if teacher is None:
        return Response({"detail": "Teacher profile not found", "code": "teacher_not_found"},
                        status=status.HTTP_404_NOT_FOUND)

    serializer = GrantTalentsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = grant_or_transfer(
        teacher.id,
        data["studentId"],
        data["amount"],
        data["reason"],
        data["useOwnBalance"],
    )
    payload = {
        "success": True,
        "mode": result.mode,
        "amount": result.amount,
        "student": {"before": result.student_before, "after": result.student_after},
    }
    if result.teacher_before is not None:
        payload["teacher"] = {"before": result.teacher_before, "after": result.teacher_after}
    return Response(payload)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsTeacher])
def teacher_weekly_grants_view(request):
    """
    GET /api/teacher/talents/weekly-grants
    Returns: { weeklyTotal, limit, remaining, weekStart, weekEnd, grants: [...] }
    """
    teacher = _request_teacher(request)
    if teacher is None:
        return Response({"detail": "Teacher profile not found", "code": "teacher_not_found"},
                        status=status.HTTP_404_NOT_FOUND)

    summary = weekly_grant_summary(teacher.id)
    return Response({
        "weeklyTotal": summary.total,
        "limit": summary.limit,
        "remaining": summary.remaining,
        "weekStart": summary.window_start.isoformat(),
        "weekEnd": summary.window_end.isoformat(),
        "grants": TalentHistorySerializer(summary.grants, many=True).data,
    })
