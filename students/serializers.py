"""
Serializers for students app
"""
from rest_framework import serializers
from .models import Student, Teacher


class StudentSerializer(serializers.ModelSerializer):
    """Student summary embedded in ledger responses. `talents` is read-only: balances move through the ledger."""
    className = serializers.CharField(source='class_name', read_only=True)

    class Meta:
        model = Student
        fields = ['id', 'name', 'className', 'teacher', 'talents']
        read_only_fields = fields


class TeacherSerializer(serializers.ModelSerializer):
    """Teacher summary embedded in ledger responses."""
    className = serializers.CharField(source='class_name', read_only=True)

    class Meta:
        model = Teacher
        fields = ['id', 'name', 'className', 'talents']
        read_only_fields = fields
