# Initial migration: append-only talent history for students and teachers
from django.db import migrations, models
import django.db.models.deletion


TYPE_CHOICES = [
    ('attendance', 'Attendance'),
    ('activity', 'Weekly activity'),
    ('manual', 'Manual'),
    ('transfer', 'Transfer'),
    ('purchase', 'Purchase'),
    ('delete', 'Attendance deleted'),
    ('correction', 'Correction'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('students', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='TalentHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.IntegerField(help_text='Signed: positive credits, negative debits')),
                ('before_balance', models.IntegerField()),
                ('after_balance', models.IntegerField()),
                ('reason', models.CharField(max_length=255)),
                ('type', models.CharField(choices=TYPE_CHOICES, db_index=True, max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('granted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='granted_history', to='students.teacher')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='talent_history', to='students.student')),
            ],
            options={
                'verbose_name': 'Talent History',
                'verbose_name_plural': 'Talent History',
                'db_table': 'talent_history',
                'ordering': ['-created_at', '-id'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['student', 'created_at'], name='talent_hist_student_6b1f0e_idx'),
                    models.Index(fields=['granted_by', 'type', 'created_at'], name='talent_hist_granted_3c9a42_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TeacherTalentHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.IntegerField(help_text='Signed: positive credits, negative debits')),
                ('before_balance', models.IntegerField()),
                ('after_balance', models.IntegerField()),
                ('reason', models.CharField(max_length=255)),
                ('type', models.CharField(choices=TYPE_CHOICES, db_index=True, max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('teacher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='talent_history', to='students.teacher')),
            ],
            options={
                'verbose_name': 'Teacher Talent History',
                'verbose_name_plural': 'Teacher Talent History',
                'db_table': 'teacher_talent_history',
                'ordering': ['-created_at', '-id'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['teacher', 'created_at'], name='teacher_tal_teacher_8d2e57_idx'),
                ],
            },
        ),
    ]
