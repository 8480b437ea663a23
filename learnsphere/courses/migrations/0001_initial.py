import django.db.models.deletion
import django.utils.timezone
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Course',
            fields=[
                ('id', models.UUIDField(db_column='course_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_column='title', max_length=500)),
                ('description', models.TextField(blank=True, db_column='description', null=True)),
                ('sequential_progress', models.BooleanField(db_column='sequential_progress', default=False)),
                ('published', models.BooleanField(db_column='published', default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('created_by', models.ForeignKey(db_column='created_by', on_delete=django.db.models.deletion.PROTECT, related_name='created_courses', to='accounts.profile')),
            ],
            options={
                'db_table': 'courses',
                'indexes': [models.Index(fields=['created_by'], name='idx_courses_created_by')],
            },
        ),
        migrations.CreateModel(
            name='Quiz',
            fields=[
                ('id', models.UUIDField(db_column='id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_column='title', max_length=500)),
                ('description', models.TextField(blank=True, db_column='description', null=True)),
                ('points_first_try', models.PositiveIntegerField(db_column='points_first_try', default=0)),
                ('points_second_try', models.PositiveIntegerField(db_column='points_second_try', default=0)),
                ('points_third_try', models.PositiveIntegerField(db_column='points_third_try', default=0)),
                ('points_fourth_plus', models.PositiveIntegerField(db_column='points_fourth_plus', default=0)),
                ('allow_multiple_attempts', models.BooleanField(db_column='allow_multiple_attempts', default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='quizzes', to='courses.course')),
            ],
            options={
                'db_table': 'quizzes',
            },
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.UUIDField(db_column='id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('text', models.TextField(db_column='text')),
                ('multiple_selection', models.BooleanField(db_column='multiple_selection', default=False)),
                ('order', models.IntegerField(db_column='order', default=0)),
                ('quiz', models.ForeignKey(db_column='quiz_id', on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='courses.quiz')),
            ],
            options={
                'db_table': 'questions',
                'ordering': ['order'],
            },
        ),
        migrations.CreateModel(
            name='Option',
            fields=[
                ('id', models.UUIDField(db_column='id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('text', models.CharField(db_column='text', max_length=1000)),
                ('is_correct', models.BooleanField(db_column='is_correct', default=False)),
                ('question', models.ForeignKey(db_column='question_id', on_delete=django.db.models.deletion.CASCADE, related_name='options', to='courses.question')),
            ],
            options={
                'db_table': 'options',
            },
        ),
        migrations.CreateModel(
            name='Lesson',
            fields=[
                ('id', models.UUIDField(db_column='lesson_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(db_column='title', max_length=500)),
                ('type', models.CharField(choices=[('VIDEO', 'Video'), ('DOCUMENT', 'Document'), ('IMAGE', 'Image'), ('QUIZ', 'Quiz')], db_column='type', default='VIDEO', max_length=20)),
                ('sort_order', models.IntegerField(db_column='sort_order')),
                ('description', models.TextField(blank=True, db_column='description', null=True)),
                ('duration_sec', models.IntegerField(blank=True, db_column='duration_sec', null=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_column='deleted_at', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('updated_at', models.DateTimeField(auto_now=True, db_column='updated_at')),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='lessons', to='courses.course')),
                ('quiz', models.OneToOneField(blank=True, db_column='quiz_id', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='lesson', to='courses.quiz')),
            ],
            options={
                'db_table': 'lessons',
                'ordering': ['sort_order'],
                'unique_together': {('course', 'sort_order')},
            },
        ),
        migrations.CreateModel(
            name='QuizAttempt',
            fields=[
                ('id', models.UUIDField(db_column='id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('attempt_number', models.PositiveIntegerField(db_column='attempt_number')),
                ('answers', models.JSONField(db_column='answers', default=dict)),
                ('score', models.PositiveIntegerField(db_column='score', default=0)),
                ('max_score', models.PositiveIntegerField(db_column='max_score', default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
                ('quiz', models.ForeignKey(db_column='quiz_id', on_delete=django.db.models.deletion.CASCADE, related_name='attempts', to='courses.quiz')),
                ('user', models.ForeignKey(db_column='user_id', on_delete=django.db.models.deletion.CASCADE, related_name='quiz_attempts', to='accounts.profile')),
            ],
            options={
                'db_table': 'quiz_attempts',
                'ordering': ['attempt_number'],
                'indexes': [models.Index(fields=['quiz', 'user'], name='idx_attempt_quiz_user')],
                'unique_together': {('quiz', 'user', 'attempt_number')},
            },
        ),
        migrations.CreateModel(
            name='Enrollment',
            fields=[
                ('id', models.UUIDField(db_column='id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('YET_TO_START', 'Yet to start'), ('IN_PROGRESS', 'In progress'), ('COMPLETED', 'Completed')], db_column='status', default='YET_TO_START', max_length=20)),
                ('completion_percent', models.PositiveSmallIntegerField(db_column='completion_percent', default=0)),
                ('progress', models.JSONField(db_column='progress', default=dict)),
                ('enrolled_at', models.DateTimeField(db_column='enrolled_at', default=django.utils.timezone.now)),
                ('start_date', models.DateTimeField(blank=True, db_column='start_date', null=True)),
                ('completed_date', models.DateTimeField(blank=True, db_column='completed_date', null=True)),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='enrollments', to='courses.course')),
                ('user', models.ForeignKey(db_column='user_id', on_delete=django.db.models.deletion.CASCADE, related_name='enrollments', to='accounts.profile')),
            ],
            options={
                'db_table': 'enrollments',
                'unique_together': {('course', 'user')},
            },
        ),
        migrations.CreateModel(
            name='LessonProgress',
            fields=[
                ('id', models.UUIDField(db_column='id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('completed_at', models.DateTimeField(db_column='completed_at', default=django.utils.timezone.now)),
                ('course', models.ForeignKey(db_column='course_id', on_delete=django.db.models.deletion.CASCADE, related_name='lesson_progress', to='courses.course')),
                ('enrollment', models.ForeignKey(db_column='enrollment_id', on_delete=django.db.models.deletion.CASCADE, related_name='lesson_progress', to='courses.enrollment')),
                ('lesson', models.ForeignKey(db_column='lesson_id', on_delete=django.db.models.deletion.CASCADE, related_name='progress', to='courses.lesson')),
                ('user', models.ForeignKey(db_column='user_id', on_delete=django.db.models.deletion.CASCADE, related_name='lesson_progress', to='accounts.profile')),
            ],
            options={
                'db_table': 'lesson_progress',
                'unique_together': {('enrollment', 'lesson')},
            },
        ),
    ]
