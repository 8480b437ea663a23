import django.db.models.deletion
import django.utils.timezone
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('courses', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Badge',
            fields=[
                ('id', models.UUIDField(db_column='badge_id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_column='name', max_length=100, unique=True)),
                ('required_points', models.PositiveIntegerField(db_column='required_points')),
                ('description', models.TextField(blank=True, db_column='description', null=True)),
                ('icon', models.CharField(blank=True, db_column='icon', max_length=255, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_column='created_at')),
            ],
            options={
                'db_table': 'badges',
                'ordering': ['required_points', 'name'],
            },
        ),
        migrations.CreateModel(
            name='PointsTransaction',
            fields=[
                ('id', models.UUIDField(db_column='id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('source', models.CharField(choices=[('QUIZ', 'Quiz'), ('COURSE_COMPLETION', 'Course completion'), ('MANUAL', 'Manual')], db_column='source', max_length=20)),
                ('points', models.IntegerField(db_column='points')),
                ('metadata', models.JSONField(blank=True, db_column='metadata', default=dict)),
                ('created_at', models.DateTimeField(db_column='created_at', default=django.utils.timezone.now)),
                ('course', models.ForeignKey(blank=True, db_column='course_id', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='points_transactions', to='courses.course')),
                ('user', models.ForeignKey(db_column='user_id', on_delete=django.db.models.deletion.CASCADE, related_name='points_transactions', to='accounts.profile')),
            ],
            options={
                'db_table': 'points_transactions',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'created_at'], name='idx_points_user_time')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('source', 'COURSE_COMPLETION')), fields=('user', 'course'), name='uniq_course_completion_bonus')],
            },
        ),
        migrations.CreateModel(
            name='UserBadge',
            fields=[
                ('id', models.UUIDField(db_column='id', default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('earned_at', models.DateTimeField(db_column='earned_at', default=django.utils.timezone.now)),
                ('badge', models.ForeignKey(db_column='badge_id', on_delete=django.db.models.deletion.CASCADE, related_name='holders', to='gamification.badge')),
                ('user', models.ForeignKey(db_column='user_id', on_delete=django.db.models.deletion.CASCADE, related_name='badges', to='accounts.profile')),
            ],
            options={
                'db_table': 'user_badges',
                'ordering': ['-earned_at'],
                'unique_together': {('user', 'badge')},
            },
        ),
    ]
