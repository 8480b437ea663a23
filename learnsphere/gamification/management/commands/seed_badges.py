from django.core.management.base import BaseCommand

from gamification.models import Badge

DEFAULT_BADGES = [
    ('Newbie', 20, 'Earned your first 20 points', 'badge-newbie'),
    ('Explorer', 40, 'Reached 40 points', 'badge-explorer'),
    ('Achiever', 60, 'Reached 60 points', 'badge-achiever'),
    ('Specialist', 80, 'Reached 80 points', 'badge-specialist'),
    ('Expert', 100, 'Reached 100 points', 'badge-expert'),
    ('Master', 120, 'Reached 120 points', 'badge-master'),
]


class Command(BaseCommand):
    help = 'Create the default badge ladder (existing badges are left untouched)'

    def handle(self, *args, **options):
        created = 0
        for name, required_points, description, icon in DEFAULT_BADGES:
            _, was_created = Badge.objects.get_or_create(
                name=name,
                defaults={
                    'required_points': required_points,
                    'description': description,
                    'icon': icon,
                },
            )
            if was_created:
                created += 1
                self.stdout.write(f'  + {name} ({required_points} pts)')

        self.stdout.write(self.style.SUCCESS(f'{created} badge(s) created, {len(DEFAULT_BADGES) - created} already present'))
