from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import IntegerField, OuterRef, Subquery, Sum, Value
from django.db.models.functions import Coalesce

from accounts.models import Profile
from gamification.models import PointsTransaction


class Command(BaseCommand):
    help = 'Report profiles whose total_points differs from the sum of their ledger entries'

    def add_arguments(self, parser):
        parser.add_argument('--fix', action='store_true', help='Rewrite total_points from the ledger sum')

    def handle(self, *args, **options):
        ledger_sum = (
            PointsTransaction.objects.filter(user=OuterRef('pk'))
            .order_by()
            .values('user')
            .annotate(total=Sum('points'))
            .values('total')
        )
        profiles = Profile.objects.annotate(
            ledger=Coalesce(Subquery(ledger_sum, output_field=IntegerField()), Value(0)),
        )

        mismatched = [p for p in profiles if p.total_points != p.ledger]
        for profile in mismatched:
            self.stdout.write(f'{profile.pk}: total_points={profile.total_points} ledger={profile.ledger}')

        if not mismatched:
            self.stdout.write(self.style.SUCCESS('All point totals match the ledger'))
            return

        if options['fix']:
            with transaction.atomic():
                for profile in mismatched:
                    Profile.objects.filter(pk=profile.pk).update(total_points=profile.ledger)
            self.stdout.write(self.style.SUCCESS(f'Fixed {len(mismatched)} profile(s)'))
        else:
            self.stdout.write(self.style.WARNING(f'{len(mismatched)} profile(s) out of sync; rerun with --fix to repair'))
