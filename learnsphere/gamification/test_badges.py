"""
Tests for badge evaluation and badge seeding
"""
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.db import IntegrityError
from django.test import TestCase

from accounts.models import Profile
from gamification.models import Badge, UserBadge
from gamification.services import badges
from learnsphere.testing import make_profile


class EvaluateTest(TestCase):

    def setUp(self):
        call_command('seed_badges', stdout=StringIO())
        self.learner = make_profile('learner')

    def set_points(self, points):
        Profile.objects.filter(pk=self.learner.pk).update(total_points=points)

    def test_grants_every_reached_threshold(self):
        self.set_points(65)
        result = badges.evaluate(self.learner.pk)
        self.assertEqual(result.awarded, 3)
        self.assertEqual(result.badge_names, ['Newbie', 'Explorer', 'Achiever'])

    def test_second_call_grants_nothing(self):
        """Evaluating twice with an unchanged total grants the set once"""
        self.set_points(100)
        first = badges.evaluate(self.learner.pk)
        second = badges.evaluate(self.learner.pk)

        self.assertEqual(first.awarded, 5)
        self.assertEqual(second.awarded, 0)
        self.assertEqual(second.badge_names, [])
        self.assertEqual(UserBadge.objects.filter(user=self.learner).count(), 5)

    def test_only_new_badges_reported(self):
        self.set_points(20)
        badges.evaluate(self.learner.pk)
        self.set_points(45)
        self.assertEqual(badges.evaluate(self.learner.pk).badge_names, ['Explorer'])

    def test_below_first_threshold(self):
        self.set_points(19)
        self.assertEqual(badges.evaluate(self.learner.pk).awarded, 0)

    def test_unknown_user(self):
        result = badges.evaluate('00000000-0000-0000-0000-000000000000')
        self.assertEqual((result.awarded, result.badge_names), (0, []))

    def test_badges_are_not_revoked(self):
        self.set_points(40)
        badges.evaluate(self.learner.pk)
        self.set_points(0)
        badges.evaluate(self.learner.pk)
        self.assertEqual(UserBadge.objects.filter(user=self.learner).count(), 2)

    def test_concurrent_insert_counts_as_owned(self):
        """A row inserted by a racing evaluation is skipped, not reported, not an error"""
        self.set_points(20)
        with mock.patch.object(UserBadge.objects, 'get_or_create', side_effect=IntegrityError('duplicate key')):
            result = badges.evaluate(self.learner.pk)
        self.assertEqual(result.awarded, 0)

    def test_evaluate_safely_swallows_errors(self):
        with mock.patch.object(badges, 'evaluate', side_effect=RuntimeError('boom')):
            self.assertEqual(badges.evaluate_safely(self.learner.pk), [])

    def test_user_badges_lists_owned(self):
        self.set_points(40)
        badges.evaluate(self.learner.pk)
        names = [ub.badge.name for ub in badges.user_badges(self.learner.pk)]
        self.assertCountEqual(names, ['Newbie', 'Explorer'])


class SeedBadgesCommandTest(TestCase):

    def test_seed_is_idempotent(self):
        call_command('seed_badges', stdout=StringIO())
        out = StringIO()
        call_command('seed_badges', stdout=out)

        self.assertEqual(Badge.objects.count(), 6)
        self.assertIn('0 badge(s) created', out.getvalue())
        self.assertEqual(
            list(badges.list_badges().values_list('name', 'required_points')),
            [('Newbie', 20), ('Explorer', 40), ('Achiever', 60), ('Specialist', 80), ('Expert', 100), ('Master', 120)],
        )

    def test_existing_badge_left_untouched(self):
        Badge.objects.create(name='Newbie', required_points=5)
        call_command('seed_badges', stdout=StringIO())
        self.assertEqual(Badge.objects.get(name='Newbie').required_points, 5)
