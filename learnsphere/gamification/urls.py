from django.urls import path

from . import views

urlpatterns = [
    path('points/me/', views.my_points, name='points-me'),
    path('points/award/', views.award_points, name='points-award'),
    path('badges/', views.badge_list, name='badge-list'),
    path('badges/me/', views.my_badges, name='badges-me'),
]
