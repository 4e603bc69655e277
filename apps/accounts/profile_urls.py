from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('profile/', views.profile, name='profile'),
    path('profile-picture/', views.upload_profile_picture, name='profile-picture'),
    path('banner/', views.upload_banner, name='banner'),
]
