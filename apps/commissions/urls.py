from django.urls import path
from . import views

app_name = 'commissions'

urlpatterns = [
    # GET        /api/commissions/                - List (optional ?status=)
    # GET        /api/commissions/kanban/         - Kanban board
    # GET/PATCH  /api/commissions/{id}/           - Detail / operator update
    # GET/POST   /api/commissions/{id}/updates/   - Update log
    path('', views.commission_list, name='commission-list'),
    path('kanban/', views.kanban, name='kanban'),
    path('<int:pk>/', views.commission_detail, name='commission-detail'),
    path('<int:pk>/updates/', views.commission_updates, name='commission-updates'),
]
