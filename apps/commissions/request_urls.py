from django.urls import path
from . import views

app_name = 'requests'

urlpatterns = [
    # POST /api/requests/                  - Submit a request
    # GET  /api/requests/my-requests/      - Caller's requests
    # GET  /api/requests/{id}/             - Get request (owner / artist)
    # POST /api/requests/{id}/accept/      - Accept (artist)
    # POST /api/requests/{id}/decline/     - Decline (artist)
    path('', views.submit_request, name='submit'),
    path('my-requests/', views.my_requests, name='my-requests'),
    path('<int:pk>/', views.request_detail, name='request-detail'),
    path('<int:pk>/accept/', views.accept_request, name='accept'),
    path('<int:pk>/decline/', views.decline_request, name='decline'),
]
