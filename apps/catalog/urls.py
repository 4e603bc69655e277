from django.urls import path
from . import views

app_name = 'services'

urlpatterns = [
    # GET  /api/services/                   - List active services
    # GET  /api/services/{id}/              - Get service
    # POST /api/services/calculate-price/   - Price quote
    # GET  /api/services/terms-of-service/  - Terms of service
    path('', views.service_list, name='service-list'),
    path('calculate-price/', views.calculate_price, name='calculate-price'),
    path('terms-of-service/', views.terms_of_service, name='terms-of-service'),
    path('<int:pk>/', views.service_detail, name='service-detail'),
]
