from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Consumer
    path('me/', views.my_analytics, name='my-analytics'),

    # Seller
    path('seller/', views.seller_analytics, name='seller-analytics'),

    # Admin
    path('admin/', views.admin_dashboard, name='admin-dashboard'),
]
