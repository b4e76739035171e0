from django.urls import path
from . import views

app_name = 'claims'

urlpatterns = [
    # Consumer
    path('promotions/<int:promotion_id>/claim/', views.claim_promotion, name='claim-promotion'),
    path('mine/', views.my_claims, name='my-claims'),
    path('<uuid:pk>/qr/', views.claim_qr, name='claim-qr'),

    # Seller
    path('scan/', views.scan, name='scan'),
    path('promotions/<int:promotion_id>/', views.promotion_claims, name='promotion-claims'),
]
