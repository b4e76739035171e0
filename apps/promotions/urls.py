from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'promotions'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.PromotionViewSet, basename='promotion')

urlpatterns = [
    # Promotion ViewSet routes
    # GET    /api/promotions/                - List visible promotions
    # POST   /api/promotions/                - Create promotion (seller)
    # GET    /api/promotions/{id}/           - Get promotion
    # PUT    /api/promotions/{id}/           - Update own promotion (seller)
    # PATCH  /api/promotions/{id}/           - Partial update (seller)
    # DELETE /api/promotions/{id}/           - Delete own promotion (seller)
    # POST   /api/promotions/{id}/approve/   - Approve (admin)
    # POST   /api/promotions/{id}/decline/   - Decline (admin)

    path('industries/', views.industries, name='industries'),

    # Include router URLs
    path('', include(router.urls)),
]
