from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('confirm-email/', views.confirm_email, name='confirm-email'),
    path('confirm-email/resend/', views.resend_confirmation, name='confirm-email-resend'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),

    # Session
    path('user/', views.get_current_user, name='current-user'),
    path('route/', views.route, name='route'),

    # Password reset
    path('password-reset/', views.request_password_reset, name='password-reset'),
    path('password-reset/verify/', views.verify_password_reset, name='password-reset-verify'),
    path('password-reset/confirm/', views.confirm_password_reset, name='password-reset-confirm'),

    # Profile
    path('profile/', views.update_profile, name='update-profile'),
    path('profile/logo/', views.upload_logo, name='upload-logo'),

    # Admin user management
    path('users/', views.list_users, name='user-list'),
    path('users/<uuid:pk>/role/', views.update_user_role, name='update-user-role'),
]
