from django.urls import path

from suscheck import views

urlpatterns = [
    path('scan', views.ScanAPIView.as_view(), name='scan-api'),
    path('health', views.HealthAPIView.as_view(), name='health-api'),
]
