from django.urls import path
from .views import signup, dashboard, upload_data, uploads, upload_detail, upload_projection, inline_projection

urlpatterns = [
    path('signup', signup, name='signup'),
    path('dashboard', dashboard, name='dashboard'),
    path('upload', upload_data, name='upload_data'),
    path('uploads', uploads, name='uploads'),
    path('uploads/<int:entry_id>', upload_detail, name='upload_detail'),
    path('uploads/<int:entry_id>/projection', upload_projection, name='upload_projection'),
    path('projection', inline_projection, name='inline_projection'),
]
