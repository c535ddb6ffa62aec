from django.contrib import admin
from .models import Dataset, UploadEntry, UserProfile


@admin.register(UploadEntry)
class UploadEntryAdmin(admin.ModelAdmin):
    list_display = ['original_filename', 'owner', 'uploaded_at', 'stored_filename']
    list_filter = ['owner']
    search_fields = ['original_filename', 'stored_filename']
    readonly_fields = ['uploaded_at', 'dataset']


@admin.register(Dataset)
class DatasetAdmin(admin.ModelAdmin):
    list_display = ['dataset_id', 'created_at']
    readonly_fields = ['dataset_id', 'created_at', 'columns', 'rows']


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'role']
    list_filter = ['role']
