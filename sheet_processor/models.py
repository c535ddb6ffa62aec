from django.conf import settings
from django.db import models
from django.utils import timezone
import uuid


class UserProfile(models.Model):
    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_ADMIN, 'Admin'),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='profile')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)

    def __str__(self):
        return f"{self.user} ({self.role})"


class Dataset(models.Model):
    """
    A parsed spreadsheet stored as its {columns, rows} record.

    Rows are written once and never updated. The record is removed together with its upload entry.
    """
    dataset_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    columns = models.JSONField(default=list)
    rows = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.dataset_id} ({len(self.rows)} rows)"


class UploadEntry(models.Model):
    """
    One upload in a user's history.

    Attributes:
        owner: The uploading user
        stored_filename: Name of the stored file under UPLOAD_ROOT
        original_filename: The client's filename, display only
        uploaded_at: Set when the entry is recorded
        dataset: The dataset parsed from the upload
    """
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='uploads')
    stored_filename = models.CharField(max_length=255)
    original_filename = models.CharField(max_length=255)
    uploaded_at = models.DateTimeField(default=timezone.now, editable=False)
    # Deleting the dataset cascades to its entry
    dataset = models.OneToOneField(Dataset, on_delete=models.CASCADE, related_name='upload_entry')

    class Meta:
        # Newest first, ties broken by reverse insertion order
        ordering = ['-uploaded_at', '-id']
        verbose_name = 'Upload entry'
        verbose_name_plural = 'Upload entries'

    def __str__(self):
        return f"{self.original_filename} by {self.owner}"
