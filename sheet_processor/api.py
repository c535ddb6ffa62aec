"""
This module contains the API for the sheet processor application.
Its used by the views to upload, list, delete and project spreadsheets.

Every function takes the access gate Caller first and checks it before doing any work.
"""
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from .models import UserProfile
from .utils.access_gate import Action, require, ROLE_USER, ROLE_ADMIN
from .utils.dataset_parser import DatasetParser, ParsedDataset, file_kind_for, SUPPORTED_FILE_KINDS
from .utils.dataset_store import DatasetStore
from .utils.exceptions import InvalidRequest, StorageFailure, UnsupportedFileKind
from .utils.file_transport import FileTransport
from .utils.projection_engine import project
from .utils.upload_ledger import UploadLedger
import logging

logger = logging.getLogger(__name__)

def _ledger():
    return UploadLedger(DatasetStore(), FileTransport())

def entry_to_json_object(entry):
    """An upload entry with its dataset expanded into the {columns, rows} shape."""
    return {
        'id': entry.pk,
        'stored_filename': entry.stored_filename,
        'original_filename': entry.original_filename,
        'uploaded_at': entry.uploaded_at.isoformat(),
        'data': {
            'columns': entry.dataset.columns,
            'rows': entry.dataset.rows,
        },
    }

def upload_and_parse_file(caller, file):
    """
    Parses an uploaded spreadsheet and records it in the caller's upload history.

    The file kind is checked before any parsing. The dataset and its ledger entry are
    written in one transaction; if that fails the stored file is removed again.

    Args:
        caller (Caller): The uploading caller.
        file (UploadedFile): The uploaded .xls or .xlsx file.

    Returns:
        (entry, dataset): The new UploadEntry and the ParsedDataset.
    """
    require(caller, Action.UPLOAD)
    if file is None:
        raise InvalidRequest("No file uploaded or invalid file type")

    file_kind = file_kind_for(file.name)
    if file_kind not in settings.ALLOWED_UPLOAD_EXTENSIONS or file_kind not in SUPPORTED_FILE_KINDS:
        raise UnsupportedFileKind("Only .xls and .xlsx files are allowed")

    file.seek(0)
    dataset = DatasetParser.parse(file.read(), file_kind)

    store = DatasetStore()
    transport = FileTransport()
    ledger = UploadLedger(store, transport)
    stored_filename = transport.store(file)
    try:
        with transaction.atomic():
            dataset_id = store.save(dataset)
            entry = ledger.record(caller.identity, stored_filename, file.name, dataset_id)
    except Exception:
        transport.remove(stored_filename)
        raise
    logger.info("%s: File %s uploaded by user %s", entry.pk, file.name, caller.identity)
    return entry, dataset

def list_uploads(caller):
    """The caller's own uploads, newest first. Never another user's, whatever the role."""
    require(caller, Action.LIST_HISTORY, caller.identity)
    return _ledger().list_for(caller.identity)

def get_upload(caller, entry_id):
    require(caller, Action.VIEW, caller.identity)
    return _ledger().get_for(caller.identity, entry_id)

def delete_upload(caller, entry_id):
    require(caller, Action.DELETE, caller.identity)
    return _ledger().delete_one(caller.identity, entry_id)

def project_upload(caller, entry_id, x_column, y_column, chart_kind):
    """
    Projects two columns of one of the caller's uploads.

    Returns:
        CategorySeries, PointSeries or NoData.
    """
    require(caller, Action.PROJECT, caller.identity)
    entry = _ledger().get_for(caller.identity, entry_id)
    dataset = DatasetStore().get(entry.dataset_id)
    return project(dataset, x_column, y_column, chart_kind)

def project_inline(caller, dataset_json, x_column, y_column, chart_kind):
    """Projects a {columns, rows} dataset the client already holds."""
    require(caller, Action.PROJECT, caller.identity)
    try:
        dataset = ParsedDataset.from_json_object(dataset_json)
    except ValueError as e:
        raise InvalidRequest(str(e))
    return project(dataset, x_column, y_column, chart_kind)

def dashboard_greeting(caller):
    require(caller, Action.DASHBOARD_VIEW)
    return f"Welcome, user {caller.identity} with role {caller.role}"

def register_user(name, email, password, role=None):
    """
    Creates a user and their profile. The email doubles as the username.

    Raises:
        InvalidRequest: Missing fields, an unknown role or an email that is already registered.
    """
    if not email or not password:
        raise InvalidRequest("Value 'email' and 'password' are required")
    role = role or ROLE_USER
    if role not in (ROLE_USER, ROLE_ADMIN):
        raise InvalidRequest(f"Unknown role {role}")

    User = get_user_model()
    if User.objects.filter(username=email).exists():
        raise InvalidRequest("User already exists")
    try:
        with transaction.atomic():
            user = User.objects.create_user(email, email, password, first_name=name or '')
            UserProfile.objects.create(user=user, role=role)
    except DatabaseError as e:
        logger.error("Failed to register user %s: %s", email, e)
        raise StorageFailure("User storage is unavailable") from e
    logger.info("Registered user %s with role %s", user.pk, role)
    return user
