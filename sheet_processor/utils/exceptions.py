"""
Error taxonomy for the spreadsheet upload and projection pipeline.

Each error carries the HTTP status the views answer with and a stable code
that clients can branch on.
"""


class SheetProcessorError(Exception):
    """Base exception for the sheet processor."""
    status_code = 500
    code = 'error'


class ParseError(SheetProcessorError):
    """Raised when an uploaded file cannot be turned into a dataset."""
    status_code = 400
    code = 'parse_error'


class UnsupportedFileKind(ParseError):
    """Raised for files that are not .xls or .xlsx spreadsheets."""
    status_code = 415
    code = 'unsupported_file_kind'


class EmptyDataset(ParseError):
    """Raised when the first sheet has no data rows below the header."""
    code = 'empty_dataset'


class MalformedSpreadsheet(ParseError):
    """Raised when the spreadsheet reader cannot open the file."""
    code = 'malformed_spreadsheet'


class InvalidRequest(SheetProcessorError):
    status_code = 400
    code = 'invalid_request'


class NotFound(SheetProcessorError):
    """Raised for missing uploads and for uploads owned by someone else."""
    status_code = 404
    code = 'not_found'


class Forbidden(SheetProcessorError):
    status_code = 403
    code = 'forbidden'


class StorageFailure(SheetProcessorError):
    """Raised when the persistence layer is unavailable."""
    status_code = 503
    code = 'storage_failure'
