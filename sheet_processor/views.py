from functools import wraps
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.decorators import parser_classes
from rest_framework.decorators import permission_classes
from rest_framework.exceptions import APIException
from rest_framework.parsers import MultiPartParser, JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from .api import (upload_and_parse_file, list_uploads, get_upload, delete_upload, project_upload,
                  project_inline, dashboard_greeting, register_user, entry_to_json_object)
from .utils.exceptions import SheetProcessorError, InvalidRequest
from .utils.projection_engine import NoData, chart_kind_for
from .utils.token_issuance import caller_for_request
import logging

logger = logging.getLogger(__name__)

def structured_errors(view):
    """
    Answers domain errors with {'status': 'Error', 'code', 'message'} and their HTTP status.
    Anything else is logged and answered with a generic 500 that leaks no internals.
    """
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except SheetProcessorError as e:
            logger.info("%s %s failed: %s", request.method, request.path, e)
            return Response({'status': 'Error', 'code': e.code, 'message': str(e)}, status=e.status_code)
        except APIException:
            # Malformed or unsupported request bodies, answered by DRF itself
            raise
        except Exception:
            logger.exception("%s %s failed unexpectedly", request.method, request.path)
            return Response({'status': 'Error', 'code': 'error', 'message': 'An unexpected error occurred'},
                            status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return wrapper

def request_body(request):
    """The parsed request body, which must be a JSON object or form fields."""
    if not isinstance(request.data, dict):
        raise InvalidRequest("Request body must be an object")
    return request.data

def projection_response(chart_kind, result):
    if isinstance(result, NoData):
        return Response({'status': 'NoData', 'message': result.reason})
    return Response({'status': 'Success', 'chart_kind': chart_kind_for(chart_kind).value, 'series': result.to_json_object()})

@api_view(['POST'])
@parser_classes([JSONParser, MultiPartParser])
@permission_classes([AllowAny])
@structured_errors
def signup(request):
    """
    Registers a new user. The email is also the login username.
    """
    data = request_body(request)
    user = register_user(
        data.get('name'),
        data.get('email'),
        data.get('password'),
        data.get('role'),
    )
    return Response({'status': 'Success', 'message': 'User registered successfully', 'id': user.pk},
                    status=status.HTTP_201_CREATED)

@api_view(['GET'])
@permission_classes([IsAuthenticated])
@structured_errors
def dashboard(request):
    message = dashboard_greeting(caller_for_request(request))
    return Response({'status': 'Success', 'message': message})

@api_view(['POST'])
@parser_classes([MultiPartParser])
@permission_classes([IsAuthenticated])
@structured_errors
def upload_data(request):
    """
    Handles the upload of an .xls or .xlsx spreadsheet using Django Rest Framework.
    Responds with the parsed {columns, rows} under 'data'.
    """
    entry, dataset = upload_and_parse_file(caller_for_request(request), request.FILES.get('file'))
    response_data = {
        'status': 'Success',
        'message': 'File uploaded and parsed successfully',
        'id': entry.pk,
        'data': dataset.to_json_object(),
        'renamed_columns': dataset.renamed_columns,
    }
    return Response(response_data)

@api_view(['GET'])
@permission_classes([IsAuthenticated])
@structured_errors
def uploads(request):
    """
    Lists the caller's upload history, newest first, with each dataset expanded.
    """
    entries = list_uploads(caller_for_request(request))
    return Response([entry_to_json_object(entry) for entry in entries])

@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
@structured_errors
def upload_detail(request, entry_id):
    caller = caller_for_request(request)
    if request.method == 'DELETE':
        delete_upload(caller, entry_id)
        return Response({'status': 'Success', 'message': 'Upload deleted successfully'})
    return Response(entry_to_json_object(get_upload(caller, entry_id)))

@api_view(['GET'])
@permission_classes([IsAuthenticated])
@structured_errors
def upload_projection(request, entry_id):
    """
    Projects two columns of a stored upload.

    Query parameters: x_column, y_column, chart_kind (bar, line, pie, scatter or 3d).
    """
    chart_kind = request.query_params.get('chart_kind', 'bar')
    result = project_upload(
        caller_for_request(request),
        entry_id,
        request.query_params.get('x_column', ''),
        request.query_params.get('y_column', ''),
        chart_kind,
    )
    return projection_response(chart_kind, result)

@api_view(['POST'])
@parser_classes([JSONParser])
@permission_classes([IsAuthenticated])
@structured_errors
def inline_projection(request):
    """
    Projects two columns of a {columns, rows} dataset sent in the request body.
    """
    data = request_body(request)
    chart_kind = data.get('chart_kind', 'bar')
    result = project_inline(
        caller_for_request(request),
        data.get('dataset'),
        data.get('x_column', ''),
        data.get('y_column', ''),
        chart_kind,
    )
    return projection_response(chart_kind, result)
