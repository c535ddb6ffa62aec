from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.views import TokenObtainPairView
from sheet_processor.models import UserProfile
from .access_gate import Caller, ROLE_ADMIN, ROLE_USER
import logging

# Issues JWT pairs that carry the caller's role, and turns an authenticated
# request back into the (identity, role) pair used by the access gate.

logger = logging.getLogger(__name__)

ROLE_CLAIM = 'role'

def role_for_user(user):
    """The user's role from their profile. Superusers without a profile are admins."""
    try:
        return user.profile.role
    except UserProfile.DoesNotExist:
        return ROLE_ADMIN if user.is_superuser else ROLE_USER

def caller_for_request(request):
    """
    Builds the access gate caller for an authenticated DRF request.

    The role claim of a validated access token wins; session-authenticated
    requests fall back to the user's profile.
    """
    user = request.user
    role = None
    token = request.auth
    if token is not None and hasattr(token, 'get'):
        role = token.get(ROLE_CLAIM)
    if role is None:
        role = role_for_user(user)
    return Caller(user.pk, role)

def user_summary(user):
    return {
        'id': user.pk,
        'name': user.get_full_name() or user.get_username(),
        'email': user.email,
        'role': role_for_user(user),
    }

class RoleTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token[ROLE_CLAIM] = role_for_user(user)
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = user_summary(self.user)
        logger.info("Issued token pair for user %s", self.user.pk)
        return data

class RoleTokenObtainPairView(TokenObtainPairView):
    serializer_class = RoleTokenObtainPairSerializer
