"""Signed session tokens carrying the user's id, name and VIP flag."""

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from rest_framework_simplejwt.tokens import RefreshToken


class CommissionRefreshToken(RefreshToken):
    """Refresh token with username and VIP claims.

    The access token derived from it copies the extra claims.
    """

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token['username'] = user.username
        token['is_vip'] = user.is_vip
        return token


def issue_tokens(user) -> dict:
    """Return a fresh refresh/access token pair for ``user``."""
    refresh = CommissionRefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


class OptionalJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that never rejects a request.

    Missing, expired or malformed tokens leave the caller anonymous, so
    public endpoints keep working for visitors holding a stale session.
    """

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed):
            return None
