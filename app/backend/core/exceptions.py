"""Error taxonomy shared by services and views."""

from rest_framework import exceptions, status

GENERIC_ERROR_MESSAGE = "Something went wrong, please try again later"

# Re-exported so callers import the whole taxonomy from one place.
NotFound = exceptions.NotFound
ValidationError = exceptions.ValidationError


class Unauthenticated(exceptions.AuthenticationFailed):
    """Missing, malformed, expired or revoked credential."""

    default_detail = "User is unauthorized to access this resource"
    default_code = "unauthenticated"


class UpstreamFailure(exceptions.APIException):
    """An external collaborator (metadata provider, identity provider, store) failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = GENERIC_ERROR_MESSAGE
    default_code = "upstream_failure"
