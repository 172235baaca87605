from django.http import HttpRequest

from .middleware import get_access_context


def access(request: HttpRequest) -> dict:
    """Expose the request's access context to templates as ``access``."""
    return {"access": get_access_context(request)}
