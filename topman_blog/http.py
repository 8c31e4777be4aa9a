"""
JSON API plumbing: request body parsing, responses and the base view.
"""
import json
import logging
from io import BytesIO

from django.http import JsonResponse, QueryDict
from django.http.multipartparser import MultiPartParser, MultiPartParserError
from django.middleware.csrf import CsrfViewMiddleware
from django.utils.datastructures import MultiValueDict
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .exceptions import BlogError, Forbidden, NotAuthenticated, ValidationError

logger = logging.getLogger(__name__)

JSON_DUMPS_PARAMS = {"ensure_ascii": False}


def success_response(data=None, status=200, **extra):
    payload = {"success": True, **extra, "data": {} if data is None else data}
    return JsonResponse(payload, status=status, json_dumps_params=JSON_DUMPS_PARAMS)


def error_response(error):
    return JsonResponse(error.as_dict(), status=error.status, json_dumps_params=JSON_DUMPS_PARAMS)


def parse_request_data(request):
    """
    Return ``(data, files)`` for any body type.

    Django only parses form bodies on POST, so PUT multipart and urlencoded
    bodies are parsed here. JSON bodies must be objects.
    """
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except ValueError as exc:
            raise ValidationError("Malformed JSON body") from exc
        if not isinstance(data, dict):
            raise ValidationError("JSON body must be an object")
        return data, MultiValueDict()

    if request.method == "POST":
        return request.POST, request.FILES

    if request.content_type == "multipart/form-data":
        try:
            parser = MultiPartParser(
                request.META, BytesIO(request.body), request.upload_handlers, request.encoding
            )
            return parser.parse()
        except MultiPartParserError as exc:
            raise ValidationError("Malformed multipart body") from exc

    return QueryDict(request.body, encoding=request.encoding), MultiValueDict()


class CsrfCheck(CsrfViewMiddleware):
    """CSRF middleware that reports the failure reason instead of rendering a page."""

    def _reject(self, request, reason):
        return reason


def enforce_csrf(request):
    """Raise ``Forbidden`` when an unsafe request lacks a valid CSRF token."""
    check = CsrfCheck(lambda req: None)
    check.process_request(request)
    reason = check.process_view(request, None, (), {})
    if reason:
        logger.warning("CSRF check failed for %s %s: %s", request.method, request.path, reason)
        raise Forbidden(f"CSRF Failed: {reason}")


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """
    Base view for JSON endpoints.

    Methods not listed in ``public_methods`` require an authenticated user.
    CSRF is checked only for session-authenticated requests, so anonymous
    clients can register and log in without a token. ``BlogError``
    subclasses become structured error responses; anything else is logged
    and reported as a generic 500.
    """

    public_methods = ("get", "head", "options")

    def dispatch(self, request, *args, **kwargs):
        try:
            if request.user.is_authenticated:
                enforce_csrf(request)
            elif request.method.lower() not in self.public_methods:
                raise NotAuthenticated()
            return super().dispatch(request, *args, **kwargs)
        except BlogError as exc:
            return error_response(exc)
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return error_response(BlogError())

    def get_request_data(self):
        return parse_request_data(self.request)

    def validate(self, form_class, **kwargs):
        """Bind ``form_class`` to the request body and return it if valid."""
        data, files = self.get_request_data()
        form = form_class(data, files, **kwargs)
        if not form.is_valid():
            raise ValidationError.from_form(form)
        return form
