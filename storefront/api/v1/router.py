import logging

from django.core.exceptions import ValidationError
from ninja import NinjaAPI

from .auth.api import router as auth_router
from .catalog.api import router as catalog_router
from .order.api import router as order_router
from .status.api import router as status_router

logger = logging.getLogger(__name__)

api = NinjaAPI(
    title="Storefront API",
    version="1.0.0",
    description="""
    # Storefront API Documentation

    ## Authentication
    Endpoints require a JWT bearer token. Admin endpoints require a staff user.

    ## Rate Limiting
    Mutating order endpoints are rate limited per user.

    ## Pagination
    The admin order list supports `page` and `size` parameters.

    ## Error Codes
    - 400: Bad Request
    - 401: Unauthorized
    - 403: Forbidden
    - 404: Not Found
    - 409: Order update already in progress
    - 429: Too Many Requests
    """,
    docs_url="/docs",
    openapi_url="/openapi.json",
    urls_namespace="api_v1",
)


@api.exception_handler(ValidationError)
def validation_error(request, exc):
    message = "; ".join(exc.messages)
    logger.info("Ошибка валидации %s: %s", request.path, message)
    return api.create_response(
        request, {"detail": message, "message": message}, status=400
    )


api.add_router("/auth/", auth_router)
api.add_router("/catalog/", catalog_router)
api.add_router("/order/", order_router)
api.add_router("/status/", status_router)
