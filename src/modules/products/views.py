"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
The view forwards raw request bodies to the service and renders its
verdicts: domain exceptions are caught and translated into status codes,
everything else propagates to the DRF exception handler.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework.viewsets import GenericViewSet

from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    ProductValidationFailed,
)
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService


def _not_found() -> Response:
    return Response(
        {"detail": "Product not found."},
        status=status.HTTP_404_NOT_FOUND,
    )


def _invalid(exc: ProductValidationFailed) -> Response:
    return Response({"errors": exc.errors}, status=status.HTTP_400_BAD_REQUEST)


def _duplicate(exc: ProductAlreadyExists) -> Response:
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through the
    service/repository layer.  PATCH is not offered; PUT replaces every
    field.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    lookup_value_regex = "[0-9]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=[
            OpenApiParameter(
                "search",
                str,
                description="Case-insensitive text matched against every field.",
            )
        ]
    )
    def list(self, request: Request) -> Response:
        """GET /api/products?search=<term>"""
        products = self._service.get_products(request.query_params.get("search", ""))
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str) -> Response:
        """GET /api/products/{pk}"""
        try:
            product = self._service.get_product(int(pk))
        except ProductNotFound:
            return _not_found()
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        try:
            product = self._service.create_product(request.data)
        except ProductValidationFailed as exc:
            return _invalid(exc)
        except ProductAlreadyExists as exc:
            return _duplicate(exc)

        location = reverse("product-detail", kwargs={"pk": product.id}, request=request)
        return Response(
            ProductSerializer(product).data,
            status=status.HTTP_201_CREATED,
            headers={"Location": location},
        )

    def update(self, request: Request, pk: str) -> Response:
        """PUT /api/products/{pk}"""
        try:
            product = self._service.update_product(int(pk), request.data)
        except ProductValidationFailed as exc:
            return _invalid(exc)
        except ProductNotFound:
            return _not_found()
        except ProductAlreadyExists as exc:
            return _duplicate(exc)

        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str) -> Response:
        """DELETE /api/products/{pk}"""
        try:
            self._service.delete_product(int(pk))
        except ProductNotFound:
            return _not_found()
        return Response(status=status.HTTP_204_NO_CONTENT)
