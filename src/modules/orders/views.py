"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into HTTP status codes;
anything else propagates to the DRF exception handler.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    InsufficientStock,
    OrderNotFound,
    ProductLookupFailed,
    ProductNotFound,
)
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import CreateOrderSerializer, OrderSerializer
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Body: ``{"customer_id": ..., "products": [{"id": ..., "quantity": n}]}``
        """
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        try:
            dto = CreateOrderDTO(
                customer_id=data["customer_id"],
                items=[
                    CreateOrderItemDTO(product_id=item["id"], quantity=item["quantity"])
                    for item in data["products"]
                ],
            )
        except PydanticValidationError as exc:
            return error_response("invalid", str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            order = self._service.create_order(dto)
        except CustomerNotFound as exc:
            return error_response(
                exc.code, str(exc), status.HTTP_404_NOT_FOUND, attr="customer_id"
            )
        except ProductLookupFailed as exc:
            return error_response(
                exc.code, str(exc), status.HTTP_400_BAD_REQUEST, attr="products"
            )
        except ProductNotFound as exc:
            return error_response(
                exc.code, str(exc), status.HTTP_404_NOT_FOUND, attr="products"
            )
        except InsufficientStock as exc:
            return error_response(
                exc.code, str(exc), status.HTTP_409_CONFLICT, attr="products"
            )

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # Retrieve
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(str(pk))
        except OrderNotFound as exc:
            return error_response("order_not_found", str(exc), status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(order).data)
