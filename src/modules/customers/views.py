"""Customer API views.

Exposes the ``CustomerService`` via HTTP using DRF ViewSets.
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
from modules.customers.dtos import CreateCustomerDTO
from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CreateCustomerSerializer, CustomerSerializer
from modules.customers.services import CustomerService


class CustomerViewSet(GenericViewSet):
    """ViewSet for creating and reading customers.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    """

    serializer_class = CustomerSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        serializer = CreateCustomerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = CreateCustomerDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return error_response("invalid", str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            customer = self._service.create_customer(dto)
        except CustomerAlreadyExists as exc:
            return error_response(
                "customer_already_exists",
                str(exc),
                status.HTTP_409_CONFLICT,
                attr="email",
            )

        return Response(
            CustomerSerializer(customer).data, status=status.HTTP_201_CREATED
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer = self._service.get_customer(str(pk))
        except CustomerNotFound as exc:
            return error_response(
                "customer_not_found", str(exc), status.HTTP_404_NOT_FOUND
            )
        return Response(CustomerSerializer(customer).data)
