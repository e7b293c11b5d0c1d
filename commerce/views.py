"""
API Layer — Accounts and Orders (Django REST Framework)

Thin controllers over the repositories. Each view parses input with a
serializer, delegates to a repository and translates the repository's
error taxonomy into HTTP responses:

- InvalidArgument -> 400
- NotFound        -> 404
- Conflict        -> 409 (duplicate email, declined payment)
- GatewayFailure  -> 502

The repositories are coroutines; views run them with async_to_sync.
No business rules live here.
"""

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from commerce.application.accounts import AccountRepository
from commerce.application.orders import OrderRepository
from commerce.domain.exceptions import Conflict, GatewayFailure, InvalidArgument, NotFound
from commerce.models import Account, Order
from commerce.serializers import AccountSerializer, AccountWithOrdersSerializer, OrderSerializer

ERROR_STATUSES = (
    (InvalidArgument, status.HTTP_400_BAD_REQUEST),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Conflict, status.HTTP_409_CONFLICT),
    (GatewayFailure, status.HTTP_502_BAD_GATEWAY),
)


def error_response(exc):
    for error_class, status_code in ERROR_STATUSES:
        if isinstance(exc, error_class):
            return Response({"error": str(exc)}, status=status_code)
    raise exc


def run(operation, *args):
    return async_to_sync(operation)(*args)


class AccountListView(APIView):
    """GET lists accounts, POST creates one and sends the welcome notification."""

    def get(self, request):
        accounts = run(AccountRepository().list_all)
        return Response(AccountSerializer(accounts, many=True).data)

    def post(self, request):
        serializer = AccountSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            account = run(AccountRepository().add, Account(**serializer.validated_data))
        except (InvalidArgument, Conflict, GatewayFailure) as exc:
            return error_response(exc)

        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)


class AccountDetailView(APIView):
    """
    GET /api/accounts/<id>/        (?expand=orders includes the account's orders)
    PUT /api/accounts/<id>/        full replacement
    DELETE /api/accounts/<id>/
    """

    def get(self, request, pk):
        repository = AccountRepository()

        if request.query_params.get("expand") == "orders":
            result = run(repository.get_with_orders, pk)
            serializer_class = AccountWithOrdersSerializer
        else:
            result = run(repository.get_by_id, pk)
            serializer_class = AccountSerializer

        if result is None:
            return Response({"error": "Account not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(serializer_class(result).data)

    def put(self, request, pk):
        serializer = AccountSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            account = run(AccountRepository().update, Account(pk=pk, **serializer.validated_data))
        except (InvalidArgument, NotFound, Conflict) as exc:
            return error_response(exc)

        return Response(AccountSerializer(account).data)

    def delete(self, request, pk):
        if not run(AccountRepository().delete, pk):
            return Response({"error": "Account not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AccountOrdersView(APIView):
    def get(self, request, pk):
        try:
            orders = run(OrderRepository().get_by_account, pk)
        except NotFound as exc:
            return error_response(exc)

        return Response(OrderSerializer(orders, many=True).data)


class OrderListView(APIView):
    """GET lists orders, POST authorizes payment and creates an order."""

    def get(self, request):
        orders = run(OrderRepository().list_all)
        return Response(OrderSerializer(orders, many=True).data)

    def post(self, request):
        serializer = OrderSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = run(OrderRepository().add, Order(**serializer.validated_data))
        except (InvalidArgument, NotFound, Conflict, GatewayFailure) as exc:
            return error_response(exc)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    def get(self, request, pk):
        order = run(OrderRepository().get_by_id, pk)
        if order is None:
            return Response({"error": "Order not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(order).data)

    def put(self, request, pk):
        serializer = OrderSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = run(OrderRepository().update, Order(pk=pk, **serializer.validated_data))
        except (InvalidArgument, NotFound) as exc:
            return error_response(exc)

        return Response(OrderSerializer(order).data)

    def delete(self, request, pk):
        if not run(OrderRepository().delete, pk):
            return Response({"error": "Order not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
