from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    CreditCodePathSerializer,
    CreditListSerializer,
    CreditRequestSerializer,
    CreditSerializer,
    CustomerIdQuerySerializer,
    CustomerRequestSerializer,
    CustomerSerializer,
    CustomerUpdateSerializer,
)
from .services import CreditService, CustomerService


def _customer_id_param(request):
    query = CustomerIdQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return query.validated_data['customer_id']


class CustomerView(APIView):
    """
    POST  /api/customers
    PATCH /api/customers?customer_id=<id>
    """
    customer_service = CustomerService()

    def post(self, request):
        serializer = CustomerRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = self.customer_service.save(serializer.to_entity())
        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)

    def patch(self, request):
        customer_id = _customer_id_param(request)
        serializer = CustomerUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = self.customer_service.update(customer_id, serializer.to_patch())
        return Response(CustomerSerializer(customer).data, status=status.HTTP_200_OK)


class CustomerDetailView(APIView):
    """
    GET    /api/customers/<id>
    DELETE /api/customers/<id>
    """
    customer_service = CustomerService()

    def get(self, request, customer_id):
        customer = self.customer_service.find_by_id(customer_id)
        return Response(CustomerSerializer(customer).data, status=status.HTTP_200_OK)

    def delete(self, request, customer_id):
        self.customer_service.delete(customer_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CreditView(APIView):
    """
    POST /api/credits
    GET  /api/credits?customer_id=<id>
    """
    credit_service = CreditService()

    def post(self, request):
        serializer = CreditRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        credit = self.credit_service.save(serializer.to_entity())
        response_data = {
            "message": f"Credit {credit.credit_code} - Customer {credit.customer.email} saved!",
            "credit_code": str(credit.credit_code),
        }
        return Response(response_data, status=status.HTTP_201_CREATED)

    def get(self, request):
        credits = self.credit_service.find_all_by_customer(_customer_id_param(request))
        return Response(CreditListSerializer(credits, many=True).data, status=status.HTTP_200_OK)


class CreditDetailView(APIView):
    """
    GET /api/credits/<credit_code>?customer_id=<id>
    """
    credit_service = CreditService()

    def get(self, request, credit_code):
        path = CreditCodePathSerializer(data={"credit_code": credit_code})
        path.is_valid(raise_exception=True)
        credit = self.credit_service.find_by_credit_code(
            _customer_id_param(request), path.validated_data["credit_code"]
        )
        return Response(CreditSerializer(credit).data, status=status.HTTP_200_OK)
