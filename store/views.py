"""
Talent store API.
Endpoints:
- GET  /api/store/products                  Products for sale
- POST /api/store/products/{id}/purchase    Student buys with talents
"""
import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsStudent
from store.models import Product
from store.serializers import ProductSerializer, PurchaseRequestSerializer, PurchaseSerializer
from store.services.purchase import purchase

logger = logging.getLogger(__name__)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def product_list_view(request):
    products = Product.objects.filter(is_available=True)
    return Response(ProductSerializer(products, many=True).data)


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsStudent])
def product_purchase_view(request, product_id):
    """
    POST /api/store/products/{id}/purchase
    Body: { quantity: int = 1, requirements?: str }
    Returns: { success, purchase, remainingTalents }
    """
    student = getattr(request.user, 'student_profile', None)
    if student is None:
        logger.warning(f"[store] User {request.user.id} has no student profile, purchase refused")
        return Response({"detail": "Student profile not found", "code": "student_not_found"},
                        status=status.HTTP_404_NOT_FOUND)

    serializer = PurchaseRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = purchase(student.id, product_id, data['quantity'], data['requirements'])
    return Response(
        {
            "success": True,
            "purchase": PurchaseSerializer(result.purchase).data,
            "remainingTalents": result.remaining_talents,
        },
        status=status.HTTP_201_CREATED,
    )
