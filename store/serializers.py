"""
Serializers for store app
"""
from rest_framework import serializers
from .models import Product, Purchase


class ProductSerializer(serializers.ModelSerializer):
    isAvailable = serializers.BooleanField(source='is_available', read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'name', 'description', 'price', 'stock', 'isAvailable']
        read_only_fields = fields


class PurchaseSerializer(serializers.ModelSerializer):
    studentId = serializers.IntegerField(source='student_id', read_only=True)
    productId = serializers.IntegerField(source='product_id', read_only=True)
    productName = serializers.CharField(source='product.name', read_only=True)
    totalPrice = serializers.IntegerField(source='total_price', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Purchase
        fields = [
            'id', 'studentId', 'productId', 'productName', 'quantity', 'totalPrice',
            'requirements', 'status', 'createdAt',
        ]
        read_only_fields = fields


class PurchaseRequestSerializer(serializers.Serializer):
    """Quantity bounds are checked by the purchase service (invalid_quantity)."""
    quantity = serializers.IntegerField(required=False, default=1)
    requirements = serializers.CharField(required=False, allow_blank=True, default='')
